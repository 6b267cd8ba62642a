"""One-off wallet setup steps (token approvals)."""
