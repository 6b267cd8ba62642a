"""Runnable commands."""
