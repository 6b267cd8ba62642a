"""End-to-end ordering and failure policy of a full run."""

import logging
import os
import unittest
from unittest import mock

from eth_account import Account
from web3 import Web3

from plaza_runner.commands import run_transactions as runner
from plaza_runner.commands.run_transactions import RunReport, run_transactions
from plaza_runner.config.tokens import TokenType
from plaza_runner.helpers.blockchain_sender import TxResult, TxStatus

from tests.fakes import (
    EXPLORER,
    POOL,
    TEST_PRIVATE_KEY,
    TOKEN_A,
    TOKEN_B,
    FakeWeb3,
    make_config,
)

ADDRESS = Account.from_key(TEST_PRIVATE_KEY).address


def _messages(cm) -> list[str]:
    return [record.getMessage() for record in cm.records]


class RunTransactionsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = make_config(tokens=(TOKEN_A, TOKEN_B))

    def test_happy_path_order(self) -> None:
        w3 = FakeWeb3(allowances={TOKEN_B.address: Web3.to_wei("999999", "ether")})

        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, TokenType.LEVERAGE, config=self.config, w3=w3)

        self.assertTrue(report.ok)
        self.assertEqual(report.address, ADDRESS)
        self.assertEqual([c.name for c in w3.eth.sent], ["approve", "create", "redeem"])

        messages = _messages(cm)
        markers = [
            f"Approval transaction for {TOKEN_A.name} confirmed",
            f"Allowance for {TOKEN_B.name} already sufficient",
            f"Address {ADDRESS} Executing deposit...",
            "Deposit transaction confirmed",
            f"Address {ADDRESS} Executing redeem...",
            "Redeem transaction confirmed.",
        ]
        positions = [
            next(i for i, m in enumerate(messages) if marker in m) for marker in markers
        ]
        self.assertEqual(positions, sorted(positions))

    def test_pool_calls_use_token_type_and_amounts(self) -> None:
        w3 = FakeWeb3(gas_prices=[101])
        run_transactions(TEST_PRIVATE_KEY, 1, config=self.config, w3=w3)

        for name in ("create", "redeem"):
            call = w3.eth.calls_named(name)[0]
            self.assertEqual(call.address, Web3.to_checksum_address(POOL))
            self.assertEqual(call.args, (1, self.config.deposit_amount, self.config.min_amount))
            self.assertEqual(call.tx_params["gasPrice"], 126)

    def test_confirmation_links_use_explorer(self) -> None:
        w3 = FakeWeb3(allowances={
            TOKEN_A.address: Web3.to_wei("1", "ether"),
            TOKEN_B.address: Web3.to_wei("1", "ether"),
        })
        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 0, config=self.config, w3=w3)

        messages = _messages(cm)
        self.assertIn(f"Deposit transaction confirmed {EXPLORER}{report.deposit.tx_hash}", messages)
        self.assertIn(f"Redeem transaction confirmed. {EXPLORER}{report.redeem.tx_hash}", messages)

    def test_redeem_runs_after_failed_deposit(self) -> None:
        w3 = FakeWeb3(outcomes={"create": "revert"})

        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 1, config=self.config, w3=w3)

        self.assertEqual(report.deposit.status, TxStatus.ERROR)
        self.assertEqual(report.redeem.status, TxStatus.CONFIRMED)
        self.assertFalse(report.ok)
        self.assertEqual(report.failures(), [report.deposit])

        messages = _messages(cm)
        error_at = next(i for i, m in enumerate(messages) if m.startswith("Error in Deposit:"))
        redeem_at = next(i for i, m in enumerate(messages) if "Executing redeem..." in m)
        self.assertLess(error_at, redeem_at)

    def test_timeouts_never_abort_the_run(self) -> None:
        w3 = FakeWeb3(outcomes={"approve": "timeout", "create": "timeout", "redeem": "timeout"})

        with self.assertLogs("plaza_runner", level="ERROR") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 1, config=self.config, w3=w3)

        self.assertEqual(
            [r.status for r in report.results()],
            [TxStatus.TIMEOUT] * 4,
        )
        self.assertEqual([c.name for c in w3.eth.sent], ["approve", "approve", "create", "redeem"])
        messages = _messages(cm)
        self.assertTrue(messages[-2].startswith("Error in Deposit:"))
        self.assertTrue(messages[-1].startswith("Error in redeem:"))

    def test_rpc_down_still_attempts_every_step(self) -> None:
        w3 = FakeWeb3(
            gas_prices=[ConnectionError("node unreachable")],
            allowance_errors={
                TOKEN_A.address: ConnectionError("node unreachable"),
                TOKEN_B.address: ConnectionError("node unreachable"),
            },
        )

        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 1, config=self.config, w3=w3)

        self.assertEqual(len(report.failures()), 4)
        messages = _messages(cm)
        self.assertEqual(sum(m.startswith("Error approving") for m in messages), 2)
        self.assertIn(f"Address {ADDRESS} Executing deposit...", messages)
        self.assertIn(f"Address {ADDRESS} Executing redeem...", messages)

    def test_token_type_outside_uint8_is_a_step_error(self) -> None:
        w3 = FakeWeb3(allowances={
            TOKEN_A.address: Web3.to_wei("1", "ether"),
            TOKEN_B.address: Web3.to_wei("1", "ether"),
        })

        with self.assertLogs("plaza_runner", level="ERROR") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 300, config=self.config, w3=w3)

        self.assertEqual(report.deposit.status, TxStatus.ERROR)
        self.assertEqual(report.redeem.status, TxStatus.ERROR)
        self.assertEqual(w3.eth.sent, [])
        self.assertEqual(len(cm.records), 2)

    def test_malformed_swap_address_fails_only_the_approvals(self) -> None:
        config = make_config(swap_address="0xnot-an-address")
        w3 = FakeWeb3()

        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 1, config=config, w3=w3)

        self.assertEqual([r.status for r in report.approvals], [TxStatus.ERROR, TxStatus.ERROR])
        self.assertEqual(report.deposit.status, TxStatus.CONFIRMED)
        self.assertEqual(report.redeem.status, TxStatus.CONFIRMED)
        self.assertEqual([c.name for c in w3.eth.sent], ["create", "redeem"])
        messages = _messages(cm)
        self.assertEqual(sum(m.startswith("Error approving") for m in messages), 2)

    def test_malformed_pool_address_fails_only_deposit_and_redeem(self) -> None:
        config = make_config(pool_address="0xnot-an-address")
        w3 = FakeWeb3()

        with self.assertLogs("plaza_runner", level="INFO") as cm:
            report = run_transactions(TEST_PRIVATE_KEY, 1, config=config, w3=w3)

        self.assertEqual([r.status for r in report.approvals], [TxStatus.CONFIRMED, TxStatus.CONFIRMED])
        self.assertEqual(report.deposit.status, TxStatus.ERROR)
        self.assertEqual(report.redeem.status, TxStatus.ERROR)
        self.assertEqual([c.name for c in w3.eth.sent], ["approve", "approve"])
        messages = _messages(cm)
        self.assertEqual(sum(m.startswith("Error in Deposit:") for m in messages), 1)
        self.assertEqual(sum(m.startswith("Error in redeem:") for m in messages), 1)

    def test_invalid_key_raises_before_any_step(self) -> None:
        w3 = FakeWeb3()
        with self.assertRaises(ValueError):
            run_transactions("0x1234", 1, config=self.config, w3=w3)
        self.assertEqual(w3.eth.events, [])

    def test_private_key_is_never_logged(self) -> None:
        w3 = FakeWeb3(outcomes={"create": "revert"})
        with self.assertLogs("plaza_runner", level="DEBUG") as cm:
            run_transactions(TEST_PRIVATE_KEY, 1, config=self.config, w3=w3)

        bare_key = TEST_PRIVATE_KEY[2:]
        for line in cm.output:
            self.assertNotIn(bare_key, line)


class RunReportTests(unittest.TestCase):
    def test_incomplete_report_is_not_ok(self) -> None:
        report = RunReport(address=ADDRESS, token_type=1, approvals=[TxResult.skipped("Approval for AAA")])
        self.assertFalse(report.ok)

    def test_skipped_approvals_count_as_success(self) -> None:
        report = RunReport(
            address=ADDRESS,
            token_type=1,
            approvals=[TxResult.skipped("Approval for AAA")],
            deposit=TxResult("Deposit", TxStatus.CONFIRMED, tx_hash="0x01"),
            redeem=TxResult("Redeem", TxStatus.CONFIRMED, tx_hash="0x02"),
        )
        self.assertTrue(report.ok)
        self.assertEqual(len(report.results()), 3)


class MainTests(unittest.TestCase):
    def _report(self, ok: bool) -> RunReport:
        status = TxStatus.CONFIRMED if ok else TxStatus.TIMEOUT
        return RunReport(
            address=ADDRESS,
            token_type=1,
            deposit=TxResult("Deposit", TxStatus.CONFIRMED, tx_hash="0x01"),
            redeem=TxResult("Redeem", status, tx_hash="0x02"),
        )

    def _main(self, argv, report=None, env=None):
        env = env or {"PRIVATE_KEY": TEST_PRIVATE_KEY}
        with mock.patch.dict(os.environ, env), \
                mock.patch.object(runner, "get_runner_logger"), \
                mock.patch.object(runner, "run_with_account", return_value=report) as run:
            code = runner.main(argv)
        return code, run

    def test_exit_code_zero_when_all_ok(self) -> None:
        code, run = self._main(["--token-type", "1"], report=self._report(True))
        self.assertEqual(code, 0)
        args, kwargs = run.call_args
        self.assertEqual(args[0].address, ADDRESS)
        self.assertEqual(args[1], 1)
        self.assertEqual(kwargs["config"].tx_timeout, make_config().tx_timeout)

    def test_exit_code_one_on_any_failure(self) -> None:
        code, _ = self._main(["--token-type", "1"], report=self._report(False))
        self.assertEqual(code, 1)

    def test_cli_overrides(self) -> None:
        _, run = self._main(
            ["--token-type", "0", "--rpc-url", "http://node:8545", "--timeout", "5"],
            report=self._report(True),
        )
        config = run.call_args.kwargs["config"]
        self.assertEqual(config.rpc_url, "http://node:8545")
        self.assertEqual(config.tx_timeout, 5)

    def test_invalid_key_exits_without_echoing_it(self) -> None:
        bad_key = "0xdeadbeef"
        with mock.patch.dict(os.environ, {"PRIVATE_KEY": bad_key}), \
                mock.patch.object(runner, "get_runner_logger"), \
                mock.patch.object(runner, "run_with_account") as run:
            with self.assertRaises(SystemExit) as ctx:
                runner.main(["--token-type", "1"])

        self.assertEqual(ctx.exception.code, "PRIVATE_KEY is not a valid private key")
        self.assertNotIn("deadbeef", str(ctx.exception.code))
        run.assert_not_called()

    def test_bad_pool_address_is_a_step_failure_not_a_key_error(self) -> None:
        env = {"PRIVATE_KEY": TEST_PRIVATE_KEY, "PLAZA_POOL_ADDRESS": "0xnot-an-address"}
        w3 = FakeWeb3()
        with mock.patch.dict(os.environ, env), \
                mock.patch.object(runner, "get_runner_logger"), \
                mock.patch.object(runner, "get_web3_instance", return_value=w3):
            with self.assertLogs("plaza_runner", level="INFO") as cm:
                code = runner.main(["--token-type", "1"])

        self.assertEqual(code, 1)
        self.assertEqual({c.name for c in w3.eth.sent}, {"approve"})
        messages = _messages(cm)
        self.assertEqual(sum(m.startswith("Error in Deposit:") for m in messages), 1)
        summary = [r for r in cm.records if r.getMessage().startswith("RUN COMPLETE")]
        self.assertEqual(len(summary), 1)
        self.assertEqual(summary[0].levelno, logging.WARNING)
        self.assertIn("Deposit (error), Redeem (error)", summary[0].getMessage())

    def test_missing_private_key(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(runner, "get_runner_logger"):
            with self.assertRaises(SystemExit) as ctx:
                runner.main(["--token-type", "1"])
        self.assertIn("PRIVATE_KEY", str(ctx.exception.code))


if __name__ == "__main__":
    unittest.main()
