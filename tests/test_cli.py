import json
import os
import tempfile
import unittest
from unittest import mock

from solexplorer.cli.main import main
from solexplorer.core.dto import AccountData, RawTransaction
from solexplorer.ports.transaction_data_port import TransactionDataPort

ME = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
FUNDER = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
UNKNOWN_MINT = "abcdQ7ZxkP3nV8s2LmTq9RuW4yHcJe6FgNbKwxyz"
SIG = "5wHu1qwD7q4" * 8                   # 88 chars, like a real base58 signature

TRANSFER_ROW = {
    "signature": SIG,
    "timestamp": 1704844800,
    "slot": 241234567,
    "type": "TRANSFER",
    "description": "transfer",
    "source": "SYSTEM_PROGRAM",
    "fee": 5000,
    "feePayer": ME,
    "events": [{"type": "transfer", "accounts": [ME, FUNDER], "data": {"amount": 1500000000, "source": ME}}],
    "accountData": [
        {"pubkey": ME, "nativeBalanceChange": -1500005000},
        {"pubkey": FUNDER, "nativeBalanceChange": 1500000000},
    ],
}

FUNDING_ROW = {
    "signature": "fund-1",
    "timestamp": 1704931200,
    "type": "TRANSFER",
    "feePayer": FUNDER,
    "instructions": [{"programId": "11111111111111111111111111111111"}],
    "accountData": [{"pubkey": ME}, {"pubkey": FUNDER}],
    "nativeTransfers": [{"fromUserAccount": FUNDER, "toUserAccount": ME, "amount": 2000000000}],
    "tokenTransfers": [
        {"fromUserAccount": FUNDER, "toUserAccount": ME, "mint": USDC, "tokenAmount": 12.5},
        {"fromUserAccount": FUNDER, "toUserAccount": ME, "mint": UNKNOWN_MINT, "tokenAmount": 3},
    ],
}


class _OneTxSource(TransactionDataPort):
    def __init__(self) -> None:
        self.requested = []

    def iter_address_transactions(self, address, limit, before=None):
        raise AssertionError("address listing should not be used for a signature")

    def get_transaction(self, signature):
        self.requested.append(signature)
        return RawTransaction(
            signature=signature,
            timestamp=1704844800,
            type="UNKNOWN",
            source="JUPITER",
            fee=10000,
            fee_payer=ME,
            account_data=(AccountData(ME, -10000),),
        )


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dump = os.path.join(self._tmp.name, "dump.json")
        self.out = os.path.join(self._tmp.name, "out")
        with open(self.dump, "w", encoding="utf-8") as f:
            json.dump([TRANSFER_ROW, FUNDING_ROW], f)

    def _static(self, *args):
        return main([*args, "--use-static", "--static-file", self.dump, "--out", self.out])

    def _read(self, name):
        with open(os.path.join(self.out, name), encoding="utf-8") as f:
            return f.read()

    def test_address_query_writes_timeline_outputs(self) -> None:
        rc = self._static(ME, "--days", "7")

        self.assertEqual(rc, 0)
        report = json.loads(self._read("timeline.json"))
        self.assertEqual(report["address"], ME)
        self.assertEqual(report["transaction_count"], 2)
        self.assertIn("2024-01", report["timeline"]["by_time_period"])
        self.assertEqual(len(json.loads(self._read("heatmap.json"))), 7)
        self.assertFalse(os.path.exists(os.path.join(self.out, "transaction.json")))

    def test_address_flag_skips_routing(self) -> None:
        self.assertEqual(self._static("--address", ME, "--days", "7"), 0)
        self.assertTrue(os.path.exists(os.path.join(self.out, "timeline.json")))

    def test_summary_lists_token_funding_per_mint(self) -> None:
        self.assertEqual(self._static(ME), 0)

        summary = self._read("summary.md")
        self.assertIn(f"- **2 SOL** | {FUNDER}", summary)
        self.assertIn("  - 12.500000 USDC\n", summary)
        self.assertIn("  - 3 [abcd...wxyz]\n", summary)

    def test_signature_query_writes_transaction_detail(self) -> None:
        rc = self._static(SIG)

        self.assertEqual(rc, 0)
        detail = json.loads(self._read("transaction.json"))
        self.assertEqual(detail["transaction"]["signature"], SIG)
        self.assertEqual(detail["transaction"]["direction"], "SENT")
        self.assertEqual(detail["transaction"]["source"], FUNDER)
        self.assertEqual(detail["slot"], 241234567)
        self.assertEqual(detail["program_label"], "SYSTEM_PROGRAM")
        self.assertEqual(detail["fee_sol"], "0.000005")
        self.assertEqual(detail["fee_payer"], ME)
        self.assertEqual(detail["balance_changes"], {ME: "-1.500005", FUNDER: "1.5"})
        self.assertFalse(os.path.exists(os.path.join(self.out, "timeline.json")))

    def test_unknown_signature_fails(self) -> None:
        self.assertEqual(self._static("9" * 88), 1)

    def test_signature_query_uses_live_adapter_lookup(self) -> None:
        source = _OneTxSource()
        with mock.patch.dict(os.environ, {"HELIUS_API_KEY": "test-key"}), \
                mock.patch("solexplorer.cli.main.HeliusTransactionAdapter", return_value=source):
            rc = main([f"  {SIG}  ", "--out", self.out])

        self.assertEqual(rc, 0)
        self.assertEqual(source.requested, [SIG])
        detail = json.loads(self._read("transaction.json"))
        self.assertEqual(detail["program_label"], "JUPITER")
        self.assertEqual(detail["fee_sol"], "0.00001")

    def test_invalid_query(self) -> None:
        self.assertEqual(self._static("x" * 29), 2)
        self.assertEqual(self._static("x" * 50), 2)
        self.assertEqual(self._static("   "), 2)

    def test_missing_query(self) -> None:
        self.assertEqual(main(["--use-static"]), 2)

    def test_bad_days(self) -> None:
        self.assertEqual(self._static(ME, "--days", "0"), 2)

    def test_missing_api_key(self) -> None:
        with mock.patch.dict(os.environ, {"HELIUS_API_KEY": ""}):
            self.assertEqual(main([ME, "--out", self.out]), 2)


if __name__ == "__main__":
    unittest.main()
