import unittest
from decimal import Decimal

from solexplorer.adapters.helius.static_adapter import StaticTransactionAdapter
from solexplorer.core.dto import AccountData, RawTransaction, TransactionEvent
from solexplorer.core.enums import TransactionStatus, TransferDirection
from solexplorer.core.errors import DataSourceError
from solexplorer.io.schemas import transaction_detail_to_dict
from solexplorer.services.transaction_view import build_transaction_detail, fetch_transaction_detail

PAYER = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
PAYEE = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


def _transfer(sig="sig-1", **overrides) -> RawTransaction:
    kw = dict(
        signature=sig,
        timestamp=1704844800,
        slot=241234567,
        type="TRANSFER",
        source="SYSTEM_PROGRAM",
        fee=5000,
        fee_payer=PAYER,
        events=(TransactionEvent("transfer", (PAYER, PAYEE), {"amount": 2_000_000_000, "source": PAYER}),),
        account_data=(
            AccountData(PAYER, -2_000_005_000),
            AccountData(PAYEE, 2_000_000_000),
            AccountData("11111111111111111111111111111111"),
        ),
    )
    kw.update(overrides)
    return RawTransaction(**kw)


class TransactionDetailTests(unittest.TestCase):
    def test_fee_program_and_balance_changes(self) -> None:
        detail = build_transaction_detail(_transfer())

        self.assertEqual(detail.slot, 241234567)
        self.assertEqual(detail.program_label, "SYSTEM_PROGRAM")
        self.assertEqual(detail.fee_sol, Decimal("0.000005"))
        self.assertEqual(detail.fee_payer, PAYER)
        # zero deltas are left out
        self.assertEqual(
            detail.balance_changes,
            {PAYER: Decimal("-2.000005"), PAYEE: Decimal("2")},
        )

    def test_defaults_to_fee_payer_viewpoint(self) -> None:
        tx = build_transaction_detail(_transfer()).transaction

        self.assertEqual(tx.source, PAYEE)
        self.assertEqual(tx.sol_amount, Decimal("2"))
        self.assertEqual(tx.direction, TransferDirection.SENT)
        self.assertEqual(tx.status, TransactionStatus.SUCCESS)

    def test_explicit_viewpoint(self) -> None:
        tx = build_transaction_detail(_transfer(), address=PAYEE).transaction

        self.assertEqual(tx.source, PAYER)
        self.assertEqual(tx.direction, TransferDirection.RECEIVED)

    def test_missing_optional_fields(self) -> None:
        detail = build_transaction_detail(
            RawTransaction(signature="bare", timestamp=1704844800, type="UNKNOWN", transaction_error={"err": 1})
        )

        self.assertEqual(detail.program_label, "")
        self.assertEqual(detail.fee_payer, "")
        self.assertEqual(detail.fee_sol, Decimal("0"))
        self.assertEqual(detail.balance_changes, {})
        self.assertEqual(detail.transaction.status, TransactionStatus.FAILED)

    def test_fetch_goes_through_the_port(self) -> None:
        source = StaticTransactionAdapter(transactions=[_transfer("sig-1"), _transfer("sig-2", fee=10000)])

        detail = fetch_transaction_detail(source, "sig-2")

        self.assertEqual(detail.transaction.signature, "sig-2")
        self.assertEqual(detail.fee_sol, Decimal("0.00001"))
        with self.assertRaises(DataSourceError):
            fetch_transaction_detail(source, "missing")

    def test_serializes_to_strings(self) -> None:
        out = transaction_detail_to_dict(build_transaction_detail(_transfer()))

        self.assertEqual(out["fee_sol"], "0.000005")
        self.assertEqual(out["balance_changes"][PAYER], "-2.000005")
        self.assertEqual(out["transaction"]["direction"], "SENT")
        self.assertEqual(out["transaction"]["sol_amount"], "2")


if __name__ == "__main__":
    unittest.main()
