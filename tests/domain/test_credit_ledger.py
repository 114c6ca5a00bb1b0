"""Unit tests for the CreditLedger domain service."""

import threading
from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.credit import CreditTransaction, CreditTransactionType
from storefront.domain.model.value_objects import Money
from storefront.domain.service.credit_ledger import CreditLedger, CreditOutcomeStatus
from tests.fakes import FakeDatabase, FakeUnitOfWork, give_credit


def _ledger(balance: str | None = None, user_id: int = 1) -> tuple[CreditLedger, FakeDatabase]:
    db = FakeDatabase()
    if balance is not None:
        give_credit(db, user_id, balance)
    return CreditLedger(FakeUnitOfWork(db)), db


class TestApplyCredit:

    def test_debits_and_records_usage(self):
        ledger, db = _ledger("100.00")

        outcome = ledger.apply_credit(1, 10, Money.of("30.00"))

        assert outcome.ok
        assert outcome.available == Money.of("70.00")
        assert ledger.get_balance(1) == Money.of("70.00")
        used = db.transactions[-1]
        assert used.type == CreditTransactionType.USED
        assert used.order_id == 10
        assert used.description == "Credit applied to order #10"

    def test_insufficient_balance_is_an_outcome_not_an_error(self):
        ledger, db = _ledger("25.00")

        outcome = ledger.apply_credit(1, 10, Money.of("50.00"))

        assert outcome.status == CreditOutcomeStatus.INSUFFICIENT_BALANCE
        assert outcome.message == "You only have R25.00 available"
        assert ledger.get_balance(1) == Money.of("25.00")
        assert len(db.transactions) == 1

    def test_user_without_balance_has_nothing_to_spend(self):
        ledger, _ = _ledger()
        outcome = ledger.apply_credit(1, 10, Money.of("1.00"))
        assert outcome.status == CreditOutcomeStatus.INSUFFICIENT_BALANCE
        assert ledger.get_balance(1) == Money.zero()

    def test_exact_balance_can_be_spent(self):
        ledger, _ = _ledger("50.00")
        assert ledger.apply_credit(1, 10, Money.of("50.00")).ok
        assert ledger.get_balance(1) == Money.zero()

    def test_concurrent_spends_cannot_overdraw(self):
        db = FakeDatabase()
        give_credit(db, 1, "100.00")
        barrier = threading.Barrier(2)
        outcomes = []

        def spend(order_id: int) -> None:
            ledger = CreditLedger(FakeUnitOfWork(db))
            barrier.wait()
            outcomes.append(ledger.apply_credit(1, order_id, Money.of("80.00")))

        threads = [threading.Thread(target=spend, args=(oid,)) for oid in (101, 102)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        statuses = sorted(o.status.value for o in outcomes)
        assert statuses == ["applied", "insufficient_balance"]
        assert db.balances[1].available_credits == Money.of("20.00")


class TestRefundCredit:

    def test_refund_restores_balance(self):
        ledger, db = _ledger("100.00")
        ledger.apply_credit(1, 10, Money.of("40.00"))

        outcome = ledger.refund_credit(1, 10, Money.of("40.00"))

        assert outcome.ok
        assert ledger.get_balance(1) == Money.of("100.00")
        assert db.transactions[-1].type == CreditTransactionType.REFUNDED
        assert db.transactions[-1].description == "Credit refunded for cancelled order #10"

    def test_second_refund_is_rejected(self):
        ledger, _ = _ledger("100.00")
        ledger.apply_credit(1, 10, Money.of("40.00"))
        ledger.refund_credit(1, 10, Money.of("40.00"))

        outcome = ledger.refund_credit(1, 10, Money.of("40.00"))

        assert outcome.status == CreditOutcomeStatus.DUPLICATE_REFUND
        assert outcome.message == "Credit for order #10 has already been refunded"
        assert ledger.get_balance(1) == Money.of("100.00")

    def test_refund_more_than_used_rejected(self):
        ledger, _ = _ledger("100.00")
        ledger.apply_credit(1, 10, Money.of("40.00"))

        with pytest.raises(ValidationError, match="exceeds"):
            ledger.refund_credit(1, 10, Money.of("60.00"))
        assert ledger.get_balance(1) == Money.of("60.00")


class TestEarnAndReconcile:

    def test_earn_creates_balance(self):
        ledger, _ = _ledger()
        outcome = ledger.earn_credit(1, Money.of("15.00"), "Late delivery")
        assert outcome.ok
        assert ledger.get_balance(1) == Money.of("15.00")

    def test_ledger_replays_to_balance(self):
        ledger, _ = _ledger("100.00")
        ledger.apply_credit(1, 10, Money.of("30.00"))
        ledger.apply_credit(1, 11, Money.of("20.00"))
        ledger.refund_credit(1, 10, Money.of("30.00"))
        ledger.earn_credit(1, Money.of("5.00"), "Goodwill")

        reconciliation = ledger.reconcile(1)

        assert reconciliation.balanced
        assert reconciliation.ledger_total == Decimal("85.00")
        assert ledger.get_balance(1) == Money.of("85.00")

    def test_tampered_balance_does_not_reconcile(self):
        ledger, db = _ledger("100.00")
        db.balances[1].available_credits = Money.of("90.00")
        assert not ledger.reconcile(1).balanced

    def test_negative_ledger_is_unbalanced_not_an_error(self):
        ledger, db = _ledger("20.00")
        db.transactions.append(
            CreditTransaction(
                id=db.next_transaction_id,
                user_id=1,
                type=CreditTransactionType.USED,
                amount=Money.of("50.00"),
                order_id=7,
            )
        )

        reconciliation = ledger.reconcile(1)

        assert not reconciliation.balanced
        assert reconciliation.ledger_total == Decimal("-30.00")
        assert reconciliation.available == Money.of("20.00")

    def test_history_is_newest_first(self):
        ledger, _ = _ledger("100.00")
        ledger.apply_credit(1, 10, Money.of("30.00"))

        history = ledger.history(1)

        assert [t.type for t in history] == [
            CreditTransactionType.USED,
            CreditTransactionType.EARNED,
        ]
