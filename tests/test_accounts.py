"""
Test suite for accounts module

Tests balance mutation rules, transaction recording and the
never-negative balance invariant.
"""

import pytest
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from bank_ledger.accounts import Account, validate_positive
from bank_ledger.errors import ErrorKind, InsufficientFundsError, InvalidAmountError
from bank_ledger.transactions import Transaction


class FakeClock:
    """Deterministic clock advancing one minute per call"""

    def __init__(self):
        self.current = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


@pytest.fixture
def account():
    return Account("A1", "Alice", Decimal("100"), clock=FakeClock())


class TestValidatePositive:
    """Test amount validation shared by all operations"""

    def test_accepts_positive_values(self):
        """Test ints, floats, strings and Decimals are normalised"""
        assert validate_positive(5, "Deposit").value == Decimal("5")
        assert validate_positive(0.1, "Deposit").value == Decimal("0.1")
        assert validate_positive("12.50", "Deposit").value == Decimal("12.50")
        assert validate_positive(Decimal("3"), "Deposit").value == Decimal("3")

    @pytest.mark.parametrize("amount", [0, -1, Decimal("-0.01"), "0", "-5"])
    def test_rejects_non_positive(self, amount):
        """Test zero and negative amounts are invalid"""
        result = validate_positive(amount, "Deposit")
        assert result.is_err
        assert result.kind == ErrorKind.INVALID_AMOUNT
        assert "Deposit amount must be positive." in result.error.message

    @pytest.mark.parametrize("amount", ["abc", "", None, True, float("nan"), float("inf")])
    def test_rejects_non_numbers(self, amount):
        """Test values that are not usable numbers are invalid"""
        result = validate_positive(amount, "Withdrawal")
        assert result.is_err
        assert isinstance(result.error, InvalidAmountError)


class TestAccountCreation:
    """Test Account construction"""

    def test_defaults(self):
        """Test a new account starts at zero with empty history"""
        account = Account("A2", "Bob")

        assert account.account_number == "A2"
        assert account.holder_name == "Bob"
        assert account.balance == Decimal("0")
        assert account.history_snapshot() == ()
        assert account.created_at.tzinfo is not None

    def test_opening_balance_is_not_a_transaction(self, account):
        """Test the initial balance does not create a history entry"""
        assert account.balance_snapshot() == Decimal("100")
        assert len(account.history_snapshot()) == 0

    def test_negative_opening_balance_rejected(self):
        """Test an account cannot be constructed below zero"""
        with pytest.raises(ValueError, match="non-negative"):
            Account("A3", "Carol", Decimal("-1"))

    def test_account_number_is_read_only(self, account):
        """Test the account number cannot be reassigned"""
        with pytest.raises(AttributeError):
            account.account_number = "OTHER"

    def test_balance_is_read_only(self, account):
        """Test the balance cannot be assigned directly"""
        with pytest.raises(AttributeError):
            account.balance = Decimal("1000000")

    def test_holder_name_is_mutable(self, account):
        """Test the display name can change"""
        account.holder_name = "Alice Smith"
        assert account.holder_name == "Alice Smith"

    def test_to_dict(self, account):
        """Test summary rendering"""
        account.deposit(Decimal("1"))
        data = account.to_dict()

        assert data["account_number"] == "A1"
        assert data["holder_name"] == "Alice"
        assert data["balance"] == "101"
        assert data["transaction_count"] == 1
        assert data["created_at"] == "2024-01-01T09:00:00+00:00"


class TestDeposit:
    """Test deposits"""

    def test_deposit_increases_balance_and_records(self, account):
        """Test deposit adds exactly the amount and appends one transaction"""
        result = account.deposit(Decimal("50"))

        assert result.is_ok
        assert result.value is None
        assert account.balance == Decimal("150")

        history = account.history_snapshot()
        assert len(history) == 1
        assert history[0].kind == "Deposit"
        assert history[0].amount == Decimal("50")
        assert history[0].is_credit

    @pytest.mark.parametrize("amount", [0, -10])
    def test_invalid_deposit_leaves_state_unchanged(self, account, amount):
        """Test rejected deposits change nothing"""
        result = account.deposit(amount)

        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_float_deposit_is_exact(self):
        """Test floats are converted without binary artefacts"""
        account = Account("F1", "Float")
        account.deposit(0.1)
        account.deposit(0.2)
        assert account.balance == Decimal("0.3")

    @pytest.mark.parametrize("amount", ["abc5", "USD5", "e5", "5 dollars"])
    def test_text_with_letters_is_rejected(self, account, amount):
        """Test only a currency symbol may precede the digits"""
        result = account.deposit(amount)

        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert "Deposit amount must be a number." in result.error.message
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_currency_symbol_is_accepted(self, account):
        assert account.deposit("$1,000.25").is_ok
        assert account.balance == Decimal("1100.25")

    @pytest.mark.parametrize("amount", ["1e1000000", Decimal("1E15"), "0.000000001"])
    def test_out_of_range_deposit(self, account, amount):
        """Test huge or over-precise amounts are InvalidAmount, not an arithmetic error"""
        result = account.deposit(amount)

        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert "outside the supported range" in result.error.message
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_deposit_cannot_exceed_balance_cap(self):
        """Test a balance near the cap refuses credits it cannot hold"""
        account = Account("C1", "Cap", Decimal("999999999999999"))

        assert account.can_credit(Decimal("0.99999999")).is_ok
        result = account.deposit(Decimal("1"))

        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert account.balance == Decimal("999999999999999")
        assert account.transfer_in(Decimal("1"), "X").has_kind(ErrorKind.INVALID_AMOUNT)
        assert account.history_snapshot() == ()

    def test_small_amounts_stay_exact(self):
        """Test eight-decimal amounts accumulate without rounding"""
        account = Account("S1", "Small", Decimal("99999999999999.9"))
        assert account.deposit("0.00000001").is_ok
        assert account.balance == Decimal("99999999999999.90000001")


class TestWithdraw:
    """Test withdrawals"""

    def test_withdraw_decreases_balance_and_records(self, account):
        """Test withdrawal subtracts and records a negative amount"""
        result = account.withdraw(Decimal("30"))

        assert result.is_ok
        assert account.balance == Decimal("70")
        txn = account.history_snapshot()[0]
        assert txn.kind == "Withdrawal"
        assert txn.amount == Decimal("-30")
        assert txn.is_debit

    def test_withdraw_entire_balance(self, account):
        """Test withdrawing exactly the balance leaves zero"""
        assert account.withdraw(Decimal("100")).is_ok
        assert account.balance == Decimal("0")

    def test_insufficient_funds(self, account):
        """Test overdrawing fails and leaves state unchanged"""
        result = account.withdraw(Decimal("100.01"))

        assert result.is_err
        assert isinstance(result.error, InsufficientFundsError)
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_invalid_amount_checked_before_funds(self):
        """Test a negative amount is InvalidAmount even on an empty account"""
        account = Account("E1", "Empty")
        result = account.withdraw(-5)
        assert result.has_kind(ErrorKind.INVALID_AMOUNT)


class TestTransferHalves:
    """Test the debit and credit halves of a transfer"""

    def test_transfer_out(self, account):
        """Test debit half labels the recipient"""
        assert account.transfer_out(Decimal("40"), "B7").is_ok

        assert account.balance == Decimal("60")
        txn = account.history_snapshot()[-1]
        assert txn.kind == "Transfer to B7"
        assert txn.amount == Decimal("-40")

    def test_transfer_out_insufficient_funds(self, account):
        """Test debit half refuses to overdraw"""
        result = account.transfer_out(Decimal("500"), "B7")

        assert result.has_kind(ErrorKind.INSUFFICIENT_FUNDS)
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_transfer_out_invalid_amount(self, account):
        """Test debit half rejects zero"""
        result = account.transfer_out(0, "B7")
        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert "Transfer amount must be positive." in result.error.message

    def test_transfer_in(self, account):
        """Test credit half labels the sender"""
        assert account.transfer_in(Decimal("25"), "C3").is_ok

        assert account.balance == Decimal("125")
        txn = account.history_snapshot()[-1]
        assert txn.kind == "Transfer from C3"
        assert txn.amount == Decimal("25")

    def test_transfer_in_rejects_negative(self, account):
        """Test credit half cannot be used to drain the account"""
        result = account.transfer_in(Decimal("-25"), "C3")

        assert result.has_kind(ErrorKind.INVALID_AMOUNT)
        assert account.balance == Decimal("100")


class TestCanDebit:
    """Test the non-mutating debit check"""

    def test_can_debit_does_not_mutate(self, account):
        """Test the check returns the normalised amount without side effects"""
        result = account.can_debit("60")

        assert result.value == Decimal("60")
        assert account.balance == Decimal("100")
        assert account.history_snapshot() == ()

    def test_can_debit_reports_shortfall(self, account):
        """Test the check reports insufficient funds"""
        result = account.can_debit(Decimal("101"), "Transfer")
        assert result.has_kind(ErrorKind.INSUFFICIENT_FUNDS)
        assert "A1" in result.error.message


class TestHistory:
    """Test transaction history behaviour"""

    def test_history_is_chronological(self, account):
        """Test insertion order is timestamp order"""
        account.deposit(10)
        account.withdraw(5)
        account.transfer_out(1, "X")

        history = account.history_snapshot()
        assert [txn.kind for txn in history] == ["Deposit", "Withdrawal", "Transfer to X"]
        timestamps = [txn.timestamp for txn in history]
        assert timestamps == sorted(timestamps)

    def test_history_snapshot_is_immutable_copy(self, account):
        """Test callers cannot mutate the log through the snapshot"""
        account.deposit(10)
        snapshot = account.history_snapshot()

        assert isinstance(snapshot, tuple)
        with pytest.raises(AttributeError):
            snapshot.append(snapshot[0])

        account.deposit(20)
        assert len(snapshot) == 1
        assert len(account.history_snapshot()) == 2

    def test_history_never_shrinks(self, account):
        """Test history length is non-decreasing across successes and failures"""
        lengths = [len(account.history_snapshot())]
        for operation in (
            lambda: account.deposit(10),
            lambda: account.withdraw(1000),
            lambda: account.deposit(-1),
            lambda: account.withdraw(5),
            lambda: account.transfer_out(0, "Z"),
        ):
            operation()
            lengths.append(len(account.history_snapshot()))

        assert lengths == sorted(lengths)
        assert lengths[-1] == 2

    def test_transactions_are_frozen(self, account):
        """Test a recorded transaction cannot be edited"""
        account.deposit(10)
        txn = account.history_snapshot()[0]

        with pytest.raises(AttributeError):
            txn.amount = Decimal("1000")

    def test_transaction_to_dict(self):
        """Test JSON rendering of a transaction"""
        txn = Transaction(
            timestamp=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
            kind="Withdrawal",
            amount=Decimal("-12.50")
        )

        assert txn.to_dict() == {
            "timestamp": "2024-05-01T12:30:00+00:00",
            "kind": "Withdrawal",
            "amount": "-12.50",
        }
