"""
Account Module

An Account owns its balance and its append-only transaction history.
Only the account's own operations change either of them, and every
operation validates before it mutates, so the balance never goes negative.
"""

from decimal import Decimal
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .amounts import Numeric, ZERO, exact_sum, to_decimal, within_bounds
from .errors import InsufficientFundsError, InvalidAmountError
from .results import Err, Ok, Result
from .transactions import (
    DEPOSIT, WITHDRAWAL, Transaction, transfer_from, transfer_to
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_positive(amount: Numeric, operation: str) -> Result[Decimal]:
    """
    Check that an amount is a number strictly greater than zero

    Args:
        amount: Raw amount supplied by the caller
        operation: Operation name used in the error message

    Returns:
        Ok with the normalised Decimal, or Err(InvalidAmountError)
    """
    value = to_decimal(amount)
    if value is None:
        return Err(InvalidAmountError(f"{operation} amount must be a number."))
    if value <= ZERO:
        return Err(InvalidAmountError(f"{operation} amount must be positive."))
    if not within_bounds(value):
        return Err(InvalidAmountError(
            f"{operation} amount is outside the supported range "
            f"(below 10^15, at most 8 decimal places)."
        ))
    return Ok(value)


class Account:
    """
    Bank account with a balance and chronological transaction log
    """

    def __init__(
        self,
        account_number: str,
        holder_name: str,
        initial_balance: Numeric = ZERO,
        clock: Optional[Clock] = None
    ):
        opening = to_decimal(initial_balance)
        if opening is None or opening < ZERO or not within_bounds(opening):
            raise ValueError("Initial balance must be a non-negative number in the supported range")

        self._account_number = account_number
        self.holder_name = holder_name
        self._balance = opening
        self._history: List[Transaction] = []
        self._clock = clock or utc_now
        self.created_at = self._clock()

    def __repr__(self) -> str:
        return (f"Account(account_number={self._account_number!r}, "
                f"holder_name={self.holder_name!r}, balance={self._balance})")

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def balance(self) -> Decimal:
        return self._balance

    def balance_snapshot(self) -> Decimal:
        """Current balance"""
        return self._balance

    def history_snapshot(self) -> Tuple[Transaction, ...]:
        """Transactions in the order they happened, as an immutable copy"""
        return tuple(self._history)

    def can_debit(self, amount: Numeric, operation: str = "Withdrawal") -> Result[Decimal]:
        """
        Check whether a debit of this amount would be accepted

        Nothing is mutated. Withdrawals, outgoing transfers and the ledger's
        transfer pre-check all go through here.

        Args:
            amount: Amount to debit
            operation: Operation name used in error messages

        Returns:
            Ok with the normalised amount, or Err with InvalidAmountError /
            InsufficientFundsError
        """
        checked = validate_positive(amount, operation)
        if checked.is_err:
            return checked

        value = checked.value
        if value > self._balance:
            return Err(InsufficientFundsError(
                f"Insufficient funds in account {self._account_number}: "
                f"balance {self._balance}, requested {value}."
            ))
        return Ok(value)

    def can_credit(self, amount: Numeric, operation: str = "Deposit") -> Result[Decimal]:
        """
        Check whether a credit of this amount would be accepted

        The new balance must stay below 10^15 and be representable without
        rounding. Nothing is mutated.
        """
        checked = validate_positive(amount, operation)
        if checked.is_err:
            return checked

        new_balance = exact_sum(self._balance, checked.value)
        if new_balance is None or not within_bounds(new_balance):
            return Err(InvalidAmountError(
                f"{operation} would push account {self._account_number} "
                f"beyond the largest supported balance."
            ))
        return checked

    def deposit(self, amount: Numeric) -> Result[None]:
        """Credit the account with a positive amount"""
        checked = self.can_credit(amount, "Deposit")
        if checked.is_err:
            return checked

        self._credit(checked.value, DEPOSIT)
        return Ok(None)

    def withdraw(self, amount: Numeric) -> Result[None]:
        """Debit the account, refusing to go below zero"""
        checked = self.can_debit(amount, "Withdrawal")
        if checked.is_err:
            return checked

        self._debit(checked.value, WITHDRAWAL)
        return Ok(None)

    def transfer_out(self, amount: Numeric, counterpart_number: str) -> Result[None]:
        """
        Debit half of a transfer

        Args:
            amount: Amount leaving this account
            counterpart_number: Account number of the recipient

        Returns:
            Ok(None), or Err with InvalidAmountError / InsufficientFundsError
        """
        checked = self.can_debit(amount, "Transfer")
        if checked.is_err:
            return checked

        self._debit(checked.value, transfer_to(counterpart_number))
        return Ok(None)

    def transfer_in(self, amount: Numeric, sender_number: str) -> Result[None]:
        """
        Credit half of a transfer

        Args:
            amount: Amount arriving in this account
            sender_number: Account number of the sender

        Returns:
            Ok(None), or Err(InvalidAmountError) for a non-positive amount
            or one the balance cannot absorb exactly
        """
        checked = self.can_credit(amount, "Transfer")
        if checked.is_err:
            return checked

        self._credit(checked.value, transfer_from(sender_number))
        return Ok(None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account_number": self._account_number,
            "holder_name": self.holder_name,
            "balance": str(self._balance),
            "created_at": self.created_at.isoformat(),
            "transaction_count": len(self._history),
        }

    def _credit(self, amount: Decimal, kind: str) -> None:
        self._balance += amount
        self._record(kind, amount)

    def _debit(self, amount: Decimal, kind: str) -> None:
        self._balance -= amount
        self._record(kind, -amount)

    def _record(self, kind: str, amount: Decimal) -> None:
        self._history.append(Transaction(timestamp=self._clock(), kind=kind, amount=amount))
