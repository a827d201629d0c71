"""
Ledger Module

The Ledger is the registry of accounts, keyed by account number, and the
only place where an operation touches two accounts at once. Transfers are
validated completely before either account is changed; after that the
debit and the credit run back to back and cannot fail.
"""

from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple
import re

from .accounts import Account, Clock
from .amounts import Numeric, ZERO, to_decimal, within_bounds
from .errors import (
    AccountNotFoundError, DuplicateAccountError, InvalidAccountNumberError,
    InvalidAmountError, SelfTransferError
)
from .results import Err, Ok, Result
from .transactions import Transaction

AccountNumberValidator = Callable[[str], bool]


def accept_any_account_number(account_number: str) -> bool:
    """Default validation policy: every account number is accepted"""
    return True


def pattern_validator(pattern: str) -> AccountNumberValidator:
    """
    Build a validation policy requiring account numbers to fully match a regex

    Args:
        pattern: Regular expression, e.g. r"[A-Z]{2}\\d{6}"

    Returns:
        Predicate suitable for Ledger(account_number_validator=...)

    Raises:
        ValueError: If the pattern does not compile
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid account number pattern {pattern!r}: {e}")

    def validator(account_number: str) -> bool:
        return compiled.fullmatch(account_number) is not None

    return validator


class Ledger:
    """
    Registry owning every account it creates and mediating transfers
    """

    def __init__(
        self,
        account_number_validator: Optional[AccountNumberValidator] = None,
        enforce_unique_account_numbers: bool = True,
        clock: Optional[Clock] = None
    ):
        self.account_number_validator = account_number_validator or accept_any_account_number
        self.enforce_unique_account_numbers = enforce_unique_account_numbers
        self._clock = clock
        # First account registered under each number; lookups resolve here
        self._accounts: Dict[str, Account] = {}
        # Every account ever created, in creation order
        self._created: List[Account] = []

    def __len__(self) -> int:
        return len(self._created)

    def __contains__(self, account_number: object) -> bool:
        return account_number in self._accounts

    def create_account(
        self,
        account_number: str,
        holder_name: str,
        initial_balance: Numeric = ZERO
    ) -> Result[Account]:
        """
        Open and register a new account

        The opening balance is not recorded as a transaction. When
        uniqueness is not enforced a repeated number still opens a new
        account, but lookups keep resolving to the earliest one.

        Args:
            account_number: Unique account identifier
            holder_name: Display name of the account holder
            initial_balance: Opening balance, zero or more

        Returns:
            Ok(Account), or Err with InvalidAccountNumberError,
            DuplicateAccountError or InvalidAmountError
        """
        if not self.account_number_validator(account_number):
            return Err(InvalidAccountNumberError(
                f"Invalid account number: {account_number!r}"
            ))

        if self.enforce_unique_account_numbers and account_number in self._accounts:
            return Err(DuplicateAccountError(
                f"Account {account_number} already exists"
            ))

        opening = to_decimal(initial_balance)
        if opening is None or opening < ZERO or not within_bounds(opening):
            return Err(InvalidAmountError(
                "Initial balance must be a non-negative number below 10^15 "
                "with at most 8 decimal places."
            ))

        account = Account(account_number, holder_name, opening, clock=self._clock)
        self._accounts.setdefault(account_number, account)
        self._created.append(account)
        return Ok(account)

    def lookup(self, account_number: str) -> Result[Account]:
        """Find an account by number"""
        account = self._accounts.get(account_number)
        if account is None:
            return Err(AccountNotFoundError(f"Account {account_number} not found"))
        return Ok(account)

    def transfer(self, amount: Numeric, from_account_number: str, to_account_number: str) -> Result[None]:
        """
        Move funds from one account to another as a single unit

        Both accounts are resolved, and the sender's funds and the
        recipient's headroom checked, before anything changes, so a failed
        transfer leaves both accounts as they were.

        Args:
            amount: Amount to move
            from_account_number: Sender
            to_account_number: Recipient

        Returns:
            Ok(None), or Err with AccountNotFoundError, SelfTransferError,
            InvalidAmountError or InsufficientFundsError
        """
        sender_result = self.lookup(from_account_number)
        if sender_result.is_err:
            return sender_result
        recipient_result = self.lookup(to_account_number)
        if recipient_result.is_err:
            return recipient_result

        sender = sender_result.value
        recipient = recipient_result.value

        if sender is recipient:
            return Err(SelfTransferError(
                f"Cannot transfer from account {from_account_number} to itself"
            ))

        checked = sender.can_debit(amount, "Transfer")
        if checked.is_err:
            return checked
        credit_check = recipient.can_credit(checked.value, "Transfer")
        if credit_check.is_err:
            return credit_check

        value = checked.value
        # Both halves were checked above and return Ok here
        sender.transfer_out(value, recipient.account_number)
        recipient.transfer_in(value, sender.account_number)
        return Ok(None)

    def deposit(self, account_number: str, amount: Numeric) -> Result[None]:
        found = self.lookup(account_number)
        if found.is_err:
            return found
        return found.value.deposit(amount)

    def withdraw(self, account_number: str, amount: Numeric) -> Result[None]:
        found = self.lookup(account_number)
        if found.is_err:
            return found
        return found.value.withdraw(amount)

    def balance(self, account_number: str) -> Result[Decimal]:
        found = self.lookup(account_number)
        if found.is_err:
            return found
        return Ok(found.value.balance_snapshot())

    def history(self, account_number: str) -> Result[Tuple[Transaction, ...]]:
        found = self.lookup(account_number)
        if found.is_err:
            return found
        return Ok(found.value.history_snapshot())

    def accounts_snapshot(self) -> Tuple[Account, ...]:
        """All accounts in creation order"""
        return tuple(self._created)

    def total_balance(self) -> Decimal:
        """Sum of every account balance; transfers leave it unchanged"""
        return sum((account.balance for account in self._created), ZERO)
