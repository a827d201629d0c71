"""
Bank Ledger

An in-memory multi-account ledger: accounts with Decimal balances and
append-only transaction histories, and a registry that creates, looks up
and transfers between them. Operations return Ok/Err results.
"""

__version__ = "1.0.0"

from .accounts import Account
from .errors import (
    AccountNotFoundError, DuplicateAccountError, ErrorKind,
    InsufficientFundsError, InvalidAccountNumberError, InvalidAmountError,
    LedgerError, SelfTransferError
)
from .ledger import Ledger, accept_any_account_number, pattern_validator
from .results import Err, Ok, Result
from .transactions import Transaction

__all__ = [
    "Account",
    "AccountNotFoundError",
    "DuplicateAccountError",
    "Err",
    "ErrorKind",
    "InsufficientFundsError",
    "InvalidAccountNumberError",
    "InvalidAmountError",
    "Ledger",
    "LedgerError",
    "Ok",
    "Result",
    "SelfTransferError",
    "Transaction",
    "accept_any_account_number",
    "pattern_validator",
]
