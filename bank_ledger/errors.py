"""
Ledger Error Taxonomy

Every failure the ledger can report has an ErrorKind and a matching
exception class. Core operations return these errors inside a Result
instead of raising them; callers raise them on demand via Result.unwrap().
"""

from enum import Enum
from typing import Dict


class ErrorKind(Enum):
    """Kinds of ledger failures"""
    INVALID_AMOUNT = "invalid_amount"                  # Amount <= 0 or not a number
    INSUFFICIENT_FUNDS = "insufficient_funds"          # Debit exceeds current balance
    ACCOUNT_NOT_FOUND = "account_not_found"            # No account with that number
    INVALID_ACCOUNT_NUMBER = "invalid_account_number"  # Rejected by the validation policy
    DUPLICATE_ACCOUNT = "duplicate_account"            # Number already registered
    SELF_TRANSFER = "self_transfer"                    # Source and destination are the same


class LedgerError(Exception):
    """Base class for all ledger errors"""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        """Render as a JSON-friendly error payload"""
        return {"error": self.kind.value, "message": self.message}


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT


class InsufficientFundsError(LedgerError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class AccountNotFoundError(LedgerError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND


class InvalidAccountNumberError(LedgerError):
    kind = ErrorKind.INVALID_ACCOUNT_NUMBER


class DuplicateAccountError(LedgerError):
    kind = ErrorKind.DUPLICATE_ACCOUNT


class SelfTransferError(LedgerError):
    kind = ErrorKind.SELF_TRANSFER

