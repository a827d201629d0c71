"""
Transaction Records

A Transaction is the immutable record an Account appends to its history
each time an operation changes its balance. The amount is a signed delta:
positive for credits, negative for debits.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

DEPOSIT = "Deposit"
WITHDRAWAL = "Withdrawal"


def transfer_to(account_number: str) -> str:
    """Label for the debit half of a transfer"""
    return f"Transfer to {account_number}"


def transfer_from(account_number: str) -> str:
    """Label for the credit half of a transfer"""
    return f"Transfer from {account_number}"


@dataclass(frozen=True)
class Transaction:
    """Single balance-affecting event in an account's history"""
    timestamp: datetime
    kind: str
    amount: Decimal

    @property
    def is_credit(self) -> bool:
        return self.amount > 0

    @property
    def is_debit(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind,
            "amount": str(self.amount),
        }
