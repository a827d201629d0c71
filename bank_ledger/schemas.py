"""
Pydantic schemas for API requests and responses
"""

from typing import List
from pydantic import BaseModel, Field

from .accounts import Account
from .transactions import Transaction


class CreateAccountRequest(BaseModel):
    account_number: str = Field(..., min_length=1)
    holder_name: str = ""
    initial_balance: str = Field("0", description="Decimal amount as string")


class UpdateAccountRequest(BaseModel):
    holder_name: str


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Decimal amount as string")


class TransferRequest(BaseModel):
    from_account_number: str
    to_account_number: str
    amount: str = Field(..., description="Decimal amount as string")


class AccountModel(BaseModel):
    account_number: str
    holder_name: str
    balance: str
    created_at: str
    transaction_count: int

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        return cls(**account.to_dict())


class TransactionModel(BaseModel):
    timestamp: str
    kind: str
    amount: str

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransactionModel':
        return cls(**transaction.to_dict())


class TransactionListModel(BaseModel):
    account_number: str
    transactions: List[TransactionModel]
