"""
Bank Ledger API Application Factory

Exposes a Ledger over HTTP. Every handler is async, so all ledger calls run
on the event loop thread one at a time.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status

from . import __version__
from .config import LedgerConfig, build_ledger, get_config
from .errors import ErrorKind
from .ledger import Ledger
from .logging_config import get_logger, log_action
from .results import Result
from .schemas import (
    AccountModel, AmountRequest, CreateAccountRequest, TransactionListModel,
    TransactionModel, TransferRequest, UpdateAccountRequest
)


logger = get_logger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
}


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def _check(result: Result, action: str, resource: Optional[str] = None):
    """Return the Ok value or translate the error into an HTTPException"""
    if result.is_ok:
        return result.value

    error = result.error
    log_action(
        logger, "warning", error.message,
        action=action, resource=resource,
        extra={"error": error.kind.value}
    )
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail=error.to_dict()
    )


accounts_router = APIRouter()
transfers_router = APIRouter()


@accounts_router.post("", status_code=status.HTTP_201_CREATED, response_model=AccountModel)
async def create_account(request: CreateAccountRequest, ledger: Ledger = Depends(get_ledger)):
    """Open a new account"""
    account = _check(
        ledger.create_account(request.account_number, request.holder_name, request.initial_balance),
        "create_account", request.account_number
    )
    log_action(logger, "info", "Account created", action="create_account",
               resource=account.account_number)
    return AccountModel.from_account(account)


@accounts_router.get("", response_model=List[AccountModel])
async def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """List all accounts in creation order"""
    return [AccountModel.from_account(account) for account in ledger.accounts_snapshot()]


@accounts_router.get("/{account_number}", response_model=AccountModel)
async def get_account(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Get account details"""
    account = _check(ledger.lookup(account_number), "lookup", account_number)
    return AccountModel.from_account(account)


@accounts_router.patch("/{account_number}", response_model=AccountModel)
async def update_account(
    account_number: str,
    request: UpdateAccountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Change the account holder's display name"""
    account = _check(ledger.lookup(account_number), "update_account", account_number)
    account.holder_name = request.holder_name
    log_action(logger, "info", "Account holder renamed", action="update_account",
               resource=account_number)
    return AccountModel.from_account(account)


@accounts_router.post("/{account_number}/deposit", response_model=AccountModel)
async def deposit(account_number: str, request: AmountRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a deposit"""
    account = _check(ledger.lookup(account_number), "deposit", account_number)
    _check(account.deposit(request.amount), "deposit", account_number)
    log_action(logger, "info", "Deposit processed", action="deposit",
               resource=account_number, extra={"amount": request.amount})
    return AccountModel.from_account(account)


@accounts_router.post("/{account_number}/withdraw", response_model=AccountModel)
async def withdraw(account_number: str, request: AmountRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a withdrawal"""
    account = _check(ledger.lookup(account_number), "withdraw", account_number)
    _check(account.withdraw(request.amount), "withdraw", account_number)
    log_action(logger, "info", "Withdrawal processed", action="withdraw",
               resource=account_number, extra={"amount": request.amount})
    return AccountModel.from_account(account)


@accounts_router.get("/{account_number}/transactions", response_model=TransactionListModel)
async def get_account_transactions(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Get transaction history for account"""
    history = _check(ledger.history(account_number), "history", account_number)
    return TransactionListModel(
        account_number=account_number,
        transactions=[TransactionModel.from_transaction(txn) for txn in history]
    )


@transfers_router.post("")
async def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    """Move funds between two accounts"""
    _check(
        ledger.transfer(request.amount, request.from_account_number, request.to_account_number),
        "transfer", request.from_account_number
    )
    log_action(logger, "info", "Transfer completed", action="transfer",
               resource=request.from_account_number,
               extra={"to": request.to_account_number, "amount": request.amount})

    sender = ledger.lookup(request.from_account_number).unwrap()
    recipient = ledger.lookup(request.to_account_number).unwrap()
    return {
        "from_account": AccountModel.from_account(sender).model_dump(),
        "to_account": AccountModel.from_account(recipient).model_dump(),
        "message": "Transfer completed successfully"
    }


def create_app(ledger: Optional[Ledger] = None, settings: Optional[LedgerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        ledger: Ledger to serve; a fresh one built from settings if omitted
        settings: Configuration, the global instance if omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_config()

    app = FastAPI(
        title="Bank Ledger API",
        description="In-memory multi-account ledger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger if ledger is not None else build_ledger(settings)
    app.state.settings = settings

    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transfers_router, prefix="/transfers", tags=["Transfers"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "bank_ledger_api",
            "version": __version__,
            "accounts": len(app.state.ledger)
        }

    return app


def run_server(host: str = "127.0.0.1", port: int = 8090, debug: bool = False):
    """Run the API server with uvicorn"""
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port, log_level="debug" if debug else "info")
