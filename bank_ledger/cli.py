"""
Interactive Menu

Text front end over a Ledger: reads choices and values line by line,
prints results and turns ledger errors into user-facing messages.
Input and output are injectable so sessions can be scripted.
"""

from typing import Callable, Dict, Optional

from .accounts import Account
from .amounts import format_amount, to_decimal
from .config import LedgerConfig, build_ledger, get_config
from .errors import ErrorKind
from .ledger import Ledger
from .logging_config import get_logger, log_action, setup_logging
from .results import Result


logger = get_logger(__name__)

MENU_OPTIONS = (
    "Create Account",
    "Deposit",
    "Withdraw",
    "Check Balance",
    "View Transaction History",
    "Transfer Money",
    "Exit",
)

ERROR_PREFIXES: Dict[ErrorKind, str] = {
    ErrorKind.INVALID_AMOUNT: "Invalid amount.",
    ErrorKind.INSUFFICIENT_FUNDS: "Insufficient funds.",
    ErrorKind.ACCOUNT_NOT_FOUND: "Account not found.",
    ErrorKind.INVALID_ACCOUNT_NUMBER: "Invalid account number.",
    ErrorKind.DUPLICATE_ACCOUNT: "Account number already in use.",
    ErrorKind.SELF_TRANSFER: "Cannot transfer to the same account.",
}


class LedgerShell:
    """
    Menu-driven session over a single Ledger
    """

    def __init__(
        self,
        ledger: Ledger,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        bank_name: str = "Advanced Bank"
    ):
        self.ledger = ledger
        self._input = input_fn
        self._output = output_fn
        self.bank_name = bank_name

        self._handlers: Dict[int, Callable[[Account], None]] = {
            2: self._deposit,
            3: self._withdraw,
            4: self._check_balance,
            5: self._print_history,
            6: self._transfer,
        }

    def run(self) -> None:
        """Show the menu until the user exits or input runs out"""
        while True:
            self._print_menu()
            choice = self._read("Choose an option:")
            if choice is None:
                return

            try:
                option = int(choice)
            except ValueError:
                self._output("Invalid input. Please enter a valid option.")
                continue

            if option == 7:
                self._output(f"Thank you for using {self.bank_name}!")
                return
            if option == 1:
                self.create_account()
            elif option in self._handlers:
                self.perform_transaction(option)
            else:
                self._output("Invalid option. Please choose a valid option.")

    def create_account(self) -> None:
        account_number = self._read("Enter account number:")
        if not account_number:
            self._output("Invalid account number.")
            return

        holder_name = self._read("Enter account holder name:") or ""
        opening = self._read("Enter initial balance (leave blank for 0):") or "0"

        result = self.ledger.create_account(account_number, holder_name, opening)
        if self._report_failure(result, "create_account", account_number, "Failed to create account."):
            return

        log_action(logger, "info", "Account created", action="create_account",
                   resource=account_number)
        self._output("Account created successfully!")

    def perform_transaction(self, option: int) -> None:
        account_number = self._read("Enter account number:")
        found = self.ledger.lookup(account_number) if account_number else None
        if found is None or found.is_err:
            self._output("Account not found.")
            return

        self._handlers[option](found.value)

    def _deposit(self, account: Account) -> None:
        amount = self._read_amount("Enter deposit amount:", "Invalid deposit amount.")
        if amount is None:
            return

        result = account.deposit(amount)
        if self._report_failure(result, "deposit", account.account_number):
            return

        log_action(logger, "info", "Deposit processed", action="deposit",
                   resource=account.account_number, extra={"amount": str(amount)})
        self._output(f"Deposit of {format_amount(amount)} successfully credited "
                     f"to account {account.account_number}.")

    def _withdraw(self, account: Account) -> None:
        amount = self._read_amount("Enter withdrawal amount:", "Invalid withdrawal amount.")
        if amount is None:
            return

        result = account.withdraw(amount)
        if self._report_failure(result, "withdraw", account.account_number):
            return

        log_action(logger, "info", "Withdrawal processed", action="withdraw",
                   resource=account.account_number, extra={"amount": str(amount)})
        self._output(f"Withdrawal of {format_amount(amount)} successfully debited "
                     f"from account {account.account_number}.")

    def _check_balance(self, account: Account) -> None:
        self._output(f"Account {account.account_number} - "
                     f"Balance: {format_amount(account.balance_snapshot())}")

    def _print_history(self, account: Account) -> None:
        self._output(f"Transaction History for Account {account.account_number}:")
        for txn in account.history_snapshot():
            stamp = txn.timestamp.strftime("%Y-%m-%d %H:%M")
            self._output(f"{stamp} - {txn.kind}: {format_amount(txn.amount)}")

    def _transfer(self, sender: Account) -> None:
        recipient_number = self._read("Enter recipient's account number:")
        if not recipient_number or recipient_number not in self.ledger:
            self._output("Transaction failed. Account not found.")
            return

        amount = self._read_amount("Enter transfer amount:", "Invalid transfer amount.")
        if amount is None:
            return

        result = self.ledger.transfer(amount, sender.account_number, recipient_number)
        if self._report_failure(result, "transfer", sender.account_number):
            return

        log_action(logger, "info", "Transfer completed", action="transfer",
                   resource=sender.account_number,
                   extra={"to": recipient_number, "amount": str(amount)})
        self._output(f"Transfer of {format_amount(amount)} from account "
                     f"{sender.account_number} to {recipient_number} completed successfully.")

    def _print_menu(self) -> None:
        self._output(f"\nWelcome to {self.bank_name}!")
        for number, label in enumerate(MENU_OPTIONS, start=1):
            self._output(f"{number}. {label}")

    def _read(self, prompt: str) -> Optional[str]:
        self._output(prompt)
        try:
            return self._input("").strip()
        except EOFError:
            return None

    def _read_amount(self, prompt: str, invalid_message: str):
        raw = self._read(prompt)
        amount = to_decimal(raw) if raw else None
        if amount is None or amount <= 0:
            self._output(f"Transaction failed. {invalid_message}")
            return None
        return amount

    def _report_failure(self, result: Result, action: str, resource: str,
                        prefix: str = "Transaction failed.") -> bool:
        """Print and log an Err result; True when the operation failed"""
        if result.is_ok:
            return False

        error = result.error
        log_action(logger, "warning", error.message, action=action,
                   resource=resource, extra={"error": error.kind.value})
        self._output(f"{prefix} {ERROR_PREFIXES[error.kind]} {error.message}")
        return True


def main(settings: Optional[LedgerConfig] = None) -> None:
    """Entry point for the bank-ledger console script"""
    settings = settings or get_config()
    setup_logging(settings.log_level, settings.log_format)

    shell = LedgerShell(build_ledger(settings), bank_name=settings.bank_name)
    try:
        shell.run()
    except KeyboardInterrupt:
        print(f"\nThank you for using {settings.bank_name}!")
