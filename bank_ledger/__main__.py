"""Run the interactive bank ledger menu"""

from .cli import main


if __name__ == "__main__":
    main()
