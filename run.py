#!/usr/bin/env python3
"""
Bank Ledger API Entry Point

Starts the FastAPI server on the configured host and port.
"""

import sys

from bank_ledger.api import run_server
from bank_ledger.config import get_config
from bank_ledger.logging_config import setup_logging


if __name__ == "__main__":
    settings = get_config()
    setup_logging(settings.log_level, settings.log_format)

    print("Starting Bank Ledger API...")
    print(f"API available at: http://{settings.api_host}:{settings.api_port}")
    print(f"Documentation at: http://{settings.api_host}:{settings.api_port}/docs")
    print()

    try:
        run_server(
            host=settings.api_host,
            port=settings.api_port,
            debug=settings.log_level == "DEBUG"
        )
    except KeyboardInterrupt:
        print("\nShutting down Bank Ledger API...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
