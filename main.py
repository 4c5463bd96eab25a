"""
Main application entry point
"""
import sys

from webmail_client.cli import main


if __name__ == "__main__":
    sys.exit(main())
