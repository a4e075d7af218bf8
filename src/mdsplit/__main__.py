"""Allow ``python -m mdsplit``."""

from mdsplit.cli import app

if __name__ == "__main__":
    app()
