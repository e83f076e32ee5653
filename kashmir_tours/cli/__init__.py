"""
CLI Module.

Typer command groups behind ``cli.py``. Commands that change data talk
to the database directly through the backend services, so business
rules are the same as over HTTP.

Usage:
    python cli.py --help
    python cli.py catalog seed
    python cli.py users create-admin --email ops@example.com
"""
