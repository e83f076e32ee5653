"""
CLI Commands.

Organized by domain/feature area.
"""

from kashmir_tours.cli.commands.catalog import app as catalog_app
from kashmir_tours.cli.commands.db import app as db_app
from kashmir_tours.cli.commands.server import app as server_app
from kashmir_tours.cli.commands.system import app as system_app
from kashmir_tours.cli.commands.users import app as users_app

__all__ = [
    "catalog_app",
    "db_app",
    "server_app",
    "system_app",
    "users_app",
]
