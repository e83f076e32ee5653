"""
ExploreKashmirTours.

- backend/: Booking API, database models, configuration
- cli/: Operator CLI (Typer + Rich) for migrations, catalog and users
"""
