"""
Catalog Seed Schemas.

Shape of config/seed/catalog.yaml: destinations, each with its tours.
"""

from pydantic import BaseModel, ConfigDict, Field

from kashmir_tours.backend.schemas.destination import DestinationCreate
from kashmir_tours.backend.schemas.tour import TourCreate


class SeedTour(TourCreate):
    """A tour nested under its destination; destination_id is filled in on load."""

    destination_id: str = ""


class SeedDestination(DestinationCreate):
    tours: list[SeedTour] = Field(default_factory=list)


class CatalogSeed(BaseModel):
    destinations: list[SeedDestination]

    model_config = ConfigDict(extra="forbid")


class SeedResult(BaseModel):
    destinations_created: int = 0
    destinations_skipped: int = 0
    tours_created: int = 0
    tours_skipped: int = 0
