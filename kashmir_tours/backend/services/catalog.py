"""
Catalog Seeding Service.

Loads destinations and tours from a seed document. Records are matched
by slug, so running the same seed twice creates nothing new.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.utils import slugify
from kashmir_tours.backend.repositories.destination import DestinationRepository
from kashmir_tours.backend.repositories.tour import TourRepository
from kashmir_tours.backend.schemas.catalog import CatalogSeed, SeedResult
from kashmir_tours.backend.services.base import BaseService


class CatalogSeedService(BaseService):
    """Idempotent catalogue loader used by ``cli.py catalog seed``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.destinations = DestinationRepository(session)
        self.tours = TourRepository(session)

    async def seed(self, catalog: CatalogSeed) -> SeedResult:
        result = SeedResult()

        for item in catalog.destinations:
            slug = slugify(item.name)
            destination = await self.destinations.get_by_slug(slug)
            if destination is None:
                destination = await self._execute_db_operation(
                    "seed_destination",
                    self.destinations.create(
                        slug=slug,
                        **item.model_dump(exclude={"tours"}),
                    ),
                )
                result.destinations_created += 1
            else:
                result.destinations_skipped += 1

            for tour in item.tours:
                tour_slug = slugify(tour.title)
                if await self.tours.get_by_slug(tour_slug) is not None:
                    result.tours_skipped += 1
                    continue
                data = tour.model_dump()
                data["destination_id"] = destination.id
                await self._execute_db_operation(
                    "seed_tour",
                    self.tours.create(slug=tour_slug, **data),
                )
                result.tours_created += 1

        self._log_operation("Catalog seeded", **result.model_dump())
        return result
