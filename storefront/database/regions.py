"""Wilaya storage"""

from typing import Iterable, Optional

from ..models.region import Region
from .engine import Database


class RegionDatabase:
    """Wilaya table. Seeded once, read-only afterwards."""

    def __init__(self, db: Database):
        self.db = db

    def seed(self, regions: Iterable[Region]) -> int:
        """Insert or refresh wilayas, keyed by code"""
        count = 0
        for region in regions:
            self.db.regions[region.code] = region.model_copy()
            count += 1
        return count

    async def get_region(self, code: str) -> Optional[Region]:
        """Get a wilaya by code"""
        await self.db.io()
        region = self.db.regions.get(code)
        return region.model_copy() if region else None

    async def list_active(self) -> list[Region]:
        """Active wilayas ordered by code"""
        await self.db.io()
        regions = [r.model_copy() for r in self.db.regions.values() if r.active]
        regions.sort(key=lambda r: r.code)
        return regions
