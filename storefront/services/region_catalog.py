"""Region catalog: read-only access to the seeded wilayas"""

import re

from ..core.errors import RegionNotFound
from ..database.regions import RegionDatabase
from ..models.region import Region

REGION_CODE_PATTERN = re.compile(r"^\d{2}$")


def is_region_code(code: object) -> bool:
    return isinstance(code, str) and REGION_CODE_PATTERN.fullmatch(code) is not None


class RegionCatalog:
    """Lookup over the wilaya table"""

    def __init__(self, regions: RegionDatabase):
        self.regions = regions

    async def list_active(self) -> list[Region]:
        """All active wilayas, ordered by code ascending"""
        return await self.regions.list_active()

    async def get_by_code(self, code: str) -> Region:
        """
        Exact lookup by two-digit code.

        Raises:
            RegionNotFound: malformed or unknown code
        """
        if not is_region_code(code):
            raise RegionNotFound(str(code))
        region = await self.regions.get_region(code)
        if region is None:
            raise RegionNotFound(code)
        return region
