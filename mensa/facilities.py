# =============================================================================
# mensa/facilities.py  —  Facility Directory
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Loads the list of canteens from the eat-api and keeps it for the rest of
#   the process.  Both tools need it: get_mensa_facilities lists it, and
#   get_mensa_menu checks that the requested api name exists.
#
# CACHE LIFECYCLE:
#   FacilityCache is a single slot.  It starts empty, is filled by the first
#   SUCCESSFUL fetch and then never refreshed (canteens change a few times a
#   year; restarting the server picks up changes).  A failed fetch leaves it
#   empty, so the next call simply tries again.
#
#   Two coroutines that both miss the cache before either fills it will both
#   fetch.  That costs one extra request and is otherwise harmless: the later
#   result overwrites an equal list.
#
#   The cache is an object rather than a module global so tests (or a future
#   admin tool) can clear() it or hand a fresh one to each directory.
# =============================================================================

import logging
from typing import Optional

from mensa.eat_api import CanteenRecord, EatApiClient, decode_json, parse_canteens
from mensa.errors import FetchError, MensaError, TransportError
from mensa.models import Coordinates, Facility, OpenHours

logger = logging.getLogger(__name__)

CANTEENS_PATH = "enums/canteens.json"


class FacilityCache:
    """Process-scoped single-slot store for the facility list."""

    def __init__(self) -> None:
        self._facilities: Optional[list[Facility]] = None

    def get(self) -> Optional[list[Facility]]:
        return self._facilities

    def set(self, facilities: list[Facility]) -> None:
        self._facilities = facilities

    def clear(self) -> None:
        self._facilities = None


def to_facility(record: CanteenRecord) -> Facility:
    """Translate an upstream canteen record into a Facility."""
    coordinates = None
    if record.location.latitude is not None and record.location.longitude is not None:
        coordinates = Coordinates(
            latitude=record.location.latitude,
            longitude=record.location.longitude,
        )

    open_hours = None
    if record.open_hours is not None:
        open_hours = {
            day: OpenHours(start=hours.start, end=hours.end)
            for day, hours in record.open_hours.items()
        }

    return Facility(
        name=record.name,
        location=record.location.address,
        api_name=record.canteen_id,
        coordinates=coordinates,
        open_hours=open_hours,
        queue_status=record.queue_status,
    )


def filter_facilities(facilities: list[Facility], text: Optional[str]) -> list[Facility]:
    """Keep facilities whose name or location contains ``text`` (case-insensitive).

    An empty or missing filter returns the list unchanged.
    """
    if not text:
        return facilities
    needle = text.lower()
    return [
        f for f in facilities
        if needle in f.name.lower() or needle in f.location.lower()
    ]


class FacilityDirectory:
    """Fetches canteens from the eat-api and serves them from a cache."""

    def __init__(self, api: EatApiClient, cache: Optional[FacilityCache] = None) -> None:
        self.api = api
        self.cache = cache if cache is not None else FacilityCache()

    async def fetch_facilities(self) -> list[Facility]:
        """Fetch the canteen list (always hits the network).

        Raises:
            FetchError: on a non-success status or any other failure; the
                original exception is chained as ``__cause__``.
        """
        try:
            response = await self.api.get(CANTEENS_PATH)
            if not response.is_success:
                raise TransportError(response.status_code, response.reason_phrase)
            records = parse_canteens(decode_json(response))
        except MensaError as e:
            raise FetchError(f"Failed to fetch facilities: {e.message}") from e
        except Exception as e:
            raise FetchError(f"Failed to fetch facilities: {e}") from e

        facilities = [to_facility(r) for r in records]
        logger.info(f"Loaded {len(facilities)} facilities from the eat-api")
        return facilities

    async def get_facilities(self) -> list[Facility]:
        """Return the cached facility list, fetching it on first use."""
        cached = self.cache.get()
        if cached is not None:
            return cached
        facilities = await self.fetch_facilities()
        self.cache.set(facilities)
        return facilities

    async def find_facility(self, api_name: str) -> Optional[Facility]:
        """Exact, case-sensitive lookup by api name."""
        for facility in await self.get_facilities():
            if facility.api_name == api_name:
                return facility
        return None
