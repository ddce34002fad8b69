# =============================================================================
# mensa/eat_api.py  —  eat-api HTTP Client & Upstream Schemas
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the TUM eat-api (https://tum-dev.github.io/eat-api), a static
#   JSON site maintained by the TUM Developers that mirrors the
#   Studierendenwerk München menus.  Two endpoints are used:
#
#     GET {base}/enums/canteens.json           → list of canteens
#     GET {base}/{canteen_id}/{year}/{week}.json → one ISO week of menus
#
# SCHEMAS AT THE BOUNDARY:
#   The JSON is checked with pydantic models before anything else touches
#   it.  If upstream changes shape (a missing "canteen_id", "days" turning
#   into a dict, ...) we raise ParseError instead of quietly producing
#   half-empty records.  Fields that upstream legitimately omits or nulls
#   are Optional here; defaulting them is the caller's job.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mensa.config import Settings
from mensa.errors import ParseError

logger = logging.getLogger(__name__)


# =============================================================================
# Upstream schemas: canteens.json
# =============================================================================
class LocationRecord(BaseModel):
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OpenHoursRecord(BaseModel):
    start: str
    end: str


class CanteenRecord(BaseModel):
    enum_name: str
    name: str
    location: LocationRecord
    canteen_id: str
    queue_status: Optional[str] = None
    open_hours: Optional[dict[str, OpenHoursRecord]] = None


# =============================================================================
# Upstream schemas: {canteen}/{year}/{week}.json
# =============================================================================
class PriceRecord(BaseModel):
    base_price: Optional[float] = None
    price_per_unit: Optional[float] = None
    unit: Optional[str] = None


class PricesRecord(BaseModel):
    students: Optional[PriceRecord] = None
    staff: Optional[PriceRecord] = None
    guests: Optional[PriceRecord] = None


class DishRecord(BaseModel):
    name: Optional[str] = None
    dish_type: Optional[str] = None
    labels: Optional[list[str]] = None
    prices: Optional[PricesRecord] = None


class DayRecord(BaseModel):
    date: str
    dishes: Optional[list[DishRecord]] = None


class WeekRecord(BaseModel):
    number: Optional[int] = None
    year: Optional[int] = None
    days: Optional[list[DayRecord]] = None


_CANTEEN_LIST = TypeAdapter(list[CanteenRecord])


def _describe(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    return f"{where}: {first.get('msg', 'invalid value')}"


def parse_canteens(payload: Any) -> list[CanteenRecord]:
    """Validate the canteens.json payload.

    Raises:
        ParseError: if the payload is not a list of canteen records.
    """
    try:
        return _CANTEEN_LIST.validate_python(payload)
    except PydanticValidationError as e:
        raise ParseError(f"Unexpected canteen list format ({_describe(e)})") from e


def parse_week(payload: Any) -> WeekRecord:
    """Validate a weekly menu payload.

    Raises:
        ParseError: if the payload does not look like a week of menus.
    """
    try:
        return WeekRecord.model_validate(payload)
    except PydanticValidationError as e:
        raise ParseError(f"Unexpected weekly menu format ({_describe(e)})") from e


def decode_json(response: httpx.Response) -> Any:
    """Decode a response body, mapping decode failures to ParseError."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON from {response.request.url}: {e}") from e


# =============================================================================
# HTTP client
# =============================================================================
class EatApiClient:
    """Minimal async client for the eat-api.

    A fresh httpx.AsyncClient is opened per request; the tools issue at most
    two requests per call, so connection reuse buys little.  ``transport``
    is passed straight to httpx (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "EatApiClient":
        return cls(base_url=settings.api_base_url, timeout=settings.http_timeout)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(self, path: str) -> httpx.Response:
        """GET ``path`` relative to the base URL.

        Non-success statuses are returned, not raised: callers decide what a
        404 means.  Network failures propagate as httpx exceptions.
        """
        url = self.url_for(path)
        logger.debug(f"GET {url}")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return await client.get(url)
