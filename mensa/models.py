# =============================================================================
# mensa/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# from the eat-api to the agent.  They carry almost no behavior.  The tool
# layer turns them into JSON with dataclasses.asdict().
#
# Upstream JSON is NOT modelled here: the raw eat-api records are validated by
# the pydantic schemas in mensa/eat_api.py and then translated into these
# classes.  Keeping the two apart means a renamed upstream field only touches
# the translation code.
# =============================================================================

from dataclasses import asdict, dataclass, field
from typing import Optional

from mensa.errors import MensaError


# -----------------------------------------------------------------------------
# Facility — one canteen / cafeteria / bistro
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class OpenHours:
    start: str                         # "11:00"
    end: str                           # "14:00"


@dataclass(frozen=True)
class Facility:
    """A canteen as listed by the eat-api directory.

    ``api_name`` is the stable identifier used verbatim in menu URLs
    (e.g. "mensa-garching").  Lookups by it are exact and case-sensitive.
    """

    name: str                          # "Mensa Garching"
    location: str                      # Street address
    api_name: str                      # "mensa-garching"
    coordinates: Optional[Coordinates] = None
    open_hours: Optional[dict[str, OpenHours]] = None   # keyed by "mon".."fri"
    queue_status: Optional[str] = None


# -----------------------------------------------------------------------------
# Menu — one day's dishes at one facility
# -----------------------------------------------------------------------------
@dataclass
class Price:
    base_price: float = 0.0
    price_per_unit: float = 0.0
    unit: str = ""                     # "100g", "Portion", or ""


@dataclass
class MenuPrices:
    """Per-audience prices.  An audience is None when upstream omits it."""

    students: Optional[Price] = None
    staff: Optional[Price] = None
    guests: Optional[Price] = None


@dataclass
class MenuItem:
    name: str
    category: Optional[str] = None     # upstream "dish_type", e.g. "Pasta"
    labels: list[str] = field(default_factory=list)   # "VEGAN", "GLUTEN", ...
    price: Optional[MenuPrices] = None


@dataclass
class DayMenu:
    date: str                          # "2025-06-16"
    facility: str                      # api_name
    menu: list[MenuItem] = field(default_factory=list)
    facility_name: Optional[str] = None   # filled in by the tool layer
    location: Optional[str] = None


# -----------------------------------------------------------------------------
# MenuResult — tagged success/failure value returned by the menu fetcher
# -----------------------------------------------------------------------------
@dataclass
class MenuResult:
    success: bool
    data: Optional[DayMenu] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data: DayMenu) -> "MenuResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: MensaError) -> "MenuResult":
        return cls(success=False, error=error.message, error_type=error.kind)

    def to_dict(self) -> dict:
        """Serialize for the tool payload, leaving out empty top-level keys."""
        return {k: v for k, v in asdict(self).items() if v is not None}
