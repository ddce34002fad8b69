# =============================================================================
# mensa/menu.py  —  Daily Menu Lookup
# =============================================================================
#
# HOW A LOOKUP WORKS:
#   1. Validate the date ("YYYY-MM-DD", and a real calendar day)
#   2. Convert it to an ISO (year, week) pair  → mensa/week_dates.py
#   3. GET {base}/{api_name}/{year}/{week}.json  (week is NOT zero-padded)
#   4. Pick the entry of "days" whose date equals the requested date
#   5. Reshape its dishes into MenuItem records
#
# FAILURE POLICY:
#   get_mensa_menu() never raises.  Every failure ends up as a MenuResult with
#   success=False, a readable message and an error_type.  Two "not found"
#   cases are distinguished in the message:
#     - HTTP 404: the week file does not exist (closed, or too far ahead)
#     - the week exists but the day is missing (weekend, public holiday)
# =============================================================================

import logging
import re
from datetime import datetime, tzinfo
from typing import Optional

from mensa import week_dates
from mensa.eat_api import DishRecord, EatApiClient, PriceRecord, decode_json, parse_week
from mensa.errors import MensaError, NotFoundError, TransportError, UnknownError, ValidationError
from mensa.models import DayMenu, MenuItem, MenuPrices, MenuResult, Price

logger = logging.getLogger(__name__)

_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

UNKNOWN_DISH = "Unknown dish"

INVALID_DATE_MESSAGE = "Invalid date format. Expected YYYY-MM-DD (e.g., 2025-05-25)"


def get_current_date(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> str:
    """Today's date as "YYYY-MM-DD"."""
    return week_dates.today(now, tz).strftime(week_dates.DATE_FORMAT)


def is_valid_date(value: str) -> bool:
    """True for a "YYYY-MM-DD" string naming a real calendar day.

    "2025-02-28" → True, "2025-02-30" → False, "25-02-28" → False.
    """
    if not _DATE_SHAPE.match(value):
        return False
    try:
        parsed = datetime.strptime(value, week_dates.DATE_FORMAT)
    except ValueError:
        return False
    return parsed.strftime(week_dates.DATE_FORMAT) == value


def _to_price(record: Optional[PriceRecord]) -> Optional[Price]:
    if record is None:
        return None
    return Price(
        base_price=record.base_price or 0.0,
        price_per_unit=record.price_per_unit or 0.0,
        unit=record.unit or "",
    )


def to_menu_item(dish: DishRecord) -> MenuItem:
    """Reshape one upstream dish, filling the documented defaults."""
    price = None
    if dish.prices is not None:
        price = MenuPrices(
            students=_to_price(dish.prices.students),
            staff=_to_price(dish.prices.staff),
            guests=_to_price(dish.prices.guests),
        )
    return MenuItem(
        name=dish.name or UNKNOWN_DISH,
        category=dish.dish_type or None,
        labels=list(dish.labels or []),
        price=price,
    )


class MenuFetcher:
    """Looks up one facility's menu for one day."""

    def __init__(self, api: EatApiClient) -> None:
        self.api = api

    async def get_mensa_menu(self, api_name: str, date: str) -> MenuResult:
        """Fetch the menu of ``api_name`` on ``date`` ("YYYY-MM-DD").

        Returns:
            MenuResult.ok(DayMenu) on success, otherwise a failure result
            with error_type validation_error, not_found, transport_error,
            parse_error or unknown_error.
        """
        try:
            return MenuResult.ok(await self._fetch_day(api_name, date))
        except MensaError as e:
            logger.warning(f"Menu lookup for {api_name} on {date} failed: {e.message}")
            return MenuResult.failure(e)
        except Exception as e:
            logger.exception(f"Unexpected error fetching menu for {api_name} on {date}")
            return MenuResult.failure(UnknownError(f"Failed to fetch menu: {e}"))

    async def _fetch_day(self, api_name: str, date: str) -> DayMenu:
        if not is_valid_date(date):
            raise ValidationError(INVALID_DATE_MESSAGE)

        year, week = week_dates.date_to_api_path(date)
        logger.info(f"Fetching menu for {api_name} on {date} (year: {year}, week: {week})")

        path = f"{api_name}/{year}/{week}.json"
        logger.info(f"Constructed URL: {self.api.url_for(path)}")
        response = await self.api.get(path)

        if response.status_code == 404:
            raise NotFoundError(
                f"No menu found for {api_name} in year {year}, week {week}. "
                "The facility might be closed or the week is too far in the future."
            )
        if not response.is_success:
            raise TransportError(response.status_code, response.reason_phrase)

        week_record = parse_week(decode_json(response))
        day = next((d for d in week_record.days or [] if d.date == date), None)
        if day is None:
            raise NotFoundError(
                f"No menu data found for date {date} in year {year}, week {week}"
            )

        return DayMenu(
            date=date,
            facility=api_name,
            menu=[to_menu_item(dish) for dish in day.dishes or []],
        )
