"""Shared fixtures: canned eat-api payloads and a fake HTTP transport."""

import httpx
import pytest

from mensa.eat_api import EatApiClient

BASE_URL = "https://eat-api.test"


CANTEENS = [
    {
        "enum_name": "MENSA_ARCISSTR",
        "name": "Mensa Arcisstraße",
        "location": {
            "address": "Arcisstraße 17, München",
            "latitude": 48.147420,
            "longitude": 11.567220,
        },
        "canteen_id": "mensa-arcisstr",
        "queue_status": None,
        "open_hours": {
            "mon": {"start": "11:00", "end": "14:00"},
            "fri": {"start": "11:00", "end": "13:30"},
        },
    },
    {
        "enum_name": "MENSA_GARCHING",
        "name": "Mensa Garching",
        "location": {
            "address": "Boltzmannstraße 19, Garching",
            "latitude": 48.268132,
            "longitude": 11.672263,
        },
        "canteen_id": "mensa-garching",
        "queue_status": "https://mensa.liste.party/api/",
        "open_hours": {"mon": {"start": "10:30", "end": "14:30"}},
    },
    {
        "enum_name": "STUBISTRO_GOETHESTR",
        "name": "StuBistro Goethestraße",
        "location": {
            "address": "Goethestraße 70, München",
            "latitude": 48.13,
            "longitude": 11.56,
        },
        "canteen_id": "stubistro-goethestr",
        "queue_status": None,
        "open_hours": {},
    },
]


# ISO week 25 of 2025: Monday 2025-06-16 .. Sunday 2025-06-22.
WEEK_2025_25 = {
    "number": 25,
    "year": 2025,
    "days": [
        {
            "date": "2025-06-16",
            "dishes": [
                {
                    "name": "Pasta mit Tomatensauce",
                    "dish_type": "Pasta",
                    "labels": ["VEGAN", "GLUTEN"],
                    "prices": {
                        "students": {"base_price": 0.0, "price_per_unit": 0.85, "unit": "100g"},
                        "staff": {"base_price": 0.0, "price_per_unit": 1.05, "unit": "100g"},
                        "guests": {"base_price": 0.0, "price_per_unit": 1.35, "unit": "100g"},
                    },
                },
                {
                    "name": "Schweinebraten",
                    "dish_type": "Fleisch",
                    "labels": ["PORK"],
                    "prices": {
                        "students": {"base_price": 3.5, "price_per_unit": None, "unit": None},
                    },
                },
                {
                    "dish_type": "",
                },
            ],
        },
        {
            "date": "2025-06-17",
            "dishes": [],
        },
    ],
}


def make_api(handler) -> EatApiClient:
    """An EatApiClient whose requests are answered by ``handler``."""
    return EatApiClient(BASE_URL, timeout=1.0, transport=httpx.MockTransport(handler))


class Recorder:
    """A MockTransport handler that serves fixed routes and records calls."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)


@pytest.fixture
def canteens():
    return CANTEENS


@pytest.fixture
def recorder():
    return Recorder({
        "/enums/canteens.json": CANTEENS,
        "/mensa-garching/2025/25.json": WEEK_2025_25,
    })


@pytest.fixture
def api(recorder):
    return make_api(recorder)
