# =============================================================================
# mensa_agent/console.py  —  Terminal rendering of mensa tool results
# =============================================================================
#
# While the agent works, main.py shows what the tools returned so the user
# can check the answer against the raw data: how many canteens matched, and
# each dish with its student price and labels.
#
# ADK hands MCP results over as the dumped CallToolResult:
#   {"content": [{"type": "text", "text": "<our JSON payload>"}], ...}
# extract_payload() digs the payload back out of that envelope.
# =============================================================================

import json
from typing import Any, Optional


def extract_payload(response: Any) -> Optional[dict]:
    """Return the JSON payload of a tool response, or None if there is none."""
    if not isinstance(response, dict):
        return None
    texts = [
        item.get("text")
        for item in response.get("content") or []
        if isinstance(item, dict) and item.get("type") == "text"
    ]
    if not texts and isinstance(response.get("result"), str):
        texts = [response["result"]]
    for text in texts:
        try:
            payload = json.loads(text)
        except (TypeError, json.JSONDecodeError):
            continue
        if isinstance(payload, dict):
            return payload
    return None


def format_price(price: Optional[dict]) -> str:
    """Student price as shown on the canteen boards: "2.50 €" or "0.85 €/100g"."""
    students = (price or {}).get("students")
    if not students:
        return "n/a"
    if students.get("base_price"):
        text = f"{students['base_price']:.2f} €"
        if students.get("price_per_unit"):
            text += f" + {students['price_per_unit']:.2f} €/{students.get('unit') or 'unit'}"
        return text
    if students.get("price_per_unit"):
        return f"{students['price_per_unit']:.2f} €/{students.get('unit') or 'unit'}"
    return "free"


def render_facilities(payload: dict) -> list[str]:
    header = f"📍 {payload['total']} facilities"
    if payload.get("filter"):
        header += f" matching {payload['filter']!r}"
    lines = [header]
    for facility in payload.get("facilities", []):
        lines.append(f"   • {facility['name']} [{facility['api_name']}]")
    return lines


def render_menu(payload: dict) -> list[str]:
    data = payload["data"]
    title = data.get("facility_name") or data["facility"]
    lines = [f"🍽  {title}, {data['date']}: {len(data['menu'])} dishes"]
    for dish in data["menu"]:
        category = f"{dish['category']}: " if dish.get("category") else ""
        labels = f"  ({', '.join(dish['labels'])})" if dish.get("labels") else ""
        lines.append(f"   • {category}{dish['name']}, {format_price(dish.get('price'))}{labels}")
    return lines


def render_tool_result(tool_name: str, response: Any) -> list[str]:
    """Human-readable lines for one tool result (empty if unrecognised)."""
    payload = extract_payload(response)
    if payload is None:
        return []
    if payload.get("success") is False:
        return [f"⚠️  {tool_name}: {payload.get('error', 'unknown error')}"]
    if tool_name == "get_mensa_facilities" and "total" in payload:
        return render_facilities(payload)
    if tool_name == "get_mensa_menu" and payload.get("data"):
        return render_menu(payload)
    return []
