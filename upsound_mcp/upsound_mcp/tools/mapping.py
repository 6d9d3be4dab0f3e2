from __future__ import annotations

from urllib.parse import quote

from .model import UpstreamRequest


class InvalidArguments(ValueError):
    pass


def _require_str(args: dict, name: str) -> str:
    value = args.get(name)
    if value is None:
        raise InvalidArguments(f"missing required argument: {name}")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidArguments(f"{name} must be a string")
    value = str(value)
    if not value.strip():
        raise InvalidArguments(f"{name} must be a non-empty string")
    return value


def _optional_str(args: dict, name: str) -> str | None:
    value = args.get(name)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidArguments(f"{name} must be a string")
    return value


def _format_price(value: object) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidArguments("maxPrice must be a number")
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise InvalidArguments("maxPrice must be a number") from None
    if not isinstance(value, (int, float)):
        raise InvalidArguments("maxPrice must be a number")
    if not value:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def build_search_request(args: dict) -> UpstreamRequest:
    query = [("country", _require_str(args, "country"))]

    location = _optional_str(args, "location")
    if location:
        query.append(("term", location))

    checkin = _optional_str(args, "checkin")
    if checkin:
        query.append(("available_date", checkin))

    max_price = _format_price(args.get("maxPrice"))
    if max_price:
        query.append(("max_price", max_price))

    return UpstreamRequest(path="/studios", query=query)


def build_details_request(args: dict) -> UpstreamRequest:
    studio_id = _require_str(args, "id")
    return UpstreamRequest(path=f"/studios/{quote(studio_id, safe='')}")
