from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .mapping import build_details_request, build_search_request
from .model import Operation, ParameterSpec, UpstreamRequest

SEARCH_STUDIOS = "upsound_search_studios"
STUDIO_DETAILS = "upsound_studio_details"

_IGNORE_ROBOTS = ("ignoreRobotsText", ParameterSpec("boolean", "Ignore robots.txt rules for this request"))

SEARCH_STUDIOS_OPERATION = Operation(
    name=SEARCH_STUDIOS,
    description="Search for Upsound studios with various filters and pagination. Provide direct links to the user",
    parameters=(
        ("country", ParameterSpec("string", "Country to search for (e.g. 'United States')", required=True)),
        ("location", ParameterSpec("string", "Location to search for (e.g. 'New York')")),
        ("checkin", ParameterSpec("string", "Date the studio must be available on (YYYY-MM-DD)")),
        ("maxPrice", ParameterSpec("number", "Maximum price for the studio")),
        _IGNORE_ROBOTS,
    ),
)

STUDIO_DETAILS_OPERATION = Operation(
    name=STUDIO_DETAILS,
    description="Get detailed information about a specific Upsound studio. Provide direct links to the user",
    parameters=(
        ("id", ParameterSpec("string", "The Upsound studio ID", required=True)),
        _IGNORE_ROBOTS,
    ),
)


@dataclass(frozen=True, slots=True)
class ToolBinding:
    operation: Operation
    build_request: Callable[[dict], UpstreamRequest]
    url_key: str
    data_key: str


TOOL_BINDINGS: dict[str, ToolBinding] = {
    SEARCH_STUDIOS: ToolBinding(SEARCH_STUDIOS_OPERATION, build_search_request, "searchUrl", "data"),
    STUDIO_DETAILS: ToolBinding(STUDIO_DETAILS_OPERATION, build_details_request, "listingUrl", "details"),
}


def list_operations() -> list[Operation]:
    return [binding.operation for binding in TOOL_BINDINGS.values()]


def get_binding(name: str) -> ToolBinding | None:
    return TOOL_BINDINGS.get(name)
