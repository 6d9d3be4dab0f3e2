import pytest

from upsound_mcp.tools.mapping import InvalidArguments, build_details_request, build_search_request

BASE = "https://api.upsound.com/api"


def test_search_country_only():
    request = build_search_request({"country": "United States"})
    assert request.path_and_query == "/studios?country=United+States"
    assert request.url(BASE) == "https://api.upsound.com/api/studios?country=United+States"
    assert request.policy_path(BASE) == "/api/studios?country=United+States"


def test_search_maps_all_optional_arguments_in_fixed_order():
    request = build_search_request(
        {"maxPrice": 150, "checkin": "2026-11-01", "location": "New York", "country": "United States"}
    )
    assert request.query == [
        ("country", "United States"),
        ("term", "New York"),
        ("available_date", "2026-11-01"),
        ("max_price", "150"),
    ]


def test_search_path_is_deterministic():
    args = {"country": "United Kingdom", "location": "London", "checkin": "2026-12-24", "maxPrice": 99.5}
    first = build_search_request(dict(args)).path_and_query
    reordered = dict(reversed(list(args.items())))
    for _ in range(3):
        assert build_search_request(reordered).path_and_query == first
    assert first == "/studios?country=United+Kingdom&term=London&available_date=2026-12-24&max_price=99.5"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(200, "200"), (200.0, "200"), (99.5, "99.5"), ("120", "120")],
)
def test_max_price_is_stringified(raw, expected):
    request = build_search_request({"country": "US", "maxPrice": raw})
    assert ("max_price", expected) in request.query


def test_falsy_optionals_are_omitted():
    request = build_search_request({"country": "US", "location": "", "checkin": None, "maxPrice": 0})
    assert request.query == [("country", "US")]


def test_unused_documented_fields_are_not_mapped():
    request = build_search_request({"country": "US", "minPrice": 10, "studioType": "Recording Studio"})
    assert request.query == [("country", "US")]


def test_search_requires_country():
    with pytest.raises(InvalidArguments, match="country"):
        build_search_request({"location": "Paris"})
    with pytest.raises(InvalidArguments, match="country"):
        build_search_request({"country": "   "})


def test_search_rejects_bad_types():
    with pytest.raises(InvalidArguments, match="maxPrice"):
        build_search_request({"country": "US", "maxPrice": "cheap"})
    with pytest.raises(InvalidArguments, match="maxPrice"):
        build_search_request({"country": "US", "maxPrice": True})
    with pytest.raises(InvalidArguments, match="location"):
        build_search_request({"country": "US", "location": ["NY"]})


def test_details_substitutes_id_into_path():
    request = build_details_request({"id": "abc123"})
    assert request.path_and_query == "/studios/abc123"
    assert request.url(BASE) == "https://api.upsound.com/api/studios/abc123"


def test_details_id_is_quoted():
    request = build_details_request({"id": "a/b c"})
    assert request.path == "/studios/a%2Fb%20c"


def test_details_requires_id():
    with pytest.raises(InvalidArguments, match="id"):
        build_details_request({})


def test_required_values_pass_through_unchanged():
    assert build_search_request({"country": " United States "}).query[0] == ("country", " United States ")
    assert build_details_request({"id": " abc "}).path == "/studios/%20abc%20"
