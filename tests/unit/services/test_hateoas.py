from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from starlette.routing import NoMatchFound

from fleet.services.hateoas import HateoasService
from fleet.services.pagination import PagedResult

BASE = "http://testserver/api/v1"
ROUTES = {
    "list_vehicle": "/vehicles",
    "get_vehicle": "/vehicles/{item_id}",
    "update_vehicle": "/vehicles/{item_id}",
    "delete_vehicle": "/vehicles/{item_id}",
}


def fake_url_for(name: str, **path_params):
    if name not in ROUTES:
        raise NoMatchFound(name, path_params)
    return BASE + ROUTES[name].format(**path_params)


def _page(current: int, total_items: int, size: int = 10) -> PagedResult:
    on_page = max(0, min(size, total_items - (current - 1) * size))
    return PagedResult(items=[object()] * on_page, current_page=current, page_size=size, total_items=total_items)


def _query(href: str) -> dict[str, list[str]]:
    return parse_qs(urlparse(href).query)


def test_middle_page_links_in_order():
    links = HateoasService(fake_url_for).pagination_links(_page(2, 35), "vehicle")

    assert [link.rel for link in links] == ["first", "prev", "next", "last"]
    assert all(link.method == "GET" for link in links)
    assert [_query(link.href)["pageNumber"] for link in links] == [["1"], ["1"], ["3"], ["4"]]
    assert all(_query(link.href)["pageSize"] == ["10"] for link in links)
    assert links[0].href.startswith(f"{BASE}/vehicles?")


def test_first_page_has_no_backward_links():
    rels = [link.rel for link in HateoasService(fake_url_for).pagination_links(_page(1, 35), "vehicle")]
    assert rels == ["next", "last"]


def test_last_page_has_no_forward_links():
    rels = [link.rel for link in HateoasService(fake_url_for).pagination_links(_page(4, 35), "vehicle")]
    assert rels == ["first", "prev"]


def test_single_page_has_no_links():
    assert HateoasService(fake_url_for).pagination_links(_page(1, 3), "vehicle") == []


def test_resource_links():
    links = HateoasService(fake_url_for).resource_links("vehicle", "abc-123")

    assert [(link.rel, link.method) for link in links] == [
        ("self", "GET"),
        ("update", "PUT"),
        ("delete", "DELETE"),
    ]
    assert all(link.href == f"{BASE}/vehicles/abc-123" for link in links)


def test_unknown_route_yields_empty_href():
    links = HateoasService(fake_url_for).resource_links("truck", "abc-123")
    assert [link.href for link in links] == ["", "", ""]

    page_links = HateoasService(fake_url_for).pagination_links(_page(1, 35), "truck")
    assert [link.href for link in page_links] == ["", ""]
