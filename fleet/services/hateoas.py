"""HATEOAS link generation for listings and single resources."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

from starlette.routing import NoMatchFound

from fleet.schemas.common import LinkDto
from fleet.services.pagination import PagedResult

logger = logging.getLogger(__name__)

UrlFor = Callable[..., Any]


def list_route(resource: str) -> str:
    return f"list_{resource}"


def get_route(resource: str) -> str:
    return f"get_{resource}"


def update_route(resource: str) -> str:
    return f"update_{resource}"


def delete_route(resource: str) -> str:
    return f"delete_{resource}"


class HateoasService:
    """Build navigation links from named routes.

    ``url_for`` is usually ``request.url_for``. A route name it cannot resolve
    produces an empty href instead of an error.
    """

    def __init__(self, url_for: UrlFor) -> None:
        self._url_for = url_for

    def _href(self, route_name: str, query: dict[str, Any] | None = None, **path_params: Any) -> str:
        try:
            url = str(self._url_for(route_name, **path_params))
        except NoMatchFound:
            logger.warning(
                "hateoas.route_missing",
                extra={"event": "hateoas.route_missing", "route_name": route_name},
            )
            return ""
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    def _page_link(self, resource: str, page_number: int, page_size: int, rel: str) -> LinkDto:
        href = self._href(list_route(resource), query={"pageNumber": page_number, "pageSize": page_size})
        return LinkDto(href=href, rel=rel, method="GET")

    def pagination_links(self, page: PagedResult, resource: str) -> list[LinkDto]:
        links: list[LinkDto] = []
        if page.has_previous:
            links.append(self._page_link(resource, 1, page.page_size, "first"))
            links.append(self._page_link(resource, page.current_page - 1, page.page_size, "prev"))
        if page.has_next:
            links.append(self._page_link(resource, page.current_page + 1, page.page_size, "next"))
            links.append(self._page_link(resource, page.total_pages, page.page_size, "last"))
        return links

    def resource_links(self, resource: str, resource_id: Any) -> list[LinkDto]:
        item_id = str(resource_id)
        return [
            LinkDto(href=self._href(get_route(resource), item_id=item_id), rel="self", method="GET"),
            LinkDto(href=self._href(update_route(resource), item_id=item_id), rel="update", method="PUT"),
            LinkDto(href=self._href(delete_route(resource), item_id=item_id), rel="delete", method="DELETE"),
        ]
