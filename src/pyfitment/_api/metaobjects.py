"""Vehicle metaobject listing: the Storefront ``metaobjects`` connection.

The type name is passed as a variable; the store may know vehicles under
either of two names, and the caller decides which one to sweep.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyfitment._constants import MAX_PAGES, PAGE_SIZE
from pyfitment._transport import Transport
from pyfitment.exceptions import FitmentTransportError
from pyfitment.models.metaobject import MetaobjectConnection
from pyfitment.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)

VEHICLES_QUERY = """
query Vehicles($type: String!, $first: Int!, $after: String) {
  metaobjects(type: $type, first: $first, after: $after) {
    nodes {
      id
      handle
      type
      fields {
        key
        value
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


def build_page_variables(type_name: str, page_size: int, after: str | None) -> dict[str, Any]:
    return {"type": type_name, "first": page_size, "after": after}


def parse_page(data: dict[str, Any]) -> MetaobjectConnection | None:
    """Parse the ``metaobjects`` connection from a GraphQL ``data`` dict.

    Returns ``None`` when the store sent no connection at all, which ends
    the sweep.
    """
    raw = data.get("metaobjects")
    if raw is None:
        return None
    try:
        return MetaobjectConnection.model_validate(raw)
    except ValidationError as exc:
        raise FitmentTransportError(f"Malformed metaobjects page: {exc}") from exc


async def fetch_page(
    transport: Transport,
    type_name: str,
    *,
    page_size: int = PAGE_SIZE,
    after: str | None = None,
) -> MetaobjectConnection | None:
    """Fetch a single page of metaobjects."""
    data = await transport.post_graphql(VEHICLES_QUERY, build_page_variables(type_name, page_size, after))
    return parse_page(data)


async def fetch_all(
    transport: Transport,
    type_name: str,
    *,
    page_size: int = PAGE_SIZE,
    max_pages: int = MAX_PAGES,
) -> list[VehicleRecord]:
    """Sweep every page of *type_name* and return the flattened records.

    Stops when ``hasNextPage`` is false or comes without an ``endCursor``,
    when the store sends no connection, or after *max_pages* requests. Any error propagates and the
    pages collected so far are dropped with this call's frame.
    """
    collected: list[VehicleRecord] = []
    after: str | None = None
    pages = 0
    for _ in range(max_pages):
        pages += 1
        page = await fetch_page(transport, type_name, page_size=page_size, after=after)
        if page is None:
            break
        collected.extend(VehicleRecord.from_node(node) for node in page.nodes)
        if not page.page_info.has_next_page:
            break
        after = page.page_info.end_cursor
        if not after:
            _logger.warning("Stopped %r sweep: page %d has more pages but no end cursor", type_name, pages)
            break
    else:
        _logger.warning("Stopped %r sweep at the %d page cap", type_name, max_pages)

    _logger.debug("Fetched %d %r records in %d page(s)", len(collected), type_name, pages)
    return collected
