"""Search execution."""

from __future__ import annotations

from typing import Any

from opensearchpy import OpenSearch

from .document import backend_call
from .errors import MalformedResponseError
from .query import DEFAULT_SIZE, Query


def search(client: OpenSearch, index: str, query: Query) -> dict[str, Any]:
    """Run a :class:`Query` and return the raw search response.

    The query is rendered (and validated) before anything is sent.
    """
    return search_raw(client, index, query.render(), size=query.effective_size)


def search_raw(
    client: OpenSearch,
    index: str,
    body: dict[str, Any],
    size: int = DEFAULT_SIZE,
) -> dict[str, Any]:
    """Run an arbitrary search body."""
    with backend_call("search", index):
        response = client.search(index=index, body=body, size=size)
    if not isinstance(response, dict) or "hits" not in response:
        raise MalformedResponseError(f"search on {index} returned no hits section: {response!r}")
    return response
