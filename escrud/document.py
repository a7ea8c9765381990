"""Document CRUD and scripted array updates."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from opensearchpy import OpenSearch
from opensearchpy.exceptions import ConnectionError as ClientConnectionError
from opensearchpy.exceptions import SerializationError, TransportError

from .errors import BackendError, InvalidRequestError, MalformedResponseError
from .models import Ack, Got, parse_response
from .script import (
    Script,
    append_item_script,
    remove_item_script,
    replace_item_script,
)

logger = logging.getLogger(__name__)


@contextmanager
def backend_call(action: str, index: str, doc_id: Optional[str] = None) -> Iterator[None]:
    """Translate client errors raised inside the block.

    Connectivity errors pass through untouched; error statuses become
    :class:`BackendError`; undecodable bodies become
    :class:`MalformedResponseError`.
    """
    target = f"{index}/{doc_id}" if doc_id is not None else index
    logger.debug("%s %s", action, target)
    try:
        yield
    except ClientConnectionError:
        raise
    except SerializationError as exc:
        raise MalformedResponseError(f"cannot {action} {target}: {exc}") from exc
    except TransportError as exc:
        raise BackendError(exc.status_code, exc.info, f"cannot {action} {target}") from exc


def _with_refresh(kwargs: dict[str, Any], refresh: Optional[str]) -> dict[str, Any]:
    if refresh is not None:
        kwargs["refresh"] = refresh
    return kwargs


def _default_body(doc_id: str) -> dict[str, Any]:
    if doc_id.isascii() and doc_id.isdecimal():
        return {"id": int(doc_id)}
    return {"id": doc_id}


def create_document(
    client: OpenSearch,
    index: str,
    doc_id: str,
    doc: Optional[Mapping[str, Any]] = None,
    refresh: Optional[str] = None,
) -> Ack:
    """Index (insert or replace) a document under *doc_id*.

    An empty *doc* stores ``{"id": doc_id}``.
    """
    body = dict(doc) if doc else _default_body(doc_id)
    kwargs = _with_refresh({"index": index, "id": doc_id, "body": body}, refresh)
    with backend_call("create", index, doc_id):
        response = client.index(**kwargs)
    return parse_response(Ack, response)


def get_document(client: OpenSearch, index: str, doc_id: str) -> Got:
    """Retrieve a document with its metadata."""
    with backend_call("read", index, doc_id):
        response = client.get(index=index, id=doc_id)
    return parse_response(Got, response)


def get_source(client: OpenSearch, index: str, doc_id: str) -> dict[str, Any]:
    """Retrieve only the stored source of a document."""
    with backend_call("read source of", index, doc_id):
        response = client.get_source(index=index, id=doc_id)
    if not isinstance(response, dict):
        raise MalformedResponseError(f"source of {index}/{doc_id} is not an object: {response!r}")
    return response


def document_exists(client: OpenSearch, index: str, doc_id: str) -> bool:
    """Check whether *doc_id* is stored in *index*."""
    if not doc_id:
        raise InvalidRequestError("id too short")
    if not index:
        raise InvalidRequestError("index name too short")
    with backend_call("check", index, doc_id):
        return bool(client.exists(index=index, id=doc_id))


def update_document(
    client: OpenSearch,
    index: str,
    doc_id: str,
    fields: Mapping[str, Any],
    refresh: Optional[str] = None,
) -> Ack:
    """Merge *fields* into an existing document; other fields are kept."""
    body = {"doc": dict(fields)}
    kwargs = _with_refresh({"index": index, "id": doc_id, "body": body}, refresh)
    with backend_call("update", index, doc_id):
        response = client.update(**kwargs)
    return parse_response(Ack, response)


def update_by_script(
    client: OpenSearch,
    index: str,
    doc_id: str,
    script: Script,
    refresh: Optional[str] = None,
) -> Ack:
    """Run *script* against the stored document."""
    kwargs = _with_refresh({"index": index, "id": doc_id, "body": script.to_body()}, refresh)
    with backend_call("update", index, doc_id):
        response = client.update(**kwargs)
    return parse_response(Ack, response)


def append_array_item(
    client: OpenSearch,
    index: str,
    doc_id: str,
    array_field: str,
    item: Mapping[str, Any],
    refresh: Optional[str] = None,
) -> Ack:
    """Append *item* to *array_field*; a missing array is created."""
    script = append_item_script(array_field, item)
    return update_by_script(client, index, doc_id, script, refresh=refresh)


def update_array_item(
    client: OpenSearch,
    index: str,
    doc_id: str,
    array_field: str,
    selector_field: str,
    selector_value: int,
    item: Mapping[str, Any],
    refresh: Optional[str] = None,
) -> Ack:
    """Replace the first array element matching the selector.

    No match leaves the document unchanged and returns ``result == "noop"``.
    """
    script = replace_item_script(array_field, selector_field, selector_value, item)
    return update_by_script(client, index, doc_id, script, refresh=refresh)


def remove_array_item(
    client: OpenSearch,
    index: str,
    doc_id: str,
    array_field: str,
    selector_field: str,
    selector_value: int,
    refresh: Optional[str] = None,
) -> Ack:
    """Remove every array element matching the selector."""
    script = remove_item_script(array_field, selector_field, selector_value)
    return update_by_script(client, index, doc_id, script, refresh=refresh)


def delete_document(
    client: OpenSearch,
    index: str,
    doc_id: str,
    refresh: Optional[str] = None,
) -> Ack:
    """Delete a document by ID."""
    kwargs = _with_refresh({"index": index, "id": doc_id}, refresh)
    with backend_call("delete", index, doc_id):
        response = client.delete(**kwargs)
    return parse_response(Ack, response)
