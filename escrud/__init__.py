"""CRUD, scripted array updates and boolean filter search for Elasticsearch / OpenSearch."""

from .client import connect, create_client
from .connection_settings import ConnectionConfig, load_config
from .document import (
    append_array_item,
    create_document,
    delete_document,
    document_exists,
    get_document,
    get_source,
    remove_array_item,
    update_array_item,
    update_by_script,
    update_document,
)
from .errors import (
    BackendError,
    EscrudError,
    InvalidQueryError,
    InvalidRequestError,
    InvalidScriptError,
    MalformedResponseError,
)
from .models import Ack, Got
from .query import IdRange, Query, Toggle
from .script import (
    Script,
    append_item_script,
    remove_item_script,
    replace_item_script,
)
from .search import search, search_raw
from .store import DocumentStore

__all__ = [
    # client
    "create_client",
    "connect",
    # config
    "ConnectionConfig",
    "load_config",
    # document
    "create_document",
    "get_document",
    "get_source",
    "document_exists",
    "update_document",
    "update_by_script",
    "append_array_item",
    "update_array_item",
    "remove_array_item",
    "delete_document",
    "DocumentStore",
    # query / script
    "Toggle",
    "IdRange",
    "Query",
    "Script",
    "append_item_script",
    "replace_item_script",
    "remove_item_script",
    # search
    "search",
    "search_raw",
    # models / errors
    "Ack",
    "Got",
    "EscrudError",
    "BackendError",
    "MalformedResponseError",
    "InvalidRequestError",
    "InvalidQueryError",
    "InvalidScriptError",
]
