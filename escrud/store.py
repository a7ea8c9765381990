"""A client handle bound to a default index."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from opensearchpy import OpenSearch

from . import document
from .client import create_client
from .connection_settings import ConnectionConfig, load_config
from .models import Ack, Got
from .query import Query
from .script import Script
from .search import search


class DocumentStore:
    """CRUD, array updates and search against one index.

    Every method accepts ``index=`` to target another index for that call.
    """

    def __init__(self, client: OpenSearch, index: str) -> None:
        self.client = client
        self.index = index

    @classmethod
    def from_config(cls, config: Optional[ConnectionConfig] = None, **overrides) -> "DocumentStore":
        if config is None:
            config = load_config(**overrides)
        return cls(create_client(config), config.index)

    def _target(self, index: Optional[str]) -> str:
        return index or self.index

    def create(
        self,
        doc_id: str,
        doc: Optional[Mapping[str, Any]] = None,
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.create_document(self.client, self._target(index), doc_id, doc, refresh=refresh)

    def read(self, doc_id: str, index: Optional[str] = None) -> Got:
        return document.get_document(self.client, self._target(index), doc_id)

    def source(self, doc_id: str, index: Optional[str] = None) -> dict[str, Any]:
        return document.get_source(self.client, self._target(index), doc_id)

    def exists(self, doc_id: str, index: Optional[str] = None) -> bool:
        return document.document_exists(self.client, self._target(index), doc_id)

    def update(
        self,
        doc_id: str,
        fields: Mapping[str, Any],
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.update_document(self.client, self._target(index), doc_id, fields, refresh=refresh)

    def update_by_script(
        self,
        doc_id: str,
        script: Script,
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.update_by_script(self.client, self._target(index), doc_id, script, refresh=refresh)

    def append_array_item(
        self,
        doc_id: str,
        array_field: str,
        item: Mapping[str, Any],
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.append_array_item(
            self.client, self._target(index), doc_id, array_field, item, refresh=refresh
        )

    def update_array_item(
        self,
        doc_id: str,
        array_field: str,
        selector_field: str,
        selector_value: int,
        item: Mapping[str, Any],
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.update_array_item(
            self.client,
            self._target(index),
            doc_id,
            array_field,
            selector_field,
            selector_value,
            item,
            refresh=refresh,
        )

    def remove_array_item(
        self,
        doc_id: str,
        array_field: str,
        selector_field: str,
        selector_value: int,
        index: Optional[str] = None,
        refresh: Optional[str] = None,
    ) -> Ack:
        return document.remove_array_item(
            self.client,
            self._target(index),
            doc_id,
            array_field,
            selector_field,
            selector_value,
            refresh=refresh,
        )

    def delete(self, doc_id: str, index: Optional[str] = None, refresh: Optional[str] = None) -> Ack:
        return document.delete_document(self.client, self._target(index), doc_id, refresh=refresh)

    def search(self, query: Query, index: Optional[str] = None) -> dict[str, Any]:
        return search(self.client, self._target(index), query)
