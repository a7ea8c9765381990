"""Boolean filter query builder.

A :class:`Query` is a bag of optional :class:`Toggle` filters.  Rendering
turns it into one fixed-shape search body::

    {"query": {"bool": {
        "filter": [{"range": {"id": {"gt": N, "lt": M}}}, ...term/terms...],
        "must_not": {"range": {"id": [{"gt": N, "lt": M}]}},
        "must": {"match": {"text": "..."}}
    }}}

The ``filter`` range is always present.  The ``must_not`` range is present
unless ``exclude`` is switched off.  Optional clauses follow in a fixed order
so that equal queries render to equal bytes.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from .errors import InvalidQueryError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SIZE = 10
TEXT_FIELD = "text"

_LOWER_OPS = ("gt", "gte")
_UPPER_OPS = ("lt", "lte")


@dataclass
class Toggle(Generic[T]):
    """An optional filter: contributes a clause only when ``enabled``."""

    enabled: bool = False
    value: Optional[T] = None

    @classmethod
    def on(cls, value: T) -> "Toggle[T]":
        return cls(enabled=True, value=value)


@dataclass
class IdRange:
    """Bounds on the numeric ``id`` field."""

    lower: int = 0
    upper: int = 0
    lower_op: str = "gt"
    upper_op: str = "lt"

    def render(self) -> dict[str, int]:
        if self.lower_op not in _LOWER_OPS:
            raise InvalidQueryError(f"lower_op must be one of {_LOWER_OPS}, got {self.lower_op!r}")
        if self.upper_op not in _UPPER_OPS:
            raise InvalidQueryError(f"upper_op must be one of {_UPPER_OPS}, got {self.upper_op!r}")
        for bound in (self.lower, self.upper):
            if not _is_int(bound):
                raise InvalidQueryError(f"id range bounds must be integers, got {bound!r}")
        return {self.lower_op: self.lower, self.upper_op: self.upper}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# (attribute, indexed field) for the boolean term filters, in render order.
_FLAG_FILTERS = (
    ("has_icon", "hasIcon"),
    ("has_photorep", "hasPhotorep"),
    ("has_video", "hasVideo"),
    ("is_news", "isNews"),
    ("is_spiegel", "is_spiegel"),
)

# (attribute, indexed field) for the id-set filters, in render order.
_MEMBERSHIP_FILTERS = (
    ("projects", "projects.id"),
    ("rubrics", "rubrics.id"),
    ("collections", "collections.id"),
    ("authors", "authors.id"),
    ("tags", "tags.id"),
)

# (attribute, parent attribute, indexed field), in render order.
_COMPOUND_FLAGS = (
    ("is_main_coll", "collections", "isMainColl"),
    ("is_main_project", "projects", "isMainProject"),
)


@dataclass
class Query:
    """Search over documents keyed by a numeric ``id``.

    ``size`` below 1 means :data:`DEFAULT_SIZE`.  ``is_main_coll`` and
    ``is_main_project`` only apply together with ``collections`` and
    ``projects`` respectively and are ignored otherwise.  When both
    ``word_or`` and ``phrase`` are enabled, ``word_or`` wins.
    """

    size: int = 0
    id_range: IdRange = field(default_factory=IdRange)
    exclude: Toggle[IdRange] = field(default_factory=lambda: Toggle.on(IdRange()))

    has_icon: Toggle[bool] = field(default_factory=Toggle)
    has_photorep: Toggle[bool] = field(default_factory=Toggle)
    has_video: Toggle[bool] = field(default_factory=Toggle)
    is_news: Toggle[bool] = field(default_factory=Toggle)
    is_spiegel: Toggle[bool] = field(default_factory=Toggle)

    projects: Toggle[list[int]] = field(default_factory=Toggle)
    rubrics: Toggle[list[int]] = field(default_factory=Toggle)
    collections: Toggle[list[int]] = field(default_factory=Toggle)
    authors: Toggle[list[int]] = field(default_factory=Toggle)
    tags: Toggle[list[int]] = field(default_factory=Toggle)

    is_main_coll: Toggle[bool] = field(default_factory=Toggle)
    is_main_project: Toggle[bool] = field(default_factory=Toggle)

    doc_type: Toggle[str] = field(default_factory=Toggle)

    word_or: Toggle[str] = field(default_factory=Toggle)
    phrase: Toggle[str] = field(default_factory=Toggle)

    @property
    def effective_size(self) -> int:
        size = _require_size(self.size)
        return size if size >= 1 else DEFAULT_SIZE

    def render(self) -> dict[str, Any]:
        """Build the search body.

        Raises:
            InvalidQueryError: on an empty or non-integer id set, a
                mistyped toggle value or size, or a bad range.
        """
        _require_size(self.size)
        filters: list[dict[str, Any]] = [{"range": {"id": self.id_range.render()}}]
        filters.extend(self._flag_clauses())
        filters.extend(self._membership_clauses())
        filters.extend(self._compound_clauses())
        if self.doc_type.enabled:
            filters.append({"term": {"type": _require_str("doc_type", self.doc_type.value)}})

        bool_clause: dict[str, Any] = {"filter": filters}

        if self.exclude.enabled:
            excluded = self.exclude.value if self.exclude.value is not None else IdRange()
            bool_clause["must_not"] = {"range": {"id": [excluded.render()]}}

        text_clause = self._text_clause()
        if text_clause is not None:
            bool_clause["must"] = text_clause

        return {"query": {"bool": bool_clause}}

    def to_json(self) -> bytes:
        """Render and encode as compact UTF-8 JSON."""
        return json.dumps(self.render(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def _flag_clauses(self) -> list[dict[str, Any]]:
        clauses = []
        for attr, name in _FLAG_FILTERS:
            toggle = getattr(self, attr)
            if toggle.enabled:
                clauses.append({"term": {name: _require_bool(attr, toggle.value)}})
        return clauses

    def _membership_clauses(self) -> list[dict[str, Any]]:
        clauses = []
        for attr, name in _MEMBERSHIP_FILTERS:
            toggle = getattr(self, attr)
            if toggle.enabled:
                clauses.append({"terms": {name: _require_ids(attr, toggle.value)}})
        return clauses

    def _compound_clauses(self) -> list[dict[str, Any]]:
        clauses = []
        for attr, parent, name in _COMPOUND_FLAGS:
            toggle = getattr(self, attr)
            if not toggle.enabled:
                continue
            if not getattr(self, parent).enabled:
                logger.debug("Ignoring %s: %s filter is disabled", attr, parent)
                continue
            clauses.append({"term": {name: _require_bool(attr, toggle.value)}})
        return clauses

    def _text_clause(self) -> Optional[dict[str, Any]]:
        if self.word_or.enabled:
            return {"match": {TEXT_FIELD: _require_str("word_or", self.word_or.value)}}
        if self.phrase.enabled:
            return {"match_phrase": {TEXT_FIELD: _require_str("phrase", self.phrase.value)}}
        return None


def _require_size(value: Any) -> int:
    if not _is_int(value):
        raise InvalidQueryError(f"size must be an integer, got {value!r}")
    return value


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidQueryError(f"{name} expects a bool, got {value!r}")
    return value


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidQueryError(f"{name} expects a string, got {value!r}")
    return value


def _require_ids(name: str, values: Any) -> list[int]:
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidQueryError(f"{name} expects a sequence of integer ids, got {values!r}")
    try:
        ids = list(values)
    except TypeError as exc:
        raise InvalidQueryError(f"{name} expects a sequence of integer ids, got {values!r}") from exc
    if not ids:
        raise InvalidQueryError(f"{name} is enabled with an empty id set")
    for value in ids:
        if not _is_int(value):
            raise InvalidQueryError(f"{name} ids must be integers, got {value!r}")
    return ids
