"""Declarative post queries.

Turns flat request parameters such as::

    {"category": "travel", "views[gte]": "10", "sort": "-createdAt,title",
     "select": "title,slug", "page": "2", "limit": "20"}

into a validated ``PostQuery``. Only fields and operators listed in
``POST_QUERY_FIELDS`` are accepted; everything else is rejected with a
``ValidationError`` so that callers cannot inject arbitrary predicates.
Repositories translate a ``PostQuery`` into their own predicate form.
"""

import re
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from quill.domain.error import ValidationError
from quill.domain.value import Category
from quill.domain.value.common import ValueObject


class FilterOperator(str, Enum):
    """Comparison operators accepted in ``field[op]`` parameters."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


_ALL = frozenset(FilterOperator)
_MATCH = frozenset({FilterOperator.EQ, FilterOperator.IN})
_FLAG = frozenset({FilterOperator.EQ})


class FieldSpec(ValueObject):
    """Allow-list entry for a filterable post field."""

    name: str
    value_type: Any
    operators: frozenset[FilterOperator]
    sortable: bool = True


POST_QUERY_FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec(name="category", value_type=Category, operators=_MATCH),
        FieldSpec(name="author_id", value_type=UUID, operators=_MATCH, sortable=False),
        FieldSpec(name="featured", value_type=bool, operators=_FLAG),
        # ``tags`` matches when the post carries the tag (or any of the tags)
        FieldSpec(name="tags", value_type=str, operators=_MATCH, sortable=False),
        FieldSpec(name="title", value_type=str, operators=_MATCH),
        FieldSpec(name="slug", value_type=str, operators=_MATCH),
        FieldSpec(name="views", value_type=int, operators=_ALL),
        FieldSpec(name="like_count", value_type=int, operators=_ALL),
        FieldSpec(name="comment_count", value_type=int, operators=_ALL),
        FieldSpec(name="created_at", value_type=datetime, operators=_ALL),
        FieldSpec(name="updated_at", value_type=datetime, operators=_ALL),
    )
}

# Fields that may appear in ``select`` (projection only, never filtered)
SELECTABLE_FIELDS = frozenset(POST_QUERY_FIELDS) | {
    "id",
    "excerpt",
    "content",
    "cover_image",
}

# Public parameter names -> field names
FIELD_ALIASES = {
    "author": "author_id",
    "authorId": "author_id",
    "likeCount": "like_count",
    "likes": "like_count",
    "commentCount": "comment_count",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "coverImage": "cover_image",
}

RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})

_PARAM_PATTERN = re.compile(r"^(?P<field>[A-Za-z_]+)(?:\[(?P<op>[a-z]+)\])?$")


class FieldFilter(ValueObject):
    """A single ``field <op> value`` predicate."""

    field: str
    operator: FilterOperator
    value: Any  # Coerced to the field type; a tuple for ``in``


class SortKey(ValueObject):
    """A sort field and direction."""

    field: str
    descending: bool = False


DEFAULT_SORT = (SortKey(field="created_at", descending=True),)


class PostQuery(ValueObject):
    """Validated, bounded query against the post store."""

    filters: tuple[FieldFilter, ...] = ()
    sort: tuple[SortKey, ...] = DEFAULT_SORT
    select: Optional[tuple[str, ...]] = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        """Rows skipped before this page starts."""
        return (self.page - 1) * self.limit


class PageRef(ValueObject):
    """Pointer to a neighbouring page."""

    page: int
    limit: int


class Pagination(ValueObject):
    """Neighbouring pages; a side is absent when it holds no data."""

    next: Optional[PageRef] = None
    prev: Optional[PageRef] = None


def paginate(page: int, limit: int, total: int) -> Pagination:
    """Describe the pages around ``page`` for a result of ``total`` rows."""
    return Pagination(
        next=PageRef(page=page + 1, limit=limit) if page * limit < total else None,
        prev=PageRef(page=page - 1, limit=limit) if page > 1 else None,
    )


def resolve_field(name: str) -> str:
    """Map a public parameter name to its field name."""
    return FIELD_ALIASES.get(name, name)


class PostQueryBuilder:
    """Builds ``PostQuery`` objects from flat request parameters."""

    def __init__(self, default_limit: int = 10, max_limit: int = 100) -> None:
        """Initialize the builder.

        Args:
            default_limit: Page size used when ``limit`` is absent
            max_limit: Upper bound applied to ``limit``
        """
        self.default_limit = default_limit
        self.max_limit = max_limit

    def build(self, params: Mapping[str, Any]) -> PostQuery:
        """Parse request parameters.

        Args:
            params: Flat mapping of parameter name to value; values may be
                strings, lists of strings or already-typed values

        Returns:
            Validated query

        Raises:
            ValidationError: If a field, operator or value is not allowed
        """
        filters = [
            self._parse_filter(key, value)
            for key, value in params.items()
            if key not in RESERVED_PARAMS
        ]

        page = self._parse_int(params.get("page"), default=1)
        limit = self._parse_int(params.get("limit"), default=self.default_limit)

        return PostQuery(
            filters=tuple(filters),
            sort=self._parse_sort(params.get("sort")),
            select=self._parse_select(params.get("select")),
            page=max(page, 1),
            limit=min(max(limit, 1), self.max_limit),
        )

    def _parse_filter(self, key: str, raw: Any) -> FieldFilter:
        match = _PARAM_PATTERN.match(key)
        if not match:
            raise ValidationError(f"Invalid filter parameter: {key}")

        field = resolve_field(match.group("field"))
        spec = POST_QUERY_FIELDS.get(field)
        if spec is None:
            raise ValidationError(f"Filtering on '{match.group('field')}' is not allowed")

        op_name = match.group("op") or FilterOperator.EQ.value
        try:
            operator = FilterOperator(op_name)
        except ValueError:
            raise ValidationError(f"Unknown filter operator: {op_name}")
        if operator not in spec.operators:
            raise ValidationError(
                f"Operator '{operator.value}' is not allowed on '{match.group('field')}'"
            )

        if operator == FilterOperator.IN:
            items = _split(raw)
            if not items:
                raise ValidationError(f"'{key}' needs at least one value")
            value: Any = tuple(self._coerce(spec, item) for item in items)
        else:
            if isinstance(raw, (list, tuple)):
                if len(raw) != 1:
                    raise ValidationError(f"'{key}' takes a single value")
                raw = raw[0]
            value = self._coerce(spec, raw)

        return FieldFilter(field=field, operator=operator, value=value)

    @staticmethod
    def _coerce(spec: FieldSpec, raw: Any) -> Any:
        try:
            value = TypeAdapter(spec.value_type).validate_python(raw)
        except PydanticValidationError:
            raise ValidationError(f"Invalid value for '{spec.name}': {raw!r}")
        # Stored timestamps are naive local time
        if isinstance(value, datetime) and value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value

    @staticmethod
    def _parse_sort(raw: Any) -> tuple[SortKey, ...]:
        names = _split(raw)
        if not names:
            return DEFAULT_SORT

        keys = []
        for name in names:
            descending = name.startswith("-")
            field = resolve_field(name.lstrip("-+"))
            spec = POST_QUERY_FIELDS.get(field)
            if spec is None or not spec.sortable:
                raise ValidationError(f"Sorting on '{name.lstrip('-+')}' is not allowed")
            keys.append(SortKey(field=field, descending=descending))
        return tuple(keys)

    @staticmethod
    def _parse_select(raw: Any) -> Optional[tuple[str, ...]]:
        names = _split(raw)
        if not names:
            return None

        fields = []
        for name in names:
            field = resolve_field(name)
            if field not in SELECTABLE_FIELDS:
                raise ValidationError(f"Cannot select '{name}'")
            if field not in fields:
                fields.append(field)
        return tuple(fields)

    @staticmethod
    def _parse_int(raw: Any, default: int) -> int:
        if raw is None or raw == "":
            return default
        if isinstance(raw, (list, tuple)):
            raw = raw[0] if raw else None
        try:
            return int(raw)
        except (TypeError, ValueError):
            return default


def _split(raw: Any) -> list[Any]:
    """Split comma separated strings; lists are flattened the same way."""
    if raw is None:
        return []
    values = raw if isinstance(raw, (list, tuple)) else [raw]
    parts: list[Any] = []
    for value in values:
        if isinstance(value, str):
            parts.extend(p.strip() for p in value.split(",") if p.strip())
        else:
            parts.append(value)
    return parts
