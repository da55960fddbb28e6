"""Compile ``PostQuery`` predicates into SQLAlchemy expressions.

Only allow-listed fields reach this module (see ``quill.domain.query``), so
column lookups by name are safe. Values are always bound parameters.
"""

from sqlalchemy import ColumnElement, Select, and_, true

from quill.domain.query import FieldFilter, FilterOperator, PostQuery
from quill.persistence.mappers import to_column_value
from quill.persistence.tables import posts_table


def compile_filter(field_filter: FieldFilter) -> ColumnElement[bool]:
    """Translate one predicate.

    ``tags`` is an array column: ``eq`` means "carries the tag" and ``in``
    means "carries any of the tags".
    """
    column = posts_table.c[field_filter.field]
    operator = field_filter.operator

    if operator == FilterOperator.IN:
        values = [to_column_value(v) for v in field_filter.value]
        if field_filter.field == "tags":
            return column.overlap(values)
        return column.in_(values)

    value = to_column_value(field_filter.value)
    if field_filter.field == "tags":
        return column.any(value)
    if operator == FilterOperator.EQ:
        return column == value
    if operator == FilterOperator.GT:
        return column > value
    if operator == FilterOperator.GTE:
        return column >= value
    if operator == FilterOperator.LT:
        return column < value
    return column <= value


def where_clause(query: PostQuery) -> ColumnElement[bool]:
    """AND of all predicates (TRUE when there are none)."""
    if not query.filters:
        return true()
    return and_(*(compile_filter(f) for f in query.filters))


def apply_order(stmt: Select, query: PostQuery) -> Select:
    """Order by the query's sort keys, ties broken by id."""
    order = [
        posts_table.c[key.field].desc() if key.descending else posts_table.c[key.field].asc()
        for key in query.sort
    ]
    return stmt.order_by(*order, posts_table.c.id.asc())
