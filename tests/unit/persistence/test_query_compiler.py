"""Unit tests for compiling post queries into PostgreSQL predicates."""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql import operators

from quill.domain.query import FieldFilter, FilterOperator, PostQuery, PostQueryBuilder
from quill.domain.value import Category, Slug
from quill.persistence.mappers import to_column_value
from quill.persistence.query import apply_order, compile_filter, where_clause
from quill.persistence.tables import posts_table


def _compile(clause):
    compiled = clause.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


class TestCompileFilter:
    """Tests for single predicates."""

    def test_equality_binds_enum_value(self):
        clause = compile_filter(
            FieldFilter(field="category", operator=FilterOperator.EQ, value=Category.TRAVEL)
        )

        assert clause.left.compare(posts_table.c.category)
        assert clause.operator is operators.eq
        assert clause.right.value == "travel"

    @pytest.mark.parametrize(
        "operator, expected",
        [
            (FilterOperator.GT, operators.gt),
            (FilterOperator.GTE, operators.ge),
            (FilterOperator.LT, operators.lt),
            (FilterOperator.LTE, operators.le),
        ],
    )
    def test_range_operators(self, operator, expected):
        clause = compile_filter(FieldFilter(field="views", operator=operator, value=10))

        assert clause.left.compare(posts_table.c.views)
        assert clause.operator is expected
        assert clause.right.value == 10

    def test_in_operator(self):
        sql, params = _compile(
            compile_filter(
                FieldFilter(
                    field="category",
                    operator=FilterOperator.IN,
                    value=(Category.TRAVEL, Category.FOOD),
                )
            )
        )

        assert "posts.category IN" in sql
        assert params == {"category_1": ["travel", "food"]}

    def test_tag_equality_means_contains(self):
        sql, _ = _compile(
            compile_filter(FieldFilter(field="tags", operator=FilterOperator.EQ, value="tea"))
        )

        assert "ANY (posts.tags)" in sql

    def test_tag_in_means_overlap(self):
        sql, _ = _compile(
            compile_filter(
                FieldFilter(field="tags", operator=FilterOperator.IN, value=("tea", "coffee"))
            )
        )

        assert "posts.tags &&" in sql

    def test_values_are_never_inlined(self):
        query = PostQueryBuilder().build({"title": "x'; DROP TABLE posts; --"})

        sql, params = _compile(where_clause(query))

        assert "DROP" not in sql
        assert params == {"title_1": "x'; DROP TABLE posts; --"}


class TestWhereAndOrder:
    """Tests for full query compilation."""

    def test_no_filters_is_true(self):
        sql, _ = _compile(where_clause(PostQuery()))

        assert sql == "true"

    def test_filters_are_combined_with_and(self):
        query = PostQueryBuilder().build({"category": "food", "views[lt]": "5"})

        clause = where_clause(query)

        assert clause.operator is operators.and_
        predicates = {
            (c.left.name, c.operator, c.right.value) for c in clause.clauses
        }
        assert predicates == {
            ("category", operators.eq, "food"),
            ("views", operators.lt, 5),
        }

    def test_order_ends_with_id_tie_break(self):
        query = PostQueryBuilder().build({"sort": "-likes,title"})

        sql, _ = _compile(apply_order(select(posts_table.c.id), query))

        assert sql.endswith(
            "ORDER BY posts.like_count DESC, posts.title ASC, posts.id ASC"
        )


class TestToColumnValue:
    """Tests for unwrapping domain values."""

    def test_unwraps_enums_and_slugs(self):
        assert to_column_value(Category.SOCIAL_MEDIA) == "social-media"
        assert to_column_value(Slug("hello-world")) == "hello-world"
        assert to_column_value(42) == 42
