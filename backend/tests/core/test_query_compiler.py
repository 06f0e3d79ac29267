"""Query Compiler - verifies condition and sort compilation without a database.

Tests:
    - Unknown fields are rejected with GenericError
    - Null equality compiles to IS NULL, inequality also matches NULL
    - Substring terms are escaped, never used as patterns
    - JSON list columns are searched element by element
    - Sort direction decides where nulls go
"""

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from media_tracker.core.conditions import (
    SortSpec, eq, icontains, iequals, ne,
)
from media_tracker.core.errors import GenericError
from media_tracker.infrastructure.query_compiler import (
    compile_condition, compile_sort,
)
from media_tracker.models import MovieRecord


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect()))


def test_unknown_field_is_generic_error():
    with pytest.raises(GenericError):
        compile_condition(MovieRecord, eq("no_such_field", 1))


def test_unknown_sort_field_is_generic_error():
    with pytest.raises(GenericError):
        compile_sort(MovieRecord, [SortSpec("no_such_field")])


def test_eq_none_compiles_to_is_null():
    assert "movies.group_id IS NULL" in _sql(compile_condition(MovieRecord, eq("group_id", None)))


def test_ne_also_matches_null():
    sql = _sql(compile_condition(MovieRecord, ne("marked_as_redo", True)))
    assert "IS NULL" in sql
    assert " OR " in sql


def test_iequals_lowercases_both_sides():
    compiled = compile_condition(MovieRecord, iequals("name", "Alien")).compile(
        dialect=sqlite.dialect(),
    )
    assert "lower(movies.name)" in str(compiled)
    assert "alien" in compiled.params.values()


def test_icontains_escapes_wildcards():
    compiled = compile_condition(MovieRecord, icontains("name", "50%_off")).compile(
        dialect=sqlite.dialect(),
    )
    assert "ESCAPE '/'" in str(compiled)
    assert any("50/%/_off" in str(v) for v in compiled.params.values())


def test_icontains_on_json_column_matches_elements():
    compiled = compile_condition(MovieRecord, icontains("directors", '50%"')).compile(
        dialect=sqlite.dialect(),
    )
    sql = str(compiled)
    assert "json_each(movies.directors)" in sql
    assert "CAST" not in sql
    assert any('50/%"' in str(v) for v in compiled.params.values())


def test_icontains_on_json_column_postgres_unnests_elements():
    sql = str(compile_condition(MovieRecord, icontains("directors", "nolan")).compile(
        dialect=postgresql.dialect(),
    ))
    assert "json_array_elements_text(movies.directors)" in sql
    assert "ILIKE" in sql


def test_sort_nulls_first_ascending_last_descending():
    ascending, descending = compile_sort(MovieRecord, [
        SortSpec("release_date"), SortSpec("importance", ascending=False),
    ])
    assert "NULLS FIRST" in _sql(ascending)
    assert "NULLS LAST" in _sql(descending)


def test_sort_on_text_is_case_insensitive():
    (clause,) = compile_sort(MovieRecord, [SortSpec("name")])
    assert "lower(movies.name)" in _sql(clause)
