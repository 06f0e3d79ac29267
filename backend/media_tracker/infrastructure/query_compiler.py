"""Query Compiler - turns condition trees and sort specs into SQLAlchemy clauses.

Invariants:
    - Field names must be mapped columns of the record class, else GenericError
    - IContains never interprets wildcards: % and _ in the term are escaped
    - IContains on a JSON list column matches each element on its own, never the
      encoded list
    - JSON list columns are ordered through their text form
    - String sorts are case-insensitive (lower()); nulls first ascending, last descending

Design Decisions:
    - Pure functions over a record class: QueryHelper owns the session, this module
      owns only expression building, so it can be tested without a database
    - Element matching is a custom clause compiled per dialect (json_each on
      SQLite, json_array_elements_text on PostgreSQL)
"""

from enum import Enum
from typing import Any, Iterable

from sqlalchemy import (
    JSON, Boolean, String, and_, bindparam, cast, false, func,
    inspect as sa_inspect, nulls_first, nulls_last, or_, true,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement

from media_tracker.core.conditions import (
    And, Condition, Eq, IContains, IEquals, In, IsSet, IsUnset, Ne, Or, SortSpec,
)
from media_tracker.core.errors import GenericError

LIKE_ESCAPE = "/"


class JsonListContains(ColumnElement):
    """True when some string element of a JSON list contains the term, ignoring case."""

    type = Boolean()
    inherit_cache = False

    def __init__(self, column, term: str):
        self.column = column
        self.pattern = bindparam(
            None, f"%{escape_like(term)}%", type_=String, unique=True,
        )


@compiles(JsonListContains)
def _compile_json_list_contains(element, compiler, **kw):
    return (
        f"EXISTS (SELECT 1 FROM json_each({compiler.process(element.column, **kw)}) "
        f"AS list_element WHERE lower(list_element.value) "
        f"LIKE lower({compiler.process(element.pattern, **kw)}) "
        f"ESCAPE '{LIKE_ESCAPE}')"
    )


@compiles(JsonListContains, "postgresql")
def _compile_json_list_contains_pg(element, compiler, **kw):
    return (
        f"EXISTS (SELECT 1 FROM json_array_elements_text("
        f"{compiler.process(element.column, **kw)}) AS list_element(value) "
        f"WHERE list_element.value ILIKE {compiler.process(element.pattern, **kw)} "
        f"ESCAPE '{LIKE_ESCAPE}')"
    )


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def compile_condition(record_class: type, condition: Condition) -> ColumnElement[bool]:
    """Compile a condition tree into a boolean SQL expression."""
    match condition:
        case Eq(field=name, value=None):
            return _column(record_class, name).is_(None)
        case Eq(field=name, value=value):
            return _column(record_class, name) == _plain(value)
        case In(field=name, values=values):
            return _column(record_class, name).in_([_plain(v) for v in values])
        case Ne(field=name, value=None):
            return _column(record_class, name).is_not(None)
        case Ne(field=name, value=value):
            column = _column(record_class, name)
            return or_(column != _plain(value), column.is_(None))
        case IsSet(field=name):
            return _column(record_class, name).is_not(None)
        case IsUnset(field=name):
            return _column(record_class, name).is_(None)
        case IEquals(field=name, value=value):
            return func.lower(_text(record_class, name)) == value.lower()
        case IContains(field=name, term=term):
            if _is_json(record_class, name):
                return JsonListContains(_column(record_class, name), term)
            return _column(record_class, name).icontains(term, autoescape=True)
        case And(conditions=children):
            if not children:
                return true()
            return and_(*_compile_all(record_class, children))
        case Or(conditions=children):
            if not children:
                return false()
            return or_(*_compile_all(record_class, children))
    raise GenericError(f"Unsupported condition node: {condition!r}")


def compile_sort(record_class: type, sort: Iterable[SortSpec]) -> list:
    """Compile sort specs into ORDER BY clauses, in the given order."""
    clauses = []
    for spec in sort:
        if _is_textual(record_class, spec.field):
            expression = func.lower(_text(record_class, spec.field))
        else:
            expression = _column(record_class, spec.field)
        if spec.ascending:
            clauses.append(nulls_first(expression.asc()))
        else:
            clauses.append(nulls_last(expression.desc()))
    return clauses


def _compile_all(record_class: type, conditions: Iterable[Condition]) -> list:
    return [compile_condition(record_class, c) for c in conditions]


def _column(record_class: type, name: str):
    if name not in sa_inspect(record_class).columns:
        raise GenericError(
            f"Unknown field '{name}' for {record_class.__name__}",
        )
    return getattr(record_class, name)


def _is_textual(record_class: type, name: str) -> bool:
    _column(record_class, name)
    column_type = sa_inspect(record_class).columns[name].type
    return isinstance(column_type, (String, JSON))


def _is_json(record_class: type, name: str) -> bool:
    _column(record_class, name)
    return isinstance(sa_inspect(record_class).columns[name].type, JSON)


def _text(record_class: type, name: str):
    column = _column(record_class, name)
    if _is_json(record_class, name):
        return cast(column, String)
    return column


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
