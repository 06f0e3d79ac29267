"""Condition Tree - store-agnostic predicates and sort specs for QueryHelper.

Invariants:
    - Nodes are immutable; building a filter never mutates a shared list
    - Field names are store field names (e.g. "owner_id", not "owner")
    - IContains matches its term literally: no wildcard or regex metacharacters
    - all_of()/any_of() drop None operands and flatten nested nodes of the same kind
    - all_of() with no operands is None, meaning "no constraint"

Design Decisions:
    - Tagged expression tree instead of raw store filter dicts: the same media item
      filter logic can be compiled for any engine (infrastructure/query_compiler.py)
"""

from dataclasses import dataclass
from typing import Any, Iterable, Union


@dataclass(frozen=True)
class Eq:
    """field == value (value None means the field is unset)."""
    field: str
    value: Any


@dataclass(frozen=True)
class In:
    """field is one of values."""
    field: str
    values: tuple


@dataclass(frozen=True)
class Ne:
    """field != value, also true when the field is unset."""
    field: str
    value: Any


@dataclass(frozen=True)
class IsSet:
    field: str


@dataclass(frozen=True)
class IsUnset:
    field: str


@dataclass(frozen=True)
class IEquals:
    """Case-insensitive exact match."""
    field: str
    value: str


@dataclass(frozen=True)
class IContains:
    """Case-insensitive literal substring match."""
    field: str
    term: str


@dataclass(frozen=True)
class And:
    conditions: tuple["Condition", ...]


@dataclass(frozen=True)
class Or:
    conditions: tuple["Condition", ...]


Condition = Union[Eq, In, Ne, IsSet, IsUnset, IEquals, IContains, And, Or]


@dataclass(frozen=True)
class SortSpec:
    """One ORDER BY entry; entries apply in list order, later ones break ties."""
    field: str
    ascending: bool = True


# ─── Combinators ─────────────────────────────────────────────────

def eq(field: str, value: Any) -> Eq:
    return Eq(field, value)


def in_(field: str, values: Iterable[Any]) -> In:
    return In(field, tuple(values))


def ne(field: str, value: Any) -> Ne:
    return Ne(field, value)


def is_set(field: str) -> IsSet:
    return IsSet(field)


def is_unset(field: str) -> IsUnset:
    return IsUnset(field)


def iequals(field: str, value: str) -> IEquals:
    return IEquals(field, value)


def icontains(field: str, term: str) -> IContains:
    return IContains(field, term)


def all_of(*conditions: Condition | None) -> Condition | None:
    """AND of the given conditions."""
    flat = _flatten(And, conditions)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return And(flat)


def any_of(*conditions: Condition | None) -> Condition | None:
    """OR of the given conditions."""
    flat = _flatten(Or, conditions)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return Or(flat)


def fields_equal(**values: Any) -> Condition | None:
    """Shorthand for an AND of equalities, e.g. fields_equal(owner_id=u, category_id=c)."""
    return all_of(*(Eq(name, value) for name, value in values.items()))


def _flatten(kind: type, conditions: Iterable[Condition | None]) -> tuple:
    flat: list = []
    for condition in conditions:
        if condition is None:
            continue
        if isinstance(condition, kind):
            flat.extend(condition.conditions)
        else:
            flat.append(condition)
    return tuple(flat)
