"""Condition Tree - verifies combinator normalization.

Tests:
    - all_of/any_of drop None operands and unwrap a single operand
    - Nested nodes of the same kind are flattened
    - fields_equal builds an AND of equalities
"""

from media_tracker.core.conditions import (
    And, Eq, IContains, In, Or, all_of, any_of, eq, fields_equal, icontains,
    in_, is_set,
)


def test_all_of_without_operands_is_no_constraint():
    assert all_of() is None
    assert all_of(None, None) is None


def test_all_of_single_operand_is_unwrapped():
    assert all_of(None, eq("name", "x")) == Eq("name", "x")


def test_all_of_flattens_nested_and():
    inner = all_of(eq("a", 1), eq("b", 2))
    assert all_of(inner, eq("c", 3)) == And((Eq("a", 1), Eq("b", 2), Eq("c", 3)))


def test_any_of_does_not_flatten_and_nodes():
    inner = all_of(eq("a", 1), eq("b", 2))
    combined = any_of(inner, is_set("c"))
    assert isinstance(combined, Or)
    assert combined.conditions[0] == inner


def test_any_of_flattens_nested_or():
    combined = any_of(any_of(eq("a", 1), eq("b", 2)), eq("c", 3))
    assert combined == Or((Eq("a", 1), Eq("b", 2), Eq("c", 3)))


def test_fields_equal_builds_and_of_equalities():
    assert fields_equal(owner_id=1, category_id=2) == And(
        (Eq("owner_id", 1), Eq("category_id", 2)),
    )


def test_in_freezes_values():
    values = [1, 2]
    condition = in_("importance", values)
    values.append(3)
    assert condition == In("importance", (1, 2))


def test_icontains_keeps_term_literal():
    assert icontains("name", ".*") == IContains("name", ".*")
