"""Domain Types - verifies references, ids and enum values.

Tests:
    - ref_id reads the id of both reference variants
    - Resolved references to unsaved entities are rejected
    - Importance sorts numerically, MediaType serializes to its name
"""

from uuid import uuid4

import pytest

from media_tracker.core.domain_types import (
    CategoryId, GroupId, Importance, MediaItemId, MediaType, OwnPlatformId,
    Resolved, Unresolved, UserId,
    optional_ref_id, ref_id,
)
from media_tracker.core.entities import User


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert CategoryId(uid) == uid
    assert GroupId(uid) == uid
    assert OwnPlatformId(uid) == uid
    assert MediaItemId(uid) == uid


def test_ref_id_of_unresolved_reference():
    target = uuid4()
    assert ref_id(Unresolved(target)) == target


def test_ref_id_of_resolved_reference():
    user = User(name="alice", id=uuid4())
    assert ref_id(Resolved(user)) == user.id


def test_ref_id_rejects_resolved_unsaved_entity():
    with pytest.raises(ValueError):
        ref_id(Resolved(User(name="alice")))


def test_ref_id_rejects_non_reference():
    with pytest.raises(TypeError):
        ref_id(uuid4())


def test_optional_ref_id_passes_none_through():
    assert optional_ref_id(None) is None


def test_importance_levels_sort_numerically():
    assert sorted([Importance.HIGH, Importance.NONE, Importance.MEDIUM]) == [
        Importance.NONE, Importance.MEDIUM, Importance.HIGH,
    ]
    assert int(Importance.LOW) == 200


def test_media_type_values_match_names():
    assert {m.value for m in MediaType} == {"BOOK", "MOVIE", "TV_SHOW", "VIDEOGAME"}
    assert MediaType("TV_SHOW") is MediaType.TV_SHOW
