"""Media Item Schemas - verifies conversion between API bodies and core entities.

Tests:
    - Bodies build the right entity type with path-scoped owner and category
    - Filter bodies become frozen MediaItemFilter values
    - Responses expose populated references with their names
"""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from media_tracker.core.domain_types import (
    Importance, MediaItemSortField, Resolved, Unresolved,
)
from media_tracker.core.entities import Group, Movie, TvShow, TvShowSeason
from media_tracker.schemas.media_item import (
    FilterMediaItemsRequest, MovieBody, MovieResponse, SearchMediaItemsRequest,
    TvShowBody, TvShowResponse,
)


def test_movie_body_builds_movie():
    user_id, category_id, group_id = uuid4(), uuid4(), uuid4()
    body = MovieBody(
        name=" Alien ", importance=400, group_id=group_id, directors=["Ridley Scott"],
    )

    movie = body.to_internal(user_id, category_id)

    assert isinstance(movie, Movie)
    assert movie.id is None
    assert movie.name == "Alien"
    assert movie.importance == Importance.HIGH
    assert movie.owner == Unresolved(user_id)
    assert movie.category == Unresolved(category_id)
    assert movie.group == Unresolved(group_id)
    assert movie.own_platform is None
    assert movie.directors == ["Ridley Scott"]


def test_tv_show_body_builds_seasons():
    body = TvShowBody(name="Dark", seasons=[{"number": 1, "episodes_number": 10}])

    show = body.to_internal(uuid4(), uuid4(), uuid4())

    assert isinstance(show, TvShow)
    assert show.seasons == [TvShowSeason(1, 10, None)]


def test_invalid_importance_is_rejected():
    with pytest.raises(ValidationError):
        MovieBody(name="Alien", importance=150)


def test_filter_request_conversion():
    group_id = uuid4()
    request = FilterMediaItemsRequest(
        filter={
            "importance_levels": [300],
            "groups": {"group_ids": [str(group_id)]},
            "complete": False,
        },
        sort_by=[{"field": "NAME", "ascending": False}],
    )

    media_item_filter = request.internal_filter()
    (sort_by,) = request.internal_sort_by()

    assert media_item_filter.importance_levels == (Importance.MEDIUM,)
    assert media_item_filter.groups.group_ids == (group_id,)
    assert media_item_filter.own_platforms is None
    assert media_item_filter.complete is False
    assert sort_by.field == MediaItemSortField.NAME
    assert sort_by.ascending is False


def test_empty_filter_request_means_defaults():
    request = FilterMediaItemsRequest()
    assert request.internal_filter() is None
    assert request.internal_sort_by() is None


def test_search_term_is_required():
    with pytest.raises(ValidationError):
        SearchMediaItemsRequest(term="")


def test_response_exposes_populated_group():
    group = Group(
        name="Saga", owner=Unresolved(uuid4()), category=Unresolved(uuid4()), id=uuid4(),
    )
    movie = Movie(
        name="Alien", owner=group.owner, category=group.category, id=uuid4(),
        group=Resolved(group), completed_on=[date(2020, 1, 1)],
    )

    response = MovieResponse.from_internal(movie)

    assert response.group.id == group.id
    assert response.group.name == "Saga"
    assert response.completed_last_on == date(2020, 1, 1)


def test_tv_show_response_seasons():
    show = TvShow(
        name="Dark", owner=Unresolved(uuid4()), category=Unresolved(uuid4()),
        id=uuid4(), seasons=[TvShowSeason(1, 10, 4)],
    )

    response = TvShowResponse.from_internal(show)

    assert response.seasons[0].watched_episodes_number == 4
