from __future__ import annotations

from datetime import datetime

import pytest

from photoCatalogue.models.query import QueryParams, QueryType, SortOrder
from photoCatalogue.models.types import (
    ItemType,
    PermissionType,
    Photo,
    Representation,
    SourceType,
)


def _photo(*sizes, **kwargs) -> Photo:
    reps = tuple(Representation(f"img{index}.jpg", w, h) for index, (w, h) in enumerate(sizes))
    return Photo(representations=reps, **kwargs)


class TestDescriptorNames:
    def test_source_type(self) -> None:
        assert SourceType.from_descriptor("slr") is SourceType.SLR
        assert SourceType.from_descriptor("drone") is SourceType.DRONE
        assert SourceType.from_descriptor("phone") is SourceType.UNKNOWN
        assert SourceType.from_descriptor("") is SourceType.UNKNOWN

    def test_item_type(self) -> None:
        assert ItemType.from_descriptor("still") is ItemType.STILL
        assert ItemType.from_descriptor("movie") is ItemType.UNKNOWN

    def test_permission(self) -> None:
        assert PermissionType.from_descriptor("authBasic") is PermissionType.AUTHORISED_BASIC
        assert PermissionType.from_descriptor("authAdvanced") is PermissionType.AUTHORISED_ADVANCED
        assert PermissionType.from_descriptor("private") is PermissionType.PRIVATE
        assert PermissionType.from_descriptor("whatever") is PermissionType.PUBLIC

    def test_permission_ordering(self) -> None:
        assert (
            PermissionType.PUBLIC
            < PermissionType.AUTHORISED_BASIC
            < PermissionType.AUTHORISED_ADVANCED
            < PermissionType.PRIVATE
        )


def test_representation_aspect_ratio() -> None:
    assert Representation("a.jpg", 100, 50).aspect_ratio == pytest.approx(2.0)
    assert Representation("a.jpg", 100, 0).aspect_ratio == 0.0
    assert Representation("a.jpg").aspect_ratio == 0.0


def test_photo_requires_a_representation() -> None:
    with pytest.raises(ValueError):
        Photo(representations=())


def test_photos_compare_by_identity() -> None:
    first = _photo((10, 10))
    second = _photo((10, 10))
    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_sort_key_puts_undated_first() -> None:
    undated = _photo((1, 1))
    dated = _photo((1, 1), time_taken=datetime(1900, 1, 1))
    assert sorted([dated, undated], key=lambda p: p.sort_key) == [undated, dated]


class TestRepresentationSelection:
    def test_smallest_with_min_dimension(self) -> None:
        photo = _photo((4000, 3000), (1600, 1200), (800, 600), (400, 300))
        chosen = photo.smallest_representation_min_dimension(700)
        assert chosen is not None and chosen.relative_path == "img2.jpg"
        assert photo.smallest_representation_min_dimension(5000) is None

    def test_first_with_min_dimension(self) -> None:
        photo = _photo((400, 300), (1600, 1200), (4000, 3000))
        chosen = photo.first_representation_min_dimension(1000)
        assert chosen is not None and chosen.relative_path == "img1.jpg"

    def test_first_falls_back_to_largest(self) -> None:
        photo = _photo((1, 1), (400, 300), (200, 100))
        assert photo.first_representation_min_dimension(1000) is None
        fallback = photo.first_representation_min_dimension(1000, return_largest_if_not_found=True)
        assert fallback is not None and fallback.relative_path == "img1.jpg"

    def test_degenerate_sizes_are_never_a_fallback(self) -> None:
        photo = _photo((0, 0), (1, 1))
        assert photo.first_representation_min_dimension(10, True) is None


class TestQueryParams:
    def test_structural_equality_and_hash(self) -> None:
        first = QueryParams(QueryType.ALL, SortOrder.YOUNGEST_FIRST, permission=PermissionType.PRIVATE)
        second = QueryParams(QueryType.ALL, SortOrder.YOUNGEST_FIRST, permission=PermissionType.PRIVATE)
        assert first == second
        assert hash(first) == hash(second)
        assert QueryParams() != first

    def test_ordering_is_field_wise(self) -> None:
        assert QueryParams(sort_order=SortOrder.OLDEST_FIRST) < QueryParams(
            sort_order=SortOrder.YOUNGEST_FIRST
        )

    @pytest.mark.parametrize(
        "slr, drone, expected",
        [(False, False, 0), (True, False, 1), (False, True, 8), (True, True, 9)],
    )
    def test_make_source_type(self, slr: bool, drone: bool, expected: int) -> None:
        assert QueryParams.make_source_type(slr, drone) == expected
