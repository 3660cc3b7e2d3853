from __future__ import annotations

from datetime import datetime

from photoCatalogue.models.types import Photo, Representation
from photoCatalogue.query.date_accessor import DateAccessor


def _photo(name: str, taken=None) -> Photo:
    return Photo(representations=(Representation(name),), time_taken=taken)


def test_buckets_by_year_and_zero_based_month() -> None:
    jan = _photo("jan", datetime(2020, 1, 5))
    mar_a = _photo("mar_a", datetime(2020, 3, 1))
    mar_b = _photo("mar_b", datetime(2020, 3, 20))
    dec = _photo("dec", datetime(2019, 12, 31))
    undated = _photo("undated")

    accessor = DateAccessor.from_photos([undated, dec, jan, mar_a, mar_b])

    assert accessor.years() == [2019, 2020]
    assert accessor.months_for_year(2020) == (0, 2)
    assert accessor.months_for_year(2019) == (11,)
    assert accessor.photos_for_year(2020) == (jan, mar_a, mar_b)
    assert accessor.photos_for_month_year(2020, 2) == (mar_a, mar_b)
    assert accessor.photos_for_month_year(2019, 11) == (dec,)


def test_undated_photos_are_not_indexed() -> None:
    accessor = DateAccessor.from_photos([_photo("a"), _photo("b")])
    assert accessor.years() == []
    assert accessor.year_items == {}


def test_unknown_keys_give_empty_results() -> None:
    accessor = DateAccessor.from_photos([_photo("a", datetime(2020, 1, 1))])
    assert accessor.photos_for_year(1999) == ()
    assert accessor.months_for_year(1999) == ()
    assert accessor.photos_for_month_year(2020, 5) == ()


def test_reversed_input_keeps_result_order_within_buckets() -> None:
    early = _photo("early", datetime(2021, 6, 1))
    late = _photo("late", datetime(2021, 6, 30))
    accessor = DateAccessor.from_photos([late, early])
    assert accessor.photos_for_month_year(2021, 5) == (late, early)


def test_every_bucket_member_matches_its_key() -> None:
    photos = [_photo(str(day), datetime(2018 + day % 3, 1 + day % 12, 1)) for day in range(40)]
    accessor = DateAccessor.from_photos(photos)
    for (year, month), bucket in accessor.year_month_items.items():
        for photo in bucket:
            assert photo.time_taken.year == year
            assert photo.time_taken.month - 1 == month
