# tests/test_query_builder.py
import itertools

import pytest
from pydantic import ValidationError

from pling import crud
from pling.schemas import ListingFilter, SortBy


@pytest.fixture()
def catalog(make_user, make_listing):
    pune = make_user(city="Pune")
    return [
        make_listing(brand="Trek", price=85000, purchase_year=2022, condition="Like New", is_premium=True),
        make_listing(brand="Giant", price=40000, purchase_year=2020, frame_material="Steel", suspension="None"),
        make_listing(brand="Trek", price=30000, purchase_year=2020, category="Kids", wheel_size="20",
                     gear_transmission="Non-Geared", seller_id=pune.id),
        make_listing(brand="Scott", price=40000, purchase_year=2023, condition="Fair",
                     frame_material="Carbon Fiber", status="sold"),
        make_listing(brand="Bianchi", price=120000, purchase_year=2024, suspension="Full",
                     wheel_size="27.5", seller_id=pune.id),
    ]


def test_brand_and_price_example(db, make_listing):
    trek = make_listing(brand="Trek", price=85000)
    giant = make_listing(brand="Giant", price=40000)

    assert [l.id for l in crud.list_listings(db, ListingFilter(brand="Trek"))] == [trek.id]
    assert [l.id for l in crud.list_listings(db, ListingFilter(min_price=50000))] == [trek.id]
    ordered = crud.list_listings(db, sort_by=SortBy.PRICE_ASC)
    assert [l.id for l in ordered] == [giant.id, trek.id]


def test_empty_filters_return_everything(db, catalog):
    everything = crud.list_listings(db)
    assert len(everything) == len(catalog)
    assert len(crud.list_listings(db, ListingFilter())) == len(catalog)


def test_blank_values_impose_no_constraint(db, catalog):
    filters = ListingFilter(brand="", condition="  ", min_price=None, ids=[])
    assert len(crud.list_listings(db, filters)) == len(catalog)


def test_price_bounds_are_inclusive(db, catalog):
    rows = crud.list_listings(db, ListingFilter(min_price=40000, max_price=85000))
    assert sorted(l.price for l in rows) == [40000, 40000, 85000]


@pytest.mark.parametrize("filters,predicate", [
    ({"brand": "Trek"}, lambda l: l.brand == "Trek"),
    ({"purchase_year": 2020}, lambda l: l.purchase_year == 2020),
    ({"condition": "Fair"}, lambda l: l.condition == "Fair"),
    ({"gear_transmission": "Non-Geared"}, lambda l: l.gear_transmission == "Non-Geared"),
    ({"frame_material": "Steel"}, lambda l: l.frame_material == "Steel"),
    ({"suspension": "Full"}, lambda l: l.suspension == "Full"),
    ({"wheel_size": "20"}, lambda l: l.wheel_size == "20"),
    ({"category": "Kids"}, lambda l: l.category == "Kids"),
    ({"is_premium": True}, lambda l: l.is_premium),
    ({"status": "sold"}, lambda l: l.status == "sold"),
    ({"max_price": 40000}, lambda l: l.price <= 40000),
])
def test_single_filter_predicates(db, catalog, filters, predicate):
    rows = crud.list_listings(db, ListingFilter(**filters))
    expected = [l for l in catalog if predicate(l)]
    assert rows
    assert all(predicate(l) for l in rows)
    assert {l.id for l in rows} == {l.id for l in expected}


def test_filter_combinations_are_conjunctive(db, catalog):
    options = {
        "brand": ["Trek", "Giant"],
        "purchase_year": [2020, 2022],
        "min_price": [35000],
        "max_price": [90000],
    }
    keys = list(options)
    for r in range(1, len(keys) + 1):
        for combo in itertools.combinations(keys, r):
            for values in itertools.product(*(options[k] for k in combo)):
                criteria = dict(zip(combo, values))
                rows = crud.list_listings(db, ListingFilter(**criteria))
                expected = {
                    l.id for l in catalog
                    if l.brand == criteria.get("brand", l.brand)
                    and l.purchase_year == criteria.get("purchase_year", l.purchase_year)
                    and l.price >= criteria.get("min_price", 0)
                    and l.price <= criteria.get("max_price", l.price)
                }
                assert {l.id for l in rows} == expected, criteria


def test_owner_and_id_list_filters(db, catalog):
    pune_seller = catalog[2].seller_id
    owned = crud.list_listings(db, ListingFilter(seller_id=pune_seller))
    assert {l.id for l in owned} == {catalog[2].id, catalog[4].id}

    wanted = [catalog[0].id, catalog[3].id]
    rows = crud.list_listings(db, ListingFilter(ids=wanted))
    assert {l.id for l in rows} == set(wanted)


def test_city_filter_matches_seller_city(db, catalog):
    rows = crud.list_listings(db, ListingFilter(city="pune"))
    assert {l.id for l in rows} == {catalog[2].id, catalog[4].id}


def test_sort_price_asc_and_desc(db, catalog):
    asc = [l.price for l in crud.list_listings(db, sort_by=SortBy.PRICE_ASC)]
    desc = [l.price for l in crud.list_listings(db, sort_by=SortBy.PRICE_DESC)]
    assert asc == sorted(asc)
    assert desc == sorted(desc, reverse=True)


def test_sort_newest_and_relevance_alias(db, catalog):
    newest = crud.list_listings(db, sort_by=SortBy.NEWEST)
    stamps = [l.created_at for l in newest]
    assert stamps == sorted(stamps, reverse=True)
    assert newest[0].id == catalog[-1].id
    relevant = crud.list_listings(db, sort_by=SortBy.RELEVANT)
    assert [l.id for l in relevant] == [l.id for l in newest]
    assert [l.id for l in crud.list_listings(db)] == [l.id for l in newest]


def test_sort_by_accepts_relevance_spelling():
    assert SortBy("relevance") is SortBy.RELEVANT
    with pytest.raises(ValueError):
        SortBy("popular")


def test_pagination(db, catalog):
    page = crud.list_listings(db, sort_by=SortBy.PRICE_ASC, skip=1, limit=2)
    assert [l.price for l in page] == [40000, 40000]


@pytest.mark.parametrize("bad", [
    {"min_price": -1},
    {"min_price": 500, "max_price": 100},
    {"purchase_year": 1999},
    {"purchase_year": 3000},
    {"condition": "Mint"},
    {"category": "Teens"},
])
def test_invalid_filters_rejected(bad):
    with pytest.raises(ValidationError):
        ListingFilter(**bad)
