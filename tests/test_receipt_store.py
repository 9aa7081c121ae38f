# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-16
# Description: test_receipt_store.py
# -----------------------------------------------------------------------------
import pytest

from conftest import DIMS
from receipt.Receipt import Receipt
from store.ReceiptStore import ReceiptStore


def _vec(x: float = 0.1):
    return [x] * DIMS


def test_content_text_joins_non_empty_fields_in_order():
    r = Receipt(
        id="r1",
        owner_id="u1",
        description=" Laptop Bag ",
        brand="Targus",
        model="",
        store="Office Depot",
        location=None,
        warranty_period="1 year",
    )
    assert r.content_text() == "Laptop Bag Targus Office Depot 1 year"
    assert Receipt(id="r2", owner_id="u1", description="   ").content_text() == ""


def test_to_metadata_drops_none_and_keeps_owner():
    md = Receipt(id="r1", owner_id="u1", brand="Apple", amount=999, country="US").to_metadata()
    assert md == {"receipt_id": "r1", "owner_id": "u1", "brand": "Apple", "amount": 999.0, "country": "US"}


def test_store_satisfies_protocol(sqlite_store):
    assert isinstance(sqlite_store, ReceiptStore)
    assert sqlite_store.test_connection() is True


def test_embedding_status_counts(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="a", owner_id="u1", description="Phone", embedding=_vec()))
    sqlite_store.add_receipt(Receipt(id="b", owner_id="u1", description="Case"))
    sqlite_store.add_receipt(Receipt(id="c", owner_id="u2", description="Other owner"))

    status = sqlite_store.embedding_status("u1")
    assert (status.total, status.with_embedding, status.without_embedding) == (2, 1, 1)
    assert status.percentage_complete == 50.0

    empty = sqlite_store.embedding_status("nobody")
    assert empty.total == 0
    assert empty.percentage_complete == 0.0


def test_list_without_embedding_excludes_contentless(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="blank", owner_id="u1", brand="\n", amount=5.0))
    sqlite_store.add_receipt(Receipt(id="bag", owner_id="u1", description="Bag"))
    sqlite_store.add_receipt(Receipt(id="done", owner_id="u1", description="TV", embedding=_vec()))

    assert [r.id for r in sqlite_store.list_without_embedding("u1", limit=10)] == ["bag"]

    status = sqlite_store.embedding_status("u1")
    assert (status.total, status.with_embedding, status.without_embedding, status.no_content) == (3, 1, 1, 1)
    assert status.percentage_complete == 50.0


def test_update_embedding_persists_and_checks_dimensions(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="a", owner_id="u1", description="Phone"))

    sqlite_store.update_embedding("a", "u1", _vec(0.5))
    stored = sqlite_store.get_receipt("a", "u1")
    assert stored.has_embedding
    assert len(stored.embedding) == DIMS

    with pytest.raises(ValueError):
        sqlite_store.update_embedding("a", "u1", [0.1, 0.2])

    # wrong owner is treated as a missing record
    with pytest.raises(KeyError):
        sqlite_store.update_embedding("a", "u2", _vec())


def test_search_text_is_case_insensitive_and_owner_scoped(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="a", owner_id="u1", brand="Apple", description="iPhone 15"))
    sqlite_store.add_receipt(Receipt(id="b", owner_id="u1", store="Best Buy", description="Sony WH-1000XM5"))
    sqlite_store.add_receipt(Receipt(id="c", owner_id="u2", brand="Apple", description="iPad"))

    assert [r.id for r in sqlite_store.search_text("u1", "APPLE")] == ["a"]
    assert [r.id for r in sqlite_store.search_text("u1", "best buy")] == ["b"]
    assert sqlite_store.search_text("u1", "   ") == []


def test_search_text_treats_wildcards_literally(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="a", owner_id="u1", description="100% cotton shirt"))
    sqlite_store.add_receipt(Receipt(id="b", owner_id="u1", description="1000 piece puzzle"))

    assert [r.id for r in sqlite_store.search_text("u1", "100%")] == ["a"]
    assert sqlite_store.search_text("u1", "_") == []


def test_add_receipt_requires_owner(sqlite_store):
    with pytest.raises(ValueError):
        sqlite_store.add_receipt(Receipt(id="x", owner_id=""))


def test_search_text_covers_model_and_location(sqlite_store):
    sqlite_store.add_receipt(Receipt(id="cans", owner_id="u1", description="Headphones", model="WH-1000XM5"))
    sqlite_store.add_receipt(Receipt(id="tv", owner_id="u1", description="TV", location="Seattle, WA"))
    sqlite_store.add_receipt(Receipt(id="uk", owner_id="u1", description="Kettle", country="Seattle"))

    assert [r.id for r in sqlite_store.search_text("u1", "wh-1000")] == ["cans"]
    # country is not a searchable field
    assert [r.id for r in sqlite_store.search_text("u1", "seattle")] == ["tv"]

    with pytest.raises(ValueError):
        sqlite_store.search_text("u1", "tv", fields=("country",))
