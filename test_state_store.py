"""Tests for the QuoteBuilder state container."""

import json

import pytest

from config import SETTINGS_KEY, WORKING_QUOTE_KEY
from exceptions import InvalidDataError, NotFoundError, ValidationError
from state import QuoteBuilder, SavedQuote, merge_saved_quotes
from state.serialization import saved_quotes_to_list


def test_starts_with_defaults(builder):
    settings = builder.get()

    assert settings.target_hourly == 100
    assert settings.wages == (25,)
    assert settings.global_markup == 20
    assert builder.working_quote.items == ()


def test_apply_is_shallow_and_copy_on_write(builder):
    """Only given fields change and the previous snapshot is untouched."""
    before = builder.get()
    item = builder.add_item()
    after_add = builder.get()

    builder.apply(global_markup=35)
    after = builder.get()

    assert before.persistent_items == ()
    assert after_add.global_markup == 20
    assert after.global_markup == 35
    assert after.persistent_items == (item,)
    assert after.persistent_items is after_add.persistent_items


def test_apply_replaces_whole_catalog(builder):
    builder.add_item()
    builder.add_item()

    builder.apply(persistent_items=[])

    assert builder.get().persistent_items == ()


def test_add_item_defaults(builder):
    item = builder.add_item()

    assert item.name == "New Item"
    assert item.cost == 0
    assert item.use_custom_markup is False
    assert item.custom_markup == 0
    assert builder.find_item(item.id) == item


def test_item_ids_are_unique(builder):
    ids = {builder.add_item().id for _ in range(50)}

    assert len(ids) == 50


def test_update_item_merges_fields(builder):
    item = builder.add_item()

    builder.update_item(item.id, name="Lumber", cost=12.5)
    builder.update_item(item.id, use_custom_markup=True, custom_markup=30)

    updated = builder.find_item(item.id)
    assert (updated.name, updated.cost, updated.use_custom_markup, updated.custom_markup) == ("Lumber", 12.5, True, 30)


def test_wage_editing(builder):
    builder.add_wage()
    builder.update_wage(1, 40)
    assert builder.get().wages == (25, 40)

    builder.delete_wage(0)
    assert builder.get().wages == (40,)

    builder.delete_wage(0)
    builder.set_labor_hours(10)
    assert builder.totals().labor_cost == 0


def test_search_items_is_case_insensitive(builder):
    a = builder.add_item()
    b = builder.add_item()
    builder.update_item(a.id, name="Cedar Board")
    builder.update_item(b.id, name="Deck Screws")

    assert builder.search_items("board") == [builder.find_item(a.id)]
    assert len(builder.search_items("")) == 2
    assert builder.search_items("nails") == []


def test_working_quote_editing(builder):
    item = builder.add_item()
    builder.add_to_quote(item.id)
    builder.add_to_quote(item.id)
    builder.set_quantity(1, 4)

    assert [q.quantity for q in builder.working_quote.items] == [1, 4]

    builder.remove_from_quote(0)
    assert [q.quantity for q in builder.working_quote.items] == [4]


def test_delete_item_leaves_dangling_quote_lines(builder):
    item = builder.add_item()
    builder.update_item(item.id, cost=10)
    builder.add_to_quote(item.id)

    builder.delete_item(item.id)

    assert len(builder.working_quote.items) == 1
    assert builder.totals().materials.price == 0


def test_save_requires_name(builder):
    builder.set_labor_hours(3)

    with pytest.raises(ValidationError):
        builder.save_quote()

    assert builder.get().saved_quotes == ()


def test_save_prepends_and_resets_only_name(builder):
    builder.set_labor_hours(2)
    builder.set_quote_name("First")
    first = builder.save_quote()
    builder.set_quote_name("Second")
    second = builder.save_quote()

    assert [q.id for q in builder.get().saved_quotes] == [second.id, first.id]
    assert first.total_price == 200
    assert builder.working_quote.name == ""
    assert builder.working_quote.labor_hours == 2


def test_saved_total_is_frozen_after_catalog_edit(builder):
    """Changing the catalog later does not change a saved total."""
    builder.apply(wages=[], target_hourly=0)
    item = builder.add_item()
    builder.update_item(item.id, cost=10, use_custom_markup=True, custom_markup=0)
    builder.add_to_quote(item.id)
    builder.set_quote_name("Snapshot")
    saved = builder.save_quote()
    assert saved.total_price == 10

    builder.update_item(item.id, cost=100)
    builder.load_quote(saved.id)

    assert builder.find_saved_quote(saved.id).total_price == 10
    assert builder.totals().total_price == 100


def test_load_copies_saved_quote(builder):
    item = builder.add_item()
    builder.add_to_quote(item.id)
    builder.set_labor_hours(5)
    builder.set_quote_name("Shed")
    saved = builder.save_quote()
    builder.clear_quote()

    loaded = builder.load_quote(saved.id)
    builder.set_quantity(0, 9)

    assert loaded.name == "Shed"
    assert loaded.labor_hours == 5
    assert builder.find_saved_quote(saved.id).items[0].quantity == 1


def test_load_unknown_quote(builder):
    with pytest.raises(NotFoundError):
        builder.load_quote("missing")


def test_delete_saved_quote(builder):
    builder.set_quote_name("Temp")
    saved = builder.save_quote()

    builder.delete_saved_quote(saved.id)
    builder.delete_saved_quote("not-there")

    assert builder.get().saved_quotes == ()


def test_clear_quote_resets_everything(builder):
    builder.add_to_quote("x")
    builder.set_labor_hours(3)
    builder.set_quote_name("Gone")

    quote = builder.clear_quote()

    assert (quote.name, quote.labor_hours, quote.items) == ("", 0, ())


def test_merge_saved_quotes_imported_wins():
    existing = [SavedQuote(id="a", name="old", date="")]
    imported = [SavedQuote(id="a", name="new", date=""), SavedQuote(id="b", name="b", date="")]

    merged = merge_saved_quotes(imported, existing)

    assert len(merged) == 2
    assert {q.id: q.name for q in merged} == {"a": "new", "b": "b"}


def test_import_saved_quotes_merges_by_id(builder):
    builder.apply(saved_quotes=[SavedQuote(id="a", name="old", date=""), SavedQuote(id="c", name="c", date="")])
    payload = json.dumps([{"id": "a", "name": "new"}, {"id": "b", "name": "b"}])

    builder.import_saved_quotes(payload)

    assert [(q.id, q.name) for q in builder.get().saved_quotes] == [("a", "new"), ("b", "b"), ("c", "c")]


def test_import_settings_replaces_everything(builder):
    builder.add_item()
    other = QuoteBuilder(type(builder.storage)())
    other.apply(target_hourly=65, wages=[18, 22])

    builder.import_settings(other.export_settings())

    assert builder.get() == other.get()


@pytest.mark.parametrize("payload", ["", "nope", "[]", '{"wages": []}'])
def test_invalid_settings_import_leaves_state(builder, payload):
    builder.add_item()
    before = builder.get()

    with pytest.raises(InvalidDataError):
        builder.import_settings(payload)

    assert builder.get() is before


def test_invalid_quotes_import_leaves_state(builder):
    builder.set_quote_name("Keep")
    builder.save_quote()
    before = builder.get()

    with pytest.raises(InvalidDataError):
        builder.import_saved_quotes(builder.export_settings())
    with pytest.raises(InvalidDataError):
        builder.import_saved_quotes('[{"id": "ok"}, {"name": "no id"}]')

    assert builder.get() is before


def test_export_saved_quotes_is_list(builder):
    builder.set_quote_name("One")
    builder.save_quote()

    data = json.loads(builder.export_saved_quotes())

    assert data == saved_quotes_to_list(builder.get().saved_quotes)


def test_state_is_persisted_and_restored(memory_storage):
    builder = QuoteBuilder(memory_storage)
    item = builder.add_item()
    builder.add_to_quote(item.id, 3)
    builder.set_quote_name("Persisted")

    restored = QuoteBuilder(memory_storage)

    assert restored.get() == builder.get()
    assert restored.working_quote == builder.working_quote
    assert memory_storage.read(SETTINGS_KEY) is not None
    assert memory_storage.read(WORKING_QUOTE_KEY) is not None


def test_corrupt_storage_starts_from_defaults(memory_storage):
    memory_storage.write(SETTINGS_KEY, "{corrupt")
    memory_storage.write(WORKING_QUOTE_KEY, "[]")

    builder = QuoteBuilder(memory_storage)

    assert builder.get().wages == (25,)
    assert builder.working_quote.items == ()


def test_bad_indexes_are_not_found(builder):
    with pytest.raises(NotFoundError):
        builder.update_wage(5, 30)
    with pytest.raises(NotFoundError):
        builder.update_wage(-1, 30)
    with pytest.raises(NotFoundError):
        builder.set_quantity(0, 2)

    assert builder.get().wages == (25,)
    assert builder.working_quote.items == ()


def test_nan_rate_is_rejected_and_history_survives_restart(memory_storage):
    builder = QuoteBuilder(memory_storage)
    builder.set_quote_name("Patio")
    builder.save_quote()

    with pytest.raises(InvalidDataError):
        builder.set_target_hourly(float("nan"))

    restored = QuoteBuilder(memory_storage)
    assert restored.get().target_hourly == 100
    assert [q.name for q in restored.get().saved_quotes] == ["Patio"]


def test_string_cost_is_rejected_and_history_survives_restart(memory_storage):
    builder = QuoteBuilder(memory_storage)
    item = builder.add_item()
    builder.update_item(item.id, name="Pavers", cost=4.5)
    builder.set_quote_name("Walkway")
    builder.save_quote()

    with pytest.raises(InvalidDataError):
        builder.update_item(item.id, cost="12")

    assert builder.find_item(item.id).cost == 4.5
    restored = QuoteBuilder(memory_storage)
    assert restored.find_item(item.id).cost == 4.5
    assert [q.name for q in restored.get().saved_quotes] == ["Walkway"]


EDITS = {
    'rate': lambda b, item_id, v: b.set_target_hourly(v),
    'markup': lambda b, item_id, v: b.set_global_markup(v),
    'wage': lambda b, item_id, v: b.add_wage(v),
    'cost': lambda b, item_id, v: b.update_item(item_id, cost=v),
    'name': lambda b, item_id, v: b.update_item(item_id, name=v),
    'custom_flag': lambda b, item_id, v: b.update_item(item_id, use_custom_markup=v),
    'custom_markup': lambda b, item_id, v: b.update_item(item_id, custom_markup=v),
    'hours': lambda b, item_id, v: b.set_labor_hours(v),
}


@pytest.mark.parametrize("edit, value, accepted", [
    ('rate', -5, True),
    ('rate', "12", True),
    ('rate', float("nan"), False),
    ('rate', "abc", False),
    ('markup', 0, True),
    ('markup', float("inf"), False),
    ('markup', None, False),
    ('wage', -10.5, True),
    ('wage', float("-inf"), False),
    ('cost', -3, True),
    ('cost', 7.25, True),
    ('cost', "12", False),
    ('cost', float("nan"), False),
    ('name', "", True),
    ('name', 5, False),
    ('custom_flag', True, True),
    ('custom_flag', "yes", False),
    ('custom_markup', float("inf"), False),
    ('hours', -2, True),
    ('hours', float("nan"), False),
])
def test_edit_reloads_unchanged_or_is_rejected(memory_storage, edit, value, accepted):
    """An accepted edit comes back identical after a restart; a rejected one changes nothing."""
    builder = QuoteBuilder(memory_storage)
    item = builder.add_item()
    before, before_quote = builder.get(), builder.working_quote

    if accepted:
        EDITS[edit](builder, item.id, value)
        restored = QuoteBuilder(memory_storage)
        assert restored.get() == builder.get()
        assert restored.working_quote == builder.working_quote
    else:
        with pytest.raises(InvalidDataError):
            EDITS[edit](builder, item.id, value)
        assert builder.get() is before
        assert builder.working_quote is before_quote
        restored = QuoteBuilder(memory_storage)
        assert restored.get() == before
        assert restored.working_quote == before_quote
