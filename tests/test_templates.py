"""
Tests for named availability templates.
"""

from __future__ import annotations

import tempfile

import pytest

from studio_booking.application.exceptions import TemplateNotFoundError
from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.templates import DEFAULT_TEMPLATE_NAME, TemplateManager, total_hours
from studio_booking.infrastructure.store.json_store import JsonTemplateStore
from studio_booking.infrastructure.store.memory_store import MemoryAvailabilityStore, MemoryTemplateStore


def test_create_and_apply_returns_snapshot():
    manager = TemplateManager(MemoryTemplateStore())
    schedule = {"0-9": True, "0-10": True}

    template_id = manager.create("Summer week", schedule)
    schedule["0-11"] = True

    applied = manager.apply(template_id)
    assert applied == {"0-9": True, "0-10": True}

    applied["6-8"] = True
    assert manager.apply(template_id) == {"0-9": True, "0-10": True}


def test_blank_name_gets_default():
    manager = TemplateManager(MemoryTemplateStore())
    template_id = manager.create("   ", {})

    [template] = manager.list()
    assert template.id == template_id
    assert template.name == DEFAULT_TEMPLATE_NAME
    assert template.recurrence == "weekly"
    assert template.created_at is not None


def test_only_weekly_recurrence():
    manager = TemplateManager(MemoryTemplateStore())
    with pytest.raises(ValueError):
        manager.create("Daily", {}, recurrence="daily")


def test_delete_and_unknown_ids():
    manager = TemplateManager(MemoryTemplateStore())
    template_id = manager.create("Week", {"1-9": True})

    manager.delete(template_id)

    assert manager.list() == []
    with pytest.raises(TemplateNotFoundError):
        manager.apply(template_id)
    with pytest.raises(TemplateNotFoundError):
        manager.delete(template_id)


def test_apply_fully_replaces_live_grid():
    manager = TemplateManager(MemoryTemplateStore())
    store = AvailabilityStore("artist-1", MemoryAvailabilityStore())
    store.set_slot(0, 9, True)
    store.set_slot(4, 17, True)

    template_id = manager.create("Tuesday only", {"1-10": True, "1-11": True})
    store.restore(manager.apply(template_id))

    assert store.copy() == {"1-10": True, "1-11": True}
    assert store.is_available(0, 9) is False
    assert store.is_available(4, 17) is False


def test_total_hours_counts_available_cells():
    assert total_hours({"0-9": True, "0-10": False, "1-9": True}) == 2
    assert total_hours({}) == 0


def test_json_templates_survive_restart():
    with tempfile.TemporaryDirectory() as tmpdir:
        manager = TemplateManager(JsonTemplateStore(data_dir=tmpdir))
        first = manager.create("A", {"0-9": True})
        second = manager.create("B", {"2-14": True})

        reloaded = TemplateManager(JsonTemplateStore(data_dir=tmpdir))
        assert [t.id for t in reloaded.list()] == [first, second]
        assert reloaded.apply(second) == {"2-14": True}

        reloaded.delete(first)
        assert [t.id for t in TemplateManager(JsonTemplateStore(data_dir=tmpdir)).list()] == [second]
