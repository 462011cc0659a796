"""Tests for lovabolt.persistence.PersistenceLayer."""

import json
from datetime import datetime, timezone

import pytest

from lovabolt.persistence import PersistenceLayer, ProjectRecordError
from lovabolt.state import FIRST_STEP, default_graph
from lovabolt.store import SelectionStore
from lovabolt.utils.storage import MemoryStorage, StorageUnavailableError

KEY = "lovabolt-project"


def _fixed_now():
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def persistence(mock_config, store, storage, scheduler):
    layer = PersistenceLayer(store, storage, scheduler, now=_fixed_now)
    yield layer
    layer.close()


class _BrokenStorage(MemoryStorage):
    def set(self, key, value):
        raise StorageUnavailableError("disk on fire")

    def remove(self, key):
        raise StorageUnavailableError("disk on fire")


# --- save ---

class TestSaveProject:
    def test_writes_full_record(self, store, storage, persistence, layout):
        store.selected_layout = layout
        store.current_step = "layout"
        assert persistence.save_project() is True
        data = json.loads(storage.get(KEY))
        assert data["selectedLayout"] == layout
        assert data["currentStep"] == "layout"
        assert data["savedAt"] == "2026-10-19T12:00:00.000Z"

    def test_overwrites_single_slot(self, store, storage, persistence, layout):
        persistence.save_project()
        store.selected_layout = layout
        persistence.save_project()
        assert json.loads(storage.get(KEY))["selectedLayout"] == layout

    def test_failure_is_logged_not_raised(self, mock_config, store, scheduler, layout, capsys):
        layer = PersistenceLayer(store, _BrokenStorage(), scheduler)
        store.selected_layout = layout
        assert layer.save_project() is False
        assert store.selected_layout == layout
        assert "Failed to save project" in capsys.readouterr().err
        layer.close()

    def test_quota_exceeded_is_non_fatal(self, mock_config, store, scheduler, components, capsys):
        layer = PersistenceLayer(store, MemoryStorage(quota_bytes=64), scheduler)
        store.selected_components = components
        assert layer.save_project() is False
        assert "StorageQuotaError" in capsys.readouterr().err
        layer.close()


# --- autosave ---

class TestAutosave:
    def test_any_change_schedules_one_save(self, store, storage, scheduler, persistence, layout):
        store.project_info = {"name": "Acme"}
        scheduler.advance(0.5)
        store.selected_layout = layout
        scheduler.advance(0.5)
        store.current_step = "layout"
        scheduler.advance(0.999)
        assert storage.get(KEY) is None
        scheduler.advance(0.01)
        data = json.loads(storage.get(KEY))
        assert data["projectInfo"]["name"] == "Acme"
        assert data["currentStep"] == "layout"

    def test_close_cancels_pending_save(self, store, storage, scheduler, persistence, layout):
        store.selected_layout = layout
        persistence.close()
        scheduler.advance(5)
        assert storage.get(KEY) is None


# --- load / restore ---

class TestLoadProject:
    def test_round_trip(self, mock_config, store, storage, scheduler, persistence, full_graph):
        for field, value in full_graph.items():
            store.set(field, value)
        store.current_step = "preview"
        persistence.save_project()

        fresh = SelectionStore()
        layer = PersistenceLayer(fresh, storage, scheduler)
        assert layer.restore() is True
        assert fresh.graph() == store.graph()
        assert fresh.current_step == "preview"
        layer.close()

    def test_partial_record_leaves_other_fields(self, store, persistence, layout):
        store.selected_layout = layout
        persistence.load_project({"currentStep": "typography", "selectedComponents": []})
        assert store.selected_layout == layout
        assert store.current_step == "typography"

    def test_null_fields_skipped(self, store, persistence, layout):
        store.selected_layout = layout
        persistence.load_project({"selectedLayout": None})
        assert store.selected_layout == layout

    def test_invalid_record_changes_nothing(self, store, persistence, layout):
        with pytest.raises(ProjectRecordError):
            persistence.load_project({"selectedLayout": layout, "selectedVisuals": "icons"})
        assert store.selected_layout is None

    def test_unknown_step_in_record_falls_back(self, store, persistence):
        persistence.load_project({"currentStep": "checkout"})
        assert store.current_step == FIRST_STEP

    def test_restore_absent_slot(self, persistence):
        assert persistence.restore() is False

    def test_free_form_background_selection_round_trips(self, mock_config, store, storage, scheduler, persistence):
        selection = {"bgId": "aurora", "colorStops": ["#fff"], "amplitude": 1.2}
        store.background_selection = selection
        persistence.save_project()

        fresh = SelectionStore()
        layer = PersistenceLayer(fresh, storage, scheduler)
        assert layer.restore() is True
        assert fresh.background_selection == selection
        layer.close()

    @pytest.mark.parametrize(
        "text",
        [
            "{not json",
            '"just a string"',
            '{"selectedComponents": 7}',
            '{"selectedColorTheme": {"id": "ocean", "distribution": 40}}',
            '{"selectedAnimations": [{"id": "blur-text", "dependencies": "gsap"}]}',
        ],
    )
    def test_restore_corrupt_slot_clears_it(self, store, storage, persistence, text, capsys):
        storage.set(KEY, text)
        assert persistence.restore() is False
        assert storage.get(KEY) is None
        assert store.graph() == default_graph()
        assert "Corrupted project data cleared" in capsys.readouterr().err


class TestClearProject:
    def test_resets_store_and_deletes_slot(self, store, storage, scheduler, persistence, full_graph):
        for field, value in full_graph.items():
            store.set(field, value)
        store.current_step = "preview"
        persistence.save_project()

        persistence.clear_project()
        assert store.graph() == default_graph()
        assert store.current_step == FIRST_STEP
        assert storage.get(KEY) is None

        scheduler.advance(5)
        assert storage.get(KEY) is None

    def test_remove_failure_is_logged(self, mock_config, store, scheduler, capsys):
        layer = PersistenceLayer(store, _BrokenStorage(), scheduler)
        layer.clear_project()
        assert "Failed to remove saved project" in capsys.readouterr().err
        layer.close()
