"""Tests for the JSON snapshot store."""
import json
import logging

import pytest

from ss_tracker.data_layer.app_store import STORAGE_KEY, AppDataStore, merge_over_defaults
from ss_tracker.data_layer.defaults import DEFAULT_DATA, default_app_data
from ss_tracker.data_layer.models import AppView


@pytest.fixture
def store(tmp_path):
    return AppDataStore(data_dir=str(tmp_path / "data"))


class TestLoad:
    """Tests for AppDataStore.load."""

    def test_missing_store_returns_defaults(self, store):
        assert store.load() == default_app_data()

    def test_file_named_after_storage_key(self, store):
        assert store.file_path.name == f"{STORAGE_KEY}.json"

    def test_nested_sections_merged_with_defaults(self, store):
        """Test partial userProfile/dailyStats keep default values for missing keys."""
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(
            json.dumps({"userProfile": {"name": "Riley"}, "dailyStats": {"steps": 12}})
        )

        data = store.load()

        assert data.user_profile.name == "Riley"
        assert data.user_profile.age == 25
        assert data.daily_stats.steps == 12
        assert data.daily_stats.steps_goal == 10000
        assert len(data.meals) == 2

    def test_unknown_keys_ignored(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(json.dumps({"theme": "dark", "view": "SETTINGS"}))

        data = store.load()
        assert data.view == AppView.SETTINGS

    def test_corrupt_file_returns_defaults(self, store, caplog):
        """Test unreadable JSON is logged and replaced by defaults."""
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text("{not json")

        with caplog.at_level(logging.ERROR):
            data = store.load()

        assert data == default_app_data()
        assert "Error loading data" in caplog.text

    def test_non_object_json_returns_defaults(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text("[1, 2, 3]")
        assert store.load() == default_app_data()

    def test_invalid_values_return_defaults(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(json.dumps({"userProfile": {"gender": "Robot"}}))
        assert store.load() == default_app_data()

    @pytest.mark.parametrize(
        "stats",
        [
            {"waterIntake": None},
            {"steps": "many"},
            {"sleepHours": [7]},
        ],
    )
    def test_mistyped_counters_return_defaults(self, store, stats):
        """Test counters that aren't numbers are rejected at load time."""
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(json.dumps({"dailyStats": stats}))
        assert store.load() == default_app_data()

    def test_mistyped_body_measurements_return_defaults(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(json.dumps({"userProfile": {"height": "tall"}}))
        assert store.load() == default_app_data()

    def test_numeric_strings_are_coerced(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(json.dumps({"dailyStats": {"waterIntake": "6"}}))
        assert store.load().daily_stats.water_intake == 6

    def test_infinite_calories_return_defaults(self, store, caplog):
        """Test an Infinity literal in an integer field falls back to defaults."""
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text(
            '{"meals": [{"id": "x", "name": "a", "calories": Infinity}]}'
        )

        with caplog.at_level(logging.ERROR):
            assert store.load() == default_app_data()
        assert "Error loading data" in caplog.text

    def test_deeply_nested_document_returns_defaults(self, store):
        store.file_path.parent.mkdir(parents=True)
        store.file_path.write_text("[" * 100000 + "]" * 100000)
        assert store.load() == default_app_data()


class TestSave:
    """Tests for AppDataStore.save."""

    def test_round_trip(self, store):
        """Test save then load returns the same snapshot."""
        data = default_app_data()
        data.user_profile.name = "Jordan"
        data.daily_stats.steps = 12345
        data.tasks[0].completed = True
        data.view = AppView.NUTRITION
        data.is_logged_in = True

        store.save(data)

        assert store.load() == data

    def test_partial_save_merges_over_current(self, store):
        """Test saving one section keeps the others."""
        data = default_app_data()
        data.user_profile.name = "Jordan"
        store.save(data)

        store.save({"meals": []})

        loaded = store.load()
        assert loaded.meals == []
        assert loaded.user_profile.name == "Jordan"

    def test_partial_nested_section_defaults_missing_keys(self, store):
        """Test save({dailyStats: {steps}}) then load fills the rest from defaults."""
        store.save({"dailyStats": {"steps": 100}})

        loaded = store.load()
        assert loaded.daily_stats.steps == 100
        assert loaded.daily_stats.water_goal == DEFAULT_DATA["dailyStats"]["waterGoal"]

    def test_last_write_wins(self, store):
        store.save({"view": "DASHBOARD"})
        store.save({"view": "SETTINGS"})
        assert store.load().view == AppView.SETTINGS

    def test_write_failure_is_dropped(self, tmp_path, caplog):
        """Test an unwritable location logs and does not raise."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = AppDataStore(data_dir=str(blocker))

        with caplog.at_level(logging.ERROR):
            store.save(default_app_data())

        assert "Error saving data" in caplog.text
        assert blocker.read_text() == "not a directory"

    def test_unserializable_value_leaves_file_intact(self, store):
        store.save({"view": "DASHBOARD"})
        store.save({"view": object()})
        assert store.load().view == AppView.DASHBOARD


class TestClear:
    """Tests for AppDataStore.clear."""

    def test_clear_removes_snapshot(self, store):
        store.save({"view": "DASHBOARD"})
        store.clear()

        assert not store.file_path.exists()
        assert store.load() == default_app_data()

    def test_clear_without_snapshot(self, store):
        store.clear()


class TestMergeOverDefaults:
    def test_empty_dict_gives_defaults(self):
        assert merge_over_defaults({}) == DEFAULT_DATA

    def test_null_nested_section(self):
        merged = merge_over_defaults({"userProfile": None})
        assert merged["userProfile"] == DEFAULT_DATA["userProfile"]
