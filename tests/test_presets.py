"""
Tests for the JSON preset store.
"""

import json
import math
from dataclasses import replace

import pytest

from windsurf_app.presets import (
    PresetError,
    PresetStore,
    inputs_from_record,
    inputs_to_record,
)


class TestRecords:
    """Inputs <-> camelCase record mapping."""

    def test_record_uses_wire_names(self, reach_inputs):
        record = inputs_to_record(reach_inputs)
        assert record == {
            "trueWindSpeed": 10.0,
            "courseAngleDeg": 120.0,
            "boardSpeed": 8.0,
            "sailArea": 6.5,
            "sheetingDeg": 20.0,
            "downhaul": 0.4,
            "outhaul": 0.4,
        }
        assert inputs_from_record(record) == reach_inputs

    def test_missing_fields_fall_back_to_defaults(self):
        inputs = inputs_from_record({"trueWindSpeed": 14, "sailArea": "oops"})
        assert inputs.true_wind_mps == 14.0
        assert inputs.sail_area_m2 == 6.5
        assert inputs.course_angle_deg == 120.0


class TestLoadSave:
    """Reading and writing the presets file."""

    def test_missing_file_is_empty(self, store):
        assert store.load() == []

    def test_corrupt_file_is_empty(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load() == []

    def test_non_array_file_is_empty(self, store):
        store.path.write_text('{"name": "x"}', encoding="utf-8")
        assert store.load() == []

    def test_invalid_entries_dropped(self, store, reach_inputs):
        good = {"name": "ok", "createdAt": "2026-01-01T00:00:00+00:00", "inputs": inputs_to_record(reach_inputs)}
        store.path.write_text(json.dumps([good, {"name": 3, "inputs": {}}, {"name": "no inputs"}, None]),
                              encoding="utf-8")
        presets = store.load()
        assert [p.name for p in presets] == ["ok"]
        assert presets[0].inputs == reach_inputs
        assert presets[0].created_at == "2026-01-01T00:00:00+00:00"

    def test_save_then_load(self, store, reach_inputs):
        store.upsert("Reach", reach_inputs)
        reloaded = PresetStore(store.path).load()
        assert len(reloaded) == 1
        assert reloaded[0].name == "Reach"
        assert reloaded[0].inputs == reach_inputs


class TestUpsertDelete:
    """Saving and removing named presets."""

    def test_new_presets_go_first(self, store, reach_inputs):
        store.upsert("one", reach_inputs)
        presets = store.upsert("two", reach_inputs)
        assert [p.name for p in presets] == ["two", "one"]

    def test_name_trimmed_and_blank_ignored(self, store, reach_inputs):
        presets = store.upsert("  Gusty  ", reach_inputs)
        assert presets[0].name == "Gusty"
        assert store.upsert("   ", reach_inputs) == store.load()
        assert len(store.load()) == 1

    def test_case_insensitive_replace_in_place(self, store, reach_inputs):
        store.upsert("alpha", reach_inputs)
        store.upsert("beta", reach_inputs)
        flatter = replace(reach_inputs, downhaul=1.0)
        presets = store.upsert("ALPHA", flatter)
        assert [p.name for p in presets] == ["beta", "ALPHA"]
        assert presets[1].inputs.downhaul == 1.0

    def test_capped_at_fifty(self, store, reach_inputs):
        for i in range(55):
            store.upsert(f"p{i}", reach_inputs)
        presets = store.load()
        assert len(presets) == 50
        assert presets[0].name == "p54"
        assert presets[-1].name == "p5"

    def test_delete_exact_name(self, store, reach_inputs):
        store.upsert("Keep", reach_inputs)
        store.upsert("Drop", reach_inputs)
        assert [p.name for p in store.delete("drop")] == ["Drop", "Keep"]
        assert [p.name for p in store.delete("Drop")] == ["Keep"]

    def test_find(self, store, reach_inputs):
        store.upsert("Reach", reach_inputs)
        assert store.find("Reach").inputs == reach_inputs
        assert store.find("nope") is None


class TestImportExport:
    """JSON import/export."""

    def test_export_is_array_of_records(self, store, reach_inputs):
        store.upsert("Reach", reach_inputs)
        exported = json.loads(store.export_json())
        assert isinstance(exported, list)
        assert exported[0]["name"] == "Reach"
        assert exported[0]["inputs"]["sailArea"] == 6.5
        assert "createdAt" in exported[0]

    def test_import_replaces_presets(self, store, reach_inputs, tmp_path):
        other = PresetStore(tmp_path / "other.json")
        other.upsert("From elsewhere", reach_inputs)
        store.upsert("Local", reach_inputs)

        presets = store.import_json(other.export_json())
        assert [p.name for p in presets] == ["From elsewhere"]

    def test_import_capped_at_two_hundred(self, store, reach_inputs):
        records = [{"name": f"p{i}", "inputs": inputs_to_record(reach_inputs)} for i in range(250)]
        presets = store.import_json(json.dumps(records))
        assert len(presets) == 200
        assert presets[-1].name == "p199"

    def test_import_rejects_non_array(self, store):
        with pytest.raises(PresetError, match="array"):
            store.import_json('{"name": "x", "inputs": {"sailArea": 5}}')

    def test_import_rejects_bad_structure(self, store):
        with pytest.raises(PresetError, match="Invalid preset structure"):
            store.import_json('[{"name": "x"}]')

    def test_import_rejects_invalid_json(self, store):
        with pytest.raises(PresetError):
            store.import_json("not json")

    def test_failed_import_leaves_store_untouched(self, store, reach_inputs):
        store.upsert("Keep", reach_inputs)
        with pytest.raises(PresetError):
            store.import_json("[1, 2]")
        assert [p.name for p in store.load()] == ["Keep"]

    def test_preset_error_is_value_error(self):
        assert issubclass(PresetError, ValueError)


class TestNonFiniteValues:
    """NaN and overflowing numbers never reach the inputs or the file."""

    def test_nan_and_overflow_fall_back_to_defaults(self):
        inputs = inputs_from_record(json.loads('{"trueWindSpeed": NaN, "sailArea": 1e400, "boardSpeed": -Infinity}'))
        assert inputs.true_wind_mps == 10.0
        assert inputs.sail_area_m2 == 6.5
        assert inputs.board_speed_mps == 8.0

    def test_huge_integer_falls_back_to_default(self):
        assert inputs_from_record({"sheetingDeg": 10 ** 400}).sheeting_deg == 20.0

    def test_import_then_export_is_strict_json(self, store):
        presets = store.import_json('[{"name": "x", "inputs": {"trueWindSpeed": NaN, "sailArea": 1e400}}]')
        assert all(math.isfinite(getattr(presets[0].inputs, k)) for k in ("true_wind_mps", "sail_area_m2"))

        def reject(token):
            raise ValueError(f"non-standard JSON token {token}")

        exported = json.loads(store.export_json(), parse_constant=reject)
        assert exported[0]["inputs"]["trueWindSpeed"] == 10.0
        assert exported[0]["inputs"]["sailArea"] == 6.5


class TestEmptyInputs:

    def test_import_accepts_empty_inputs_object(self, store):
        presets = store.import_json('[{"name": "blank", "inputs": {}}]')
        assert [p.name for p in presets] == ["blank"]
        assert presets[0].inputs == inputs_from_record({})

    def test_load_keeps_empty_inputs_object(self, store):
        store.path.write_text('[{"name": "blank", "inputs": {}}]', encoding="utf-8")
        assert [p.name for p in store.load()] == ["blank"]
