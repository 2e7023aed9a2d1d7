"""
Named input presets persisted as a JSON array of records.

Record layout (camelCase keys, compatible with presets exported by the browser version):

    [{"name": "Bump & jump", "createdAt": "2026-05-01T10:00:00+00:00",
      "inputs": {"trueWindSpeed": 10, "courseAngleDeg": 120, "boardSpeed": 8,
                 "sailArea": 6.5, "sheetingDeg": 20, "downhaul": 0.4, "outhaul": 0.3}}]
"""
import json
import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import DEFAULTS, PRESETS_MAX_SAVED, PRESETS_MAX_IMPORTED
from .physics import Inputs

logger = logging.getLogger(__name__)

WIRE_KEYS = dict(
    true_wind_mps="trueWindSpeed",
    course_angle_deg="courseAngleDeg",
    board_speed_mps="boardSpeed",
    sail_area_m2="sailArea",
    sheeting_deg="sheetingDeg",
    downhaul="downhaul",
    outhaul="outhaul",
)


class PresetError(ValueError):
    """Raised when imported preset JSON is malformed."""


@dataclass(frozen=True)
class Preset:
    name: str
    created_at: str
    inputs: Inputs

    def to_record(self) -> dict:
        return {"name": self.name, "createdAt": self.created_at, "inputs": inputs_to_record(self.inputs)}


def inputs_to_record(inputs: Inputs) -> dict:
    return {WIRE_KEYS[f.name]: getattr(inputs, f.name) for f in fields(Inputs)}

def inputs_from_record(record: dict) -> Inputs:
    # Missing, non-numeric or non-finite fields fall back to the defaults
    values = {}
    for f in fields(Inputs):
        v = record.get(WIRE_KEYS[f.name])
        try:
            v = float(v)
        except (TypeError, ValueError, OverflowError):
            v = math.nan
        values[f.name] = v if math.isfinite(v) else float(DEFAULTS[f.name])
    return Inputs(**values)

def _now_iso() -> str:
    return pd.Timestamp.now(tz="UTC").isoformat()

def _is_valid_record(p) -> bool:
    return isinstance(p, dict) and isinstance(p.get("name"), str) and isinstance(p.get("inputs"), dict)

def _from_record(p: dict) -> Preset:
    return Preset(name=p["name"], created_at=str(p.get("createdAt") or _now_iso()),
                  inputs=inputs_from_record(p["inputs"]))


class PresetStore:
    """File-backed preset list. Every call reads or writes the file; nothing is cached."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[Preset]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not read presets from '{self.path}': {e}")
            return []
        if not raw.strip():
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt presets file '{self.path}': {e}")
            return []
        if not isinstance(parsed, list):
            logger.warning(f"Ignoring presets file '{self.path}': top level is not an array")
            return []
        return [_from_record(p) for p in parsed if _is_valid_record(p)]

    def save(self, presets: List[Preset]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps([p.to_record() for p in presets], indent=2), encoding="utf-8")
        logger.info(f"Saved {len(presets)} presets to {self.path}")

    def find(self, name: str) -> Optional[Preset]:
        return next((p for p in self.load() if p.name == name), None)

    def upsert(self, name: str, inputs: Inputs) -> List[Preset]:
        """Save inputs under name (case-insensitive replace, else newest first). Blank names are ignored."""
        presets = self.load()
        trimmed = name.strip()
        if not trimmed:
            return presets

        new = Preset(name=trimmed, created_at=_now_iso(), inputs=inputs)
        idx = next((i for i, p in enumerate(presets) if p.name.lower() == trimmed.lower()), None)
        if idx is not None:
            presets[idx] = new
        else:
            presets = [new] + presets
            presets = presets[:PRESETS_MAX_SAVED]
        self.save(presets)
        return presets

    def delete(self, name: str) -> List[Preset]:
        presets = [p for p in self.load() if p.name != name]
        self.save(presets)
        return presets

    def export_json(self) -> str:
        return json.dumps([p.to_record() for p in self.load()], indent=2)

    def import_json(self, text: str) -> List[Preset]:
        """Replace the stored presets with the ones in text. Raises PresetError if it is malformed."""
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise PresetError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e
        if not isinstance(parsed, list):
            raise PresetError("JSON must be an array of presets.")
        for p in parsed:
            if not _is_valid_record(p):
                raise PresetError("Invalid preset structure.")

        logger.info(f"Importing {min(len(parsed), PRESETS_MAX_IMPORTED)} of {len(parsed)} presets")
        self.save([_from_record(p) for p in parsed[:PRESETS_MAX_IMPORTED]])
        return self.load()
