from __future__ import annotations

import json
from pathlib import Path

import pytest

SAMPLE_BARS = [
    {
        "id": "bar-near",
        "name": "Near Bar",
        "lat": 40.7300,
        "lng": -73.9900,
        "tips": ["Get the pickleback!", "Pickle back special on Tuesdays"],
    },
    {
        "id": "bar-mid",
        "name": "Mid Bar",
        "lat": 40.7400,
        "lng": -73.9900,
        "tips": ["Pickle juice shots are great"],
    },
    {
        "id": "bar-far",
        "name": "Far Bar",
        "lat": 42.0,
        "lng": -75.0,
        "tips": ["Best pickleback upstate"],
    },
]


def _write_bars(path: Path, bars: list[dict]) -> Path:
    path.write_text(json.dumps(bars), encoding="utf-8")
    return path


@pytest.fixture
def write_bars():
    return _write_bars


@pytest.fixture
def bars_file(tmp_path: Path) -> Path:
    return _write_bars(tmp_path / "current.json", SAMPLE_BARS)


@pytest.fixture
def sample_bars() -> list[dict]:
    return [dict(bar) for bar in SAMPLE_BARS]
