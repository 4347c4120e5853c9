"""
Pytest configuration and fixtures for Home Energy Calculator tests.

Provides reusable test fixtures for:
- Raw input records (saved-file keys)
- Resolved effective records
- Baseline loads and fuel
"""

import json
import logging
from pathlib import Path

import pytest

from homeenergy.analysis.loads import compute_loads
from homeenergy.baseline import resolve
from homeenergy.ecm.recommender import Baseline
from homeenergy.hvac import map_cooling_fuel, map_dhw_fuel, map_heating_fuel


# =============================================================================
# RAW INPUT FIXTURES
# =============================================================================

@pytest.fixture
def simple_input() -> dict:
    """
    Fully specified 1000 ft² single-story home with round numbers.

    Envelope UA: walls 1000/R10 = 100, roof 1000/R50 = 20, doors 20×0.5 = 10,
    windows 100×0.5 = 50 → 180 Btu/hr·°F. Volume 8000 ft³ at 0.4 ACH
    (Average) → infiltration UA 57.6.
    """
    return {
        "floorArea_ft2": 1000,
        "stories": 1,
        "ceilingHeight_ft": 8,
        "yearBuilt": 1995,
        "occupants": 2,
        "wallArea_ft2": 1000,
        "wall_R": 10,
        "roofArea_ft2": 1000,
        "roof_R": 50,
        "floor_R": 20,
        "doorArea_ft2": 20,
        "door_U": 0.5,
        "window_N_ft2": 25,
        "window_S_ft2": 25,
        "window_E_ft2": 25,
        "window_W_ft2": 25,
        "window_U": 0.5,
        "window_SHGC": 0.3,
        "HDD65": 5000,
        "CDD65": 1000,
    }


@pytest.fixture
def old_home_input() -> dict:
    """Sparse 1970 home: envelope comes from the pre-1980 era defaults."""
    return {
        "floorArea_ft2": 1500,
        "stories": 1,
        "yearBuilt": 1970,
        "occupants": 3,
        "infiltrationCategory": "Leaky",
        "heating": {"kind": "Central gas furnace", "AFUE": 0.8},
        "cooling": {"kind": "Central air conditioner", "SEER": 13},
        "dhw": {"kind": "Electric Storage"},
        "HDD65": 5000,
        "CDD65": 1000,
    }


@pytest.fixture
def input_file(tmp_path, old_home_input) -> Path:
    """Input record saved as a JSON file."""
    path = tmp_path / "home.json"
    path.write_text(json.dumps(old_home_input), encoding="utf-8")
    return path


# =============================================================================
# RESOLVED FIXTURES
# =============================================================================

@pytest.fixture
def simple_eff(simple_input):
    return resolve(simple_input)


@pytest.fixture
def old_home_eff(old_home_input):
    return resolve(old_home_input)


def make_baseline(eff) -> Baseline:
    """Baseline loads and fuel for an effective record."""
    loads = compute_loads(eff)
    return Baseline(
        eff=eff,
        loads=loads,
        heating_fuel=map_heating_fuel(eff, loads.heating),
        cooling_fuel=map_cooling_fuel(eff, loads.cooling),
        dhw_fuel=map_dhw_fuel(eff),
    )


@pytest.fixture
def baseline_for():
    """Factory: baseline for any raw or effective record."""
    return lambda raw: make_baseline(resolve(raw))


@pytest.fixture
def old_home_baseline(old_home_eff) -> Baseline:
    return make_baseline(old_home_eff)


# =============================================================================
# LOGGING
# =============================================================================

@pytest.fixture
def restore_root_logging():
    """Put the root logger back after a test calls setup_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
