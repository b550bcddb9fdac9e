"""
Pytest configuration and shared fixtures.
"""

import os

import pytest
import json
from pathlib import Path
from typing import Any, Dict, List

from bakehouse.logger import StructuredLogger, reset_logger

SETTINGS_VARS = (
    "BAKEHOUSE_SIMILARITY_THRESHOLD",
    "BAKEHOUSE_DB",
    "BAKEHOUSE_LOG_LEVEL",
    "BAKEHOUSE_LOG_DIR",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep settings from the developer's environment out of tests."""
    for var in SETTINGS_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
    # load_env() writes to os.environ directly
    for var in SETTINGS_VARS:
        os.environ.pop(var, None)
    reset_logger()


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger with no handlers attached, for metric assertions."""
    return StructuredLogger(name="bakehouse-test", enable_file=False, enable_console=False)


@pytest.fixture
def existing_entries() -> List[Dict[str, Any]]:
    """Two ingredients as they come back from storage."""
    return [
        {"id": 1, "name": "Wheat Flour", "code": "ING-001"},
        {"id": 2, "name": "White Sugar", "code": "ING-002"},
    ]


@pytest.fixture
def sample_catalog() -> Dict[str, Any]:
    """JSON catalog with a few near-duplicates in each section."""
    return {
        "ingredients": [
            {"id": "i1", "name": "Wheat Flour", "code": "ING-001"},
            {"id": "i2", "name": "Wheat Flower", "code": "ING-002"},
            {"id": "i3", "name": "Butter", "code": "ING-003"},
            {"id": "i4", "name": "Brown Sugar", "code": "ING-004"},
        ],
        "products": [
            {"id": "p1", "name": "Sourdough Loaf", "code": "PRD-001"},
            {"id": "p2", "name": "Croissant", "code": "PRD-002"},
        ],
        "recipes": [
            {"id": "r1", "name": "Basic Bread Dough"},
            {"id": "r2", "name": "Basic Bread Dough 2"},
        ],
    }


@pytest.fixture
def catalog_file(tmp_path, sample_catalog) -> Path:
    """Write the sample catalog to a temporary JSON file."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(sample_catalog, indent=2))
    return path
