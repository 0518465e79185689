# File: settings.py

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

class PickerConfig:
    SEARCH_FIELD_THRESHOLD = 10  # more fields than this always shows the search box
    VERSION_FIELD_KEY = "$version"
    VERSION_FIELD_NAME = "Version"
    VERSION_FIELD_TYPE = "string"
    PRESENTATION_SPECIALS = ("alias", "no-data")  # fields that hold no data

class SnapshotFiles:
    SNAPSHOT_ROOT = BASE_DIR / "data"
    SCHEMA_SNAPSHOT_PATH = SNAPSHOT_ROOT / "schema_snapshot.json"

class DatabaseConfig:
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'field_picker.db'}"
    )
