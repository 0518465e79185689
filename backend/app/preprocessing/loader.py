# File: app/preprocessing/loader.py
import json
import os
from typing import Optional

from app.schemas.picker import SchemaSnapshot
from settings import SnapshotFiles

class SchemaSnapshotLoader:
    def __init__(self, path: Optional[str] = None):
        self.path = str(path or SnapshotFiles.SCHEMA_SNAPSHOT_PATH)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> SchemaSnapshot:
        if not self.exists():
            raise FileNotFoundError(f"No schema snapshot found at {self.path}.")

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return self.parse(data)

    @staticmethod
    def parse(data: dict) -> SchemaSnapshot:
        # snapshots exported from the CMS wrap everything in a "data" key
        if "data" in data and isinstance(data["data"], dict):
            data = data["data"]
        return SchemaSnapshot.model_validate(data)
