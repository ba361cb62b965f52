from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from .errors import StorageError

logger = logging.getLogger(__name__)


class JsonListFile:
    """A JSON array on disk. Missing file reads as empty; writes replace the file atomically."""

    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> List[Dict]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("cannot read %s: %s", self.path, e)
            raise StorageError(f"Cannot read {self.path.name}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"{self.path.name} does not hold a list")
        if not all(isinstance(rec, dict) for rec in data):
            raise StorageError(f"{self.path.name} holds entries that are not objects")
        return data

    def write(self, records: List[Dict]):
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("cannot write %s: %s", self.path, e)
            raise StorageError(f"Cannot write {self.path.name}: {e}") from e


class ProjectStore:
    """Project records keyed by id, kept in storage order."""

    def __init__(self, path):
        self.file = JsonListFile(path)

    def all(self) -> List[Dict]:
        return self.file.read()

    def get(self, project_id: str) -> Optional[Dict]:
        for rec in self.all():
            if rec.get("id") == project_id:
                return rec
        return None

    def append(self, record: Dict):
        records = self.all()
        records.append(record)
        self.file.write(records)

    def update(self, record: Dict) -> bool:
        records = self.all()
        for i, rec in enumerate(records):
            if rec.get("id") == record["id"]:
                records[i] = record
                self.file.write(records)
                return True
        return False

    def delete(self, project_id: str) -> bool:
        records = self.all()
        kept = [r for r in records if r.get("id") != project_id]
        if len(kept) == len(records):
            return False
        self.file.write(kept)
        return True
