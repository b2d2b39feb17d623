"""
Form Persistence
================

Stores the raw form record (string fields, as typed) in a key/value backend
under one fixed key, as a flat JSON object.

Records written before the load was split into solar/backup carry a single
`loadSize` field; on load it is copied into both `solarLoad` and
`backupLoad`. The migration only runs in that direction.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, MutableMapping, Optional

from .sizing.forms import DEFAULT_FORM, FORM_FIELDS

logger = logging.getLogger(__name__)

STORAGE_KEY = "solarsizer.professional.form"
LEGACY_LOAD_FIELD = "loadSize"


def migrate_record(record: Dict[str, str]) -> Dict[str, str]:
    """Upgrade a single-load record to the solar/backup split."""
    if "solarLoad" in record or "backupLoad" in record:
        return record
    if LEGACY_LOAD_FIELD not in record:
        return record
    migrated = {k: v for k, v in record.items() if k != LEGACY_LOAD_FIELD}
    migrated["solarLoad"] = record[LEGACY_LOAD_FIELD]
    migrated["backupLoad"] = record[LEGACY_LOAD_FIELD]
    logger.info("Migrated legacy %s field into solarLoad/backupLoad", LEGACY_LOAD_FIELD)
    return migrated


class JsonFileBackend(MutableMapping[str, str]):
    """Key/value store persisted as one JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable store file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file that is not a JSON object: %s", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def __getitem__(self, key: str) -> str:
        return self._read()[key]

    def __setitem__(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def __delitem__(self, key: str) -> None:
        data = self._read()
        del data[key]
        self._write(data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._read())

    def __len__(self) -> int:
        return len(self._read())


class FormStore:
    """Saves and restores the raw form record."""

    def __init__(self, backend: MutableMapping[str, str], key: str = STORAGE_KEY):
        self.backend = backend
        self.key = key

    def save(self, form: Mapping[str, str]) -> None:
        record = {name: str(form.get(name, "")) for name in FORM_FIELDS}
        self.backend[self.key] = json.dumps(record)

    def load(self) -> Dict[str, str]:
        """Stored record over the form defaults; defaults when nothing usable is stored."""
        form = dict(DEFAULT_FORM)
        raw: Optional[str] = self.backend.get(self.key)
        if raw is None:
            return form
        try:
            record = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable form record under %r", self.key)
            return form
        if not isinstance(record, dict):
            logger.warning("Discarding non-object form record under %r", self.key)
            return form

        record = migrate_record({str(k): str(v) for k, v in record.items()})
        form.update({name: record[name] for name in FORM_FIELDS if name in record})
        return form

    def clear(self) -> None:
        self.backend.pop(self.key, None)
