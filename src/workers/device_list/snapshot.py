"""
Device snapshot storage
=======================
The scraped device list is persisted as one JSON array, replaced
wholesale on every successful scrape. Readers (API, CLI) load it back
into DeviceRecord objects.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable
from pathlib import Path

from workers.device_list.models import DeviceRecord

logger = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    """The snapshot file exists but cannot be read as a device array."""


def write_snapshot(devices: Iterable[DeviceRecord], path: str | Path) -> Path:
    """
    Atomically replace the snapshot at `path` with `devices`.

    The JSON is written to a temp file in the same directory and renamed
    over the target, so readers never see a half-written file.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(
        [device.to_dict() for device in devices],
        indent=2,
        ensure_ascii=False,
    )

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            fp.write(payload)
            fp.write("\n")
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote snapshot to %s", target)
    return target


def load_snapshot(path: str | Path) -> list[DeviceRecord]:
    """
    Load the snapshot at `path`.

    A missing file yields []. Malformed entries are skipped with a warning;
    a file that is not a JSON array raises SnapshotError.
    """
    source = Path(path)
    if not source.exists():
        return []

    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read snapshot {source}: {exc}") from exc

    if not isinstance(data, list):
        raise SnapshotError(f"Snapshot {source} is not a JSON array")

    devices: list[DeviceRecord] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("Skipping snapshot entry #%d: not an object", index)
            continue
        try:
            devices.append(DeviceRecord.from_dict(entry))
        except ValueError as exc:
            logger.warning("Skipping snapshot entry #%d: %s", index, exc)
    return devices


def list_categories(devices: Iterable[DeviceRecord]) -> list[str]:
    """Sorted unique category names."""
    return sorted({device.category for device in devices})


class SnapshotCache:
    """
    Keeps the last loaded snapshot in memory, keyed by file mtime.

    Safe to share between request handlers; reloads only when the file
    changes on disk or invalidate() is called.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._key: tuple[str, int] | None = None
        self._devices: list[DeviceRecord] = []

    def get(self, path: str | Path) -> list[DeviceRecord]:
        source = Path(path)
        try:
            mtime = source.stat().st_mtime_ns
        except FileNotFoundError:
            return []

        key = (str(source.resolve()), mtime)
        with self._lock:
            if key != self._key:
                self._devices = load_snapshot(source)
                self._key = key
            return list(self._devices)

    def invalidate(self) -> None:
        with self._lock:
            self._key = None
            self._devices = []


# Shared by the API and the refresh pipeline
snapshot_cache = SnapshotCache()
