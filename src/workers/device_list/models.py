"""Data models for the device list pipeline (records, extraction results, refresh summaries)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class RefreshStatus(StrEnum):
    """Outcome of a single fetch → extract → persist run."""

    SUCCESS = "SUCCESS"
    EMPTY = "EMPTY"          # extraction found nothing, snapshot left untouched


# ── JSON key mapping ──────────────────────────────────────────────────
# attribute name → stable JSON key

_REQUIRED_KEYS: dict[str, str] = {
    "category": "category",
    "name": "name",
    "based_on": "basedOn",
    "added_in_cor_os": "addedInCorOS",
}

_OPTIONAL_KEYS: dict[str, str] = {
    "device_category": "deviceCategory",
    "previous_name": "previousName",
    "updated_in_cor_os": "updatedInCorOS",
    "plugin_source": "pluginSource",
}


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    """One device row extracted from the device list page."""

    category: str                          # ej: "Guitar amps"
    name: str                              # ej: "Twin Reverb"
    based_on: str = ""                     # real-world gear being modelled
    added_in_cor_os: str = ""              # firmware version, ej: "1.0.0"
    device_category: str | None = None     # V2 / Plugin sub-category
    previous_name: str | None = None
    updated_in_cor_os: str | None = None
    plugin_source: str | None = None       # ej: "Archetype: Plini X"

    def to_dict(self) -> dict[str, str]:
        """
        Serialize using the public JSON key names.

        The four base keys are always present; optional keys only
        when they carry a value.
        """
        data = {key: getattr(self, attr) for attr, key in _REQUIRED_KEYS.items()}
        for attr, key in _OPTIONAL_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceRecord:
        """Rebuild a record from its JSON form. Unknown keys are ignored."""
        category = data.get("category")
        name = data.get("name")
        if not category or not name:
            raise ValueError("Device entry requires non-empty 'category' and 'name'")

        kwargs: dict[str, str | None] = {
            attr: str(data.get(key) or "") for attr, key in _REQUIRED_KEYS.items()
        }
        for attr, key in _OPTIONAL_KEYS.items():
            value = data.get(key)
            kwargs[attr] = str(value) if value else None
        return cls(**kwargs)  # type: ignore[arg-type]


@dataclass(slots=True)
class ExtractionResult:
    """Consolidated result from a single extraction run."""

    devices: list[DeviceRecord] = field(default_factory=list)
    categories_seen: list[str] = field(default_factory=list)
    unsupported_categories: list[str] = field(default_factory=list)
    empty_categories: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.devices

    def category_counts(self) -> dict[str, int]:
        """Device count per category, in first-seen order."""
        counts: dict[str, int] = {}
        for device in self.devices:
            counts[device.category] = counts.get(device.category, 0) + 1
        return counts


@dataclass(slots=True)
class RefreshSummary:
    """What a refresh run did, for CLI output and ARQ job results."""

    status: RefreshStatus
    total: int = 0
    category_counts: dict[str, int] = field(default_factory=dict)
    missing_categories: list[str] = field(default_factory=list)
    unsupported_categories: list[str] = field(default_factory=list)
    snapshot_path: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "total": self.total,
            "category_counts": dict(self.category_counts),
            "missing_categories": list(self.missing_categories),
            "unsupported_categories": list(self.unsupported_categories),
            "snapshot_path": self.snapshot_path,
        }
