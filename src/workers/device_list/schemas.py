"""
Category Schema Table
=====================
Static column layouts for every device category on the device list page.

The page renders each category as a grid of generated-class <div> rows,
with a different column count and column order per category. Each schema
maps a field name to the zero-based cell index that holds it.

Layouts in use:
  - 2-column:        name, addedInCorOS
  - 4-column V2:     deviceCategory, name, basedOn, addedInCorOS
  - 4-column Plugin: deviceCategory, name, addedInCorOS, pluginSource
  - 5-column:        name, basedOn, addedInCorOS, previousName, updatedInCorOS

Categories not listed here are unsupported and produce no records. A new
category on the site needs an entry here, not a code path.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType


class DeviceField(StrEnum):
    """Field names a schema may map to a column (JSON key spelling)."""

    NAME = "name"
    BASED_ON = "basedOn"
    ADDED_IN_COR_OS = "addedInCorOS"
    DEVICE_CATEGORY = "deviceCategory"
    PREVIOUS_NAME = "previousName"
    UPDATED_IN_COR_OS = "updatedInCorOS"
    PLUGIN_SOURCE = "pluginSource"


CategorySchema = Mapping[DeviceField, int]

# Heading texts that are never extracted, even when their rows parse.
SKIPPED_CATEGORIES: frozenset[str] = frozenset({
    "Announced devices that have not yet been released",
})

PLUGIN_DEVICES = "Plugin devices"


# ── Layouts ───────────────────────────────────────────────────────────

_TWO_COLUMN: CategorySchema = MappingProxyType({
    DeviceField.NAME: 0,
    DeviceField.ADDED_IN_COR_OS: 1,
})

_CAPTURES_V2: CategorySchema = MappingProxyType({
    DeviceField.DEVICE_CATEGORY: 0,
    DeviceField.NAME: 1,
    DeviceField.BASED_ON: 2,
    DeviceField.ADDED_IN_COR_OS: 3,
})

_PLUGIN: CategorySchema = MappingProxyType({
    DeviceField.DEVICE_CATEGORY: 0,
    DeviceField.NAME: 1,
    DeviceField.ADDED_IN_COR_OS: 2,
    DeviceField.PLUGIN_SOURCE: 3,
})

_STANDARD: CategorySchema = MappingProxyType({
    DeviceField.NAME: 0,
    DeviceField.BASED_ON: 1,
    DeviceField.ADDED_IN_COR_OS: 2,
    DeviceField.PREVIOUS_NAME: 3,
    DeviceField.UPDATED_IN_COR_OS: 4,
})


# ── Registry: heading text → column layout ────────────────────────────

CATEGORY_SCHEMAS: Mapping[str, CategorySchema] = MappingProxyType({
    "Neural Captures V2": _CAPTURES_V2,
    PLUGIN_DEVICES: _PLUGIN,
    "IR loader": _TWO_COLUMN,
    "Looper": _TWO_COLUMN,
    "Utility": _TWO_COLUMN,
    "Neural Captures V1": _STANDARD,
    "Guitar amps": _STANDARD,
    "Guitar cabinets": _STANDARD,
    "Guitar overdrive": _STANDARD,
    "Bass amps": _STANDARD,
    "Bass cabinets": _STANDARD,
    "Bass overdrive": _STANDARD,
    "Delay": _STANDARD,
    "Reverb": _STANDARD,
    "Compressor": _STANDARD,
    "Pitch": _STANDARD,
    "Modulation": _STANDARD,
    "Morph": _STANDARD,
    "Filter": _STANDARD,
    "EQ": _STANDARD,
    "Wah": _STANDARD,
    "Synth": _STANDARD,
})


def get_schema(category: str) -> CategorySchema | None:
    """
    Look up the column layout for a heading.

    Exact, case-sensitive match. Returns None for unsupported categories.
    """
    return CATEGORY_SCHEMAS.get(category)


def known_categories() -> list[str]:
    """All supported category names, in registry order."""
    return list(CATEGORY_SCHEMAS)
