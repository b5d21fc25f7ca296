"""Extractors package for the device list page."""

from workers.device_list.extractors.base import BaseExtractor
from workers.device_list.extractors.device_table import (
    CELL_SELECTOR,
    ROW_SELECTOR,
    VERSION_PATTERN,
    DeviceTableExtractor,
    extract_devices,
    is_version,
    parse_row,
)

__all__ = [
    "BaseExtractor",
    "CELL_SELECTOR",
    "DeviceTableExtractor",
    "ROW_SELECTOR",
    "VERSION_PATTERN",
    "extract_devices",
    "is_version",
    "parse_row",
]
