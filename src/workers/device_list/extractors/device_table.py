"""
Device Table Extractor: schema-driven row extraction
======================================================
Turns the device list page into DeviceRecord objects.

The page carries no <table> markup. Each category is an <h2> followed by
a sibling <div> grid whose rows and cells are marked only by generated
styled-component classes. Column order differs per category, so every
row is read through the category's schema (see workers.device_list.schemas).

Flow per <h2>:
  Step 1 → Skip empty and excluded headings
  Step 2 → Find the first sibling <div> before the next <h2>
  Step 3 → Collect rows, resolve the schema (unknown → skip)
  Step 4 → Read cells by column index, validate each field
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from workers.device_list.extractors.base import BaseExtractor
from workers.device_list.models import DeviceRecord, ExtractionResult
from workers.device_list.schemas import (
    SKIPPED_CATEGORIES,
    CategorySchema,
    DeviceField,
    get_schema,
)

logger = logging.getLogger(__name__)

# ── Structural markers ────────────────────────────────────────────────

ROW_SELECTOR = "div.sc-97391185-0"
CELL_SELECTOR = "div.sc-ec576641-0"

# Firmware versions: "1.0", "3.3.0"
VERSION_PATTERN = re.compile(r"\d+\.\d+(\.\d+)?", re.ASCII)


def is_version(value: str) -> bool:
    return VERSION_PATTERN.fullmatch(value) is not None


# ── Field validators ──────────────────────────────────────────────────
# Each takes the trimmed cell text and returns the value to keep, or None.

def _keep_non_version(value: str) -> str | None:
    return "" if is_version(value) else value


def _keep_version(value: str) -> str | None:
    return value if value and is_version(value) else None


def _keep_label(value: str) -> str | None:
    return value if value and not is_version(value) else None


def _keep_non_empty(value: str) -> str | None:
    return value or None


# (schema field, DeviceRecord attribute, validator)
_FIELD_RULES: tuple[tuple[DeviceField, str, Callable[[str], str | None]], ...] = (
    (DeviceField.BASED_ON, "based_on", _keep_non_version),
    (DeviceField.ADDED_IN_COR_OS, "added_in_cor_os", _keep_version),
    (DeviceField.DEVICE_CATEGORY, "device_category", _keep_label),
    (DeviceField.PREVIOUS_NAME, "previous_name", _keep_non_empty),
    (DeviceField.UPDATED_IN_COR_OS, "updated_in_cor_os", _keep_version),
    (DeviceField.PLUGIN_SOURCE, "plugin_source", _keep_non_empty),
)

# Always present on a record, as "" when nothing valid was found.
_STRING_FIELDS = frozenset({"based_on", "added_in_cor_os"})


def _find_container(heading: Tag) -> Tag | None:
    """
    Return the first <div> sibling after `heading`, stopping at the next <h2>.

    Walks an explicit list of the parent's element children instead of
    chasing next_sibling pointers.
    """
    parent = heading.parent
    if parent is None:
        return None

    siblings = [child for child in parent.children if isinstance(child, Tag)]
    position = next(
        (i for i, sibling in enumerate(siblings) if sibling is heading),
        None,
    )
    if position is None:
        return None

    for sibling in siblings[position + 1:]:
        if sibling.name == "h2":
            return None
        if sibling.name == "div":
            return sibling
    return None


def _cell_texts(row: Tag, cell_selector: str) -> list[str]:
    return [cell.get_text().strip() for cell in row.select(cell_selector)]


def parse_row(
    cells: list[str],
    category: str,
    schema: CategorySchema,
) -> DeviceRecord | None:
    """
    Build a record from one row's cell texts using the category schema.

    Returns None when the row is too short to hold a name or the name is blank.
    Fields whose column is missing from the row are left unset.
    """
    name_index = schema.get(DeviceField.NAME, 0)
    if len(cells) <= name_index:
        return None

    name = cells[name_index]
    if not name:
        return None

    values: dict[str, str] = {}
    for field_name, attr, validator in _FIELD_RULES:
        index = schema.get(field_name)
        if index is None or index >= len(cells):
            continue
        value = validator(cells[index])
        if value is not None:
            values[attr] = value

    for attr in _STRING_FIELDS:
        values.setdefault(attr, "")

    return DeviceRecord(category=category, name=name, **values)


class DeviceTableExtractor(BaseExtractor):
    """
    Schema-driven extractor for the device list page.

    Usage:
        result = DeviceTableExtractor(html).extract_all()
        devices = result.devices
    """

    def __init__(
        self,
        html: str | bytes,
        *,
        row_selector: str = ROW_SELECTOR,
        cell_selector: str = CELL_SELECTOR,
    ) -> None:
        super().__init__(html)
        self.row_selector = row_selector
        self.cell_selector = cell_selector

    # ── Public interface (required by BaseExtractor) ───────────────────

    def extract_all(self) -> ExtractionResult:
        result = ExtractionResult()

        try:
            soup = BeautifulSoup(self.html, "html.parser")
        except ParserRejectedMarkup as exc:
            logger.warning("DeviceTableExtractor: markup rejected by parser (%s), returning empty result", exc)
            return result

        for heading in soup.find_all("h2"):
            category = heading.get_text().strip()
            if not category or category in SKIPPED_CATEGORIES:
                continue

            result.categories_seen.append(category)
            self._extract_category(heading, category, result)

        logger.debug(
            "Extracted %d devices across %d categories",
            len(result.devices),
            len(result.categories_seen),
        )
        return result

    # ── Private extraction methods ─────────────────────────────────────

    def _extract_category(
        self,
        heading: Tag,
        category: str,
        result: ExtractionResult,
    ) -> None:
        schema = get_schema(category)

        container = _find_container(heading)
        rows = container.select(self.row_selector) if container is not None else []
        if not rows:
            logger.debug("No data rows found for category %r", category)
            if schema is not None:
                result.empty_categories.append(category)
            return

        if schema is None:
            logger.debug("Unsupported category %r (%d rows skipped)", category, len(rows))
            result.unsupported_categories.append(category)
            return

        before = len(result.devices)
        for row in rows:
            device = parse_row(_cell_texts(row, self.cell_selector), category, schema)
            if device is not None:
                result.devices.append(device)

        added = len(result.devices) - before
        if added == 0:
            result.empty_categories.append(category)
        logger.debug("Category %r: %d devices from %d rows", category, added, len(rows))


def extract_devices(
    html: str | bytes,
    *,
    row_selector: str = ROW_SELECTOR,
    cell_selector: str = CELL_SELECTOR,
) -> list[DeviceRecord]:
    """
    Extract every device record from the device list page HTML.

    Records come out in heading order, row order preserved within a
    category. Never raises for missing or malformed structure; an empty
    list means nothing recognisable was found.
    """
    extractor = DeviceTableExtractor(
        html,
        row_selector=row_selector,
        cell_selector=cell_selector,
    )
    return extractor.extract_all().devices
