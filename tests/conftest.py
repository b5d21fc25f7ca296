"""Shared fixtures: HTML builders shaped like the device list page."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

ROW_CLASS = "sc-97391185-0 kQzYtB"
CELL_CLASS = "sc-ec576641-0 fHpLwN"

Section = tuple[str, Sequence[Sequence[str]]]


def render_section(heading: str, rows: Sequence[Sequence[str]]) -> str:
    """One <h2> plus its sibling grid container, the way the site renders it."""
    rendered_rows = []
    for cells in rows:
        rendered_cells = "".join(f'<div class="{CELL_CLASS}">{cell}</div>' for cell in cells)
        rendered_rows.append(f'<div class="{ROW_CLASS}">{rendered_cells}</div>')
    return f"<h2>{heading}</h2>\n<div class=\"sc-grid\">{''.join(rendered_rows)}</div>\n"


def render_page(*sections: Section) -> str:
    body = "".join(render_section(heading, rows) for heading, rows in sections)
    return f"<!DOCTYPE html><html><head><title>Device list</title></head><body><main>{body}</main></body></html>"


@pytest.fixture
def build_page() -> Callable[..., str]:
    """Return a builder: build_page(("Guitar amps", [[...cells], ...]), ...)."""
    return render_page


@pytest.fixture
def sample_page(build_page) -> str:
    """A page covering every schema layout plus an excluded and an unknown section."""
    return build_page(
        ("Guitar amps", [
            ["Twin Reverb", "Fender Twin Reverb 65", "1.0.0", "Old Twin", "2.0.0"],
            ["Brit 800", "Marshall JCM800", "1.0.0", "", ""],
        ]),
        ("Neural Captures V2", [
            ["Guitar amps", "Brit 2203 87", "Marshall JCM800", "3.3.0"],
        ]),
        ("Plugin devices", [
            ["Guitar amps", "Archetype Plini Clean", "2.0.0", "Archetype: Plini X"],
        ]),
        ("IR loader", [
            ["IR Loader 1x1", "1.0.0"],
        ]),
        ("Announced devices that have not yet been released", [
            ["Future Amp", "Secret Amp", "9.9.9", "", ""],
        ]),
        ("Drum machines", [
            ["808", "Roland TR-808", "4.0.0"],
        ]),
    )
