"""Abstract base class for device list extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from workers.device_list.models import ExtractionResult


class BaseExtractor(ABC):
    """
    Contract for extractors that turn a page into device records.

    HTML is injected via __init__. Subclasses parse their target layout
    and return typed records, never raw dicts.

    Principles:
    - Return an empty result on missing structure (never raise).
    - Log warnings for unexpected content.
    - Hold no shared mutable state; one instance per document.
    """

    def __init__(self, html: str | bytes) -> None:
        if isinstance(html, bytes):
            html = html.decode("utf-8", errors="replace")
        self.html = html

    @abstractmethod
    def extract_all(self) -> ExtractionResult:
        """
        Main entry point. Walks the whole document and returns
        a consolidated ExtractionResult.
        """
        ...
