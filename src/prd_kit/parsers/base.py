# parsers/base.py

from abc import ABC, abstractmethod
from typing import Any

from .models import ParseResult


class DocumentParser(ABC):
    @abstractmethod
    def parse(self, raw_text: Any) -> ParseResult:
        """
        Parse a requirements document into sections and a task tree.

        Requirements:
        - Never raises on None, non-string or empty input; returns an empty result
        - Deterministic structure for the same input (ids are per-parse)
        - No I/O, no shared state between calls
        """
        raise NotImplementedError
