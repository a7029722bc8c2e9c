# src/printlite/domain/page_range.py
"""
Page Range Parsing - Partial Document Selection

Parses compact page-range expressions such as ``"1-5,8,11-13"`` into the set
of selected page numbers for a document of known length. An expression is
accepted or rejected as a whole: a single out-of-bounds page or malformed
token invalidates the selection.

Files that USE this module:
- printlite.domain.models (DocumentSelection.from_files)
- tests.test_page_range (unit tests)

Files that this module USES:
- None (pure domain logic)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_SINGLE = re.compile(r"^\d+$")
_RANGE = re.compile(r"^(\d+)\s*-\s*(\d+)$")


@dataclass(frozen=True)
class PageRangeResult:
    """
    Outcome of parsing a page-range expression.

    Attributes:
        selected_count: Number of distinct pages selected (0 on error)
        selected_pages: Sorted, de-duplicated page numbers
        error: Human-readable reason when the expression was rejected
        offending_page: Page number that fell outside the document, if any
    """
    selected_count: int
    selected_pages: tuple[int, ...]
    error: Optional[str] = None
    offending_page: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _rejected(message: str, page: Optional[int] = None) -> PageRangeResult:
    return PageRangeResult(selected_count=0, selected_pages=(), error=message, offending_page=page)


def parse_page_range(expression: Optional[str], total_pages: int) -> PageRangeResult:
    """
    Parse a comma-separated page-range expression.

    Each token is either ``N`` or ``A-B`` with ``A <= B``. Every referenced
    page must lie in ``[1, total_pages]``. Overlapping ranges and repeated
    pages are counted once. Empty tokens left by stray commas are skipped.

    Args:
        expression: Range expression (e.g. ``"1-5,8"``); None or blank selects nothing
        total_pages: Number of pages in the document

    Returns:
        PageRangeResult; check ``ok`` (or ``error``) before using the selection
    """
    if total_pages < 1:
        return _rejected(f"Document must have at least one page (got {total_pages})")

    if expression is None or not expression.strip():
        return PageRangeResult(selected_count=0, selected_pages=())

    pages: set[int] = set()
    for raw_token in expression.split(","):
        token = raw_token.strip()
        if not token:
            continue

        if _SINGLE.match(token):
            start = end = int(token)
        else:
            match = _RANGE.match(token)
            if not match:
                return _rejected(f"Invalid page range token: '{token}'")
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                return _rejected(f"Invalid page range '{token}': start is greater than end")

        if start < 1:
            return _rejected(f"Page {start} is out of range (pages start at 1)", page=start)
        if end > total_pages:
            return _rejected(
                f"Page {end} exceeds the document length of {total_pages} pages", page=end
            )

        pages.update(range(start, end + 1))

    selected = tuple(sorted(pages))
    return PageRangeResult(selected_count=len(selected), selected_pages=selected)
