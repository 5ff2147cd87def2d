"""
pdf_utils.pages

Page selection: which zero-based page indexes take part in a comparison.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import List, Optional

from .errors import ConfigurationError


def _as_indexes(name: str, indexes: Iterable[int]) -> List[int]:
    if isinstance(indexes, (str, bytes)) or not isinstance(indexes, Iterable):
        raise ConfigurationError(f"{name} must be a list of page indexes, got {indexes!r}")
    out: List[int] = []
    for i in indexes:
        if isinstance(i, bool) or not isinstance(i, int) or i < 0:
            raise ConfigurationError(f"{name} contains invalid page index {i!r}")
        out.append(i)
    return out


class PageFilter:
    """Inclusion (``only``) or exclusion (``skip``) list of page indexes.

    Setting both is rejected when the filter is resolved, as is any index
    outside the document.
    """

    def __init__(self, only: Optional[Iterable[int]] = None, skip: Optional[Iterable[int]] = None):
        self.only: Optional[List[int]] = None
        self.skip: Optional[List[int]] = None
        if only is not None:
            self.only_page_indexes(only)
        if skip is not None:
            self.skip_page_indexes(skip)

    def only_page_indexes(self, indexes: Iterable[int]) -> PageFilter:
        self.only = _as_indexes("onlyPageIndexes", indexes)
        return self

    def skip_page_indexes(self, indexes: Iterable[int]) -> PageFilter:
        self.skip = _as_indexes("skipPageIndexes", indexes)
        return self

    def validate(self) -> None:
        if self.only is not None and self.skip is not None:
            raise ConfigurationError("onlyPageIndexes and skipPageIndexes cannot be combined")

    def resolve_page_indexes(self, total_pages: int) -> List[int]:
        self.validate()

        for name, indexes in (("onlyPageIndexes", self.only), ("skipPageIndexes", self.skip)):
            out_of_range = sorted(i for i in indexes or [] if i >= total_pages)
            if out_of_range:
                raise ConfigurationError(
                    f"{name} {out_of_range} out of range for a document with {total_pages} page(s)"
                )

        if self.only is not None:
            return sorted(set(self.only))
        skipped = set(self.skip or [])
        return [i for i in range(total_pages) if i not in skipped]

    def snapshot(self) -> PageFilter:
        return PageFilter(
            only=list(self.only) if self.only is not None else None,
            skip=list(self.skip) if self.skip is not None else None,
        )

    def __repr__(self) -> str:
        return f"PageFilter(only={self.only!r}, skip={self.skip!r})"
