"""Anchor id generation for rendered reports."""

from __future__ import annotations

import re
from collections import Counter


class AnchorSequence:
    """Hands out unique anchor ids for one rendered report.

    One instance lives for one render call, so ids restart per task and two
    tasks rendered concurrently never share counters.
    """

    def __init__(self, prefix: str = "report"):
        self.prefix = _slug(prefix) or "report"
        self._counts: Counter[str] = Counter()

    def next(self, section: str) -> str:
        slug = _slug(section) or "section"
        self._counts[slug] += 1
        return f"{self.prefix}-{slug}-{self._counts[slug]}"

    __call__ = next


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
