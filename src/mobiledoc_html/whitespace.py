"""Preserve runs of spaces when text is embedded as HTML content."""

from __future__ import annotations

import re

NBSP = "&nbsp;"

_SPACE_RUN = re.compile(r" {2,}")


def _alternate(match: re.Match[str]) -> str:
    run = len(match.group(0))
    return "".join(" " if i % 2 == 0 else NBSP for i in range(run))


def normalize_whitespace(text: str) -> str:
    """Replace every second space in each run of spaces with ``&nbsp;``.

    A run of N spaces keeps ceil(N/2) literal spaces and gains floor(N/2)
    non-breaking space references, alternating and starting with a literal
    space. Single spaces are left alone, so text without repeated spaces is
    returned unchanged. The returned value is meant to be inserted after HTML
    escaping; the references would otherwise be escaped a second time.
    """

    return _SPACE_RUN.sub(_alternate, text)
