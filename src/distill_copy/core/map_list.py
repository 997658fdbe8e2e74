"""Parsing of the delimited ``Maps`` parameter.

Pure transformation — no I/O, fully deterministic.
"""

from __future__ import annotations

import re

from distill_copy.utils import MAP_SEPARATORS

_SPLIT_PATTERN = re.compile("|".join(re.escape(sep) for sep in MAP_SEPARATORS))


def split_maps(raw: str | None) -> tuple[str, ...]:
    """Split *raw* on ``+`` or ``;`` and drop empty entries.

    Order and case are preserved; entries are not trimmed.

    >>> split_maps("Entry+Level01;;Level02")
    ('Entry', 'Level01', 'Level02')
    """
    if raw is None:
        return ()
    return tuple(entry for entry in _SPLIT_PATTERN.split(raw) if entry)
