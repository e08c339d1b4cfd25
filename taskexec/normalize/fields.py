"""Delimiter-based payload extraction for free-text log lines."""

from __future__ import annotations

FIELD_DELIMITER = ":"


def extract_field(line: str, delimiter: str = FIELD_DELIMITER) -> str:
    """Return the text after the first ``delimiter`` in ``line``, trimmed.

    Without a delimiter the whole (trimmed) line is returned. There is no
    escaping: the first occurrence always wins, so ``Reading file: C:\\x``
    yields ``C:\\x`` while ``C:\\x`` alone yields ``\\x``.
    """
    _, separator, remainder = line.partition(delimiter)
    if not separator:
        return line.strip()
    return remainder.strip()
