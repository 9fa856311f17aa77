from __future__ import annotations

import re
from datetime import date
from typing import Any

"""Two-digit-year date normalization.

Statement exports print dates as ``dd/mm/yy``. The year is expanded with a
sliding window anchored on the reference year (the current year unless one
is injected): years up to the cutoff land in the reference century, later
ones in the previous century.
"""

__all__ = [
    "DEFAULT_CENTURY_CUTOFF",
    "normalize_date",
    "expand_year",
]

DEFAULT_CENTURY_CUTOFF = 50

# day <sep> month <same sep> yy ; sep は / - . または空白
_DATE_RE = re.compile(r"(\d{1,2})([/\-.\s])(\d{1,2})\2(\d{2})")


def expand_year(year_part: int, reference_year: int | None = None, cutoff: int = DEFAULT_CENTURY_CUTOFF) -> int:
    """Expand a two-digit year to four digits relative to ``reference_year``.

    >>> expand_year(49, reference_year=2024)
    2049
    >>> expand_year(51, reference_year=2024)
    1951
    """
    current_year = reference_year if reference_year is not None else date.today().year
    century = (current_year // 100) * 100
    if year_part <= cutoff:
        return century + year_part
    return century - 100 + year_part


def normalize_date(
    value: Any,
    separator: str | None = None,
    *,
    reference_year: int | None = None,
    cutoff: int = DEFAULT_CENTURY_CUTOFF,
) -> Any:
    """Return ``value`` with its two-digit year expanded to four digits.

    Parameters
    ----------
    value: cell value; only strings matching ``d<sep>m<sep>yy`` are rewritten
    separator: output separator override (default: reuse the input separator)
    reference_year: year the century window is anchored on (default: today)
    cutoff: two-digit years <= cutoff map to the reference century

    Anything that does not match (``"N/A"``, numbers, datetime cells, None)
    is returned unchanged.
    """
    if not isinstance(value, str):
        return value
    m = _DATE_RE.fullmatch(value)
    if m is None:
        return value
    day, sep, month, yy = m.groups()
    year = expand_year(int(yy), reference_year=reference_year, cutoff=cutoff)
    out_sep = separator if separator is not None else sep
    return f"{day}{out_sep}{month}{out_sep}{year}"
