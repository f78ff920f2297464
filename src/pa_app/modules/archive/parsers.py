# src/pa_app/modules/archive/parsers.py
"""
Directory-name grammars for the year/month/day levels of an archive.

A parser turns a directory name into a date component or 0 when the name is
not a valid component at that level. Malformed names are an everyday case
(albums, exports, ``@eaDir`` folders...), so parsers never raise for them.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from pa_app.core.errors import BadRequest

__all__ = [
    "DirectoryDateParser",
    "RegexDirectoryDateParser",
    "GRAMMARS",
    "get_parser",
]

YEAR_RANGE = (1000, 9999)
MONTH_RANGE = (1, 12)
DAY_RANGE = (1, 31)


@runtime_checkable
class DirectoryDateParser(Protocol):
    def parse_year(self, name: str) -> int: ...
    def parse_month(self, name: str) -> int: ...
    def parse_day(self, name: str) -> int: ...


class RegexDirectoryDateParser:
    """
    Grammar described by one regex per level. Each pattern must define a
    ``value`` group holding the digits of the component and is matched
    against the whole directory name. Patterns are compiled with re.ASCII,
    so only ASCII digits count as dates.
    """

    def __init__(self, year: str, month: str, day: str) -> None:
        self.year_re = re.compile(year, re.ASCII)
        self.month_re = re.compile(month, re.ASCII)
        self.day_re = re.compile(day, re.ASCII)

    def parse_year(self, name: str) -> int:
        return self._parse(self.year_re, name, YEAR_RANGE)

    def parse_month(self, name: str) -> int:
        return self._parse(self.month_re, name, MONTH_RANGE)

    def parse_day(self, name: str) -> int:
        return self._parse(self.day_re, name, DAY_RANGE)

    @staticmethod
    def _parse(pattern: re.Pattern[str], name: str, bounds: tuple[int, int]) -> int:
        if not isinstance(name, str):
            return 0
        m = pattern.fullmatch(name)
        if not m:
            return 0
        value = int(m.group("value"))
        lo, hi = bounds
        return value if lo <= value <= hi else 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(year={self.year_re.pattern!r}, "
            f"month={self.month_re.pattern!r}, day={self.day_re.pattern!r})"
        )


# ---- registered grammars ------------------------------------------------------

# 2021/03/15, 2021/3/5, 2021/03 - March/15_birthday
NUMERIC = dict(
    year=r"(?P<value>\d{4})",
    month=r"(?P<value>\d{1,2})(?:[ _-].*)?",
    day=r"(?P<value>\d{1,2})(?:[ _-].*)?",
)

# 2021/2021-03/2021-03-15, 2021/2021-03 March/2021-03-15 party
ISO = dict(
    year=r"(?P<value>\d{4})",
    month=r"\d{4}-(?P<value>\d{2})(?:[ _].*)?",
    day=r"\d{4}-\d{2}-(?P<value>\d{2})(?:[ _].*)?",
)

GRAMMARS: dict[str, dict[str, str]] = {
    "numeric": NUMERIC,
    "iso": ISO,
}


def get_parser(name: str = "numeric") -> RegexDirectoryDateParser:
    key = (name or "").strip().lower()
    try:
        patterns = GRAMMARS[key]
    except KeyError:
        raise BadRequest(
            f"Unknown date grammar: {name!r} (choose from {', '.join(sorted(GRAMMARS))})"
        ) from None
    return RegexDirectoryDateParser(**patterns)
