# src/pa_app/modules/archive/dates.py
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class DateMarker:
    """
    A (possibly partial) calendar date at year/month/day granularity.

    0 means "unset" for every field. During traversal the fields are filled
    top-down (year, then month, then day); preset filters may set any
    combination, so presence is always checked per field.
    """

    year: int = 0
    month: int = 0
    day: int = 0

    @classmethod
    def from_parts(
        cls, year: int | None = None, month: int | None = None, day: int | None = None
    ) -> DateMarker | None:
        """Build a preset from optional values; None when nothing is set."""
        marker = cls(year or 0, month or 0, day or 0)
        if not (marker.has_year() or marker.has_month() or marker.has_day()):
            return None
        return marker

    def with_month(self, month: int) -> DateMarker:
        return replace(self, month=month)

    def with_day(self, day: int) -> DateMarker:
        return replace(self, day=day)

    def has_year(self) -> bool:
        return self.year > 0

    def has_month(self) -> bool:
        return self.month > 0

    def has_day(self) -> bool:
        return self.day > 0

    def __str__(self) -> str:
        year = f"{self.year:04d}" if self.has_year() else "----"
        month = f"{self.month:02d}" if self.has_month() else "--"
        day = f"{self.day:02d}" if self.has_day() else "--"
        return f"{year}-{month}-{day}"
