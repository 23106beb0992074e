"""Ledger of daily contributions keyed by (month, day)."""

import calendar

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def days_in_month(month_index: int, year: int) -> int:
    """Number of days in a zero-based month of the given year."""
    _check_month(month_index)
    return calendar.monthrange(year, month_index + 1)[1]


def _check_month(month_index: int) -> None:
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")


def _key(month_index: int, day: int) -> str:
    _check_month(month_index)
    if not 1 <= day <= 31:
        raise ValueError(f"Day must be 1-31, got {day}")
    return f"{month_index}-{day}"


class LedgerStore:
    """Boolean contribution flag per calendar day.

    Entries are created on first toggle and are never removed; an
    untoggled day reads as not contributed.
    """

    def __init__(self, entries: dict[str, bool] | None = None):
        self._entries: dict[str, bool] = dict(entries or {})

    @classmethod
    def from_dict(cls, entries: dict[str, bool]) -> "LedgerStore":
        """Build a ledger from a 'month-day' -> flag mapping (copied)."""
        return cls(entries)

    def toggle(self, month_index: int, day: int) -> bool:
        """Flip the contribution flag for a day.

        Args:
            month_index: Zero-based month (0-11).
            day: Day of month (1-31).

        Returns:
            The new value of the flag.
        """
        key = _key(month_index, day)
        self._entries[key] = not self._entries.get(key, False)
        return self._entries[key]

    def is_contributed(self, month_index: int, day: int) -> bool:
        """Check whether a day is marked as contributed."""
        return self._entries.get(_key(month_index, day), False)

    def contributed_days(self, month_index: int) -> list[int]:
        """Sorted days of a month that are marked as contributed."""
        _check_month(month_index)
        prefix = f"{month_index}-"
        return sorted(
            int(key[len(prefix):])
            for key, value in self._entries.items()
            if value and key.startswith(prefix)
        )

    def total_days(self) -> int:
        """Count of contributed days across all months."""
        return sum(1 for value in self._entries.values() if value)

    def to_dict(self) -> dict[str, bool]:
        """Snapshot mapping of 'month-day' keys to flags."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
