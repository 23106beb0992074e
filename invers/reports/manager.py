"""Monthly report lifecycle: draft -> locked -> deleted."""

import logging
from typing import Optional, Union

from invers.models import MonthlyReport

logger = logging.getLogger(__name__)

REPORT_FIELDS = ("profit", "loss", "note")


def _check_month(month_index: int) -> None:
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")


def _parse_amount(value: Union[float, int, str, None]) -> Optional[float]:
    """Parse a profit/loss amount; blank clears it."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Not a number: {value!r}") from None
    return float(value)


class MonthlyReportManager:
    """Holds one MonthlyReport per month and guards locked ones.

    A month with no record has nothing stored. The first update creates a
    draft; save() locks it. Locked reports ignore further updates and can
    only be deleted, after which the month starts over.
    """

    def __init__(self, reports: dict[int, MonthlyReport] | None = None):
        self._reports: dict[int, MonthlyReport] = dict(reports or {})

    @classmethod
    def from_dict(cls, reports: dict[int, MonthlyReport]) -> "MonthlyReportManager":
        """Build a manager from a month index -> report mapping (copied)."""
        return cls(reports)

    def get(self, month_index: int) -> Optional[MonthlyReport]:
        """Get the report for a month, if any."""
        _check_month(month_index)
        return self._reports.get(month_index)

    def is_locked(self, month_index: int) -> bool:
        """Check whether a month's report is locked."""
        report = self.get(month_index)
        return report is not None and report.locked

    def update(
        self,
        month_index: int,
        field: str,
        value: Union[float, int, str, None],
    ) -> bool:
        """Set one field of a month's draft report.

        Args:
            month_index: Zero-based month (0-11).
            field: One of 'profit', 'loss' or 'note'.
            value: New value. Blank strings clear the field.

        Returns:
            True if the report changed, False if it is locked.

        Raises:
            ValueError: If the field is unknown or the value is invalid.
        """
        return self.update_many(month_index, {field: value})

    def update_many(
        self,
        month_index: int,
        changes: dict[str, Union[float, int, str, None]],
    ) -> bool:
        """Set several fields of a month's draft report at once.

        Either every change is applied or none is: all values are parsed
        and the merged report validated before anything is stored.

        Args:
            month_index: Zero-based month (0-11).
            changes: Field name -> new value.

        Returns:
            True if the report changed, False if it is locked.

        Raises:
            ValueError: If any field is unknown or any value is invalid.
        """
        _check_month(month_index)
        for field in changes:
            if field not in REPORT_FIELDS:
                raise ValueError(f"Unknown report field: {field!r}")

        current = self._reports.get(month_index) or MonthlyReport()
        if current.locked:
            logger.debug(
                "Ignoring %s edit on locked report for month %d",
                ", ".join(changes),
                month_index,
            )
            return False

        parsed = {}
        for field, value in changes.items():
            if field == "note":
                parsed[field] = value if value is None else str(value)
            else:
                parsed[field] = _parse_amount(value)

        # Re-validate so negative amounts are rejected before storing
        self._reports[month_index] = MonthlyReport.model_validate(
            {**current.model_dump(), **parsed}
        )
        return True

    def save(self, month_index: int) -> bool:
        """Lock a month's report.

        Returns:
            True if the report was locked now, False if it already was.
        """
        _check_month(month_index)
        current = self._reports.get(month_index) or MonthlyReport()
        if current.locked:
            return False
        self._reports[month_index] = current.model_copy(update={"locked": True})
        return True

    def delete(self, month_index: int) -> bool:
        """Remove a month's report entirely.

        Returns:
            True if a report was removed.
        """
        _check_month(month_index)
        return self._reports.pop(month_index, None) is not None

    def locked_reports(self) -> list[tuple[int, MonthlyReport]]:
        """Locked reports ordered by month."""
        return [
            (month_index, report)
            for month_index, report in sorted(self._reports.items())
            if report.locked
        ]

    def to_dict(self) -> dict[int, MonthlyReport]:
        """Snapshot mapping of month index to report."""
        return dict(self._reports)

    def __len__(self) -> int:
        return len(self._reports)
