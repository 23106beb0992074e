"""Monthly profit/loss reports."""

from invers.reports.manager import REPORT_FIELDS, MonthlyReportManager

__all__ = ["REPORT_FIELDS", "MonthlyReportManager"]
