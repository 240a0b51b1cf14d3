"""Report delivery mechanisms."""

from .stdout_report import StdoutReportDelivery

__all__ = ["StdoutReportDelivery"]
