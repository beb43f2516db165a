"""Error taxonomy for the report store and service.

Route handlers translate these into the ``{success: false, error}`` envelope;
the exception detail itself only ever reaches the server log.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every report-layer failure."""


class ReportNotFound(ReportError):
    def __init__(self, report_id: str):
        super().__init__(f"no report with id {report_id!r}")
        self.report_id = report_id


class DuplicateKey(ReportError):
    def __init__(self, report_id: str):
        super().__init__(f"report id {report_id!r} already exists")
        self.report_id = report_id


class StorageUnavailable(ReportError):
    """The underlying SQLite database could not be read or written."""


class CorruptRecord(ReportError):
    def __init__(self, report_id: str, reason: str):
        super().__init__(f"stored report {report_id!r} is not valid JSON: {reason}")
        self.report_id = report_id


class CreateFailed(ReportError):
    """Raised by the service when a report could not be persisted."""
