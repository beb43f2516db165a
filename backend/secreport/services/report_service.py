"""Report create/fetch service."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Callable, List

from secreport.core.errors import CorruptRecord, CreateFailed, ReportError, ReportNotFound
from secreport.models.database import ReportStore
from secreport.models.report_model import CreatedReport, Report, ReportSummary

logger = logging.getLogger(__name__)

REPORT_PATH = "/report"


def generate_report_id() -> str:
    return str(uuid.uuid4())


def serialize_document(document: Any) -> str:
    # Compact separators, key order kept. ASCII escapes let lone surrogates through.
    return json.dumps(document, separators=(",", ":"), ensure_ascii=True, allow_nan=False)


def deserialize_document(data: str) -> Any:
    return json.loads(data)


class ReportService:
    def __init__(self, store: ReportStore, id_factory: Callable[[], str] = generate_report_id):
        self.store = store
        self.id_factory = id_factory

    def create_report(self, document: Any, base_url: str) -> CreatedReport:
        """Persist ``document`` under a fresh id and return its share URL.

        ``base_url`` is ``scheme://host`` of the request that submitted it.
        """
        report_id = self.id_factory()
        try:
            data = serialize_document(document)
        except (TypeError, ValueError, RecursionError) as exc:
            raise CreateFailed(f"document is not serializable: {exc}") from exc
        try:
            self.store.put(report_id, data)
        except ReportError as exc:
            raise CreateFailed(f"could not store report {report_id}") from exc

        logger.info("Created report %s (%d bytes)", report_id, len(data))
        return CreatedReport(id=report_id, url=f"{base_url.rstrip('/')}{REPORT_PATH}/{report_id}")

    def fetch_report(self, report_id: str) -> Report:
        stored = self.store.get(report_id)
        if stored is None:
            raise ReportNotFound(report_id)
        try:
            document = deserialize_document(stored.data)
        except (ValueError, RecursionError) as exc:
            raise CorruptRecord(report_id, str(exc)) from exc
        logger.debug("Fetched report %s", report_id)
        return Report(id=stored.id, document=document, created_at=stored.created_at)

    def list_reports(self) -> List[ReportSummary]:
        return self.store.list()
