import pytest

from secreport.core.errors import (
    CorruptRecord,
    CreateFailed,
    DuplicateKey,
    ReportNotFound,
    StorageUnavailable,
)
from secreport.models.database import ReportStore
from secreport.services.report_service import ReportService, generate_report_id

BASE_URL = "https://reports.example.com"

DOCUMENTS = [
    {"riskLevel": "Alto", "companyName": "Acme"},
    {"nested": {"list": [1, 2.5, None, True, "ñandú"]}, "empty": {}},
    ["a", "b", {"c": []}],
    "just a string",
    42,
    None,
]


@pytest.mark.parametrize("document", DOCUMENTS)
def test_document_round_trips_unchanged(service, document) -> None:
    created = service.create_report(document, BASE_URL)

    report = service.fetch_report(created.id)

    assert report.id == created.id
    assert report.document == document
    assert report.created_at


def test_key_order_is_preserved(service) -> None:
    created = service.create_report({"z": 1, "a": 2, "m": 3}, BASE_URL)

    assert list(service.fetch_report(created.id).document) == ["z", "a", "m"]


def test_ids_are_unique(service) -> None:
    ids = {service.create_report({"n": i}, BASE_URL).id for i in range(50)}

    assert len(ids) == 50


def test_generated_ids_are_non_empty_strings() -> None:
    report_id = generate_report_id()

    assert isinstance(report_id, str)
    assert len(report_id) == 36


def test_url_points_at_report_page(service) -> None:
    created = service.create_report({}, BASE_URL + "/")

    assert created.url == f"{BASE_URL}/report/{created.id}"


def test_unknown_id_is_not_found(service) -> None:
    with pytest.raises(ReportNotFound):
        service.fetch_report("never-issued")


def test_reports_do_not_cross_contaminate(service) -> None:
    first = service.create_report({"companyName": "Acme", "score": 1}, BASE_URL)
    second = service.create_report({"companyName": "Globex", "score": 2}, BASE_URL)

    assert service.fetch_report(first.id).document == {"companyName": "Acme", "score": 1}
    assert service.fetch_report(second.id).document == {"companyName": "Globex", "score": 2}


def test_corrupt_stored_text_is_not_not_found(store, service) -> None:
    store.put("broken", "{not json")

    with pytest.raises(CorruptRecord):
        service.fetch_report("broken")


def test_id_collision_surfaces_as_create_failed(store) -> None:
    service = ReportService(store, id_factory=lambda: "fixed-id")
    service.create_report({"first": True}, BASE_URL)

    with pytest.raises(CreateFailed) as excinfo:
        service.create_report({"second": True}, BASE_URL)

    assert isinstance(excinfo.value.__cause__, DuplicateKey)
    assert service.fetch_report("fixed-id").document == {"first": True}


def test_non_finite_numbers_are_rejected(service, store) -> None:
    with pytest.raises(CreateFailed):
        service.create_report({"score": float("nan")}, BASE_URL)

    assert store.count() == 0


def test_storage_failure_on_create_is_create_failed(db_path) -> None:
    service = ReportService(ReportStore(db_path))

    with pytest.raises(CreateFailed) as excinfo:
        service.create_report({}, BASE_URL)

    assert isinstance(excinfo.value.__cause__, StorageUnavailable)


def test_list_reports_is_newest_first(service) -> None:
    ids = [service.create_report({"n": i}, BASE_URL).id for i in range(3)]

    listed = service.list_reports()

    assert [r.id for r in listed] == list(reversed(ids))


def test_lone_surrogate_document_round_trips(service, store) -> None:
    created = service.create_report({"note": "\ud800"}, BASE_URL)

    assert store.get(created.id).data.isascii()
    assert service.fetch_report(created.id).document == {"note": "\ud800"}


def test_too_deeply_nested_stored_text_is_corrupt(store, service) -> None:
    store.put("deep", "[" * 100000 + "]" * 100000)

    with pytest.raises(CorruptRecord):
        service.fetch_report("deep")
