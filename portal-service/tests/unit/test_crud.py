from datetime import timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError

from api.schemas.applications import ApplicationRequest, ApplicationStatus, DocumentRequest, DocumentType
from db import crud
from db.models import SocialAssistanceApplication, StatusTimeline


@pytest.fixture
def app_request(application_payload):
    return ApplicationRequest(**application_payload)


def test_create_application_starts_submitted(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-AAAAA")

    assert db_app.id is not None
    assert db_app.status == ApplicationStatus.SUBMITTED.value
    assert db_app.created_at == db_app.updated_at
    assert db_session.query(StatusTimeline).count() == 0


def test_duplicate_tracking_number_is_not_retried(db_session, app_request):
    crud.db_create_application(db_session, app_request, "SA-1-AAAAA")

    with pytest.raises(IntegrityError):
        crud.db_create_application(db_session, app_request, "SA-1-AAAAA")

    # rolled back; the session is still usable
    assert db_session.query(SocialAssistanceApplication).count() == 1


def test_update_status_missing_application(db_session):
    assert crud.update_application_status(db_session, 12345, ApplicationStatus.APPROVED) is None
    assert db_session.query(StatusTimeline).count() == 0


def test_update_status_writes_application_and_timeline(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-BBBBB")
    created_at = db_app.created_at

    updated = crud.update_application_status(db_session, db_app.id, ApplicationStatus.REJECTED)

    assert updated.status == "REJECTED"
    assert updated.updated_at >= created_at
    entries = crud.list_status_timeline(db_session, db_app.id)
    assert [(e.status, e.notes) for e in entries] == [("REJECTED", "Status updated to REJECTED")]


def test_add_status_timeline_leaves_status_alone(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-CCCCC")

    entry = crud.add_status_timeline(db_session, db_app.id, ApplicationStatus.VERIFIED, "cek lapangan")

    assert entry.notes == "cek lapangan"
    db_session.refresh(db_app)
    assert db_app.status == "SUBMITTED"


def test_track_application_miss_and_hit(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-DDDDD")
    crud.create_document(
        db_session,
        db_app.id,
        DocumentRequest(document_type=DocumentType.KARTU_KELUARGA, file_name="kk.pdf", file_path="/kk.pdf", file_size=10),
    )

    assert crud.track_application(db_session, "SA-1-DDDDD", "0000000000000000") is None
    assert crud.track_application(db_session, "SA-1-ddddd", app_request.nik) is None

    result = crud.track_application(db_session, "SA-1-DDDDD", app_request.nik)
    assert result["application"].id == db_app.id
    assert [d.file_name for d in result["documents"]] == ["kk.pdf"]
    assert result["timeline"] == []


def test_create_document_missing_application(db_session):
    req = DocumentRequest(document_type=DocumentType.FOTO_RUMAH, file_name="r.jpg", file_path="/r.jpg", file_size=1)
    assert crud.create_document(db_session, 999, req) is None


def test_update_status_rolls_back_when_timeline_insert_fails(database, db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-EEEEE")

    def _fail_timeline_insert(conn, cursor, statement, parameters, context, executemany):
        if statement.startswith("INSERT INTO status_timeline"):
            raise OperationalError(statement, parameters, Exception("timeline storage unavailable"))

    event.listen(database.engine, "before_cursor_execute", _fail_timeline_insert)
    try:
        with pytest.raises(OperationalError):
            crud.update_application_status(db_session, db_app.id, ApplicationStatus.APPROVED)
    finally:
        event.remove(database.engine, "before_cursor_execute", _fail_timeline_insert)

    fresh = database.session()
    try:
        assert crud.get_application_by_id(fresh, db_app.id).status == "SUBMITTED"
        assert fresh.query(StatusTimeline).count() == 0
    finally:
        fresh.close()


def test_atomic_rolls_back_on_non_database_error(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-FFFFF")

    with pytest.raises(RuntimeError):
        with crud.atomic(db_session):
            db_app.status = "APPROVED"
            raise RuntimeError("handler bug")

    assert not db_session.in_transaction()
    db_session.refresh(db_app)
    assert db_app.status == "SUBMITTED"


def test_timestamps_read_back_in_utc(db_session, app_request):
    db_app = crud.db_create_application(db_session, app_request, "SA-1-GGGGG")

    assert db_app.created_at.tzinfo is not None
    assert db_app.created_at.utcoffset() == timedelta(0)
