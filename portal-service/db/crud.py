import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import SocialAssistanceApplication, Document, StatusTimeline, utcnow
from api.schemas.applications import ApplicationRequest, ApplicationStatus, DocumentRequest

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session):
    """
    Commit everything staged inside the block as one transaction, or roll all of it back.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def db_create_application(db: Session, app_req: ApplicationRequest, tracking_number: str) -> SocialAssistanceApplication:
    """
    Persist a new application in SUBMITTED state and return the created model instance.
    created_at and updated_at share one clock reading.
    """
    now = utcnow()
    db_obj = SocialAssistanceApplication(
        tracking_number=tracking_number,
        full_name=app_req.full_name,
        nik=app_req.nik,
        place_of_birth=app_req.place_of_birth,
        date_of_birth=app_req.date_of_birth,
        gender=app_req.gender.value,
        marital_status=app_req.marital_status.value,
        phone=app_req.phone,
        email=str(app_req.email),
        address=app_req.address,
        village=app_req.village,
        district=app_req.district,
        assistance_category=app_req.assistance_category.value,
        assistance_type=app_req.assistance_type,
        reason=app_req.reason,
        family_members_count=app_req.family_members_count,
        monthly_income_range=app_req.monthly_income_range.value,
        status=ApplicationStatus.SUBMITTED.value,
        created_at=now,
        updated_at=now,
    )
    with atomic(db):
        db.add(db_obj)
    db.refresh(db_obj)
    logger.info("Created application %s (%s)", db_obj.id, db_obj.tracking_number)
    return db_obj


def get_application_by_id(db: Session, application_id: int) -> Optional[SocialAssistanceApplication]:
    """
    Retrieve an application by its ID.
    Returns None if not found.
    """
    return db.query(SocialAssistanceApplication).filter(SocialAssistanceApplication.id == application_id).first()


def list_applications(db: Session) -> List[SocialAssistanceApplication]:
    return (
        db.query(SocialAssistanceApplication)
        .order_by(SocialAssistanceApplication.created_at.desc(), SocialAssistanceApplication.id.desc())
        .all()
    )


def update_application_status(
    db: Session, application_id: int, status: ApplicationStatus
) -> Optional[SocialAssistanceApplication]:
    """
    Set the application's status and append a matching timeline entry in one transaction.
    Returns None (and writes nothing) when the application does not exist.
    No transition rules: any status may follow any other, including itself.
    """
    db_app = get_application_by_id(db, application_id)
    if db_app is None:
        return None

    now = utcnow()
    previous = db_app.status
    with atomic(db):
        db_app.status = status.value
        db_app.updated_at = now
        db.add(
            StatusTimeline(
                application_id=db_app.id,
                status=status.value,
                notes=f"Status updated to {status.value}",
                created_at=now,
            )
        )
    db.refresh(db_app)
    logger.info("Application %s status %s -> %s", db_app.id, previous, status.value)
    return db_app


def add_status_timeline(
    db: Session, application_id: int, status: ApplicationStatus, notes: Optional[str] = None
) -> Optional[StatusTimeline]:
    """
    Append an audit entry without touching the application's own status.
    Returns None when the application does not exist.
    """
    if get_application_by_id(db, application_id) is None:
        return None

    entry = StatusTimeline(application_id=application_id, status=status.value, notes=notes, created_at=utcnow())
    with atomic(db):
        db.add(entry)
    db.refresh(entry)
    logger.info("Added timeline entry %s (%s) to application %s", entry.id, entry.status, application_id)
    return entry


def list_status_timeline(db: Session, application_id: int) -> List[StatusTimeline]:
    """Newest entry first."""
    return (
        db.query(StatusTimeline)
        .filter(StatusTimeline.application_id == application_id)
        .order_by(StatusTimeline.created_at.desc(), StatusTimeline.id.desc())
        .all()
    )


def create_document(db: Session, application_id: int, doc_req: DocumentRequest) -> Optional[Document]:
    """
    Record metadata for an uploaded file. File contents are not stored here.
    Returns None when the application does not exist.
    """
    if get_application_by_id(db, application_id) is None:
        return None

    document = Document(
        application_id=application_id,
        document_type=doc_req.document_type.value,
        file_name=doc_req.file_name,
        file_path=doc_req.file_path,
        file_size=doc_req.file_size,
        uploaded_at=utcnow(),
    )
    with atomic(db):
        db.add(document)
    db.refresh(document)
    logger.info("Stored document %s (%s) for application %s", document.id, document.document_type, application_id)
    return document


def list_documents(db: Session, application_id: int) -> List[Document]:
    return (
        db.query(Document)
        .filter(Document.application_id == application_id)
        .order_by(Document.uploaded_at.asc(), Document.id.asc())
        .all()
    )


def track_application(db: Session, tracking_number: str, nik: str) -> Optional[dict]:
    """
    Resolve a (tracking number, NIK) pair to the application with its documents and timeline.

    Both values must match the same row exactly. A miss returns None whichever
    of the two was wrong, so callers cannot tell them apart.
    """
    db_app = (
        db.query(SocialAssistanceApplication)
        .filter(
            SocialAssistanceApplication.tracking_number == tracking_number,
            SocialAssistanceApplication.nik == nik,
        )
        .first()
    )
    if db_app is None:
        return None

    return {
        "application": db_app,
        "documents": list_documents(db, db_app.id),
        "timeline": list_status_timeline(db, db_app.id),
    }
