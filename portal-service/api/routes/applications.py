import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi import Depends
from sqlalchemy.orm import Session

from api.schemas.applications import (
    ApplicationRequest,
    ApplicationResponse,
    ApplicationTrackingResponse,
    DocumentRequest,
    DocumentResponse,
    StatusTimelineRequest,
    StatusTimelineResponse,
    TrackApplicationRequest,
    UpdateApplicationStatusRequest,
)
from db.database import get_db
from db import crud
from services.tracking_numbers import TrackingNumberGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])

NOT_FOUND = "Application not found"


def get_tracking_numbers(request: Request) -> TrackingNumberGenerator:
    return request.app.state.tracking_numbers


@router.post("", status_code=201, response_model=ApplicationResponse)
def create_application(
    payload: ApplicationRequest,
    db: Session = Depends(get_db),
    tracking_numbers: TrackingNumberGenerator = Depends(get_tracking_numbers),
):
    return crud.db_create_application(db, payload, tracking_numbers.generate())


@router.get("", response_model=List[ApplicationResponse])
def list_applications(db: Session = Depends(get_db)):
    return crud.list_applications(db)


@router.post("/track", response_model=Optional[ApplicationTrackingResponse])
def track_application(payload: TrackApplicationRequest, db: Session = Depends(get_db)):
    # a miss is a normal 200 with a null body, never a 404
    result = crud.track_application(db, payload.tracking_number, payload.nik)
    if result is None:
        logger.info("Tracking lookup for %s matched nothing", payload.tracking_number)
    return result


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: int, payload: UpdateApplicationStatusRequest, db: Session = Depends(get_db)
):
    db_app = crud.update_application_status(db, application_id, payload.status)
    if not db_app:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return db_app


@router.post("/{application_id}/timeline", status_code=201, response_model=StatusTimelineResponse)
def add_status_timeline(application_id: int, payload: StatusTimelineRequest, db: Session = Depends(get_db)):
    entry = crud.add_status_timeline(db, application_id, payload.status, payload.notes)
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return entry


@router.get("/{application_id}/timeline", response_model=List[StatusTimelineResponse])
def list_status_timeline(application_id: int, db: Session = Depends(get_db)):
    return crud.list_status_timeline(db, application_id)


@router.post("/{application_id}/documents", status_code=201, response_model=DocumentResponse)
def upload_document(application_id: int, payload: DocumentRequest, db: Session = Depends(get_db)):
    document = crud.create_document(db, application_id, payload)
    if not document:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return document


@router.get("/{application_id}/documents", response_model=List[DocumentResponse])
def list_documents(application_id: int, db: Session = Depends(get_db)):
    return crud.list_documents(db, application_id)
