import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from .crud import atomic
from .models import Service, FeaturedProgram, News, utcnow
from api.schemas.content import (
    ServiceRequest,
    ServiceUpdateRequest,
    FeaturedProgramRequest,
    FeaturedProgramUpdateRequest,
    NewsRequest,
    NewsUpdateRequest,
)

logger = logging.getLogger(__name__)


def _to_decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _insert(db: Session, obj):
    with atomic(db):
        db.add(obj)
    db.refresh(obj)
    return obj


def _apply_patch(db: Session, obj, changes: dict):
    """
    Write only the supplied fields, refresh updated_at, and commit.
    """
    with atomic(db):
        for field, value in changes.items():
            setattr(obj, field, value)
        obj.updated_at = utcnow()
    db.refresh(obj)
    return obj


def _delete(db: Session, model, obj_id: int) -> bool:
    with atomic(db):
        deleted = db.query(model).filter(model.id == obj_id).delete(synchronize_session=False)
    return deleted > 0


# Services


def create_service(db: Session, req: ServiceRequest) -> Service:
    now = utcnow()
    service = _insert(db, Service(**req.model_dump(), created_at=now, updated_at=now))
    logger.info("Created service %s", service.id)
    return service


def get_services(db: Session) -> List[Service]:
    """Active services in display order."""
    return (
        db.query(Service)
        .filter(Service.is_active.is_(True))
        .order_by(Service.order_index.asc(), Service.id.asc())
        .all()
    )


def update_service(db: Session, service_id: int, req: ServiceUpdateRequest) -> Optional[Service]:
    service = db.query(Service).filter(Service.id == service_id).first()
    if service is None:
        return None
    service = _apply_patch(db, service, req.model_dump(exclude_unset=True))
    logger.info("Updated service %s", service_id)
    return service


def delete_service(db: Session, service_id: int) -> bool:
    deleted = _delete(db, Service, service_id)
    logger.info("Delete service %s: %s", service_id, deleted)
    return deleted


# Featured programs


def create_featured_program(db: Session, req: FeaturedProgramRequest) -> FeaturedProgram:
    now = utcnow()
    values = req.model_dump()
    values["budget"] = _to_decimal(values["budget"])
    program = _insert(db, FeaturedProgram(**values, created_at=now, updated_at=now))
    logger.info("Created featured program %s", program.id)
    return program


def get_featured_programs(db: Session) -> List[FeaturedProgram]:
    """Active programs in display order."""
    return (
        db.query(FeaturedProgram)
        .filter(FeaturedProgram.is_active.is_(True))
        .order_by(FeaturedProgram.order_index.asc(), FeaturedProgram.id.asc())
        .all()
    )


def update_featured_program(
    db: Session, program_id: int, req: FeaturedProgramUpdateRequest
) -> Optional[FeaturedProgram]:
    program = db.query(FeaturedProgram).filter(FeaturedProgram.id == program_id).first()
    if program is None:
        return None
    changes = req.model_dump(exclude_unset=True)
    if "budget" in changes:
        changes["budget"] = _to_decimal(changes["budget"])
    program = _apply_patch(db, program, changes)
    logger.info("Updated featured program %s", program_id)
    return program


def delete_featured_program(db: Session, program_id: int) -> bool:
    deleted = _delete(db, FeaturedProgram, program_id)
    logger.info("Delete featured program %s: %s", program_id, deleted)
    return deleted


# News & announcements


def create_news(db: Session, req: NewsRequest) -> News:
    now = utcnow()
    news = _insert(
        db,
        News(
            **req.model_dump(),
            published_at=now if req.is_published else None,
            created_at=now,
            updated_at=now,
        ),
    )
    logger.info("Created news %s (published=%s)", news.id, news.is_published)
    return news


def get_news(db: Session) -> List[News]:
    """Published news and announcements, latest publication first."""
    return (
        db.query(News)
        .filter(News.is_published.is_(True))
        .order_by(News.published_at.desc(), News.created_at.desc(), News.id.desc())
        .all()
    )


def get_announcements(db: Session) -> List[News]:
    return (
        db.query(News)
        .filter(News.is_announcement.is_(True), News.is_published.is_(True))
        .order_by(News.published_at.desc(), News.id.desc())
        .all()
    )


def update_news(db: Session, news_id: int, req: NewsUpdateRequest) -> Optional[News]:
    """
    Partial update. Publishing an item that was never published stamps published_at;
    unpublishing keeps the original stamp.
    """
    news = db.query(News).filter(News.id == news_id).first()
    if news is None:
        return None
    changes = req.model_dump(exclude_unset=True)
    if changes.get("is_published") is True and news.published_at is None:
        changes["published_at"] = utcnow()
    news = _apply_patch(db, news, changes)
    logger.info("Updated news %s", news_id)
    return news


def delete_news(db: Session, news_id: int) -> bool:
    deleted = _delete(db, News, news_id)
    logger.info("Delete news %s: %s", news_id, deleted)
    return deleted
