from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Numeric, Integer, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.types import TypeDecorator
from .database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timestamp stored in UTC and always read back timezone-aware.
    SQLite keeps no offset, so naive values coming out of it are UTC by construction.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class SocialAssistanceApplication(Base):
    __tablename__ = "social_assistance_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_number = Column(String(64), nullable=False, unique=True, index=True)

    # applicant
    full_name = Column(String(255), nullable=False)
    nik = Column(String(16), nullable=False, index=True)
    place_of_birth = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(20), nullable=False)
    marital_status = Column(String(20), nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    village = Column(String(255), nullable=False)
    district = Column(String(255), nullable=False)

    # request
    assistance_category = Column(String(30), nullable=False)
    assistance_type = Column(String(255), nullable=False)
    reason = Column(Text, nullable=False)
    family_members_count = Column(Integer, nullable=False)
    monthly_income_range = Column(String(20), nullable=False)

    status = Column(String(20), nullable=False, default="SUBMITTED")
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, nullable=False)


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(Integer, ForeignKey("social_assistance_applications.id"), nullable=False, index=True)
    document_type = Column(String(40), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_path = Column(Text, nullable=False)
    file_size = Column(Integer, nullable=False)
    uploaded_at = Column(UTCDateTime(), default=utcnow, nullable=False)


class StatusTimeline(Base):
    __tablename__ = "status_timeline"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(Integer, ForeignKey("social_assistance_applications.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, nullable=False)


class FeaturedProgram(Base):
    __tablename__ = "featured_programs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_path = Column(Text, nullable=True)
    target_beneficiaries = Column(Text, nullable=True)
    budget = Column(Numeric(15, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, nullable=False)


class News(Base):
    __tablename__ = "news"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(Text, nullable=True)
    image_path = Column(Text, nullable=True)
    is_announcement = Column(Boolean, nullable=False, default=False)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(UTCDateTime(), nullable=True)
    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, nullable=False)
