"""
Request/response models for the portal's content pages: services, featured
programs, and news/announcements.

Update models leave every field optional. Only the fields a client actually
sends are written (see ``model_dump(exclude_unset=True)`` in db.content_crud),
so ``{"icon": null}`` clears the icon while ``{}`` leaves it untouched.
"""
from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PartialUpdate(BaseModel):
    NOT_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_not_nullable(self):
        cleared = [name for name in self.NOT_NULLABLE if name in self.model_fields_set and getattr(self, name) is None]
        if cleared:
            raise ValueError(f"Field(s) cannot be null: {', '.join(cleared)}")
        return self


class ServiceRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    icon: Optional[str] = None
    is_active: bool = True
    order_index: int = 0


class ServiceUpdateRequest(PartialUpdate):
    NOT_NULLABLE = ("title", "description", "is_active", "order_index")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    order_index: Optional[int] = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    icon: Optional[str]
    is_active: bool
    order_index: int
    created_at: datetime
    updated_at: datetime


class FeaturedProgramRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image_path: Optional[str] = None
    target_beneficiaries: Optional[str] = None
    budget: Optional[float] = Field(None, gt=0)
    is_active: bool = True
    order_index: int = 0


class FeaturedProgramUpdateRequest(PartialUpdate):
    NOT_NULLABLE = ("title", "description", "is_active", "order_index")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image_path: Optional[str] = None
    target_beneficiaries: Optional[str] = None
    budget: Optional[float] = Field(None, gt=0)
    is_active: Optional[bool] = None
    order_index: Optional[int] = None


class FeaturedProgramResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    image_path: Optional[str]
    target_beneficiaries: Optional[str]
    budget: Optional[float]
    is_active: bool
    order_index: int
    created_at: datetime
    updated_at: datetime

    @field_validator("budget", mode="before")
    @classmethod
    def numeric_to_float(cls, value):
        # Numeric columns come back as Decimal
        return float(value) if value is not None else None


class NewsRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    summary: Optional[str] = None
    image_path: Optional[str] = None
    is_announcement: bool = False
    is_published: bool = False


class NewsUpdateRequest(PartialUpdate):
    NOT_NULLABLE = ("title", "content", "is_announcement", "is_published")

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    summary: Optional[str] = None
    image_path: Optional[str] = None
    is_announcement: Optional[bool] = None
    is_published: Optional[bool] = None


class NewsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    summary: Optional[str]
    image_path: Optional[str]
    is_announcement: bool
    is_published: bool
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    deleted: bool
