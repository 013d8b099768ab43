from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class Gender(str, Enum):
    LAKI_LAKI = "LAKI_LAKI"
    PEREMPUAN = "PEREMPUAN"


class MaritalStatus(str, Enum):
    BELUM_MENIKAH = "BELUM_MENIKAH"
    MENIKAH = "MENIKAH"
    CERAI_HIDUP = "CERAI_HIDUP"
    CERAI_MATI = "CERAI_MATI"


class IncomeRange(str, Enum):
    KURANG_DARI_1JT = "KURANG_DARI_1JT"
    SATU_SAMPAI_2JT = "1JT_SAMPAI_2JT"
    DUA_SAMPAI_3JT = "2JT_SAMPAI_3JT"
    TIGA_SAMPAI_5JT = "3JT_SAMPAI_5JT"
    LEBIH_DARI_5JT = "LEBIH_DARI_5JT"


class AssistanceCategory(str, Enum):
    BANTUAN_SOSIAL = "BANTUAN_SOSIAL"
    BANTUAN_PENDIDIKAN = "BANTUAN_PENDIDIKAN"
    BANTUAN_KESEHATAN = "BANTUAN_KESEHATAN"
    BANTUAN_EKONOMI = "BANTUAN_EKONOMI"
    BANTUAN_BENCANA = "BANTUAN_BENCANA"


class ApplicationStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    VERIFIED = "VERIFIED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class DocumentType(str, Enum):
    KTP = "KTP"
    KARTU_KELUARGA = "KARTU_KELUARGA"
    SURAT_KETERANGAN_TIDAK_MAMPU = "SURAT_KETERANGAN_TIDAK_MAMPU"
    FOTO_RUMAH = "FOTO_RUMAH"
    DOKUMEN_TAMBAHAN = "DOKUMEN_TAMBAHAN"


NIK_LENGTH = 16


def _missing_fields(values: dict, required: List[str]) -> List[str]:
    missing = []
    for key in required:
        if key not in values or values.get(key) is None:
            missing.append(key)
        elif isinstance(values.get(key), str) and values.get(key).strip() == "":
            missing.append(key)
    return missing


class ApplicationRequest(BaseModel):
    # applicant
    full_name: str = Field(..., min_length=1)
    nik: str = Field(..., min_length=NIK_LENGTH, max_length=NIK_LENGTH)
    place_of_birth: str = Field(..., min_length=1)
    date_of_birth: date
    gender: Gender
    marital_status: MaritalStatus
    phone: str = Field(..., min_length=1)
    email: EmailStr
    address: str = Field(..., min_length=1)
    village: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    # request
    assistance_category: AssistanceCategory
    assistance_type: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)
    family_members_count: int = Field(..., gt=0)
    monthly_income_range: IncomeRange

    @model_validator(mode="before")
    @classmethod
    def check_required_fields(cls, values):
        """
        Ensure required keys are present and not blank.
        Reports every missing field in one message instead of one error per field.
        """
        if not isinstance(values, dict):
            return values
        required = [
            "full_name", "nik", "place_of_birth", "date_of_birth", "gender", "marital_status",
            "phone", "email", "address", "village", "district", "assistance_category",
            "assistance_type", "reason", "family_members_count", "monthly_income_range",
        ]
        missing = _missing_fields(values, required)
        if missing:
            # raising ValueError produces a validation error surfaced as 422 by FastAPI
            raise ValueError(f"Missing or empty required field(s): {', '.join(missing)}")
        return values


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tracking_number: str
    full_name: str
    nik: str
    place_of_birth: str
    date_of_birth: date
    gender: Gender
    marital_status: MaritalStatus
    phone: str
    email: str
    address: str
    village: str
    district: str
    assistance_category: AssistanceCategory
    assistance_type: str
    reason: str
    family_members_count: int
    monthly_income_range: IncomeRange
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime


class TrackApplicationRequest(BaseModel):
    tracking_number: str = Field(..., min_length=1)
    nik: str = Field(..., min_length=NIK_LENGTH, max_length=NIK_LENGTH)


class UpdateApplicationStatusRequest(BaseModel):
    status: ApplicationStatus


class StatusTimelineRequest(BaseModel):
    status: ApplicationStatus
    notes: Optional[str] = None


class StatusTimelineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    status: ApplicationStatus
    notes: Optional[str]
    created_at: datetime


class DocumentRequest(BaseModel):
    document_type: DocumentType
    file_name: str = Field(..., min_length=1)
    file_path: str = Field(..., min_length=1)
    file_size: int = Field(..., gt=0)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    document_type: DocumentType
    file_name: str
    file_path: str
    file_size: int
    uploaded_at: datetime


class ApplicationTrackingResponse(BaseModel):
    application: ApplicationResponse
    documents: List[DocumentResponse]
    timeline: List[StatusTimelineResponse]
