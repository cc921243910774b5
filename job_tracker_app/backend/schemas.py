import enum
from datetime import date, datetime
from typing import Annotated, Optional, Dict

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel


class ApplicationStatus(str, enum.Enum):
    SAVED = "Saved"
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


STATUS_VALUES = [s.value for s in ApplicationStatus]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Base for payloads exchanged with the client in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Auth Schemas
class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    ok: bool = True
    user: Optional[UserPublic] = None


class OkResponse(BaseModel):
    ok: bool = True


# Application Tracker Schemas
class ApplicationBase(CamelModel):
    company: NonEmptyStr
    title: NonEmptyStr
    url: Optional[str] = None
    status: ApplicationStatus = Field(..., examples=["Applied"])
    applied_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("url", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("applied_date", mode="before")
    @classmethod
    def coerce_applied_date(cls, v):
        # The date input sends "" when cleared; datetimes keep only the day
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            return v[:10]
        if isinstance(v, datetime):
            return v.date()
        return v


class ApplicationCreate(ApplicationBase):
    pass


class ApplicationUpdate(ApplicationBase):
    """PUT replaces every mutable field; omitted optionals become null."""
    pass


class Application(ApplicationBase):
    id: int
    user_id: int
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class StatusSummary(BaseModel):
    counts: Dict[str, int]
    total: int
