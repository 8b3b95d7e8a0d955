"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any, Dict
from datetime import datetime
from enum import Enum

from udyog_saathi.models.accounts import AccountRole


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class ApplicationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    declined = "declined"


class ListingType(str, Enum):
    worker = "worker"
    job = "job"
    instant = "instant"


# ============================================================
# AUTH / ACCOUNT SCHEMAS
# ============================================================

class SignupRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: AccountRole
    contact: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str
    role: AccountRole


class ProfileUpdate(CamelModel):
    email: EmailStr
    role: AccountRole
    name: Optional[str] = None
    contact: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = None


class LoginResponse(BaseModel):
    user: Dict[str, Any]
    access_token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None


# ============================================================
# LISTING SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1)
    salary: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    contact: Optional[str] = None
    owner_email: EmailStr
    owner_name: Optional[str] = None
    owner_pic: Optional[str] = None
    image: Optional[str] = None


class WorkerProfileCreate(CamelModel):
    name: str = Field(..., min_length=1)
    skill: Optional[str] = None
    expected_salary: Optional[str] = None
    location: Optional[str] = None
    experience: Optional[str] = None
    contact: Optional[str] = None
    email: EmailStr
    owner_name: Optional[str] = None
    owner_pic: Optional[str] = None
    image: Optional[str] = None


class InstantServiceCreate(CamelModel):
    role: str = Field(..., min_length=1)
    experience: Optional[str] = None
    budget: Optional[str] = None
    location: Optional[str] = None
    past_work: Optional[str] = None
    full_address: Optional[str] = None
    image: Optional[str] = None
    owner_email: EmailStr
    owner_name: str = "Verified Professional"
    owner_pic: Optional[str] = None
    contact: Optional[str] = None


class CommentCreate(CamelModel):
    user_name: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class LikeToggle(CamelModel):
    email: EmailStr


class UserActivityResponse(BaseModel):
    posts: List[Dict[str, Any]] = []
    instant: List[Dict[str, Any]] = []


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    job_id: Optional[str] = None
    job_title: str
    business_email: EmailStr
    applicant_name: Optional[str] = None
    applicant_email: EmailStr
    applicant_contact: Optional[str] = None


class NotificationCreate(CamelModel):
    """Apply request as sent from a feed card."""
    to_email: EmailStr
    from_email: EmailStr
    from_name: Optional[str] = None
    title: Optional[str] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(CamelModel):
    id: str = Field(alias="_id")
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    business_email: str
    applicant_name: Optional[str] = None
    applicant_email: str
    applicant_contact: Optional[str] = None
    status: ApplicationStatus
    timestamp: datetime


# ============================================================
# CHAT SCHEMAS
# ============================================================

class ChatMessageCreate(CamelModel):
    sender_email: EmailStr
    receiver_email: EmailStr
    text: str


class ChatMessageResponse(CamelModel):
    id: str = Field(alias="_id")
    sender_email: str
    receiver_email: str
    text: str
    status: str = "sent"
    timestamp: datetime


# ============================================================
# PROXY SCHEMAS (AI + image upload)
# ============================================================

class CareerGuidanceRequest(CamelModel):
    user_details: Dict[str, Any] = {}
    query: str
    lang: Optional[str] = "en"


class CareerGuidanceResponse(CamelModel):
    ai_reply: str


class ImageUploadRequest(BaseModel):
    data: str = Field(..., min_length=1, description="Data URI or base64 encoded image")


class ImageUploadResponse(BaseModel):
    url: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class AckResponse(BaseModel):
    msg: str
    success: bool = True
