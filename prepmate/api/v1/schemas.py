# prepmate/api/v1/schemas.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl


class SignupIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(default="", max_length=100)


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ResumeJDIn(BaseModel):
    """Either a stored resume or raw resume + job description text."""
    resume_id: Optional[str] = None
    resume_text: Optional[str] = None
    jd_text: Optional[str] = None


class CompanyArchiveIn(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)


class ResourcesIn(BaseModel):
    resume_id: Optional[str] = None
    jd_text: Optional[str] = None


class AnalyzeIn(BaseModel):
    resume_id: Optional[str] = None


class SaveResourceIn(BaseModel):
    title: str = Field(min_length=1)
    link: HttpUrl
    description: str = Field(min_length=1)


class ProgressMarkIn(BaseModel):
    skill_name: str = Field(min_length=1)
    resource_link: Optional[str] = None
    is_completed: bool
    skill_total: Optional[int] = Field(default=None, ge=0)


class ChallengeSubmitIn(BaseModel):
    challenge_id: str
    status: Literal["completed", "skipped"] = "completed"


class ProgressMetricsIn(BaseModel):
    metrics: Dict[str, Any] = Field(default_factory=dict)


class ProfileIn(BaseModel):
    profile: Dict[str, Any] = Field(default_factory=dict)


class ProfileUpdateIn(BaseModel):
    """Partial profile update; only the fields sent are written."""
    name: Optional[str] = Field(default=None, max_length=100)
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    skills: Optional[List[str]] = None
    goal: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    experience_level: Optional[str] = None
