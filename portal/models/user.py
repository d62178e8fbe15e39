from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator

from portal.models.base import CamelModel, coerce_enum


class Role(str, Enum):
    APPLICANT = "USER"
    ADMIN = "ADMIN"


class User(CamelModel):
    id: int
    name: str
    email: str
    phone_number: str = ""
    role: Role = Role.APPLICANT
    # The backend spells it "exprience" on signup responses
    experience: str = Field(
        "",
        validation_alias=AliasChoices("experience", "exprience"),
        serialization_alias="experience",
    )
    resume_url: str | None = None
    campus: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, value):
        if isinstance(value, str):
            value = value.upper()
        return coerce_enum(Role, value, Role.APPLICANT) or Role.APPLICANT

    @field_validator("experience", mode="before")
    @classmethod
    def _experience(cls, value):
        return "" if value is None else str(value)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class Education(CamelModel):
    education_name: str = ""
    time_line: str = Field("", alias="timeLine")
    percentage: str = Field("", alias="Percentage")
    institute_name: str = Field("", alias="InstituteName")

    def is_complete(self) -> bool:
        return all(
            value.strip()
            for value in (
                self.education_name, self.time_line, self.percentage, self.institute_name,
            )
        )


class SignupForm(CamelModel):
    """Signup wizard state. The resume file is held separately and never stored."""

    step: int = 1
    name: str = ""
    email: str = ""
    password: str = ""
    phone_number: str = ""
    experience: str = ""
    education: list[Education] = Field(default_factory=lambda: [Education()])
    agree_terms: bool = False

    @field_validator("education", mode="before")
    @classmethod
    def _education(cls, value):
        if not isinstance(value, list) or not value:
            return [Education()]
        return value

    def basic_information(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "phoneNumber": self.phone_number,
            "experience": self.experience,
        }


class PersonalInfoUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone_number: str | None = None
    experience: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str
    remember_me: bool = False
