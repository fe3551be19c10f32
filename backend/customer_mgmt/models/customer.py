# backend/customer_mgmt/models/customer.py
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

# Digits, "+", "-" and whitespace only
PHONE_PATTERN = r"^[0-9+\-\s]+$"


def _require_digit(value: Optional[str]) -> Optional[str]:
    if value is not None and not any(ch.isdigit() for ch in value):
        raise ValueError("phone number must contain at least one digit")
    return value


class VerificationStatus(str, Enum):
    NOT_VERIFIED = "Not Verified"
    VERIFIED = "Verified"
    FRAUD = "Fraud"
    SUSPICIOUS = "Suspicious"
    BLACK_LISTED = "Black Listed"

    @classmethod
    def normalize(cls, value: Any) -> "VerificationStatus":
        """Map a stored value onto the enumeration, falling back to NOT_VERIFIED."""
        if isinstance(value, cls):
            return value
        for status in cls:
            if status.value == value:
                return status
        return cls.NOT_VERIFIED


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=2)
    address: str = Field(..., min_length=1)
    phone_no: str = Field(..., alias="phoneNo", pattern=PHONE_PATTERN)
    email: EmailStr

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("phone_no")
    @classmethod
    def phone_has_digit(cls, value):
        return _require_digit(value)


class CustomerCreate(CustomerBase):
    # Left unset, the stored record gets NOT_VERIFIED
    verification_status: Optional[VerificationStatus] = Field(None, alias="verificationStatus")


class CustomerUpdate(CustomerBase):
    """Full update payload. Any verificationStatus sent along is ignored."""
    pass


class CustomerPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    address: Optional[str] = Field(None, min_length=1)
    phone_no: Optional[str] = Field(None, alias="phoneNo", pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None
    verification_status: Optional[VerificationStatus] = Field(None, alias="verificationStatus")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("phone_no")
    @classmethod
    def phone_has_digit(cls, value):
        return _require_digit(value)


class StatusUpdate(BaseModel):
    status: VerificationStatus


class Customer(BaseModel):
    id: Optional[int] = None
    name: str
    address: str
    phone_no: str = Field(..., alias="phoneNo")
    email: str
    verification_status: VerificationStatus = Field(VerificationStatus.NOT_VERIFIED, alias="verificationStatus")

    class Config:
        from_attributes = True
        populate_by_name = True

    @field_validator("verification_status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return VerificationStatus.normalize(value)
