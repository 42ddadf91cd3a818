"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "wanjiru@example.com",
                    "first_name": "Wanjiru",
                    "last_name": "Kamau",
                    "phone": "+254 712 345678",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=20)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"first_name": "Wanjiru", "phone": "+254 700 000111"}]}}

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)


class AddAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_type": "Shipping",
                    "first_name": "Wanjiru",
                    "last_name": "Kamau",
                    "street": "12 Moi Avenue",
                    "city": "Nairobi",
                    "state": "Nairobi County",
                    "zip_code": "00100",
                    "country": "Kenya",
                    "is_default": True,
                }
            ]
        }
    }

    address_type: str | None = Field(None, max_length=20)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"street": "40 Kenyatta Avenue", "zip_code": "00200"}]}}

    address_type: str | None = Field(None, max_length=20)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)


class ChangeRoleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"role": "Admin"}]}}

    role: str = Field(..., max_length=20)


class SuspendUserRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"reason": "Repeated counterfeit listings"}]}}

    reason: str = Field(..., max_length=500)


# --- Response Schemas ---


class UserIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    user_id: str


class AddressIdResponse(BaseModel):
    address_id: str


class AddressResponse(BaseModel):
    address_id: str
    address_type: str
    first_name: str
    last_name: str
    street: str
    city: str
    state: str | None = None
    zip_code: str | None = None
    country: str
    is_default: bool


class UserResponse(BaseModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: str
    status: str
    registered_at: datetime | None = None
    addresses: list[AddressResponse] = []


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
