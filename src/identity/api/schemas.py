"""Pydantic request schemas for the Identity API."""

from pydantic import BaseModel, Field

from shared.api import RequiredStr, TrimmedStr
from shared.auth import Role


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "password": "s3cret-pass",
                    "phone": "+91 98765 43210",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateProfileRequest(BaseModel):
    name: RequiredStr = Field(None, max_length=200)
    phone: TrimmedStr | None = Field(None, max_length=20)

    model_config = {"json_schema_extra": {"examples": [{"name": "Asha R", "phone": "+91 90000 00000"}]}}


# --- Address Request Schemas ---


class CreateAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "phone": "9876543210",
                    "address_line1": "12 MG Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "pincode": "560001",
                    "country": "India",
                    "is_default": True,
                }
            ]
        }
    }

    name: RequiredStr = Field(..., max_length=200)
    phone: TrimmedStr | None = Field(None, max_length=20)
    address_line1: RequiredStr = Field(..., max_length=255)
    address_line2: TrimmedStr | None = Field(None, max_length=255)
    city: RequiredStr = Field(..., max_length=100)
    state: RequiredStr = Field(..., max_length=100)
    pincode: RequiredStr = Field(..., max_length=20)
    country: RequiredStr = Field(..., max_length=100)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    name: RequiredStr = Field(None, max_length=200)
    phone: TrimmedStr | None = Field(None, max_length=20)
    address_line1: RequiredStr = Field(None, max_length=255)
    address_line2: TrimmedStr | None = Field(None, max_length=255)
    city: RequiredStr = Field(None, max_length=100)
    state: RequiredStr = Field(None, max_length=100)
    pincode: RequiredStr = Field(None, max_length=20)
    country: RequiredStr = Field(None, max_length=100)
    is_default: bool = None


class WishlistRequest(BaseModel):
    product_id: str | None = None


# --- Staff Request Schemas ---


class StaffLoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"username": "meera", "password": "s3cret-pass"}]}}


class CreateStaffRequest(BaseModel):
    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "examples": [
                {
                    "username": "meera",
                    "name": "Meera",
                    "email": "meera@vairanya.in",
                    "role": "worker",
                    "password": "packing-pass",
                }
            ]
        },
    }

    username: RequiredStr = Field(..., max_length=100)
    name: RequiredStr = Field(..., max_length=200)
    email: TrimmedStr = Field("", max_length=255)
    role: Role
    password: str = Field(..., min_length=1)


class BootstrapRequest(CreateStaffRequest):
    name: RequiredStr = Field(None, max_length=200)
    role: Role = Role.SUPERADMIN.value

    def staff_fields(self) -> dict:
        fields = self.model_dump()
        fields["name"] = self.name or self.username
        return fields


class UpdateStaffRequest(BaseModel):
    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {"examples": [{"role": "admin", "email": "meera@vairanya.in"}]},
    }

    name: RequiredStr = Field(None, max_length=200)
    email: TrimmedStr = Field(None, max_length=255)
    role: Role = None
    password: str = Field(None, min_length=1)
