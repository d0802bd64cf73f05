from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from stockroom.domain.users.entities import SessionCredential, User


class _RequestDTO(BaseModel):
    # Presence and length rules live in the use cases; DTOs only check shape
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegisterRequestDTO(_RequestDTO):
    name: str | None = Field(None, max_length=128)
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, max_length=128)


class LoginRequestDTO(_RequestDTO):
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, max_length=128)


class UpdateProfileRequestDTO(_RequestDTO):
    name: str | None = Field(None, max_length=128)
    phone: str | None = Field(None, max_length=32)
    bio: str | None = Field(None, max_length=250)
    photo: str | None = Field(None, max_length=512)


class ChangePasswordRequestDTO(_RequestDTO):
    old_password: str | None = Field(None, alias="oldPassword", max_length=128)
    password: str | None = Field(None, max_length=128)


class ForgotPasswordRequestDTO(_RequestDTO):
    email: str | None = Field(None, max_length=254)


class ResetPasswordRequestDTO(_RequestDTO):
    password: str | None = Field(None, max_length=128)


class UserProfileDTO(BaseModel):
    id: int = Field(serialization_alias="_id")
    name: str
    email: str
    photo: str | None = None
    phone: str | None = None
    bio: str | None = None

    @classmethod
    def from_user(cls, user: User) -> UserProfileDTO:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            photo=user.photo,
            phone=user.phone,
            bio=user.bio,
        )


class AuthSuccessDTO(UserProfileDTO):
    token: str

    @classmethod
    def from_credential(cls, user: User, credential: SessionCredential) -> AuthSuccessDTO:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            photo=user.photo,
            phone=user.phone,
            bio=user.bio,
            token=credential.token,
        )


class MessageDTO(BaseModel):
    message: str
