"""
Database Models for MongoDB Collections
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """
    User model for MongoDB storage
    Stores the account name and a bcrypt hash of the password
    """

    id: str | None = Field(default=None, description="MongoDB ObjectId as string")
    username: str = Field(..., description="Unique, case-sensitive account name")
    password_hash: str = Field(..., description="bcrypt hash of the password")

    # Timestamps
    created_at: datetime = Field(
        default_factory=datetime.utcnow, description="Account creation timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "username": "traveler1",
                "password_hash": "$2b$12$...",
                "created_at": "2024-01-01T00:00:00",
            }
        }

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})


class UserInfo(BaseModel):
    id: str
    username: str


class RegisterRequest(BaseModel):
    username: str | None = None
    password: str | None = None
    confirm_password: str | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    message: str
    user: UserInfo
