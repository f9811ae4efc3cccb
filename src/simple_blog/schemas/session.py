"""Pydantic schemas for session identity and token claims."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionClaims(BaseModel):
    """Claims carried inside a session token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", description="ID of the authenticated user")
    username: str = Field(min_length=1, description="Username at the time of login")
    exp: int = Field(description="Expiry as unix seconds")


class SessionIdentity(BaseModel):
    """Identity resolved from a valid session token."""

    model_config = ConfigDict(frozen=True)

    user_id: int = Field(description="ID of the authenticated user")
    username: str = Field(description="Username")
    expires_at: datetime = Field(description="When the session token expires")

    @classmethod
    def from_claims(cls, claims: SessionClaims) -> "SessionIdentity":
        return cls(
            user_id=claims.user_id,
            username=claims.username,
            expires_at=datetime.fromtimestamp(claims.exp, tz=UTC),
        )
