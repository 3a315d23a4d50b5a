"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class CurrentUser(BaseModel):
    """Authenticated identity (id, username, role names) injected into handlers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    roles: list[str] = Field(default_factory=list)

    def has_role(self, name: str) -> bool:
        return name in self.roles
