"""Auth Schemas — login request and token response."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials — the admin username, or a stored user's email."""
    model_config = ConfigDict(
        json_schema_extra={"examples": [{"username": "admin", "password": "1234"}]},
    )

    username: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=1024)


class TokenResponse(BaseModel):
    """Signed bearer token."""
    token: str
    token_type: str = Field("Bearer", serialization_alias="tokenType")
    expires_in: int = Field(serialization_alias="expiresIn")
