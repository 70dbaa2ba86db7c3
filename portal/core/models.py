"""Pydantic models for Portal token requests and responses."""
from typing import Dict, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from portal.config import GRANT_TYPE
from portal.core.exceptions import DeserializationError, PortalError


class Credentials(BaseModel):
    """Client identifier and secret used for the client-credentials grant."""

    client_id: str = Field(..., description="OAuth2 client identifier")
    client_secret: SecretStr = Field(..., description="OAuth2 client secret")

    model_config = ConfigDict(frozen=True)

    def payload(self) -> Dict[str, str]:
        """Token request form fields; ``grant_type`` is always last."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret.get_secret_value(),
            "grant_type": GRANT_TYPE,
        }

    def encode(self) -> str:
        """URL-encoded form body for the token request."""
        return urlencode(self.payload())


class AccessTokenResponse(BaseModel):
    """Response model for a successful token request."""

    access_token: str = Field(..., description="Bearer token")
    expires_in: int = Field(..., description="Token validity window in seconds")


class TokenResult(BaseModel):
    """Outcome of a single token request.

    Exactly one of ``token`` and ``error`` is set. Raw response text from an
    unparseable body is only reachable through ``diagnostic``, so it can never
    be mistaken for a token.
    """

    token: Optional[str] = Field(default=None, repr=False)
    expires_in: Optional[int] = None
    error: Optional[PortalError] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def success(cls, response: AccessTokenResponse) -> "TokenResult":
        return cls(token=response.access_token, expires_in=response.expires_in)

    @classmethod
    def failure(cls, error: PortalError) -> "TokenResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def diagnostic(self) -> Optional[str]:
        if isinstance(self.error, DeserializationError):
            return self.error.raw_text
        return None

    def unwrap(self) -> str:
        """Return the token, or raise the error carried by a failed result."""
        if self.error is not None:
            raise self.error
        return self.token  # type: ignore

    def __bool__(self) -> bool:
        return self.ok
