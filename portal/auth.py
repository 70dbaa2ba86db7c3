"""HTTPX authentication backed by the client-credentials token client."""

from typing import Generator, Optional

import httpx

from portal.core.client import TokenClient

__all__ = [
    "ClientCredentialsAuth",
]


class ClientCredentialsAuth(httpx.Auth):
    """Attach a freshly acquired bearer token to every outgoing request.

    Tokens are not cached; each request triggers one token exchange.
    Token acquisition errors propagate as ``PortalError`` to the caller.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        token_client: Optional[TokenClient] = None,
    ) -> None:
        self.token_client = token_client or TokenClient.from_env(
            client_id=client_id,
            client_secret=client_secret,
            token_url=token_url,
        )

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.token_client.request_token().access_token
        request.headers["Authorization"] = f"Bearer {token}"
        yield request
