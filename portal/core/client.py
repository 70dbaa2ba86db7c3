"""TokenClient for acquiring Portal access tokens synchronously."""

import logging
import os
from typing import Dict, NoReturn, Optional

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from portal.config import (
    CLIENT_ID_ENV,
    CLIENT_SECRET_ENV,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN_URL,
    TOKEN_URL_ENV,
)
from portal.core.exceptions import (
    ConfigurationError,
    DeserializationError,
    PortalError,
    ServerError,
    TextReadError,
    TransportError,
)
from portal.core.models import AccessTokenResponse, Credentials, TokenResult

logger = logging.getLogger(__name__)


class TokenClient:
    """Synchronous client for the OAuth2 client-credentials grant."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str = DEFAULT_TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize TokenClient with credentials and an optional HTTPX
        client (for testing or connection reuse)."""
        self.credentials = Credentials(client_id=client_id, client_secret=client_secret)
        self.token_url = token_url
        self.timeout = timeout
        self.client = client

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        **kwargs,
    ) -> "TokenClient":
        """
        Construct a TokenClient from the process environment.

        Values are resolved in the following order of preference:
        1. Direct function arguments.
        2. Environment variables (optionally loaded from ``env_file``):
           - PORTAL_CLIENT_ID
           - PORTAL_CLIENT_SECRET
           - PORTAL_TOKEN_URL
        3. Default values:
           - token_url defaults to DEFAULT_TOKEN_URL (from portal.config)

        Args:
            env_file: Optional path to a dotenv file loaded before lookup.
                Variables already set in the environment take precedence.
            client_id: OAuth2 client ID.
            client_secret: OAuth2 client secret.
            token_url: The token endpoint URL.
            **kwargs: Passed through to the constructor (``timeout``, ``client``).

        Raises:
            ConfigurationError: If client_id or client_secret is not provided via
                arguments or environment variables.
        """
        if env_file is not None:
            load_dotenv(env_file)

        final_client_id = client_id or os.getenv(CLIENT_ID_ENV)
        if not final_client_id:
            raise ConfigurationError(
                "Client ID must be provided either as an argument "
                f"or via the {CLIENT_ID_ENV} environment variable."
            )

        final_client_secret = client_secret or os.getenv(CLIENT_SECRET_ENV)
        if not final_client_secret:
            raise ConfigurationError(
                "Client secret must be provided either as an argument "
                f"or via the {CLIENT_SECRET_ENV} environment variable."
            )

        final_token_url = token_url or os.getenv(TOKEN_URL_ENV) or DEFAULT_TOKEN_URL

        return cls(
            client_id=final_client_id,
            client_secret=final_client_secret,
            token_url=final_token_url,
            **kwargs,
        )

    def payload(self) -> Dict[str, str]:
        return self.credentials.payload()

    def encode_payload(self) -> str:
        return self.credentials.encode()

    def request_token(self) -> AccessTokenResponse:
        """
        POST the client credentials to the token endpoint and parse the reply.

        Raises:
            ConfigurationError: If the token URL is not an absolute http(s) URL.
            TransportError: If the request could not be sent or answered.
            ServerError: If the endpoint answered with a status other than 200.
            DeserializationError: If a 200 body is not an access token payload.
            TextReadError: If that body could not even be read as text.
        """
        url = self._validated_url()
        logger.debug("Requesting access token from %s", url)

        if self.client is not None:
            response = self._post(self.client, url)
        else:
            with httpx.Client(headers=DEFAULT_HEADERS, timeout=self.timeout) as client:
                response = self._post(client, url)

        if response.status_code != 200:
            logger.warning("Token request failed with status %s", response.status_code)
            raise ServerError(response.status_code)

        try:
            token = AccessTokenResponse.model_validate_json(response.content)
        except ValidationError:
            self._raise_for_body(response)

        logger.info("Access token acquired, expires in %s seconds", token.expires_in)
        return token

    def generate_token(self) -> TokenResult:
        """Acquire a token, reporting every failure in the returned result."""
        try:
            return TokenResult.success(self.request_token())
        except PortalError as exc:
            return TokenResult.failure(exc)

    def _validated_url(self) -> httpx.URL:
        try:
            url = httpx.URL(self.token_url)
        except (httpx.InvalidURL, TypeError) as exc:
            raise ConfigurationError(f"Invalid token URL: {self.token_url!r}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"Invalid token URL: {self.token_url!r}")
        return url

    def _post(self, client: httpx.Client, url: httpx.URL) -> httpx.Response:
        try:
            return client.post(url, content=self.encode_payload(), headers=DEFAULT_HEADERS)
        except httpx.HTTPError as exc:
            logger.warning("Token request could not be completed: %s", type(exc).__name__)
            raise TransportError(f"Token request failed: {exc}") from exc

    def _raise_for_body(self, response: httpx.Response) -> NoReturn:
        try:
            text = response.text
        except (httpx.StreamError, UnicodeError, LookupError) as exc:
            logger.warning("Token response body could not be read as text")
            raise TextReadError(f"Could not read token response body: {exc}") from exc
        logger.warning("Token response body did not match the expected shape")
        raise DeserializationError(text)
