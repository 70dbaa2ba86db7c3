"""Exceptions raised while acquiring a Portal access token."""


class PortalError(Exception):
    """Base class for every token acquisition failure."""


class ConfigurationError(PortalError):
    """The token endpoint or the credentials could not be configured."""


class TransportError(PortalError):
    """The token request could not be sent or no response was received."""


class ServerError(PortalError):
    """The token endpoint answered with a status other than 200 OK.

    Only the status code is kept; the response body is never read.
    """

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Token endpoint returned status code: {status_code}")


class DeserializationError(PortalError):
    """The token endpoint answered 200 OK with an unexpected body."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__("Token response body is not a valid access token payload")


class TextReadError(PortalError):
    """The raw response body could not be read as text."""
