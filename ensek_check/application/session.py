"""Login/reset helpers shared by every ENSEK check."""

from __future__ import annotations

from ensek_check.client import EnsekApiClient
from ensek_check.runtime import EnsekSettings, get_logger

logger = get_logger(__name__)


class AuthenticationError(RuntimeError):
    """Raised when a bearer token cannot be obtained."""


class EnsekSession:
    """Holds a client and the credentials used to authenticate it."""

    def __init__(self, client: EnsekApiClient, settings: EnsekSettings) -> None:
        self.client = client
        self.settings = settings

    @property
    def bearer_token(self) -> str | None:
        return self.client.bearer_token

    def login_and_set_bearer_token(self) -> bool:
        """Log in with the configured credentials and keep the returned token.

        Returns:
            True if a token was obtained, False otherwise.
        """
        result = self.client.login(self.settings.username, self.settings.password)
        token = result.access_token
        if result.is_success and token:
            self.client.set_bearer_token(token)
            logger.info("Login successful - bearer token captured (%d characters)", len(token))
            return True

        if result.is_unauthorized:
            logger.warning("Login failed - 401 Unauthorized, check ENSEK_USERNAME/ENSEK_PASSWORD: %s", result.error_message)
        else:
            logger.warning("Login failed - HTTP %s: %s", result.status_code, result.error_message)
        return False

    def ensure_bearer_token(self) -> str:
        """Return the current token, logging in first when there is none.

        Raises:
            AuthenticationError: If login does not produce a token.
        """
        if not self.client.bearer_token:
            logger.info("Bearer token not available - performing login")
            if not self.login_and_set_bearer_token():
                raise AuthenticationError("Failed to obtain Bearer token - login failed")
        token = self.client.bearer_token
        assert token is not None
        return token

    def reset_test_data(self) -> bool:
        """Reset the remote test data, logging in first if needed.

        Returns:
            True if the reset succeeded, False otherwise.
        """
        if not self.client.bearer_token and not self.login_and_set_bearer_token():
            logger.warning("Cannot reset - login failed")
            return False

        result = self.client.reset()
        if result.is_success:
            description = result.data.description if result.data else None
            logger.info("Reset successful: %s", description or "No description provided")
            return True

        if result.is_unauthorized:
            logger.warning("Reset failed - 401 Unauthorized, bearer token might be invalid or expired")
        else:
            logger.warning("Reset failed - HTTP %s: %s", result.status_code, result.error_message)
        return False
