"""API key validation against the PowerOn Pipelines license server."""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import aiohttp

from ..config.settings import LicenseSettings
from ..utils.logging import get_logger
from .errors import SymitarSyncError

# Generous enough to cover cold starts on the license server
LICENSE_REQUEST_TIMEOUT_SECONDS = 30.0

MAX_LICENSE_ATTEMPTS = 3

BASE_RETRY_DELAY_SECONDS = 0.5
MAX_RETRY_DELAY_SECONDS = 10.0

LICENSE_PORT = 443
LICENSE_PRODUCT = "poweron-pipelines"


def retry_delay(attempt: int) -> float:
    """Backoff before the attempt following ``attempt`` (1-based)."""
    return min(BASE_RETRY_DELAY_SECONDS * (2 ** (attempt - 1)), MAX_RETRY_DELAY_SECONDS)


def is_subscription_response(data: Any) -> bool:
    """Check the structure of a subscription lookup payload."""
    return (
        isinstance(data, dict)
        and isinstance(data.get("isFound"), bool)
        and isinstance(data.get("subscriptions"), list)
    )


class LicenseValidator:
    """Validates an API key for an active PowerOn Pipelines subscription."""

    def __init__(
        self,
        stage_prefix: str = "",
        is_sandbox: bool = False,
        request_timeout: float = LICENSE_REQUEST_TIMEOUT_SECONDS,
        max_attempts: int = MAX_LICENSE_ATTEMPTS,
        session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """Initialize the validator.

        Args:
            stage_prefix: Prefix for staged license hosts, empty in production
            is_sandbox: Target the sandbox license server
            request_timeout: Deadline for each attempt, in seconds
            max_attempts: Attempts before a connection failure is raised
            session_factory: Creates the HTTP session used for all attempts
            sleep: Awaitable used for backoff between attempts
        """
        self.stage_prefix = stage_prefix
        self.is_sandbox = is_sandbox
        self.request_timeout = request_timeout
        self.max_attempts = max_attempts
        self._session_factory = session_factory
        self._sleep = sleep
        self.logger = get_logger(self.__class__.__name__)

    @classmethod
    def from_settings(cls, settings: LicenseSettings, **kwargs) -> "LicenseValidator":
        return cls(
            stage_prefix=settings.sst_stage_prefix,
            is_sandbox=settings.is_sandbox,
            request_timeout=settings.request_timeout_seconds,
            max_attempts=settings.max_attempts,
            **kwargs
        )

    @property
    def host(self) -> str:
        sandbox = ".libum-sandbox" if self.is_sandbox else ""
        return f"{self.stage_prefix}license{sandbox}.libum.io"

    @property
    def url(self) -> str:
        return f"https://{self.host}/subscriptionsByApiKey?product={LICENSE_PRODUCT}"

    async def validate(self, api_key: str) -> None:
        """Validate ``api_key``.

        Raises:
            SymitarSyncError: authentication kind when the key is missing,
                unknown or has no active subscription (never retried);
                connection kind when the server could not be reached
                within ``max_attempts`` attempts
        """
        self.logger.info("Validating API key")

        if not api_key or not api_key.strip():
            self.logger.error(
                "No API key provided. Please make sure 'apiKey' is set properly in your workflow."
            )
            raise SymitarSyncError.authentication("PowerOn Pipelines API Key is missing", api_key or "", "")

        last_error: Optional[BaseException] = None

        async with self._session_factory() as session:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    await self._check_subscription(session, api_key)
                    self.logger.info("API key validation successful", attempt=attempt)
                    return

                except SymitarSyncError as e:
                    self.logger.error(
                        "Validation attempt failed",
                        attempt=attempt,
                        outcome="terminal",
                        error=e.message
                    )
                    raise

                except Exception as e:
                    last_error = e
                    self.logger.error(
                        "Validation attempt failed",
                        attempt=attempt,
                        outcome="retryable",
                        error=str(e) or e.__class__.__name__
                    )

                if attempt < self.max_attempts:
                    delay = retry_delay(attempt)
                    self.logger.info("Retrying API key validation", delay_seconds=delay)
                    await self._sleep(delay)

        raise SymitarSyncError.connection(
            "Failed to fetch PowerOn Pipelines API key subscription data after multiple attempts",
            host=self.host,
            port=LICENSE_PORT,
            is_ssl=True,
            original_error=last_error
        )

    async def _check_subscription(self, session: aiohttp.ClientSession, api_key: str) -> None:
        """Run one lookup and classify the response.

        The timeout is scoped to the request context and released on every
        exit path, so nothing is left pending between attempts.
        """
        headers = {
            "Content-Type": "application/json",
            "X-API-Key": api_key
        }
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)

        async with session.get(self.url, headers=headers, timeout=timeout) as response:
            if not 200 <= response.status < 300:
                self.logger.error(
                    "Failed to validate API key",
                    status=response.status,
                    reason=response.reason
                )
                raise SymitarSyncError.authentication(
                    f"Failed to validate API key: {response.status} {response.reason}",
                    api_key,
                    self.host
                )

            data = await response.json()

        if not is_subscription_response(data):
            raise SymitarSyncError.authentication(
                "Invalid response format from license server", api_key, self.host
            )

        if not data["isFound"]:
            raise SymitarSyncError.authentication(
                "Provided API key was not found. Please make sure 'apiKey' is set properly in your workflow.",
                api_key,
                self.host
            )

        if not data["subscriptions"]:
            raise SymitarSyncError.authentication(
                "No active subscription found for the provided API key.", api_key, self.host
            )
