"""
HTTP client for retrieving the releases page, with retries on transient failures
"""
import logging
from typing import Optional

import httpx
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from studio_releases.core.config import (
    ANDROID_STUDIO_RELEASES_LIST,
    APP_USER_AGENT,
    Settings,
    get_settings,
)
from studio_releases.core.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
MAX_RETRIES = 2


class _ServerError(Exception):
    """5xx response, retried like a transport failure"""

    def __init__(self, response: httpx.Response):
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


class HTTPClient:
    """Synchronous HTTP client with a fixed user agent and bounded retries"""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize client.

        Args:
            user_agent: User-Agent header sent with every request
            timeout: Request timeout in seconds
            max_retries: Retries after the first attempt for transient failures
            transport: Optional httpx transport (used by tests)
        """
        self.user_agent = user_agent or APP_USER_AGENT
        self.timeout = httpx.Timeout(timeout if timeout is not None else DEFAULT_TIMEOUT)
        self.max_retries = MAX_RETRIES if max_retries is None else max_retries
        self.transport = transport
        self.wait = wait_exponential(multiplier=0.5, min=0.5, max=8)

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> 'HTTPClient':
        return cls(
            user_agent=settings.user_agent,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            transport=transport,
        )

    def get_text(self, url: str) -> str:
        """
        GET a URL and return the decoded response body.

        Transport errors and 5xx responses are retried with exponential backoff;
        any other non-2xx status fails immediately.

        Raises:
            FetchError: If the page could not be retrieved
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self.wait,
            retry=retry_if_exception_type((httpx.TransportError, _ServerError)),
            reraise=False,
        )

        try:
            response = retrying(self._get, url)
        except RetryError as e:
            last = e.last_attempt.exception()
            if isinstance(last, _ServerError):
                raise FetchError(url, last.response.reason_phrase or "server error",
                                 status_code=last.response.status_code) from last
            raise FetchError(url, str(last) or last.__class__.__name__) from last
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or e.__class__.__name__) from e

        if response.status_code >= 400:
            raise FetchError(url, response.reason_phrase or "request failed",
                             status_code=response.status_code)

        logger.info(f"[net] GET {url} -> {response.status_code} ({len(response.content)} bytes)")
        return response.text

    def _get(self, url: str) -> httpx.Response:
        headers = {"User-Agent": self.user_agent}
        with httpx.Client(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True
        ) as client:
            response = client.get(url, headers=headers)

        if response.status_code >= 500:
            logger.warning(f"[net] Server error {response.status_code} for {url}")
            raise _ServerError(response)
        return response


def build_releases_url(base: Optional[str] = None) -> httpx.URL:
    """
    Build the release list URL.

    Raises:
        FetchError: If the address is not an absolute http(s) URL
    """
    raw = base or ANDROID_STUDIO_RELEASES_LIST
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        raise FetchError(raw, f"invalid URL: {e}") from e

    if url.scheme not in ('http', 'https') or not url.host:
        raise FetchError(raw, "URL must be absolute http(s)")
    return url


def fetch_releases(settings: Optional[Settings] = None,
                   transport: Optional[httpx.BaseTransport] = None) -> str:
    """Fetch the releases list page configured in settings."""
    settings = settings or get_settings()
    url = build_releases_url(settings.releases_url)
    client = HTTPClient.from_settings(settings, transport=transport)
    return client.get_text(str(url))
