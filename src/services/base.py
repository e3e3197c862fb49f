"""HTTP client for the fantasy API with caching and rate limiting."""

import hashlib
import json
import logging
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

import requests

from ..config import DEFAULT_API_BASE_URL, DEFAULT_CACHE_DIR, Settings


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for remote service errors."""

    pass


class FetchError(ServiceError):
    """Raised when a request fails."""

    pass


class NotFoundError(FetchError):
    """Raised when the requested resource does not exist."""

    pass


class AuthenticationError(FetchError):
    """Raised when the API rejects our credentials."""

    pass


class RateLimitError(ServiceError):
    """Raised when rate limit is exceeded."""

    pass


class ParseError(ServiceError):
    """Raised when a response cannot be understood."""

    pass


def _error_message(response: requests.Response) -> str:
    """Pull the most useful error message out of an error response."""
    fallback = response.reason or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    for key in ("error", "message", "detail", "title"):
        if body.get(key):
            return str(body[key])
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return ", ".join(str(e) for e in errors)
    return fallback


class ApiClient:
    """
    JSON client for the fantasy API.

    GET responses can be cached on disk; every request is rate limited
    and transport failures are mapped onto ServiceError subclasses.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        cache_dir: Optional[Path] = None,
        cache_ttl_hours: int = 1,
        rate_limit_seconds: float = 0.0,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Root URL of the API.
            access_token: Bearer token for authenticated endpoints.
            timeout: Request timeout in seconds.
            cache_dir: Directory for caching GET responses.
            cache_ttl_hours: Cache time-to-live in hours.
            rate_limit_seconds: Minimum seconds between requests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cache_dir = cache_dir or DEFAULT_CACHE_DIR
        self.cache_ttl = timedelta(hours=cache_ttl_hours)
        self.rate_limit_seconds = rate_limit_seconds
        self._last_request_time: Optional[float] = None

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "fantasy-squad-builder/1.0",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )
        if access_token:
            self._session.headers["Authorization"] = f"Bearer {access_token}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            access_token=settings.access_token,
            timeout=settings.request_timeout,
            cache_dir=settings.cache_dir,
            cache_ttl_hours=settings.cache_ttl_hours,
        )

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def _cache_key(self, url: str) -> str:
        """Generate a cache key from URL."""
        return hashlib.md5(url.encode()).hexdigest()

    def _cache_path(self, url: str) -> Path:
        """Get the cache file path for a URL."""
        return self.cache_dir / f"{self._cache_key(url)}.json"

    def _read_cache(self, url: str) -> Optional[Any]:
        """
        Read cached data if valid.

        Args:
            url: The URL to look up in cache.

        Returns:
            Cached data if valid, None otherwise.
        """
        cache_path = self._cache_path(url)
        if not cache_path.exists():
            return None

        try:
            with open(cache_path, "r") as f:
                entry = json.load(f)

            timestamp = datetime.fromisoformat(entry["timestamp"])
            if datetime.now() - timestamp < self.cache_ttl:
                return entry["data"]
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.debug("Dropping unreadable cache entry %s", cache_path)
            cache_path.unlink(missing_ok=True)

        return None

    def _write_cache(self, url: str, data: Any) -> None:
        """
        Write data to cache.

        Args:
            url: The URL being cached.
            data: The decoded JSON to cache.
        """
        cache_path = self._cache_path(url)
        entry = {
            "url": url,
            "timestamp": datetime.now().isoformat(),
            "data": data,
        }
        with open(cache_path, "w") as f:
            json.dump(entry, f)

    def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if self._last_request_time is not None:
            elapsed = time.time() - self._last_request_time
            if elapsed < self.rate_limit_seconds:
                time.sleep(self.rate_limit_seconds - elapsed)
        self._last_request_time = time.time()

    def request(self, method: str, endpoint: str, body: Any = None) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method.
            endpoint: Path below the base URL, starting with "/".
            body: JSON body for POST and PUT.

        Returns:
            Decoded JSON, or None for 204 No Content.

        Raises:
            AuthenticationError: On 401.
            NotFoundError: On 404.
            RateLimitError: On 429.
            FetchError: On any other transport or HTTP failure.
            ParseError: If the response is not valid JSON.
        """
        url = self.url(endpoint)
        self._rate_limit()
        logger.debug("%s %s", method, url)

        try:
            response = self._session.request(method, url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise FetchError(f"Request timed out: {url}")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            logger.warning("%s %s failed with HTTP %s: %s", method, url, status, message)
            if status == 401:
                raise AuthenticationError(message)
            if status == 404:
                raise NotFoundError(message)
            if status == 429:
                raise RateLimitError(f"Rate limited: {url}")
            raise FetchError(f"HTTP error {status}: {message}")
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {url} - {e}")

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}")

    def get(self, endpoint: str, use_cache: bool = False) -> Any:
        """
        GET an endpoint, optionally through the disk cache.

        Args:
            endpoint: Path below the base URL.
            use_cache: Whether to use cached data if available.
        """
        url = self.url(endpoint)
        if use_cache:
            cached = self._read_cache(url)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached

        data = self.request("GET", endpoint)

        if use_cache and data is not None:
            self._write_cache(url, data)
        return data

    def post(self, endpoint: str, body: Any) -> Any:
        return self.request("POST", endpoint, body)

    def put(self, endpoint: str, body: Any) -> Any:
        return self.request("PUT", endpoint, body)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def clear_cache(self) -> int:
        """
        Clear all cached data.

        Returns:
            Number of cache entries cleared.
        """
        count = 0
        for cache_file in self.cache_dir.glob("*.json"):
            # Validate it's a cache entry before deletion
            try:
                with open(cache_file, "r") as f:
                    entry = json.load(f)
                if not all(k in entry for k in ("url", "timestamp", "data")):
                    continue
            except (json.JSONDecodeError, IOError):
                continue
            cache_file.unlink()
            count += 1
        return count
