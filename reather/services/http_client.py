"""HTTP client shared by all remote services"""
from typing import Any, Dict, Optional
import logging

import requests

from reather.models.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Longest slice of an error body quoted back to the user
ERROR_BODY_LIMIT = 500


class ServiceError(Exception):
    """Base class for failures talking to a remote service"""


class NetworkError(ServiceError):
    """The request never produced a response"""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Network error: {cause}. Please check your internet connection.")
        self.url = url
        self.cause = cause


class ApiError(ServiceError):
    """The service answered with an error status or an unusable body"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(f"API error: {message}")
        self.status_code = status_code


class HttpClient:
    """Thin wrapper over a requests session: one GET per call, no retries"""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, timeout: float = 15.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize HTTP client

        Args:
            user_agent: User-Agent header sent with every request
            timeout: Per-request timeout in seconds
            session: Existing session to reuse (a new one is created otherwise)
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None,
             headers: Optional[Dict[str, str]] = None) -> requests.Response:
        logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Request to {url} failed: {e}")
            raise NetworkError(url, e) from e

        if not response.ok:
            body = response.text[:ERROR_BODY_LIMIT] if response.text else "Failed to read error body"
            raise ApiError(
                f"Request failed (Status: {response.status_code}). URL: {url}. Details: {body}",
                status_code=response.status_code
            )
        return response

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a URL and decode its JSON body

        Raises:
            NetworkError: On connection failure or timeout
            ApiError: On a non-2xx status or a body that is not JSON
        """
        response = self._get(url, params=params, headers={'Accept': 'application/geo+json, application/json'})
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Failed to parse JSON response (URL: {url}): {e}") from e

    def get_bytes(self, url: str) -> bytes:
        """GET a URL and return the raw body"""
        return self._get(url).content

    def close(self) -> None:
        self.session.close()
