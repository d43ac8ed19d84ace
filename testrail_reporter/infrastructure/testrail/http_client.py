"""
TestRail HTTP Client - Low-level HTTP interactions with TestRail.

This class handles only HTTP concerns for the TestRail API: authentication,
URL building, and mapping transport failures onto TransportError.
"""
import base64
from typing import Any, Dict, Optional

import requests

from ...core.exceptions import TransportError, UnsupportedMethodError
from ...core.services.metrics import get_logger

SUPPORTED_METHODS = ('get', 'post')


class TestRailHttpClient:
    """Low-level HTTP client for TestRail API v2."""
    __test__ = False

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        project_id: int,
        timeout: int = 30
    ):
        """Initialize TestRail HTTP client.

        Args:
            base_url: TestRail instance URL (e.g., "https://company.testrail.io")
            username: User name or email for basic authentication
            password: Password or API key
            project_id: Project ID sent along with every request
            timeout: Request timeout in seconds
        """
        if not base_url:
            raise ValueError("Base URL is required")
        if not username:
            raise ValueError("Username is required")
        if not password:
            raise ValueError("Password is required")

        self._base_url = base_url.rstrip('/')
        self._username = username
        self._password = password
        self._project_id = project_id
        self._timeout = timeout
        self._headers = self._create_headers()
        self._log = get_logger()

    @property
    def base_url(self) -> str:
        """Base URL for API calls."""
        return self._base_url

    @property
    def project_id(self) -> int:
        return self._project_id

    @property
    def headers(self) -> Dict[str, str]:
        """Headers for API calls."""
        return self._headers.copy()

    def _create_headers(self) -> Dict[str, str]:
        """Create authentication headers."""
        credentials = base64.b64encode(
            f"{self._username}:{self._password}".encode()
        ).decode()
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Basic {credentials}'
        }

    def _get_api_url(self, endpoint: str) -> str:
        """Get the full API URL for an endpoint."""
        return f"{self._base_url}/index.php?/api/v2/{endpoint}"

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send an authenticated request and decode the JSON body.

        The project id is always added: as a query parameter for GET,
        in the JSON body for POST.

        Args:
            method: "get" or "post" (case-insensitive)
            endpoint: API endpoint (e.g., "get_case/1")
            params: Query parameters (GET) or body fields (POST)

        Returns:
            Decoded JSON response, {} for an empty body

        Raises:
            UnsupportedMethodError: If method is not GET or POST
            TransportError: If the request fails or the body is not JSON
        """
        verb = (method or '').lower()
        if verb not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        payload = dict(params or {})
        payload['project_id'] = self._project_id
        url = self._get_api_url(endpoint)

        try:
            if verb == 'get':
                response = requests.get(
                    url,
                    headers=self._headers,
                    params=payload,
                    timeout=self._timeout
                )
            else:
                response = requests.post(
                    url,
                    headers=self._headers,
                    json=payload,
                    timeout=self._timeout
                )
            self._log.log_api_request(verb, endpoint, response.status_code)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(
                f"TestRail {verb.upper()} {endpoint} failed with status {status}",
                status_code=status,
                url=url
            ) from e
        except requests.RequestException as e:
            raise TransportError(
                f"TestRail {verb.upper()} {endpoint} failed: {e}",
                url=url
            ) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"TestRail {verb.upper()} {endpoint} returned a non-JSON body",
                status_code=response.status_code,
                url=url
            ) from e

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make GET request to TestRail API."""
        return self.request('get', endpoint, params)

    def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make POST request to TestRail API."""
        return self.request('post', endpoint, data)
