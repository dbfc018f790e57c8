"""
Cloudflare Client Module
========================

Thin wrapper around a ``requests`` session for the Cloudflare v4 API.

Every list endpoint used by the importer answers with the same envelope::

    {"success": true, "errors": [], "messages": [], "result": [...]}

The client sends the configured credentials, checks the HTTP status and
the envelope's ``success`` flag, and hands back ``result`` as a list of
plain dictionaries.

Classes
-------
CloudflareClient
    Main client class for Cloudflare API reads.

Example
-------
>>> from cf_terraforming.core.cloudflare_client import CloudflareClient
>>>
>>> client = CloudflareClient(api_token="...")
>>> records = client.get("zones/023e105f4ecef8ad9ca31a8372d0c353/dns_records")
>>> [r["id"] for r in records]

Notes
-----
Only the first page of each listing is requested. A failed request is
not retried.

See Also
--------
requests : HTTP library used for transport.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from cf_terraforming import __version__
from cf_terraforming.core.exceptions import CloudflareAPIError, CredentialsError

# Module logger
logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "api.cloudflare.com"
API_BASE_PATH = "/client/v4"


class CloudflareClient:
    """
    Read-only Cloudflare v4 API client.

    Parameters
    ----------
    api_token : str, optional
        Scoped API token. Takes precedence over email + key.
    api_email : str, optional
        Account email for global API key authentication.
    api_key : str, optional
        Global API key, used together with ``api_email``.
    hostname : str, default="api.cloudflare.com"
        API host, for use against a proxy or a staging environment.
    timeout : int, default=30
        Request timeout in seconds.

    Attributes
    ----------
    base_url : str
        URL every request path is joined onto.

    Raises
    ------
    CredentialsError
        On first use, if neither a token nor an email + key pair was given.

    Examples
    --------
    Token authentication:

    >>> client = CloudflareClient(api_token="abc")
    >>> client.auth_method
    'token'

    Global API key authentication:

    >>> client = CloudflareClient(api_email="me@example.com", api_key="xyz")
    >>> client.auth_method
    'key'
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        api_email: Optional[str] = None,
        api_key: Optional[str] = None,
        hostname: str = DEFAULT_HOSTNAME,
        timeout: int = 30,
    ) -> None:
        """Initialize the client; no connection is made until the first request."""
        self.api_token = api_token
        self.api_email = api_email
        self.api_key = api_key
        self.hostname = hostname or DEFAULT_HOSTNAME
        self.timeout = timeout
        self.base_url = f"https://{self.hostname}{API_BASE_PATH}"

        # Lazy-loaded session
        self._session: Optional[requests.Session] = None

        logger.debug(
            f"Initialized CloudflareClient for {self.base_url} "
            f"(auth={self.auth_method or 'none'})"
        )

    @property
    def auth_method(self) -> Optional[str]:
        """``"token"``, ``"key"`` or None when no credentials are configured."""
        if self.api_token:
            return "token"
        if self.api_email and self.api_key:
            return "key"
        return None

    def _auth_headers(self) -> Dict[str, str]:
        """
        Build authentication headers for the configured credentials.

        Raises
        ------
        CredentialsError
            If no credentials are configured.
        """
        if self.auth_method == "token":
            return {"Authorization": f"Bearer {self.api_token}"}
        if self.auth_method == "key":
            return {"X-Auth-Email": self.api_email, "X-Auth-Key": self.api_key}
        raise CredentialsError(
            "Cloudflare credentials not found",
            details={
                "hint": (
                    "Set an API token with --token or CLOUDFLARE_API_TOKEN, or "
                    "--email and --key (CLOUDFLARE_EMAIL, CLOUDFLARE_API_KEY)"
                ),
            },
        )

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": f"cf-terraforming/{__version__}",
            }
        )
        session.headers.update(self._auth_headers())
        logger.debug(f"Created HTTP session for {self.base_url}")
        return session

    def url_for(self, path: str) -> str:
        """Join an API path such as ``zones/abc/dns_records`` onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Perform a GET request and return the envelope's ``result``.

        Parameters
        ----------
        path : str
            API path relative to the v4 base URL.
        params : dict, optional
            Query string parameters.

        Returns
        -------
        list of dict
            The ``result`` array. An object result is wrapped in a list and
            a null result becomes an empty list.

        Raises
        ------
        CredentialsError
            If no credentials are configured.
        CloudflareAPIError
            If the request fails, the response is not JSON, or the API
            reports an error.
        """
        url = self.url_for(path)
        logger.debug(f"GET {url} params={params or {}}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise CloudflareAPIError(
                f"Request to Cloudflare API failed: {e}",
                path=path,
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise CloudflareAPIError(
                "Cloudflare API returned a non-JSON response",
                path=path,
                status_code=response.status_code,
            )

        if not response.ok or not payload.get("success", False):
            raise CloudflareAPIError(
                self._error_message(payload, response),
                path=path,
                status_code=response.status_code,
                details={"errors": payload.get("errors", [])},
            )

        result = payload.get("result")
        if result is None:
            return []
        if isinstance(result, dict):
            return [result]
        logger.debug(f"GET {path} returned {len(result)} item(s)")
        return list(result)

    @staticmethod
    def _error_message(payload: Dict[str, Any], response: requests.Response) -> str:
        """Collapse the envelope's error list into one message."""
        errors = payload.get("errors") or []
        messages = [
            f"{err.get('code')}: {err.get('message')}" if isinstance(err, dict) else str(err)
            for err in errors
        ]
        if messages:
            return "Cloudflare API error: " + "; ".join(messages)
        return f"Cloudflare API request failed with HTTP {response.status_code}"

    def close(self) -> None:
        """Close the underlying HTTP session, if one was created."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "CloudflareClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"CloudflareClient(base_url='{self.base_url}', "
            f"auth_method={self.auth_method!r})"
        )
