"""API wrapper for the Qiita v2 REST API.

This module wraps a requests Session and provides error translation from
HTTP exceptions to our typed exception hierarchy. Only the two write
operations the sync tool needs are exposed: item creation and item update.
Writes are never retried; a failed write surfaces immediately.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

import requests
from requests.exceptions import (
    ConnectionError,
    ConnectTimeout,
    ReadTimeout,
    RequestException,
    Timeout,
)

from .auth import Credentials
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    ItemNotFoundError,
)

logger = logging.getLogger(__name__)

# Seconds before a request is abandoned
API_TIMEOUT = 30


class APIWrapper:
    """Thin wrapper around the Qiita items endpoints with error translation.

    This class:
    1. Sends authenticated JSON requests with a bearer token
    2. Translates HTTP and transport errors to typed exceptions
    3. Keeps the server's error payload so operators can see why a write failed

    Example:
        >>> creds = Authenticator().get_credentials()
        >>> api = APIWrapper(creds)
        >>> item = api.create_item({"title": "Hello", "body": "...", ...})
        >>> api.update_item(item["id"], {...})
    """

    def __init__(self, credentials: Credentials, session: Optional[requests.Session] = None):
        """Initialize the API wrapper with credentials.

        Args:
            credentials: Credentials loaded once at startup
            session: Optional pre-built session (created lazily if omitted)
        """
        self._credentials = credentials
        self._session = session

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session carrying the auth headers."""
        if self._session is None:
            self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {self._credentials.access_token}",
            "Content-Type": "application/json",
        })
        return self._session

    def _validate_item_id(self, item_id: str) -> None:
        """Validate that an item ID is safe to place in a URL path.

        Args:
            item_id: The item ID to validate

        Raises:
            ValueError: If item_id is empty or contains non-alphanumeric characters
        """
        if item_id is None or not str(item_id).strip():
            raise ValueError("item_id cannot be empty")

        if not re.match(r'^[A-Za-z0-9]+$', str(item_id).strip()):
            raise ValueError(
                f"Invalid item_id format: '{item_id}'. "
                f"Item IDs must contain only alphanumeric characters."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens and token-like values in error text.

        Example:
            >>> api._sanitize_credentials("Authorization: Bearer abc123")
            "Authorization: ***REDACTED***"
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(access_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        token = self._credentials.access_token
        if token:
            sanitized = sanitized.replace(token, '***REDACTED***')

        return sanitized

    @staticmethod
    def _extract_payload(response: Optional[requests.Response]) -> Any:
        """Return the server's error payload (JSON if possible, else text)."""
        if response is None:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text or None

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate requests exceptions to typed Qiita exceptions.

        Args:
            exception: The original exception raised by requests
            operation: Description of the operation that failed

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectTimeout, ReadTimeout, ConnectionError)):
            return APIUnreachableError(
                endpoint=self._credentials.api_url,
                reason=self._sanitize_credentials(str(exception)),
            )

        response = getattr(exception, 'response', None)
        status_code = getattr(response, 'status_code', None)

        payload = self._extract_payload(response)
        if payload is not None:
            detail = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
        else:
            detail = str(exception)
        detail = self._sanitize_credentials(detail)

        if status_code == 401:
            return InvalidCredentialsError(
                endpoint=self._credentials.api_url,
                reason=f"rejected by server (HTTP 401) {detail}",
                payload=payload,
            )

        if status_code == 404:
            item_id = "unknown"
            match = re.search(r'\(([^)]+)\)', operation)
            if match:
                item_id = match.group(1)
            return ItemNotFoundError(item_id=item_id, detail=detail, payload=payload)

        if status_code is not None:
            message = f"Qiita API failure during {operation}: HTTP {status_code} {detail}"
        else:
            message = f"Qiita API failure during {operation}: {detail}"

        logger.error(message)
        return APIAccessError(message, status_code=status_code, payload=payload)

    def _request(
        self,
        method: str,
        path: str,
        payload: Dict[str, Any],
        operation: str,
    ) -> Dict[str, Any]:
        """Send one JSON request and decode the JSON response.

        Raises:
            InvalidCredentialsError: If the token is rejected
            ItemNotFoundError: If the addressed item doesn't exist
            APIUnreachableError: If the API is unreachable or times out
            APIAccessError: For any other non-2xx response or malformed body
        """
        url = f"{self._credentials.api_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self._get_session().request(
                method,
                url,
                json=payload,
                timeout=API_TIMEOUT,
            )
            response.raise_for_status()
        except RequestException as e:
            raise self._translate_error(e, operation) from e

        try:
            data = response.json()
        except ValueError as e:
            raise APIAccessError(
                f"Qiita API returned a non-JSON response during {operation}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise APIAccessError(
                f"Qiita API returned an unexpected response during {operation}",
                status_code=response.status_code,
                payload=data,
            )
        return data

    def create_item(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new item.

        Args:
            payload: Item payload (body, private, tags, title)

        Returns:
            Dict containing the created item (id, created_at, updated_at, ...)

        Raises:
            InvalidCredentialsError: If credentials are invalid
            APIUnreachableError: If API is unreachable
            APIAccessError: If the server rejects the item
        """
        return self._request("POST", "/items", payload, "create_item")

    def update_item(self, item_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Update an existing item in place.

        Args:
            item_id: The Qiita item ID
            payload: Item payload (body, private, tags, title)

        Returns:
            Dict containing the updated item (updated_at, ...)

        Raises:
            ValueError: If item_id is malformed
            InvalidCredentialsError: If credentials are invalid
            ItemNotFoundError: If the item doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If the server rejects the update
        """
        self._validate_item_id(item_id)
        item_id = str(item_id).strip()
        return self._request("PATCH", f"/items/{item_id}", payload, f"update_item({item_id})")
