"""Authentication module for loading Qiita credentials.

This module handles loading the Qiita access token from environment variables
using python-dotenv. The token is required; the API base URL is optional and
defaults to the public Qiita endpoint.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

DEFAULT_API_URL = "https://qiita.com/api/v2"


class Credentials(NamedTuple):
    """Qiita API credentials."""
    api_url: str
    access_token: str


class Authenticator:
    """Loads and validates Qiita credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Environment variables:
        QIITA_TOKEN: Qiita personal access token (required, write_qiita scope)
        QIITA_API_URL: API base URL (optional, defaults to https://qiita.com/api/v2)

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Publishing to {creds.api_url}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Qiita credentials from environment variables.

        Returns:
            Credentials: A named tuple containing api_url and access_token

        Raises:
            InvalidCredentialsError: If QIITA_TOKEN is missing or blank
        """
        api_url = (os.getenv('QIITA_API_URL') or DEFAULT_API_URL).rstrip('/')
        access_token = os.getenv('QIITA_TOKEN')

        if not access_token or not access_token.strip():
            raise InvalidCredentialsError(
                endpoint=api_url,
                reason="QIITA_TOKEN is not set"
            )

        return Credentials(api_url=api_url, access_token=access_token.strip())
