"""Loading of access-token credentials.

Interactive OAuth flows belong to the editing application. For scripts and
server-side use, this module loads a personal access token from environment
variables using python-dotenv.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


TOKEN_ENV_VAR = 'AZURE_DEVOPS_TOKEN'


class Credentials(NamedTuple):
    """Access token credentials passed to AzureBackend.authenticate()."""
    token: str
    refresh_token: Optional[str] = None


class Authenticator:
    """Loads an access token from the environment.

    The token is read from AZURE_DEVOPS_TOKEN after loading a .env file. It is
    never cached or logged.

    Example:
        >>> creds = Authenticator().get_credentials()
        >>> backend.authenticate(creds)
    """

    def __init__(self, api_root: str = "https://dev.azure.com"):
        self.api_root = api_root
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Return the token credentials.

        Raises:
            InvalidCredentialsError: If the token variable is missing or empty
        """
        token = os.getenv(TOKEN_ENV_VAR)
        if not token:
            raise InvalidCredentialsError(endpoint=self.api_root)
        return Credentials(token=token)
