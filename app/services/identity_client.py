"""Identity provider client.

Verifies the ID tokens the frontend obtains when a user signs in, and
removes provider accounts when an admin deletes a user. Talks to the
Identity Toolkit REST API:

- ``POST /accounts:lookup?key=<api key>`` with ``{"idToken": ...}``
  resolves a token to its account.
- ``POST /projects/<project>/accounts:lookup`` and
  ``POST /projects/<project>/accounts:delete`` are admin calls
  authorized with a service access token.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class IdentityClient:
    """Client for the external identity provider."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        project_id: Optional[str] = None,
        admin_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the identity client from arguments or settings."""
        self.base_url = (base_url or settings.IDENTITY_API_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.IDENTITY_API_KEY
        self.project_id = project_id if project_id is not None else settings.IDENTITY_PROJECT_ID
        self.admin_token = admin_token if admin_token is not None else settings.IDENTITY_ADMIN_TOKEN
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    async def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        params: Optional[Dict[str, Any]] = None,
        admin: bool = False,
    ) -> httpx.Response:
        headers = {}
        if admin:
            headers["Authorization"] = f"Bearer {self.admin_token}"

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            return await client.post(
                f"{self.base_url}{path}",
                params=params,
                json=payload,
                headers=headers,
            )

    async def verify_token(self, token: str) -> str:
        """
        Verify an ID token and return the principal's email.

        Args:
            token: Bearer credential sent by the frontend

        Returns:
            Email address of the verified account

        Raises:
            UnauthorizedError: If the token is rejected or carries no email
        """
        if not self.api_key:
            logger.error("IDENTITY_API_KEY is not configured; rejecting token")
            raise UnauthorizedError("Unauthorized Access!")

        try:
            response = await self._post(
                "/accounts:lookup",
                {"idToken": token},
                params={"key": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error(f"Identity provider request failed: {e}")
            raise UnauthorizedError("Unauthorized Access!")

        if response.status_code != 200:
            logger.warning(
                f"Token rejected by identity provider ({response.status_code}): {response.text}"
            )
            raise UnauthorizedError("Unauthorized Access!")

        users = response.json().get("users") or []
        email = users[0].get("email") if users else None
        if not email:
            raise UnauthorizedError("Unauthorized Access!")

        return email.lower()

    async def delete_user(self, email: str) -> bool:
        """
        Delete the provider account registered under an email.

        Args:
            email: Account email

        Returns:
            True if an account was deleted, False if none exists

        Raises:
            httpx.HTTPStatusError: If the provider refuses the admin calls
        """
        project_path = f"/projects/{self.project_id}"

        response = await self._post(
            f"{project_path}/accounts:lookup",
            {"email": [email]},
            admin=True,
        )
        response.raise_for_status()

        users = response.json().get("users") or []
        if not users:
            logger.info(f"No identity provider account for {email}")
            return False

        local_id = users[0]["localId"]
        response = await self._post(
            f"{project_path}/accounts:delete",
            {"localId": local_id},
            admin=True,
        )
        response.raise_for_status()

        logger.info(f"Deleted identity provider account for {email}")
        return True


# Singleton instance
identity_client = IdentityClient()
