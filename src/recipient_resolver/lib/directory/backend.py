"""Directory provider backed by the wallet backend HTTP API.

Endpoints used:
    - ``GET /api/v1/app/lookup/{text}``: free text search across name services
    - ``GET /api/v1/app/account-info/{address}``: display name for one account
"""

from urllib.parse import quote

import httpx
from loguru import logger

from recipient_resolver.lib.directory.base import (
    AccountDescription,
    BaseDirectory,
    DirectoryMatch,
    DirectoryProviderError,
)

DEFAULT_BASE_URL = "https://xumm.app"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "recipient-resolver/0.1"


class BackendDirectory(BaseDirectory):
    """Directory lookups through the wallet backend."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent

    @property
    def provider_name(self) -> str:
        return "backend"

    async def lookup(self, text: str) -> list[DirectoryMatch]:
        """Search the backend directory.

        Args:
            text: Search text.  URL-encoded before being placed in the path.

        Returns:
            List of DirectoryMatch (empty when nothing matched).

        Raises:
            DirectoryProviderError: On transport or service errors.
        """
        data = await self._get(f"/api/v1/app/lookup/{quote(text, safe='')}")
        return self._parse_lookup(data)

    async def describe(self, address: str) -> AccountDescription:
        """Fetch display info for an account from the backend.

        Args:
            address: Classic address.

        Returns:
            AccountDescription with name and source (both empty if unknown).

        Raises:
            DirectoryProviderError: On transport or service errors.
        """
        data = await self._get(f"/api/v1/app/account-info/{quote(address, safe='')}")
        return self._parse_describe(data)

    async def _get(self, path: str) -> dict:
        headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(f"{self._base_url}{path}", headers=headers)
                response.raise_for_status()

            data = response.json()
        except httpx.TimeoutException as e:
            logger.warning("Directory backend timeout")
            raise DirectoryProviderError(self.provider_name, "Directory request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Directory backend HTTP error {e.response.status_code}")
            raise DirectoryProviderError(
                self.provider_name,
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Directory backend connection error")
            raise DirectoryProviderError(self.provider_name, "Connection to directory failed") from e
        except ValueError as e:
            logger.warning(f"Directory backend returned invalid JSON: {e}")
            raise DirectoryProviderError(self.provider_name, "Invalid JSON in response") from e
        except Exception as e:
            logger.exception("Directory backend unexpected error")
            raise DirectoryProviderError(self.provider_name, f"Unexpected error: {e}") from e

        if not isinstance(data, dict):
            raise DirectoryProviderError(self.provider_name, "Unexpected response shape")
        if data.get("error") is True:
            raise DirectoryProviderError(self.provider_name, "Service reported an error")
        return data

    def _parse_lookup(self, data: dict) -> list[DirectoryMatch]:
        """Parse a lookup response into DirectoryMatch objects.

        Entries without an account are skipped.  Non-numeric tags are dropped.
        """
        matches: list[DirectoryMatch] = []
        for entry in data.get("matches") or []:
            if not isinstance(entry, dict) or not entry.get("account"):
                continue
            matches.append(
                DirectoryMatch(
                    alias=str(entry.get("alias") or ""),
                    account=str(entry["account"]),
                    source=str(entry.get("source") or ""),
                    tag=_parse_tag(entry.get("tag")),
                )
            )
        return matches

    @staticmethod
    def _parse_describe(data: dict) -> AccountDescription:
        return AccountDescription(
            name=str(data.get("name") or ""),
            source=str(data.get("source") or ""),
        )


def _parse_tag(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        tag = int(str(value))
    except ValueError:
        return None
    return tag if tag >= 0 else None
