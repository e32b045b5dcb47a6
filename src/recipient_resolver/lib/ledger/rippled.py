"""Ledger info from a JSON-RPC ledger node plus the backend account advisory.

The node answers ``account_info`` for existence and account flags; the
advisory endpoint (``GET /api/v1/app/account-advisory/{address}``) answers
the fraud risk tier and may force a destination tag requirement.
"""

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from recipient_resolver.lib.ledger.base import (
    BaseLedgerInfoSource,
    DestinationInfo,
    LedgerProviderError,
    RiskLevel,
)

DEFAULT_NODE_URL = "https://xrplcluster.com"
DEFAULT_ADVISORY_URL = "https://xumm.app"
DEFAULT_TIMEOUT = 10.0

# AccountRoot flag: incoming payments must carry a destination tag
LSF_REQUIRE_DEST_TAG = 0x00020000

_ACCOUNT_NOT_FOUND = "actNotFound"

_DANGER_TO_RISK: dict[str, RiskLevel] = {
    "PROBABLE": RiskLevel.PROBABLE,
    "HIGH_PROBABILITY": RiskLevel.HIGH_PROBABILITY,
    "CONFIRMED": RiskLevel.CONFIRMED,
}


class RippledLedgerInfoSource(BaseLedgerInfoSource):
    """Combines node ``account_info`` with the backend advisory."""

    def __init__(
        self,
        node_url: str = DEFAULT_NODE_URL,
        advisory_url: str = DEFAULT_ADVISORY_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._node_url = node_url
        self._advisory_url = advisory_url.rstrip("/")
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "rippled"

    async def get_destination_info(self, address: str) -> DestinationInfo:
        """Fetch existence, tag requirement and risk for an address.

        Args:
            address: Classic address.

        Returns:
            DestinationInfo for the address.

        Raises:
            LedgerProviderError: If either the node or the advisory fails.
        """
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            account = await self._account_info(client, address)
            advisory = await self._advisory(client, address)

        exists = account is not None
        flags = int(account.get("Flags", 0)) if account else 0
        requires_tag = bool(flags & LSF_REQUIRE_DEST_TAG) or bool(advisory.get("force_dtag"))
        risk = self._map_risk(advisory.get("danger"))

        return DestinationInfo(exists=exists, requires_tag=requires_tag, risk=risk)

    async def _account_info(self, client: httpx.AsyncClient, address: str) -> dict[str, Any] | None:
        """Return the AccountRoot fields, or None if the account does not exist."""
        payload = {
            "method": "account_info",
            "params": [{"account": address, "ledger_index": "validated"}],
        }
        data = await self._request(client, "POST", self._node_url, json=payload)
        result = data.get("result")
        if not isinstance(result, dict):
            raise LedgerProviderError(self.provider_name, "Missing result in account_info response")

        if result.get("error") == _ACCOUNT_NOT_FOUND:
            return None
        if result.get("error"):
            raise LedgerProviderError(self.provider_name, f"Node reported error: {result['error']}")

        account = result.get("account_data")
        if not isinstance(account, dict):
            raise LedgerProviderError(self.provider_name, "Missing account_data in account_info response")
        return account

    async def _advisory(self, client: httpx.AsyncClient, address: str) -> dict[str, Any]:
        url = f"{self._advisory_url}/api/v1/app/account-advisory/{quote(address, safe='')}"
        return await self._request(client, "GET", url)

    async def _request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.warning("Ledger info request timed out")
            raise LedgerProviderError(self.provider_name, "Ledger info request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Ledger info HTTP error {e.response.status_code}")
            raise LedgerProviderError(
                self.provider_name,
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Ledger info connection error")
            raise LedgerProviderError(self.provider_name, "Connection to ledger info provider failed") from e
        except ValueError as e:
            logger.warning(f"Ledger info returned invalid JSON: {e}")
            raise LedgerProviderError(self.provider_name, "Invalid JSON in response") from e
        except Exception as e:
            logger.exception("Ledger info unexpected error")
            raise LedgerProviderError(self.provider_name, f"Unexpected error: {e}") from e

        if not isinstance(data, dict):
            raise LedgerProviderError(self.provider_name, "Unexpected response shape")
        return data

    @staticmethod
    def _map_risk(danger: object) -> RiskLevel:
        """Map the advisory ``danger`` value to a RiskLevel (unknown values mean none)."""
        if not isinstance(danger, str):
            return RiskLevel.NONE
        return _DANGER_TO_RISK.get(danger.upper(), RiskLevel.NONE)
