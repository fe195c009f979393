"""Read-only client for the public block-explorer API."""
import asyncio
import logging
import re

import httpx

from prediction_market.chain.models import (DEFAULT_PROGRAM_ID,
                                            ChainMarketState,
                                            TransactionStatus)
from prediction_market.chain.transactions import format_field

logger = logging.getLogger(__name__)

_U64_VALUE = re.compile(r"(\d+)u64")
_FIELD_VALUE = re.compile(r"(\d+)field")


def parse_u64(value: str | None) -> int:
    """Extract the integer from a mapping value like "1500u64"; 0 if absent."""
    if not value:
        return 0
    match = _U64_VALUE.search(value)
    return int(match.group(1)) if match else 0


def parse_field(value: str | None) -> str | None:
    """Extract the digits from a mapping value like "42field"; None if absent."""
    if not value:
        return None
    match = _FIELD_VALUE.search(value)
    return match.group(1) if match else None


class ExplorerClient:
    """Polls the explorer for program mappings and transaction state.

    Holds no keys and verifies nothing; values are whatever the explorer
    reports. Mapping keys for a market are its id as a field literal.
    """

    DEFAULT_BASE_URL = "https://api.explorer.provable.com/v2/testnet"

    def __init__(
        self,
        base_url: str | None = None,
        program_id: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the explorer client.

        Args:
            base_url: Explorer API root. Defaults to the public testnet endpoint.
            program_id: Program whose mappings are read.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self._program_id = program_id or DEFAULT_PROGRAM_ID
        self._client = httpx.AsyncClient(
            base_url=base_url or self.DEFAULT_BASE_URL,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def program_id(self) -> str:
        return self._program_id

    async def get_mapping_value(self, mapping_name: str, key: str) -> str | None:
        """Fetch one mapping entry as text.

        Args:
            mapping_name: Program mapping, e.g. "market_volumes".
            key: Mapping key literal, e.g. "42field".

        Returns:
            The raw value with surrounding JSON quotes removed, or None when the
            key has no entry (explorer 404 or null body).

        Raises:
            httpx.HTTPStatusError: On any other non-2xx response.
        """
        response = await self._client.get(
            f"/program/{self._program_id}/mapping/{mapping_name}/{key}"
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        value = response.text.strip().strip('"')
        return None if value in ("", "null") else value

    async def get_market_volume(self, market_id: str) -> int:
        return parse_u64(await self.get_mapping_value("market_volumes", format_field(market_id)))

    async def get_market_participants(self, market_id: str) -> int:
        return parse_u64(
            await self.get_mapping_value("market_participants", format_field(market_id))
        )

    async def is_market_resolved(self, market_id: str) -> bool:
        value = await self.get_mapping_value("market_resolved", format_field(market_id))
        return value == "true"

    async def get_winning_outcome(self, market_id: str) -> str | None:
        return parse_field(
            await self.get_mapping_value("winning_outcomes", format_field(market_id))
        )

    async def get_market_state(self, market_id: str) -> ChainMarketState:
        """Read all public mappings for a market concurrently."""
        volume, participants, resolved, winning = await asyncio.gather(
            self.get_market_volume(market_id),
            self.get_market_participants(market_id),
            self.is_market_resolved(market_id),
            self.get_winning_outcome(market_id),
        )
        return ChainMarketState(
            market_id=market_id,
            volume=volume,
            participants=participants,
            resolved=resolved,
            winning_outcome=winning,
        )

    async def get_transaction_status(self, transaction_id: str) -> TransactionStatus:
        """Report where a transaction stands.

        An unknown transaction (404) is still pending; any other failure to
        read it is reported as unknown rather than raised.
        """
        try:
            response = await self._client.get(f"/transaction/{transaction_id}")
        except httpx.RequestError as exc:
            logger.warning("Explorer request for transaction %s failed: %s", transaction_id, exc)
            return TransactionStatus.UNKNOWN
        if response.status_code == 404:
            return TransactionStatus.PENDING
        if not response.is_success:
            logger.warning(
                "Explorer returned %s for transaction %s", response.status_code, transaction_id
            )
            return TransactionStatus.UNKNOWN
        try:
            data = response.json()
        except ValueError:
            logger.warning("Explorer returned a non-JSON body for transaction %s", transaction_id)
            return TransactionStatus.UNKNOWN
        status = data.get("status") if isinstance(data, dict) else None
        if status == "accepted":
            return TransactionStatus.CONFIRMED
        if status == "rejected":
            return TransactionStatus.FAILED
        return TransactionStatus.PENDING

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ExplorerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
