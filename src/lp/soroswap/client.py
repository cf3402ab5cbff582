"""Soroswap API client: indexed pair list with reserves and total shares."""

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from src.lp.exceptions import BackendError, BackendHttpError, BackendPayloadError
from src.lp.models import BackendPair
from src.lp.networks import backend_network_name, classify_network

DEFAULT_BASE_URL = "https://api.soroswap.finance"

_PAIRS = TypeAdapter(list[BackendPair])


class SoroswapApiClient:
    """Async HTTP client for the Soroswap indexing backend.

    Failures raise ``BackendError`` subclasses instead of returning empty
    data, so callers can tell "no pairs" from "backend down". No retries.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str = "",
        timeout: float = 10.0,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_all_pairs(self, passphrase: str) -> list[BackendPair]:
        """Fetch every pair the backend indexes for the given network."""
        network = backend_network_name(classify_network(passphrase))
        if network is None:
            raise BackendError(f"no Soroswap index for network {passphrase!r}")

        try:
            resp = await self._client.get("/api/pairs", params={"network": network})
        except httpx.HTTPError as e:
            logger.debug(f"[SOROSWAP] {type(e).__name__} fetching {network} pairs")
            raise BackendError(f"pair list request failed: {e}") from e

        if resp.status_code != 200:
            logger.debug(f"[SOROSWAP] HTTP {resp.status_code} for {network} pairs")
            raise BackendHttpError(resp.status_code, str(resp.request.url))

        try:
            pairs = _PAIRS.validate_python(resp.json())
        except (ValueError, ValidationError) as e:
            raise BackendPayloadError(f"malformed pair list: {e}") from e

        logger.debug(f"[SOROSWAP] {len(pairs)} {network} pairs")
        return pairs
