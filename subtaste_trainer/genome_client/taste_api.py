"""
Taste API client: async HTTP adapter for the genome engine.

Responsibilities:
- Map GenomePort operations onto the /api/genome routes.
- Attach the Bearer token and profileId on every call.
- Raise TasteApiError on non-2xx responses; transport errors (timeouts,
  connection failures) propagate as httpx exceptions. No retries here: the
  trainer surfaces failures to the user instead.
"""

from __future__ import annotations

from typing import Any

import httpx

from subtaste_trainer.config.settings import TrainerSettings
from subtaste_trainer.core.exceptions import TasteApiError
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)

GENOME_PATH = "/api/genome"


class TasteApiClient:
    """
    Async client for the taste/genome API.

    Use as an async context manager so the underlying connection pool is closed:

        async with TasteApiClient.from_settings(get_settings()) as client:
            genome = await client.get_genome(profile_id)
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout_sec: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API origin, e.g. http://localhost:5000.
            token: Optional Bearer token.
            timeout_sec: Per-request timeout.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        if not base_url.strip():
            raise ValueError("base_url must be non-empty")
        if timeout_sec <= 0:
            raise ValueError("timeout_sec must be positive")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout_sec),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: TrainerSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> TasteApiClient:
        return cls(
            settings.api_url,
            token=settings.api_token,
            timeout_sec=settings.request_timeout_sec,
            transport=transport,
        )

    async def __aenter__(self) -> TasteApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one call; raise TasteApiError on an error status or a non-object body."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        resp = await self._client.request(method, path, params=params, json=json)
        if resp.is_error:
            detail = resp.text
            if resp.headers.get("content-type", "").startswith("application/json"):
                try:
                    body = resp.json()
                    detail = body.get("error") or body.get("detail") or detail
                except ValueError:
                    pass
            logger.warning(
                "taste_api_error",
                method=method,
                path=path,
                status_code=resp.status_code,
                detail=str(detail)[:200],
            )
            raise TasteApiError(f"API error: {detail}", status_code=resp.status_code, path=path)
        try:
            data = resp.json()
        except ValueError as e:
            raise TasteApiError("API returned a non-JSON body", status_code=resp.status_code, path=path) from e
        if not isinstance(data, dict):
            raise TasteApiError("API returned a non-object body", status_code=resp.status_code, path=path)
        return data

    async def get_genome(self, profile_id: str | None) -> dict[str, Any]:
        return await self._request("GET", GENOME_PATH, params={"profileId": profile_id})

    async def submit_signal(
        self,
        signal_type: str,
        option_id: str | None,
        payload: dict[str, Any],
        profile_id: str | None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": signal_type,
            "value": option_id,
            "metadata": payload,
        }
        if profile_id:
            body["profileId"] = profile_id
        ack = await self._request("POST", f"{GENOME_PATH}/signal", json=body)
        logger.debug(
            "taste_api_signal_submitted",
            signal_type=signal_type,
            option_id=option_id,
            set_id=payload.get("setId"),
        )
        return ack

    async def get_signals(self, profile_id: str | None, limit: int) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"{GENOME_PATH}/signals",
            params={"profileId": profile_id, "limit": int(limit)},
        )

    async def get_archetype_catalog(self) -> dict[str, Any]:
        return await self._request("GET", f"{GENOME_PATH}/archetypes")

    async def get_gamification(self, profile_id: str | None) -> dict[str, Any]:
        return await self._request("GET", f"{GENOME_PATH}/gamification", params={"profileId": profile_id})

    async def recompute_genome(self, profile_id: str | None) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if profile_id:
            body["profileId"] = profile_id
        return await self._request("POST", f"{GENOME_PATH}/recompute", json=body)

    async def get_raw_genome(self, profile_id: str | None) -> dict[str, Any]:
        return await self._request("GET", f"{GENOME_PATH}/raw", params={"profileId": profile_id})
