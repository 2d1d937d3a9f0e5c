"""
Async client for the scoring/configuration service.

The service is a plain JSON HTTP API:
- GET  /board           -> {"bottom": [...], "left": [...], "top": [...], "right": [...]}
- GET  /countries       -> [{"ES": "Spain"}, ...]
- GET  /ranking         -> [{"nick_name": ..., "score": ..., "country_code": ...}, ...]
- POST /score-recorder  -> acknowledgement

Transport and HTTP status failures are raised as ``NetworkError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from hotseat.exceptions import NetworkError
from hotseat.settings import ServiceSettings, get_service_settings

logger = logging.getLogger(__name__)


class Country(BaseModel):
    code: str
    name: str


class ScoreEntry(BaseModel):
    nick_name: str
    score: int
    country_code: Optional[str] = None


class BoardPayload(BaseModel):
    bottom: List[Dict[str, Any]] = Field(default_factory=list)
    left: List[Dict[str, Any]] = Field(default_factory=list)
    top: List[Dict[str, Any]] = Field(default_factory=list)
    right: List[Dict[str, Any]] = Field(default_factory=list)


def parse_countries(payload: Any) -> List[Country]:
    """
    Accept either single-key objects ({"ES": "Spain"}) or explicit
    {"code": ..., "name": ...} records.
    """
    countries: List[Country] = []
    for item in payload or []:
        if not isinstance(item, dict) or not item:
            continue
        if "code" in item:
            countries.append(Country(code=str(item["code"]), name=str(item.get("name", item["code"]))))
        else:
            code = next(iter(item))
            countries.append(Country(code=str(code), name=str(item[code])))
    return countries


class ScoreService:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    Usable as an async context manager; a client passed in by the caller is
    left open on exit.
    """

    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_service_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_seconds,
        )

    async def __aenter__(self) -> "ScoreService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"{method} {path} returned invalid JSON: {e}") from e

    async def fetch_board(self) -> Dict[str, List[Dict[str, Any]]]:
        """Fetch the raw board bands."""
        data = await self._request("GET", "/board")
        try:
            return BoardPayload.model_validate(data or {}).model_dump()
        except ValidationError as e:
            raise NetworkError(f"Malformed board payload: {e}") from e

    async def fetch_countries(self) -> List[Country]:
        return parse_countries(await self._request("GET", "/countries"))

    async def fetch_ranking(self) -> List[ScoreEntry]:
        data = await self._request("GET", "/ranking")
        try:
            return [ScoreEntry.model_validate(row) for row in data or []]
        except ValidationError as e:
            raise NetworkError(f"Malformed ranking payload: {e}") from e

    async def submit_score(self, nick_name: str, score: int, country_code: Optional[str]) -> Any:
        """Record one final score."""
        entry = ScoreEntry(nick_name=nick_name, score=score, country_code=country_code)
        ack = await self._request("POST", "/score-recorder", json=entry.model_dump())
        logger.info(f"Score registered for {nick_name}: {score}")
        return ack
