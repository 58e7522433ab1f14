"""Shared behaviour of the government source adapters"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from govdata.config import settings
from govdata.schemas.transaction import SearchCriteria, Source, Transaction
from govdata.sources.normalize import normalize_record

logger = logging.getLogger(__name__)


class SourceFetcher:
    """One external transaction source.

    ``fetch`` never raises: network errors, timeouts, non-2xx responses and
    malformed payloads all yield an empty list and a WARNING log line.
    Subclasses implement ``_send`` and ``_records``.
    """

    name: str = "source"
    source: Source = Source.REGISTRY
    verified_by_source: bool = False

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.source_timeout_seconds
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": settings.user_agent}

    async def _send(self, client: httpx.AsyncClient, criteria: SearchCriteria) -> httpx.Response:
        raise NotImplementedError

    def _records(self, payload: Any) -> list[Mapping[str, Any]]:
        raise NotImplementedError

    async def _request(self, criteria: SearchCriteria) -> httpx.Response:
        if self._client is not None:
            return await self._send(self._client, criteria)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._send(client, criteria)

    def normalize(self, payload: Any) -> list[Transaction]:
        """Normalize a decoded payload. Bad records are skipped, not fatal."""
        records = self._records(payload)
        transactions: list[Transaction] = []
        for raw in records:
            if not isinstance(raw, Mapping):
                logger.warning("%s: skipping non-object record %r", self.name, raw)
                continue
            try:
                transaction = normalize_record(raw, self.source, verified_by_source=self.verified_by_source)
            except (TypeError, ValueError, ArithmeticError) as exc:
                logger.warning("%s: skipping malformed record: %s", self.name, exc)
                continue
            if transaction is not None:
                transactions.append(transaction)
        return transactions

    async def fetch(self, criteria: SearchCriteria) -> list[Transaction]:
        try:
            response = await asyncio.wait_for(self._request(criteria), timeout=self.timeout)
            if not response.is_success:
                logger.warning("%s API non-OK response: %d", self.name, response.status_code)
                return []
            transactions = self.normalize(response.json())
        except Exception as exc:
            logger.warning("%s API error: %r", self.name, exc)
            return []

        logger.debug("  %s API: %d transactions", self.name, len(transactions))
        return transactions
