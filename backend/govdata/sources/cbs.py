"""Central Bureau of Statistics adapter"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from govdata.config import settings
from govdata.schemas.transaction import SearchCriteria, Source
from govdata.sources.base import SourceFetcher


class CbsFetcher(SourceFetcher):
    """GET {base}/real-estate-data → {"data": [...]}"""

    name = "CBS"
    source = Source.STATISTICS_BUREAU

    def __init__(self, base_url: str | None = None, **kwargs: Any) -> None:
        super().__init__(base_url or settings.cbs_base_url, **kwargs)

    async def _send(self, client: httpx.AsyncClient, criteria: SearchCriteria) -> httpx.Response:
        return await client.get(f"{self.base_url}/real-estate-data", headers=self.headers)

    def _records(self, payload: Any) -> list[Mapping[str, Any]]:
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            return []
        return payload["data"]
