"""nadlan.gov.il transaction registry adapter"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from govdata.config import settings
from govdata.schemas.transaction import SearchCriteria, Source
from govdata.sources.base import SourceFetcher


class NadlanFetcher(SourceFetcher):
    """GET {base}/transactions/search → {"results": [...]}"""

    name = "Nadlan"
    source = Source.REGISTRY

    def __init__(self, base_url: str | None = None, **kwargs: Any) -> None:
        super().__init__(base_url or settings.nadlan_base_url, **kwargs)

    def build_params(self, criteria: SearchCriteria) -> dict[str, str]:
        params: dict[str, str] = {}
        if criteria.cities:
            params["cities"] = ",".join(criteria.cities)
        if criteria.from_date:
            params["fromDate"] = criteria.from_date.isoformat()
        if criteria.to_date:
            params["toDate"] = criteria.to_date.isoformat()
        return params

    async def _send(self, client: httpx.AsyncClient, criteria: SearchCriteria) -> httpx.Response:
        return await client.get(
            f"{self.base_url}/transactions/search",
            params=self.build_params(criteria),
            headers=self.headers,
        )

    def _records(self, payload: Any) -> list[Mapping[str, Any]]:
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            return []
        return payload["results"]
