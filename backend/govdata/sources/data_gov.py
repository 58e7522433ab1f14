"""data.gov.il CKAN datastore adapter (land registry extracts)"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from govdata.config import settings
from govdata.schemas.transaction import SearchCriteria, Source
from govdata.sources.base import SourceFetcher

DEFAULT_LIMIT = 100


class DataGovFetcher(SourceFetcher):
    """POST {base}/datastore_search → {"result": {"records": [...]}}

    Registry extracts are treated as verified.
    """

    name = "Data.gov.il"
    source = Source.CADASTRE
    verified_by_source = True

    def __init__(
        self,
        base_url: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(base_url or settings.data_gov_base_url, **kwargs)
        self.resource_id = resource_id or settings.data_gov_resource_id

    async def _send(self, client: httpx.AsyncClient, criteria: SearchCriteria) -> httpx.Response:
        return await client.post(
            f"{self.base_url}/datastore_search",
            json={"resource_id": self.resource_id, "limit": criteria.limit or DEFAULT_LIMIT},
            headers=self.headers,
        )

    def _records(self, payload: Any) -> list[Mapping[str, Any]]:
        if not isinstance(payload, dict):
            return []
        # CKAN wraps records in "result"; some mirrors return them at the top level
        container = payload.get("result") if isinstance(payload.get("result"), dict) else payload
        records = container.get("records")
        return records if isinstance(records, list) else []
