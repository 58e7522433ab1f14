from govdata.sources.base import SourceFetcher
from govdata.sources.cbs import CbsFetcher
from govdata.sources.data_gov import DataGovFetcher
from govdata.sources.nadlan import NadlanFetcher


def default_fetchers(**kwargs) -> list[SourceFetcher]:
    """The three live sources, in merge order."""
    return [NadlanFetcher(**kwargs), DataGovFetcher(**kwargs), CbsFetcher(**kwargs)]


__all__ = ["CbsFetcher", "DataGovFetcher", "NadlanFetcher", "SourceFetcher", "default_fetchers"]
