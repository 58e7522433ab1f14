from fastapi import Request

from govdata.services.aggregator import TransactionAggregator


def get_aggregator(request: Request) -> TransactionAggregator:
    return request.app.state.aggregator
