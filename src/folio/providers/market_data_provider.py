"""Market data client protocol."""

from typing import Any, Protocol


class MarketDataClient(Protocol):
    """
    Protocol for upstream market data clients.

    Implementations call one provider REST endpoint and return the decoded
    JSON payload (the provider answers with JSON arrays). Failures are raised;
    the retrieval services decide how to degrade.
    """

    async def get(self, endpoint: str, **params: Any) -> Any:
        """
        Fetch `endpoint` with the given query parameters.

        Raises MarketDataError once the client has given up on the request.
        """
        ...
