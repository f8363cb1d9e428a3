from typing import Any, Dict, Optional

from sling_activity.config.settings import ConfigLoader
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)

MIN_TICKER_LENGTH = 2
MAX_TICKER_LENGTH = 5


def extract_ticker(text: str) -> Optional[str]:
    """
    Pull a ticker symbol out of text like "+0.50 AMZN" or "Sold 0.50 AMZNx".

    The ticker is taken from the last space-separated token. A trailing
    lowercase 'x' left over from share formatting is dropped.

    Returns:
        The ticker, or None if the last token doesn't look like one
    """
    if not text:
        return None

    ticker = text.split(" ")[-1]
    if ticker.endswith("x") and len(ticker) > 2:
        ticker = ticker[:-1]

    if (
        MIN_TICKER_LENGTH <= len(ticker) <= MAX_TICKER_LENGTH
        and ticker.isalpha()
        and ticker == ticker.upper()
    ):
        return ticker

    return None


class TickerResolver:
    """
    Maps company names to ticker symbols.

    Usage:
        # Production - loads tickers.json through ConfigLoader
        resolver = TickerResolver()

        # Testing - inject a table
        resolver = TickerResolver(config={"tickers": {"Apple": "AAPL"}})

        resolver.ticker_for_name("apple")  # 'AAPL'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = self._load_config(config)
        self.name_to_ticker: Dict[str, str] = dict(config.get("tickers", {}))
        self._lowercase_map = {
            name.lower(): ticker for name, ticker in self.name_to_ticker.items()
        }

    def _load_config(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if config is not None:
            return config

        try:
            return ConfigLoader.load_tickers_config()
        except FileNotFoundError:
            logger.warning("No tickers.json found, ticker lookup by name is disabled")
            return {"tickers": {}}

    def ticker_for_name(self, name: str) -> str:
        """
        Look up a ticker by company name: exact, then case-insensitive.

        Returns:
            The ticker, or the name itself if it isn't known
        """
        if name in self.name_to_ticker:
            return self.name_to_ticker[name]

        return self._lowercase_map.get(name.lower(), name)

    def resolve(self, *texts: str, name: str) -> str:
        """
        Try each text for an embedded ticker, then fall back to the name table.

        Example:
            resolver.resolve(record.subtitle_right, record.subtitle_left, name="Apple")
        """
        for text in texts:
            ticker = extract_ticker(text)
            if ticker is not None:
                return ticker

        return self.ticker_for_name(name)

    def __repr__(self) -> str:
        return f"TickerResolver({len(self.name_to_ticker)} names)"
