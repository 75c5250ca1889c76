# cexclient/core/adapters/bittrex.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, TypedDict
from urllib.parse import quote

from cexclient.core.errors import MissingRequiredParameter
from cexclient.core.exchange_base import ExchangeAdapter
from cexclient.core.signing import BittrexSigner, Clock

# Пары у Bittrex: "ETH-BTC" (base-quote)


class BittrexMarket(TypedDict, total=False):
    symbol: str
    baseCurrencySymbol: str
    quoteCurrencySymbol: str
    minTradeSize: str
    precision: int
    status: str
    createdAt: str
    notice: str
    prohibitedIn: List[str]
    associatedTermsOfService: List[str]
    tags: List[str]


class BittrexTicker(TypedDict):
    symbol: str
    lastTradeRate: str
    bidRate: str
    askRate: str


class BittrexCurrency(TypedDict, total=False):
    symbol: str
    name: str
    coinType: str
    status: str
    minConfirmations: int
    notice: str
    txFee: str
    logoUrl: str
    prohibitedIn: List[str]
    baseAddress: str
    associatedTermsOfService: List[str]
    tags: List[str]


class BittrexBalance(TypedDict):
    currencySymbol: str
    total: str
    available: str
    updatedAt: str


class BittrexAdapter(ExchangeAdapter):
    """
    Bittrex API v3.
    Док: https://bittrex.github.io/api/v3

    Приватные заголовки: Api-Key, Api-Timestamp, Api-Content-Hash, Api-Signature
    и (опционально) Api-Subaccount-Id.
    """

    name = "bittrex"
    DEFAULT_HOST = "https://api.bittrex.com"
    DEFAULT_PREFIX = "/v3"

    def __init__(self,
                 api_key: str = "",
                 api_secret: str = "",
                 subaccount_id: str = "",
                 *,
                 host: Optional[str] = None,
                 prefix: Optional[str] = None,
                 clock: Optional[Clock] = None,
                 sign_query: bool = False,
                 **kwargs: Any):
        base_url = host or self.DEFAULT_HOST
        super().__init__(
            base_url,
            self.DEFAULT_PREFIX if prefix is None else prefix,
            BittrexSigner(api_key, api_secret, subaccount_id, base_url=base_url, clock=clock,
                          sign_query=sign_query),
            **kwargs,
        )

    @classmethod
    def _kwargs_from_config(cls, cfg: Mapping[str, Any]) -> Dict[str, Any]:
        kwargs = super()._kwargs_from_config(cfg)
        # явный subaccount_id (override) важнее записи из окружения
        kwargs["subaccount_id"] = cfg.get("subaccount_id") or cfg.get("subaccount") or ""
        return kwargs

    # ===== public =====

    def get_market_list(self) -> List[BittrexMarket]:
        """List markets available for trading."""
        return self.make_request("GET", "/markets")

    def get_ticker_all(self) -> List[BittrexTicker]:
        """Tickers for all markets."""
        return self.make_request("GET", "/markets/tickers")

    def get_market_ticker(self, market_symbol: str) -> BittrexTicker:
        """Ticker of a single market, e.g. "ETH-BTC"."""
        if not market_symbol:
            raise MissingRequiredParameter(["market_symbol"])
        return self.make_request("GET", f"/markets/{quote(market_symbol, safe='')}/ticker")

    def get_currencies(self) -> List[BittrexCurrency]:
        """All supported currencies."""
        return self.make_request("GET", "/currencies")

    # ===== private =====

    def get_balances(self) -> List[BittrexBalance]:
        """Account balances."""
        return self.make_request("GET", "/balances", private=True)
