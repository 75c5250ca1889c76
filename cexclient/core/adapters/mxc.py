# cexclient/core/adapters/mxc.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from cexclient.core.exchange_base import ExchangeAdapter, drop_none
from cexclient.core.signing import Clock, MxcSigner


class MxcSymbol(TypedDict, total=False):
    symbol: str
    state: str
    price_scale: int
    quantity_scale: int
    min_amount: str
    max_amount: str
    maker_fee_rate: str
    taker_fee_rate: str


class MxcTicker(TypedDict, total=False):
    symbol: str
    volume: str
    high: str
    low: str
    bid: str
    ask: str
    open: str
    last: str
    time: int
    change_rate: str


class MxcBalance(TypedDict):
    frozen: str
    available: str


class MxcSymbolsResponse(TypedDict):
    code: int
    data: List[MxcSymbol]


class MxcTickerResponse(TypedDict):
    code: int
    data: List[MxcTicker]


class MxcTimeResponse(TypedDict):
    code: int
    data: int


class MxcBalanceResponse(TypedDict):
    code: int
    data: Dict[str, MxcBalance]


class MxcAdapter(ExchangeAdapter):
    """
    MXC open API v2. Префикса у путей нет — версия зашита в эндпоинт.
    Док: https://mxcdevelop.github.io/APIDoc/open.api.v2.en.html
    """

    name = "mxc"
    DEFAULT_HOST = "https://www.mxc.com"
    DEFAULT_PREFIX = ""

    def __init__(self,
                 api_key: str = "",
                 api_secret: str = "",
                 *,
                 host: Optional[str] = None,
                 prefix: Optional[str] = None,
                 clock: Optional[Clock] = None,
                 **kwargs: Any):
        super().__init__(
            host or self.DEFAULT_HOST,
            self.DEFAULT_PREFIX if prefix is None else prefix,
            MxcSigner(api_key, api_secret, clock=clock),
            **kwargs,
        )

    def get_all_market_symbols(self) -> MxcSymbolsResponse:
        """List all market pair symbols."""
        return self.make_request("GET", "/open/api/v2/market/symbols")

    def get_ticker_information(self, symbol: Optional[str] = None, **extra: Any) -> MxcTickerResponse:
        """Ticker by symbol ("BTC_USDT"); без symbol — по всем."""
        params = drop_none({"symbol": symbol, **extra})
        return self.make_request("GET", "/open/api/v2/market/ticker", params, [{"key": "symbol"}])

    def get_current_system_time(self) -> MxcTimeResponse:
        return self.make_request("GET", "/open/api/v2/common/timestamp")

    def get_account_balance(self) -> MxcBalanceResponse:
        """Balance of each currency (private)."""
        return self.make_request("GET", "/open/api/v2/account/info", private=True)
