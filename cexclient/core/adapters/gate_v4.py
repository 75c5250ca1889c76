# cexclient/core/adapters/gate_v4.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, TypedDict
from urllib.parse import quote

from cexclient.core.errors import MissingRequiredParameter
from cexclient.core.exchange_base import ExchangeAdapter, drop_none
from cexclient.core.signing import Clock, GateV4Signer


class GateCurrencyPair(TypedDict, total=False):
    id: str
    base: str
    quote: str
    fee: str
    min_base_amount: str
    min_quote_amount: str
    amount_precision: int
    precision: int
    trade_status: Literal["untradable", "buyable", "sellable", "tradable"]
    sell_start: int
    buy_start: int


class GateTicker(TypedDict, total=False):
    currency_pair: str
    last: str
    lowest_ask: str
    highest_bid: str
    change_percentage: str
    base_volume: str
    quote_volume: str
    high_24h: str
    low_24h: str
    etf_net_value: str
    etf_pre_net_value: str
    etf_pre_timestamp: int
    etf_leverage: str


class GateSpotAccount(TypedDict):
    currency: str
    available: str
    locked: str


class GateV4Adapter(ExchangeAdapter):
    """
    Gate.io APIv4 (spot).
    Док: https://www.gate.io/docs/apiv4/en/index.html
    """

    name = "gate"
    DEFAULT_HOST = "https://api.gateio.ws"
    DEFAULT_PREFIX = "/api/v4"

    def __init__(self,
                 api_key: str = "",
                 api_secret: str = "",
                 *,
                 host: Optional[str] = None,
                 prefix: Optional[str] = None,
                 clock: Optional[Clock] = None,
                 strip_query_prefix: bool = False,
                 **kwargs: Any):
        super().__init__(
            host or self.DEFAULT_HOST,
            self.DEFAULT_PREFIX if prefix is None else prefix,
            GateV4Signer(api_key, api_secret, clock=clock, strip_query_prefix=strip_query_prefix),
            **kwargs,
        )

    # ===== public =====

    def list_currency_pairs(self) -> List[GateCurrencyPair]:
        """List all currency pairs supported."""
        return self.make_request("GET", "/spot/currency_pairs")

    def get_currency_pair(self, currency_pair: str) -> GateCurrencyPair:
        """Get details of a specific currency pair."""
        if not currency_pair:
            raise MissingRequiredParameter(["currency_pair"])
        return self.make_request("GET", f"/spot/currency_pairs/{quote(currency_pair, safe='')}")

    def get_ticker_information(self, currency_pair: Optional[str] = None, **extra: Any) -> List[GateTicker]:
        """
        Retrieve ticker information. Если указан currency_pair — только по нему,
        иначе по всем парам.
        """
        params = drop_none({"currency_pair": currency_pair, **extra})
        return self.make_request("GET", "/spot/tickers", params, [{"key": "currency_pair"}])

    def get_server_time(self) -> Dict[str, int]:
        """{"server_time": <ms>}"""
        return self.make_request("GET", "/spot/time")

    # ===== private =====

    def list_spot_accounts(self, currency: Optional[str] = None, **extra: Any) -> List[GateSpotAccount]:
        """List spot accounts."""
        params = drop_none({"currency": currency, **extra})
        return self.make_request("GET", "/spot/accounts", params, [{"key": "currency"}], private=True)
