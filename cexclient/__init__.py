from cexclient.core.adapters.bittrex import BittrexAdapter
from cexclient.core.adapters.gate_v4 import GateV4Adapter
from cexclient.core.adapters.mxc import MxcAdapter
from cexclient.core.errors import (
    CexClientError,
    EmptyResponse,
    ExchangeNotRegistered,
    MissingCredentials,
    MissingRequiredParameter,
    TransportError,
    UnsupportedMethod,
)
from cexclient.core.exchange_base import ExchangeAdapter
from cexclient.core.exchange_proxy import available_exchanges, create_adapter, get_adapter
from cexclient.core.params import check_parameters, create_query_string, validate_parameters

__version__ = "0.1.0"

__all__ = [
    "BittrexAdapter",
    "CexClientError",
    "EmptyResponse",
    "ExchangeAdapter",
    "ExchangeNotRegistered",
    "GateV4Adapter",
    "MissingCredentials",
    "MissingRequiredParameter",
    "MxcAdapter",
    "TransportError",
    "UnsupportedMethod",
    "available_exchanges",
    "check_parameters",
    "create_adapter",
    "create_query_string",
    "get_adapter",
    "validate_parameters",
]
