# cexclient/core/exchange_proxy.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from cexclient import config
from cexclient.core.adapters.bittrex import BittrexAdapter
from cexclient.core.adapters.gate_v4 import GateV4Adapter
from cexclient.core.adapters.mxc import MxcAdapter
from cexclient.core.errors import ExchangeNotRegistered
from cexclient.core.exchange_base import ExchangeAdapter

# === Мульти-CEX: реестр + ленивые фабрики ===

Factory = Callable[[Mapping[str, Any]], ExchangeAdapter]

_registry: Dict[str, Factory] = {}
_instances: Dict[str, ExchangeAdapter] = {}
_defaults_registered: bool = False


def register_adapter(code: str, factory: Factory) -> None:
    """
    Регистрирует фабрику адаптера. Фабрика принимает запись конфигурации (dict).
    Повторная регистрация перезапишет фабрику.
    """
    _registry[code.strip().lower()] = factory


def _register_defaults_once() -> None:
    global _defaults_registered
    if _defaults_registered:
        return
    register_adapter("gate", GateV4Adapter.from_config)
    register_adapter("bittrex", BittrexAdapter.from_config)
    register_adapter("mxc", MxcAdapter.from_config)
    _defaults_registered = True


def _cfg_for(code: str) -> Dict[str, Any]:
    try:
        return dict(config.get_exchange_cfg(code))
    except KeyError:
        # биржа не перечислена в EXCH_LIST — работаем на дефолтах адаптера
        return {"code": code}


def create_adapter(code: str, **overrides: Any) -> ExchangeAdapter:
    """
    Новый (не кэшированный) инстанс. overrides перекрывают значения из окружения:
        create_adapter("gate", api_key="...", api_secret="...")
    """
    _register_defaults_once()
    code = code.strip().lower()
    factory = _registry.get(code)
    if not factory:
        raise ExchangeNotRegistered(f"Exchange adapter is not registered: '{code}'")
    return factory({**_cfg_for(code), **overrides})


def get_adapter(exchange: Optional[str] = None) -> ExchangeAdapter:
    """
    Возвращает (и кэширует) инстанс адаптера по коду биржи.
    Если exchange не задан — используется config.DEFAULT_EXCHANGE.
    """
    code = (exchange or config.DEFAULT_EXCHANGE).strip().lower()
    if code in _instances:
        return _instances[code]
    instance = create_adapter(code)
    _instances[code] = instance
    return instance


def available_exchanges() -> List[str]:
    """Список зарегистрированных кодов бирж (напр. ["bittrex", "gate", "mxc"])."""
    _register_defaults_once()
    return sorted(_registry.keys())


def clear_cached_instances() -> None:
    """Закрыть и сбросить кэш инстансов."""
    for ad in _instances.values():
        ad.close()
    _instances.clear()
