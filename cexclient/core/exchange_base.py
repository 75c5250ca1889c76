# cexclient/core/exchange_base.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from cexclient.core.errors import MissingCredentials
from cexclient.core.http import Session, make_session, request as http
from cexclient.core.params import ParamMap, validate_parameters
from cexclient.core.signing import RequestSigner

# Ключи записи из cexclient.config.build_exchanges
CONFIG_KEYS = frozenset({
    "code", "api_key", "api_secret", "host", "prefix", "subaccount",
    "timeout", "backend", "treat_falsy_as_missing",
})


def drop_none(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Необязательные аргументы эндпоинтов, не переданные вызывающим, в запрос не попадают."""
    return {k: v for k, v in params.items() if v is not None}


class ExchangeAdapter:
    """
    Общий адаптер биржи: валидация параметров -> (подпись) -> HTTP.
    Биржевые подклассы задают хост/префикс, стратегию подписи и методы эндпоинтов.

    Сессия HTTP принадлежит инстансу: создаётся в конструкторе (если не передана
    снаружи) и закрывается в close().
    """

    name: str = ""
    DEFAULT_HOST: str = ""
    DEFAULT_PREFIX: str = ""

    def __init__(self,
                 base_url: str,
                 prefix: str = "",
                 signer: Optional[RequestSigner] = None,
                 *,
                 session: Optional[Session] = None,
                 backend: str = "requests",
                 timeout: Optional[float] = None,
                 treat_falsy_as_missing: bool = True):
        self.base_url = (base_url or "").rstrip("/")
        self.prefix = prefix or ""
        self._signer = signer
        self._timeout = timeout
        self._treat_falsy_as_missing = treat_falsy_as_missing
        self._owns_session = session is None
        self._http: Session = session if session is not None else make_session(backend, timeout=timeout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, prefix={self.prefix!r}, signer={self._signer!r})"

    def exchange_name(self) -> str:
        return self.name

    # ---- фабрика из записи конфигурации (см. cexclient.config) ----

    @classmethod
    def _kwargs_from_config(cls, cfg: Mapping[str, Any]) -> Dict[str, Any]:
        kwargs = {
            "api_key": cfg.get("api_key") or "",
            "api_secret": cfg.get("api_secret") or "",
            "host": cfg.get("host") or None,
            "prefix": cfg.get("prefix"),
            "backend": cfg.get("backend") or "requests",
            "timeout": cfg.get("timeout"),
            "treat_falsy_as_missing": cfg.get("treat_falsy_as_missing", True),
        }
        # всё, что не ключ конфигурации (session, clock, subaccount_id, ...), уходит в конструктор как есть
        kwargs.update({k: v for k, v in cfg.items() if k not in CONFIG_KEYS})
        return kwargs

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "ExchangeAdapter":
        """Только для биржевых подклассов: их конструктор принимает api_key/api_secret/host/prefix."""
        return cls(**cls._kwargs_from_config(cfg))

    # ---- запрос ----

    def make_request(self,
                     method: str,
                     endpoint: str,
                     params: Optional[Mapping[str, Any]] = None,
                     param_map: Optional[ParamMap] = None,
                     private: bool = False) -> Any:
        """
        Один вызов API. Проверка параметров выполняется до любого сетевого I/O;
        для приватных эндпоинтов заголовки авторизации строит signer.
        """
        params = params or {}
        validate_parameters(params, param_map, treat_falsy_as_missing=self._treat_falsy_as_missing)

        path = f"{self.prefix}{endpoint}"
        headers: Dict[str, str] = {}
        if private:
            if self._signer is None:
                name = self.exchange_name() or type(self).__name__
                raise MissingCredentials(f"{name}: {endpoint} requires credentials")
            headers = self._signer.auth_headers(method, path, params)

        return http(self._http, method, self.base_url + path, params, headers, timeout=self._timeout)

    # ---- жизненный цикл ----

    def close(self) -> None:
        if self._owns_session:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()
