# cexclient/core/http.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx
import requests
from requests.adapters import HTTPAdapter

from cexclient.core.errors import EmptyResponse, UnsupportedMethod
from cexclient.core.params import create_query_string, to_json_body

log = logging.getLogger(__name__)

Session = Union[requests.Session, httpx.Client]

# Закрытый набор методов: куда кладём параметры
_QUERY, _BODY = "query", "body"
_METHODS: Dict[str, str] = {
    "GET": _QUERY,
    "DELETE": _QUERY,
    "POST": _BODY,
    "PUT": _BODY,
}

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def make_session(backend: str = "requests",
                 headers: Optional[Mapping[str, str]] = None,
                 timeout: Optional[float] = None) -> Session:
    """
    Сессия с пулом соединений (keep-alive) под конкретный адаптер.
    backend: "requests" (по умолчанию) или "httpx".
    """
    merged = {**DEFAULT_HEADERS, **(headers or {})}
    backend = (backend or "requests").strip().lower()
    if backend == "httpx":
        return httpx.Client(headers=merged, timeout=timeout)
    if backend != "requests":
        raise ValueError(f"Unknown HTTP backend: {backend!r}")

    session = requests.Session()
    # max_retries=0: повторов на уровне транспорта нет
    adapter = HTTPAdapter(pool_connections=100, pool_maxsize=100, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(merged)
    return session


def request(session: Session,
            method: str,
            url: str,
            params: Optional[Mapping[str, Any]] = None,
            headers: Optional[Mapping[str, str]] = None,
            *,
            timeout: Optional[float] = None) -> Any:
    """
    Унифицированный HTTP-вызов.
    - GET/DELETE: параметры сериализуются в query той же функцией, что и для подписи
    - POST/PUT: параметры уходят компактным JSON в теле (байты совпадают с подписанными)
    Ошибки транспорта (сеть, не-2xx) пробрасываются без обёрток.
    """
    m = (method or "").upper()
    mode = _METHODS.get(m)
    if mode is None:
        raise UnsupportedMethod(method)

    kwargs: Dict[str, Any] = {"headers": dict(headers or {})}
    if timeout is not None:
        kwargs["timeout"] = timeout

    if mode == _QUERY:
        full_url = url + create_query_string(params)
    else:
        full_url = url
        body = to_json_body(params).encode("utf-8")
        if isinstance(session, httpx.Client):
            kwargs["content"] = body
        else:
            kwargs["data"] = body

    resp = session.request(m, full_url, **kwargs)
    if resp is None:
        raise EmptyResponse(m, full_url)
    log.debug("%s %s -> %s", m, full_url, resp.status_code)
    resp.raise_for_status()

    txt = (resp.text or "").strip()
    if not txt:
        raise EmptyResponse(m, full_url)
    try:
        data = resp.json()
    except ValueError as e:
        raise EmptyResponse(m, full_url) from e
    if data is None:
        raise EmptyResponse(m, full_url)
    return data
