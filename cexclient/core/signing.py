# cexclient/core/signing.py
from __future__ import annotations

import hashlib
import hmac
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from cexclient.core.errors import MissingCredentials
from cexclient.core.params import create_query_string, to_json_body

Clock = Callable[[], float]

# Для этих методов параметры идут в query, для остальных — в JSON-тело
QUERY_METHODS = ("GET", "DELETE")


def sha512_hex(text: str) -> str:
    return hashlib.sha512(text.encode("utf-8")).hexdigest()


def hmac_hex(secret: str, text: str, digestmod=hashlib.sha512) -> str:
    return hmac.new(secret.encode("utf-8"), text.encode("utf-8"), digestmod).hexdigest()


# ---------- канонические строки и подписи ----------

def gate_signature(secret: str, method: str, path: str, query: str, payload: str, timestamp: str) -> str:
    """
    Gate.io APIv4:
        METHOD\\npath\\nquery\\nsha512(payload)\\ntimestamp  ->  HMAC-SHA512(secret)
    """
    raw = f"{method.upper()}\n{path}\n{query}\n{sha512_hex(payload)}\n{timestamp}"
    return hmac_hex(secret, raw, hashlib.sha512)


def bittrex_signature(secret: str, timestamp: str, uri: str, method: str,
                      content_hash: str, subaccount_id: str = "") -> str:
    """Bittrex v3: timestamp + uri + METHOD + contentHash + subaccountId -> HMAC-SHA512."""
    raw = f"{timestamp}{uri}{method.upper()}{content_hash}{subaccount_id}"
    return hmac_hex(secret, raw, hashlib.sha512)


def mxc_signature(secret: str, access_key: str, timestamp: str, request_parameters: str = "") -> str:
    """MXC v2: accessKey + timestamp + requestParameters -> HMAC-SHA256."""
    raw = f"{access_key}{timestamp}{request_parameters}"
    return hmac_hex(secret, raw, hashlib.sha256)


# ---------- стратегии подписи для адаптера ----------

class RequestSigner(ABC):
    """
    Строит заголовки авторизации для одного приватного запроса.
    Часы инъектируются (секунды с эпохи), чтобы подпись была воспроизводимой в тестах.
    """

    def __init__(self, key: str, secret: str, clock: Optional[Clock] = None):
        self._key = (key or "").strip()
        self._secret = (secret or "").strip()
        self._clock: Clock = clock or time.time

    def __repr__(self) -> str:
        masked = self._key[:4] + "…" if self._key else ""
        return f"{type(self).__name__}(key={masked!r})"

    def _require_credentials(self) -> None:
        if not self._key or not self._secret:
            raise MissingCredentials(f"{type(self).__name__}: API key/secret not configured")

    def _seconds(self) -> str:
        return str(int(self._clock()))

    def _millis(self) -> str:
        return str(int(self._clock() * 1000))

    @abstractmethod
    def auth_headers(self, method: str, path: str, params: Optional[Mapping[str, Any]]) -> Dict[str, str]: ...


class GateV4Signer(RequestSigner):
    """
    По умолчанию query подписывается вместе с ведущим "?" (как его отдаёт
    create_query_string). strip_query_prefix=True — вариант без "?",
    который описан в документации Gate APIv4.
    """

    def __init__(self, key: str, secret: str, clock: Optional[Clock] = None,
                 strip_query_prefix: bool = False):
        super().__init__(key, secret, clock)
        self._strip_query_prefix = strip_query_prefix

    def auth_headers(self, method: str, path: str, params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        self._require_credentials()
        method = method.upper()
        ts = self._seconds()
        if method in QUERY_METHODS:
            query = create_query_string(params)
            if self._strip_query_prefix:
                query = query[1:]
            payload = ""
        else:
            query, payload = "", to_json_body(params)
        return {
            "KEY": self._key,
            "Timestamp": ts,
            "SIGN": gate_signature(self._secret, method, path, query, payload, ts),
        }


class BittrexSigner(RequestSigner):
    """
    uri = base_url + path. sign_query=True добавляет к uri query для GET/DELETE
    (Bittrex v3 на проде подписывает полный URI запроса).
    """

    def __init__(self, key: str, secret: str, subaccount_id: str = "",
                 base_url: str = "https://api.bittrex.com", clock: Optional[Clock] = None,
                 sign_query: bool = False):
        super().__init__(key, secret, clock)
        self._subaccount_id = (subaccount_id or "").strip()
        self._base_url = base_url.rstrip("/")
        self._sign_query = sign_query

    def auth_headers(self, method: str, path: str, params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        self._require_credentials()
        method = method.upper()
        ts = self._millis()
        uri = f"{self._base_url}{path}"
        if method in QUERY_METHODS:
            if self._sign_query:
                uri += create_query_string(params)
            body = ""
        else:
            body = to_json_body(params)
        content_hash = sha512_hex(body)
        headers = {
            "Api-Key": self._key,
            "Api-Timestamp": ts,
            "Api-Content-Hash": content_hash,
            "Api-Signature": bittrex_signature(self._secret, ts, uri, method, content_hash, self._subaccount_id),
        }
        if self._subaccount_id:
            headers["Api-Subaccount-Id"] = self._subaccount_id
        return headers


class MxcSigner(RequestSigner):
    def auth_headers(self, method: str, path: str, params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        self._require_credentials()
        method = method.upper()
        ts = self._millis()
        if method in QUERY_METHODS:
            request_parameters = create_query_string(params)[1:]
        else:
            request_parameters = to_json_body(params)
        return {
            "ApiKey": self._key,
            "Request-Time": ts,
            "Signature": mxc_signature(self._secret, self._key, ts, request_parameters),
        }
