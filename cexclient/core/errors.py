# cexclient/core/errors.py
from __future__ import annotations

from typing import List

import httpx
import requests


class CexClientError(RuntimeError):
    """Базовая ошибка библиотеки."""


class MissingRequiredParameter(CexClientError, ValueError):
    def __init__(self, missing: List[str], message: str | None = None):
        self.missing = list(missing)
        super().__init__(
            message
            or f"You are missing the following required parameters: {', '.join(self.missing)}."
        )


class UnsupportedMethod(CexClientError, ValueError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Invalid method: {method}.")


class EmptyResponse(CexClientError):
    def __init__(self, method: str, url: str):
        self.method = method
        self.url = url
        super().__init__(f"Invalid Response: empty body for {method} {url}")


class MissingCredentials(CexClientError):
    pass


class ExchangeNotRegistered(CexClientError):
    pass


# Ошибки транспорта не оборачиваем — пробрасываем как есть.
# Кортеж удобен для `except TransportError:`.
TransportError = (requests.RequestException, httpx.HTTPError)
