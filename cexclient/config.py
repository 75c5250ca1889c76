# cexclient/config.py
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

# =========================
# Конфигурация CEX из окружения / .env:
# - EXCH_LIST = "gate,bittrex,mxc" (по умолчанию)
# - Для каждой {code} читаем:
#     {CODE}_API_KEY
#     {CODE}_API_SECRET
#     {CODE}_HOST         (опционально; у известных CEX подставим дефолты)
#     {CODE}_PREFIX       (опционально; напр. "/api/v4" у Gate)
#     {CODE}_SUBACCOUNT   (только Bittrex)
# - Общие: REQ_TIMEOUT, HTTP_BACKEND (requests|httpx), TREAT_FALSY_AS_MISSING, LOG_LEVEL
# - get_exchange_cfg("gate"|"bittrex"|"mxc") возвращает словарь для адаптера.
# Ключи, переданные адаптеру явно, важнее окружения.
# =========================

# ---------- Утилиты ----------
def _as_bool(v: Optional[str], default: bool = False) -> bool:
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


_DEFAULT_HOSTS = {
    "gate": "https://api.gateio.ws",
    "bittrex": "https://api.bittrex.com",
    "mxc": "https://www.mxc.com",
}
_GATE_TESTNET_HOST = "https://api-testnet.gateapi.io"

_DEFAULT_PREFIXES = {
    "gate": "/api/v4",
    "bittrex": "/v3",
    "mxc": "",
}


def _default_host(code: str, env: Mapping[str, str]) -> str:
    if code == "gate" and _as_bool(env.get("GATE_TESTNET"), False):
        return _GATE_TESTNET_HOST
    # Для неизвестных бирж — без дефолта
    return _DEFAULT_HOSTS.get(code, "")


def _default_exchange(env: Mapping[str, str]) -> str:
    return env.get("DEFAULT_EXCHANGE", "gate").strip().lower() or "gate"


def build_exchanges(env: Optional[Mapping[str, str]] = None) -> dict[str, dict]:
    """
    Собирает реестр {code: cfg} из окружения (или переданного словаря — удобно в тестах).
    """
    env = os.environ if env is None else env

    codes = [c.strip().lower() for c in env.get("EXCH_LIST", "gate,bittrex,mxc").split(",") if c.strip()]
    default_code = _default_exchange(env)
    if default_code not in codes:
        codes.insert(0, default_code)  # гарантируем присутствие

    timeout = float(env.get("REQ_TIMEOUT", "12"))
    backend = env.get("HTTP_BACKEND", "requests").strip().lower() or "requests"
    treat_falsy = _as_bool(env.get("TREAT_FALSY_AS_MISSING"), True)

    exchanges: dict[str, dict] = {}
    for code in codes:
        U = code.upper()
        prefix = env.get(f"{U}_PREFIX")
        exchanges[code] = {
            "code": code,
            "api_key": env.get(f"{U}_API_KEY", "").strip(),
            "api_secret": env.get(f"{U}_API_SECRET", "").strip(),
            "host": env.get(f"{U}_HOST", "").strip() or _default_host(code, env),
            # пустой {CODE}_PREFIX — осознанно пустой префикс
            "prefix": _DEFAULT_PREFIXES.get(code, "") if prefix is None else prefix.strip(),
            "subaccount": env.get(f"{U}_SUBACCOUNT", "").strip(),
            "timeout": timeout,
            "backend": backend,
            "treat_falsy_as_missing": treat_falsy,
        }
    return exchanges


EXCHANGES: dict[str, dict] = build_exchanges()
DEFAULT_EXCHANGE = _default_exchange(os.environ)

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


# ---------- Хелперы ----------
def get_exchange_cfg(code: str) -> dict:
    """
    Вернёт словарь настроек для биржи `code` (gate|bittrex|mxc|...).
    Бросит KeyError, если не найдена.
    """
    return EXCHANGES[code.strip().lower()]


def reload(env: Optional[Mapping[str, str]] = None) -> dict[str, dict]:
    """Пересобрать EXCHANGES и DEFAULT_EXCHANGE (после смены окружения)."""
    global EXCHANGES, DEFAULT_EXCHANGE
    env = os.environ if env is None else env
    EXCHANGES = build_exchanges(env)
    DEFAULT_EXCHANGE = _default_exchange(env)
    return EXCHANGES


def configure_logging(level: Optional[str] = None) -> None:
    """Для скриптов: библиотека сама хендлеры не вешает."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
