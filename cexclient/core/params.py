# cexclient/core/params.py
from __future__ import annotations

import json
import logging
import math
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple, TypedDict
from urllib.parse import quote

from cexclient.core.errors import MissingRequiredParameter

log = logging.getLogger(__name__)


class ParamSpec(TypedDict, total=False):
    key: str
    required: bool  # по умолчанию False


ParamMap = Sequence[ParamSpec]
Params = Mapping[str, Any]

# Символы, которые encodeURIComponent оставляет как есть
_URI_SAFE = "-_.!~*'()"


def _is_falsy(v: Any) -> bool:
    """
    Ложность «как в JS»: None, False, 0, NaN и пустая строка.
    Пустые dict/list считаются заполненными.
    """
    if v is None or v is False:
        return True
    if isinstance(v, str):
        return v == ""
    if isinstance(v, float) and math.isnan(v):
        return True
    if isinstance(v, (int, float, Decimal)):
        return v == 0
    return False


def _is_missing(params: Params, key: str, treat_falsy_as_missing: bool) -> bool:
    if key not in params:
        return True
    v = params[key]
    # NB: обязательный числовой параметр со значением 0 тоже попадёт в missing
    return _is_falsy(v) if treat_falsy_as_missing else v is None


def _inspect(params: Optional[Params],
             param_map: Optional[ParamMap],
             treat_falsy_as_missing: bool) -> Tuple[List[str], List[str]]:
    params = params or {}
    param_map = param_map or []
    known = {spec["key"] for spec in param_map}

    unused = [k for k in params if k not in known]
    missing = [
        spec["key"] for spec in param_map
        if spec.get("required", False) and _is_missing(params, spec["key"], treat_falsy_as_missing)
    ]

    if unused:
        log.warning("These are questionable parameters that may be unused: %s.", ", ".join(unused))
    return unused, missing


def check_parameters(params: Optional[Params],
                     param_map: Optional[ParamMap],
                     *,
                     treat_falsy_as_missing: bool = True) -> Optional[str]:
    """
    Сверяет параметры вызова с картой допустимых ключей эндпоинта.

    Лишние ключи только логируются (WARNING) и вызов не блокируют.
    Возвращает None, если всё в порядке, иначе — текст с перечнем
    отсутствующих обязательных ключей в порядке карты.
    """
    _, missing = _inspect(params, param_map, treat_falsy_as_missing)
    if missing:
        return f"You are missing the following required parameters: {', '.join(missing)}."
    return None


def validate_parameters(params: Optional[Params],
                        param_map: Optional[ParamMap],
                        *,
                        treat_falsy_as_missing: bool = True) -> None:
    """То же, что check_parameters, но бросает MissingRequiredParameter."""
    _, missing = _inspect(params, param_map, treat_falsy_as_missing)
    if missing:
        raise MissingRequiredParameter(missing)


def to_json_body(params: Optional[Params]) -> str:
    # компактный JSON без пробелов — ровно те байты, что уходят в подпись и в тело
    return json.dumps(dict(params or {}), separators=(",", ":"), ensure_ascii=False)


def _stringify(v: Any, in_list: bool = False) -> str:
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return "true" if v else "false"
    if v is None:
        # Array.join превращает null в пустую строку
        return "" if in_list else "null"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    if isinstance(v, (list, tuple)):
        return ",".join(_stringify(x, in_list=True) for x in v)
    if isinstance(v, dict):
        return json.dumps(v, separators=(",", ":"), ensure_ascii=False)
    return str(v)


def _encode(s: str) -> str:
    return quote(s, safe=_URI_SAFE)


def create_query_string(params: Optional[Params]) -> str:
    """
    "?k1=v1&k2=v2" в порядке вставки ключей; "" для пустых параметров.
    Списки склеиваются через запятую до кодирования: ["a", 1] -> "a%2C1".
    """
    if not params:
        return ""
    return "?" + "&".join(f"{_encode(str(k))}={_encode(_stringify(v))}" for k, v in params.items())
