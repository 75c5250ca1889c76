# scripts/smoke_public.py
# Быстрая проверка публичных эндпоинтов всех бирж из EXCH_LIST (без ключей).
import sys

from cexclient import config
from cexclient.core import exchange_proxy


def main() -> int:
    config.configure_logging()
    failed = 0
    for code in exchange_proxy.available_exchanges():
        if code not in config.EXCHANGES:
            continue
        ad = exchange_proxy.get_adapter(code)
        try:
            if code == "gate":
                res = ad.get_server_time()
            elif code == "bittrex":
                res = ad.get_ticker_all()[:1]
            else:
                res = ad.get_current_system_time()
            print(f"[{code}] ok -> {res}")
        except Exception as e:
            failed += 1
            print(f"[{code}] error: {e}")
    exchange_proxy.clear_cached_instances()
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
