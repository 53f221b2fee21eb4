"""
Cache em memória para a coleção de empreendimentos e o índice de busca
"""
import logging
import threading
from functools import wraps
from typing import Callable, Optional

from cachetools import TTLCache

from portal.core.config import settings

logger = logging.getLogger(__name__)

# Cache em memória com TTL (equivale à revalidação das páginas)
cache = TTLCache(maxsize=256, ttl=settings.CACHE_TTL_SECONDS) if settings.CACHE_ENABLED else None

# TTLCache não é thread-safe e as rotas síncronas rodam no threadpool
_lock = threading.Lock()
_MISSING = object()


def cached(key_prefix: str = ""):
    """
    Decorator para cachear resultados de funções síncronas

    A chave usa o repr dos argumentos, então eles precisam ter repr estável.
    Exceções não são cacheadas.

    Args:
        key_prefix: Prefixo para a chave do cache
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not settings.CACHE_ENABLED or cache is None:
                return func(*args, **kwargs)

            cache_key = f"{key_prefix}:{func.__name__}:{args!r}:{sorted(kwargs.items())!r}"

            with _lock:
                result = cache.get(cache_key, _MISSING)
            if result is not _MISSING:
                logger.debug(f"Cache hit: {cache_key}")
                return result

            logger.debug(f"Cache miss: {cache_key}")
            result = func(*args, **kwargs)
            with _lock:
                cache[cache_key] = result
            return result

        return wrapper

    return decorator


def clear_cache(pattern: Optional[str] = None):
    """
    Limpa o cache

    Args:
        pattern: Padrão para limpar apenas chaves que começam com o padrão
    """
    if cache is None:
        return

    if pattern:
        with _lock:
            keys_to_remove = [key for key in list(cache.keys()) if key.startswith(pattern)]
            for key in keys_to_remove:
                cache.pop(key, None)
        logger.info(f"Cache limpo: {len(keys_to_remove)} chaves removidas (padrão: {pattern})")
    else:
        with _lock:
            cache.clear()
        logger.info("Cache completamente limpo")
