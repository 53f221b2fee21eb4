"""
Rate limiting para a API
"""
from functools import wraps

from slowapi import Limiter
from slowapi.util import get_remote_address

from portal.core.config import settings

# Inicializa o limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"] if settings.RATE_LIMIT_ENABLED else [],
    enabled=settings.RATE_LIMIT_ENABLED,
)

_original_limit = limiter.limit


def limit(*args, **kwargs):
    """Wrapper para limiter.limit que verifica se rate limiting está habilitado"""
    if not settings.RATE_LIMIT_ENABLED:
        # Se rate limiting está desabilitado, retorna um decorator que não faz nada
        def noop_decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                return func(*args, **kwargs)
            return wrapper
        return noop_decorator
    return _original_limit(*args, **kwargs)


# Substitui o método limit do limiter
limiter.limit = limit
