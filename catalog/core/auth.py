# catalog/core/auth.py
import hashlib
import hmac
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from catalog.config import Settings, get_settings
from catalog.core.errors import AuthError

ADMIN_KEY_HEADER = "x-admin-key"

admin_key_scheme = APIKeyHeader(name=ADMIN_KEY_HEADER, auto_error=False)

logger = logging.getLogger("auth")


def _safe_key_id(key: str) -> str:
    # não loga a chave; loga um identificador abreviado
    return hashlib.sha1(key.encode()).hexdigest()[:8]


async def require_admin_key(
    provided: Optional[str] = Security(admin_key_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Dependency para rotas administrativas (POST/DELETE).
    Compara o header x-admin-key com ADMIN_API_KEY em tempo constante.
    """
    if not provided:
        raise AuthError("Missing x-admin-key header")

    expected = settings.admin_api_key
    if not expected:
        logger.error("ADMIN_API_KEY ausente; rejeitando requisição administrativa")
        raise AuthError("Invalid API key")

    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("x-admin-key inválida (key_id=%s)", _safe_key_id(provided))
        raise AuthError("Invalid API key")

    return provided
