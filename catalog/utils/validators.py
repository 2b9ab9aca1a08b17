# catalog/utils/validators.py
"""
Validação e sanitização da entrada do catálogo.

Todas as funções são puras e sem estado. A sanitização do embed é
propositalmente simples (regex): remove elementos <script> e bloqueia o
protocolo javascript:, mas NÃO trata atributos de evento (onload, onerror...),
não valida o domínio do src e pode ser contornada com HTML malformado.
"""
import math
import re
from typing import Any, List, Optional, Union

from pydantic import BaseModel

from catalog.core.errors import EmbedSanitizationError, ValidationError

MIN_TITLE_LENGTH = 3
MAX_TAGS = 10

TITLE_REQUIRED = "Title is required"
TITLE_TOO_SHORT = f"Title must be at least {MIN_TITLE_LENGTH} characters long"
EMBED_REQUIRED = "iframeEmbed is required"
EMBED_MISSING_IFRAME = "iframeEmbed must contain an <iframe> tag"
EMBED_MISSING_SRC = "iframeEmbed must contain a src attribute"
TOO_MANY_TAGS = f"Maximum of {MAX_TAGS} tags allowed"
INVALID_TAGS = "tags must be a comma-separated string or a list of strings"
DURATION_REQUIRED = "duration is required"
INVALID_DURATION = "Duration must be a positive number (in seconds)"
JAVASCRIPT_PROTOCOL = "Invalid iframe: javascript: protocol not allowed"

# não-guloso: cada <script> irmão é removido separadamente
_SCRIPT_ELEMENT = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_PLAIN_DECIMAL = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class ValidationResult(BaseModel):
    valid: bool
    error: Optional[str] = None
    value: Any = None

    def raise_for_error(self) -> "ValidationResult":
        if not self.valid:
            raise ValidationError(self.error or "Invalid input")
        return self


def _ok(value: Any = None) -> ValidationResult:
    return ValidationResult(valid=True, value=value)


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def validate_title(title: Optional[str]) -> ValidationResult:
    # comprimento medido sobre o valor aparado
    trimmed = (title or "").strip()
    if not trimmed:
        return _fail(TITLE_REQUIRED)
    if len(trimmed) < MIN_TITLE_LENGTH:
        return _fail(TITLE_TOO_SHORT)
    return _ok(trimmed)


def validate_iframe_embed(embed: Optional[str]) -> ValidationResult:
    # checagens por substring, não parse de HTML
    if not embed or not embed.strip():
        return _fail(EMBED_REQUIRED)
    lowered = embed.lower()
    if "<iframe" not in lowered:
        return _fail(EMBED_MISSING_IFRAME)
    if "src=" not in lowered:
        return _fail(EMBED_MISSING_SRC)
    return _ok(embed)


def validate_tags(tags: List[str]) -> ValidationResult:
    if len(tags) > MAX_TAGS:
        return _fail(TOO_MANY_TAGS)
    return _ok(list(tags))


def parse_tags(raw: Union[str, List[Any], None]) -> List[str]:
    """Normaliza tags vindas como "a, b,c" ou ["a", "b"]; vazios são descartados."""
    if raw is None:
        return []
    if isinstance(raw, str):
        pieces = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        if not all(isinstance(p, str) for p in raw):
            raise ValidationError(INVALID_TAGS)
        pieces = list(raw)
    else:
        raise ValidationError(INVALID_TAGS)
    return [p.strip() for p in pieces if p.strip()]


def validate_duration(duration: Any, required: bool = False) -> ValidationResult:
    if duration is None or (isinstance(duration, str) and not duration.strip()):
        return _fail(DURATION_REQUIRED) if required else _ok(None)
    # bool é subclasse de int; não aceitar True/False como segundos
    if isinstance(duration, bool):
        return _fail(INVALID_DURATION)
    if isinstance(duration, str):
        # só decimal simples: nada de "1_000" ou "1e3"
        if not _PLAIN_DECIMAL.fullmatch(duration.strip()):
            return _fail(INVALID_DURATION)
    elif not isinstance(duration, (int, float)):
        return _fail(INVALID_DURATION)
    try:
        value = float(duration)
    except (OverflowError, ValueError):
        return _fail(INVALID_DURATION)
    if not math.isfinite(value) or value < 0:
        return _fail(INVALID_DURATION)
    return _ok(duration if isinstance(duration, int) else value)


def sanitize_iframe_embed(embed: str) -> str:
    # protocolo primeiro, sempre, no texto inteiro
    if "javascript:" in embed.lower():
        raise EmbedSanitizationError(JAVASCRIPT_PROTOCOL)
    # repete até estabilizar: "<scr<script></script>ipt>" remonta um <script> após a 1ª passada
    sanitized = embed
    while True:
        stripped = _SCRIPT_ELEMENT.sub("", sanitized)
        if stripped == sanitized:
            return sanitized
        sanitized = stripped
