"""Definición de códigos de error y utilidades de clasificación.

Los códigos buscan ser estables y consumibles por capas superiores.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

class ErrorCode(str, Enum):
    CONTAINER_UNAVAILABLE = "CONTAINER_UNAVAILABLE"
    EMPTY_OR_UNOPENABLE = "EMPTY_OR_UNOPENABLE"
    AUTH_TIMEOUT = "AUTH_TIMEOUT"
    ABORTED_AT_BUDGET = "ABORTED_AT_BUDGET"
    FIELD_MISS = "FIELD_MISS"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"
    UNKNOWN = "UNKNOWN"

FATAL_CODES = frozenset({
    ErrorCode.CONTAINER_UNAVAILABLE,
    ErrorCode.EMPTY_OR_UNOPENABLE,
    ErrorCode.AUTH_TIMEOUT,
})

@dataclass
class ScrapeError:
    code: ErrorCode
    message: str
    platform: str
    context: Optional[str] = None
    phase: Optional[str] = None
    selector_category: Optional[str] = None

    @property
    def fatal(self) -> bool:
        return self.code in FATAL_CODES

    def to_dict(self):
        return {
            "code": self.code.value,
            "message": self.message,
            "platform": self.platform,
            "context": self.context,
            "phase": self.phase,
            "selector_category": self.selector_category,
        }

LOGIN_KEYWORDS = {
    'linkedin': ['Sign in', 'Join now', 'Iniciar sesión', 'Únete ahora'],
}

def classify_page_state(platform: str, text_content: str) -> ErrorCode | None:
    low = (text_content or '').lower()
    for kw in LOGIN_KEYWORDS.get(platform, []):
        if kw.lower() in low:
            return ErrorCode.LOGIN_REQUIRED
    return None
