from dataclasses import dataclass
from typing import Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_ATTACH_WAIT_MS = 3000


@dataclass(frozen=True)
class FieldSpec:
    """Where a field lives inside one list item.

    attribute=None reads the text content; otherwise the named attribute.
    immediate_fallback enables a non-waiting read when the waited one fails.
    """
    name: str
    selector: str
    attribute: Optional[str] = None
    immediate_fallback: bool = False


@dataclass(frozen=True)
class FieldResult:
    value: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: str) -> "FieldResult":
        return cls(value=value.strip())

    @classmethod
    def failure(cls, error: str) -> "FieldResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    def or_default(self, default: str = "") -> str:
        return self.value if self.ok else default


async def _read_waited(target, spec: FieldSpec, timeout_ms: int) -> Optional[str]:
    if spec.attribute:
        return await target.get_attribute(spec.attribute, timeout=timeout_ms)
    return await target.text_content(timeout=timeout_ms)


async def _resolve_immediate(item, spec: FieldSpec) -> FieldResult:
    """Reads whatever matches right now; all_text_contents/evaluate_all never wait."""
    try:
        matches = item.locator(spec.selector)
        if spec.attribute:
            values = await matches.evaluate_all(
                "(els, name) => els.map(e => e.getAttribute(name))", spec.attribute
            )
        else:
            values = await matches.all_text_contents()
    except Exception as e:
        return FieldResult.failure(f"immediate {type(e).__name__}: {e}")
    for v in values or []:
        if v and v.strip():
            return FieldResult.success(v)
    return FieldResult.failure("immediate no_match")


async def resolve_field(item, spec: FieldSpec, attach_wait_ms: int = DEFAULT_ATTACH_WAIT_MS) -> FieldResult:
    """Resolve one field relative to an item handle. Never raises."""
    try:
        target = item.locator(spec.selector).first
        await target.wait_for(state="attached", timeout=attach_wait_ms)
        raw = await _read_waited(target, spec, attach_wait_ms)
    except Exception as e:
        result = FieldResult.failure(f"{type(e).__name__}: {e}")
        if spec.immediate_fallback:
            fallback = await _resolve_immediate(item, spec)
            if fallback.ok:
                logger.debug("field.fallback_ok field=%s", spec.name)
                return fallback
        logger.debug("field.miss field=%s selector=%s error=%s", spec.name, spec.selector, result.error)
        return result
    if raw is None:
        logger.debug("field.miss field=%s selector=%s error=null_value", spec.name, spec.selector)
        return FieldResult.failure("null_value")
    return FieldResult.success(raw)


async def scroll_height(el_handle) -> int:
    try:
        value = await el_handle.evaluate('el => el.scrollHeight')
        return int(value or 0)
    except Exception as e:
        logger.debug("scroll.height failed: %s", e)
        return 0


async def scroll_to_bottom(el_handle) -> None:
    try:
        await el_handle.evaluate('el => { el.scrollTop = el.scrollHeight; }')
    except Exception as e:
        logger.debug("scroll.to_bottom failed: %s", e)
