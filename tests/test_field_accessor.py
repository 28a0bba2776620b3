from __future__ import annotations

import pytest

from src.utils.dom import FieldResult, FieldSpec, resolve_field
from tests.fakes import FakeItem, FakeNode


NAME = FieldSpec("user_name", "span.name", immediate_fallback=True)
ROLE = FieldSpec("current_role", "div.role")
LINK = FieldSpec("profile_link", "a.profile", attribute="href")


def test_field_result_defaults() -> None:
    assert FieldResult.success("  x ").or_default() == "x"
    assert FieldResult.failure("boom").or_default() == ""
    assert FieldResult.failure("boom").or_default("n/a") == "n/a"
    assert not FieldResult.failure("boom").ok
    assert FieldResult.success("").ok


@pytest.mark.asyncio
async def test_reads_trimmed_text() -> None:
    item = FakeItem({"div.role": FakeNode(text="\n  Data Engineer  \n")})

    result = await resolve_field(item, ROLE, attach_wait_ms=3000)

    assert result.ok
    assert result.value == "Data Engineer"


@pytest.mark.asyncio
async def test_reads_named_attribute() -> None:
    item = FakeItem({"a.profile": FakeNode(text="ignored", attrs={"href": " https://www.linkedin.com/in/x "})})

    assert (await resolve_field(item, LINK)).or_default() == "https://www.linkedin.com/in/x"


@pytest.mark.asyncio
async def test_missing_element_defaults_to_empty_string() -> None:
    item = FakeItem({})

    result = await resolve_field(item, ROLE, attach_wait_ms=3000)

    assert not result.ok
    assert "Timeout" in result.error
    assert result.or_default() == ""


@pytest.mark.asyncio
async def test_missing_attribute_defaults_to_empty_string() -> None:
    item = FakeItem({"a.profile": FakeNode(attrs={})})

    assert (await resolve_field(item, LINK)).or_default() == ""


@pytest.mark.asyncio
async def test_attach_wait_budget_is_forwarded() -> None:
    item = FakeItem({"div.role": FakeNode(text="x")})
    seen = []
    original = item.locator

    def _spy(selector):
        matches = original(selector)
        seen.append(matches)
        return matches

    item.locator = _spy
    await resolve_field(item, ROLE, attach_wait_ms=1234)

    assert seen[0].waits == [1234]


@pytest.mark.asyncio
async def test_user_name_falls_back_to_immediate_read() -> None:
    # Waited read fails (node reported as detached) but the non-waiting read sees text.
    item = FakeItem({"span.name": [FakeNode(text="   ", attached=False), FakeNode(text=" Grace Hopper ")]})

    result = await resolve_field(item, NAME, attach_wait_ms=3000)

    assert result.ok
    assert result.value == "Grace Hopper"


@pytest.mark.asyncio
async def test_fallback_only_applies_when_enabled() -> None:
    spec = FieldSpec("current_role", "span.name")
    item = FakeItem({"span.name": [FakeNode(text="Grace Hopper", attached=False)]})

    assert (await resolve_field(item, spec)).or_default() == ""


@pytest.mark.asyncio
async def test_fallback_without_matches_keeps_waited_error() -> None:
    item = FakeItem({})

    result = await resolve_field(item, NAME)

    assert not result.ok
    assert "Timeout" in result.error


@pytest.mark.asyncio
async def test_accessor_never_raises_on_unexpected_errors() -> None:
    class Exploding:
        def locator(self, selector):
            raise RuntimeError("detached frame")

    result = await resolve_field(Exploding(), NAME)

    assert not result.ok
    assert "RuntimeError" in result.error
    assert result.or_default() == ""
