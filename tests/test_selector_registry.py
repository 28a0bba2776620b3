from __future__ import annotations

import pytest

from src.scrapers.errors import ErrorCode, FATAL_CODES, ScrapeError, classify_page_state
from src.scrapers.linkedin.config import LinkedInConfig
from src.scrapers.selector_registry import (
    SelectorRegistryError,
    get_selectors,
    primary_selector,
    registry_version,
)


def test_registry_version() -> None:
    assert registry_version("linkedin") == "li-1"


def test_get_selectors_by_dot_path() -> None:
    assert get_selectors("linkedin", "reactions.list_item") == ["li"]
    assert primary_selector("linkedin", "fields.reaction_type") == "img[data-test-reactions-icon-size='small']"


@pytest.mark.parametrize("platform, category", [
    ("myspace", "reactions.list_item"),
    ("linkedin", "reactions.nope"),
    ("linkedin", "reactions"),
])
def test_unknown_lookups_raise(platform: str, category: str) -> None:
    with pytest.raises(SelectorRegistryError):
        get_selectors(platform, category)


def test_config_selectors_default_to_registry() -> None:
    sel = LinkedInConfig().selectors
    assert sel.open_button == primary_selector("linkedin", "reactions.open_button")
    assert sel.scroll_container == primary_selector("linkedin", "reactions.scroll_container")
    assert sel.logged_in == primary_selector("linkedin", "session.logged_in")


def test_field_specs_read_attributes_where_needed() -> None:
    specs = LinkedInConfig().field_specs()

    assert specs["profile_link"].attribute == "href"
    assert specs["reaction_type"].attribute == "alt"
    assert specs["current_role"].attribute is None
    assert specs["user_name"].immediate_fallback
    assert not specs["current_role"].immediate_fallback


@pytest.mark.parametrize("text, expected", [
    ("Sign in to view more", ErrorCode.LOGIN_REQUIRED),
    ("ÚNETE AHORA a LinkedIn", ErrorCode.LOGIN_REQUIRED),
    ("Reactions 42", None),
    ("", None),
])
def test_classify_page_state(text: str, expected) -> None:
    assert classify_page_state("linkedin", text) == expected


def test_scrape_error_fatality() -> None:
    assert ScrapeError(ErrorCode.AUTH_TIMEOUT, "x", "linkedin").fatal
    assert not ScrapeError(ErrorCode.ABORTED_AT_BUDGET, "x", "linkedin").fatal
    assert ErrorCode.PERSISTENCE_FAILURE not in FATAL_CODES
    assert ScrapeError(ErrorCode.FIELD_MISS, "m", "linkedin", phase="extract").to_dict()["code"] == "FIELD_MISS"
