from __future__ import annotations

import pytest

from src.utils.list_parser import build_reaction_record
from src.utils.url import absolute_profile_url, is_linkedin_post_url, normalize_post_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.linkedin.com/feed/update/urn:li:activity:7123456789012345678/",
         "https://www.linkedin.com/feed/update/urn:li:activity:7123456789012345678/"),
        ("linkedin.com/feed/update/urn:li:activity:7123456789012345678/?utm_source=share#x",
         "https://www.linkedin.com/feed/update/urn:li:activity:7123456789012345678/"),
        ("http://m.linkedin.com/feed/update/urn:li:share:7123456789012345678",
         "https://www.linkedin.com/feed/update/urn:li:share:7123456789012345678"),
    ],
)
def test_normalize_post_url(url: str, expected: str) -> None:
    assert normalize_post_url(url) == expected


@pytest.mark.parametrize(
    "url, ok",
    [
        ("https://www.linkedin.com/feed/update/urn:li:activity:7123456789012345678/", True),
        ("https://www.linkedin.com/feed/update/urn:li:ugcPost:7123456789012345678", True),
        ("https://www.linkedin.com/feed/update/urn:li:activity:123/", False),
        ("https://www.linkedin.com/in/someone/", False),
        ("https://example.com/feed/update/urn:li:activity:7123456789012345678/", False),
        ("", False),
    ],
)
def test_is_linkedin_post_url(url: str, ok: bool) -> None:
    assert is_linkedin_post_url(url) is ok


def test_absolute_profile_url() -> None:
    assert absolute_profile_url("/in/ada?miniProfileUrn=x") == "https://www.linkedin.com/in/ada?miniProfileUrn=x"
    assert absolute_profile_url(" https://www.linkedin.com/in/ada ") == "https://www.linkedin.com/in/ada"
    assert absolute_profile_url("") == ""


def test_build_reaction_record_cleans_values() -> None:
    record = build_reaction_record(3, " like ", "\n Ada ", None, "/in/ada")

    assert record == {
        "index": 3,
        "reaction_type": "like",
        "user_name": "Ada",
        "current_role": "",
        "profile_link": "https://www.linkedin.com/in/ada",
    }


def test_build_reaction_record_rejects_zero_index() -> None:
    with pytest.raises(ValueError):
        build_reaction_record(0, "like", "Ada", "", "")
