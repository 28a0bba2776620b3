from __future__ import annotations

import json
import os

import pytest
from pydantic import ValidationError

from src.scrapers import config_runtime
from src.scrapers.config_runtime import ENV_MAPPING
from src.scrapers.linkedin.config import LinkedInConfig


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    for key in ENV_MAPPING:
        monkeypatch.delenv(key, raising=False)
    overrides_dir = str(tmp_path / "config")
    monkeypatch.setattr(config_runtime, "OVERRIDES_DIR", overrides_dir)
    monkeypatch.setattr(config_runtime, "OVERRIDES_PATH", os.path.join(overrides_dir, "linkedin_overrides.json"))
    config_runtime.effective_config(refresh=True)
    yield
    config_runtime.effective_config(refresh=True)


def test_defaults_match_model() -> None:
    cfg = config_runtime.load_config(refresh=True)

    assert cfg == LinkedInConfig()
    assert cfg.stabilization_wait_ms == 1000
    assert cfg.max_scroll_attempts == 300
    assert cfg.stable_threshold == 3
    assert cfg.selectors.list_item == "li"


def test_env_values_are_coerced(monkeypatch) -> None:
    monkeypatch.setenv("LINKEDIN_POST_URL", "https://www.linkedin.com/feed/update/urn:li:activity:7000000000000000000/")
    monkeypatch.setenv("LI_MAX_SCROLL_ATTEMPTS", "25")
    monkeypatch.setenv("LI_HEADLESS", "true")
    monkeypatch.setenv("LI_STABILIZATION_WAIT_MS", "")

    cfg = config_runtime.load_config(refresh=True)

    assert cfg.post_url.endswith("7000000000000000000/")
    assert cfg.max_scroll_attempts == 25
    assert cfg.headless is True
    assert cfg.stabilization_wait_ms == 1000


def test_cache_is_kept_until_refresh(monkeypatch) -> None:
    config_runtime.effective_config(refresh=True)
    monkeypatch.setenv("LI_STABLE_THRESHOLD", "5")

    assert config_runtime.get("stable_threshold") == 3
    assert config_runtime.effective_config(refresh=True)["stable_threshold"] == "5"
    assert config_runtime.load_config().stable_threshold == 5


def test_keyword_overrides_win_and_none_is_ignored(monkeypatch) -> None:
    monkeypatch.setenv("LI_OUTPUT_PATH", "/tmp/from-env.csv")

    cfg = config_runtime.load_config(
        refresh=True,
        output_path="/tmp/from-cli.csv",
        headless=None,
        **{"selectors.list_item": "li.reactor"},
    )

    assert cfg.output_path == "/tmp/from-cli.csv"
    assert cfg.headless is False
    assert cfg.selectors.list_item == "li.reactor"


def test_invalid_values_are_rejected(monkeypatch) -> None:
    monkeypatch.setenv("LI_MAX_SCROLL_ATTEMPTS", "-1")

    with pytest.raises(ValidationError):
        config_runtime.load_config(refresh=True)


def test_set_override_persists_and_refreshes() -> None:
    config_runtime.set_override("selectors.open_button", "button.reactions")
    config_runtime.set_override("stable_threshold", 4)

    with open(config_runtime.OVERRIDES_PATH, encoding="utf-8") as f:
        stored = json.load(f)
    assert stored == {"selectors": {"open_button": "button.reactions"}, "stable_threshold": 4}

    cfg = config_runtime.load_config()
    assert cfg.selectors.open_button == "button.reactions"
    assert cfg.stable_threshold == 4


def test_broken_overrides_file_is_ignored(caplog) -> None:
    os.makedirs(config_runtime.OVERRIDES_DIR, exist_ok=True)
    with open(config_runtime.OVERRIDES_PATH, "w", encoding="utf-8") as f:
        f.write("{not json")

    with caplog.at_level("WARNING"):
        cfg = config_runtime.load_config(refresh=True)

    assert cfg.max_scroll_attempts == 300
    assert any("load_error" in r.getMessage() for r in caplog.records)


def test_get_missing_path_returns_default() -> None:
    assert config_runtime.get("selectors.nope", "fallback") == "fallback"
