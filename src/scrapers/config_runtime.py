from __future__ import annotations
import copy
import json
import logging
import os
from typing import Any, Dict
from functools import lru_cache

from paths import CONFIG_DIR
from src.scrapers.linkedin.config import LinkedInConfig

logger = logging.getLogger(__name__)

OVERRIDES_DIR = CONFIG_DIR
OVERRIDES_PATH = os.path.join(OVERRIDES_DIR, 'linkedin_overrides.json')

# Variables de entorno -> dot-path en LinkedInConfig.
# Los valores quedan como str; pydantic los convierte al tipo del campo.
ENV_MAPPING = {
    'LINKEDIN_USERNAME': 'username',
    'LINKEDIN_PASSWORD': 'password',
    'LINKEDIN_LOGIN_URL': 'login_url',
    'LINKEDIN_FEED_URL': 'post_url',
    'LINKEDIN_POST_URL': 'post_url',
    'LI_HEADLESS': 'headless',
    'LI_USER_DATA_DIR': 'user_data_dir',
    'LI_STABILIZATION_WAIT_MS': 'stabilization_wait_ms',
    'LI_MAX_SCROLL_ATTEMPTS': 'max_scroll_attempts',
    'LI_STABLE_THRESHOLD': 'stable_threshold',
    'LI_FIELD_WAIT_MS': 'field_attach_wait_ms',
    'LI_AUTH_TIMEOUT_MS': 'auth_timeout_ms',
    'LI_OUTPUT_PATH': 'output_path',
    'LI_BLOCK_RESOURCES': 'block_heavy_resources',
    'LI_LOG_LEVEL': 'log_level',
}


def _deep_merge(dst: Dict[str, Any], src: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_merge(dst[k], v)
        else:
            dst[k] = v
    return dst


def _set_by_path(d: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split('.') if path else []
    cur = d
    for p in parts[:-1]:
        if p not in cur or not isinstance(cur[p], dict):
            cur[p] = {}
        cur = cur[p]
    if parts:
        cur[parts[-1]] = value


def _get_by_path(d: Dict[str, Any], path: str, default: Any) -> Any:
    cur: Any = d
    for p in path.split('.') if path else []:
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


def _env_overrides() -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for env_key, path in ENV_MAPPING.items():
        val = os.getenv(env_key)
        if val is None or val == '':
            continue
        _set_by_path(result, path, val)
    return result


def _file_overrides() -> Dict[str, Any]:
    if not os.path.isfile(OVERRIDES_PATH):
        return {}
    try:
        with open(OVERRIDES_PATH, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"config.overrides load_error path={OVERRIDES_PATH} error={e}")
        return {}
    return overrides if isinstance(overrides, dict) else {}


@lru_cache(maxsize=1)
def _cached_effective_config() -> Dict[str, Any]:
    data = LinkedInConfig().model_dump()
    _deep_merge(data, _file_overrides())
    _deep_merge(data, _env_overrides())
    return data


def effective_config(refresh: bool = False) -> Dict[str, Any]:
    """Return merged configuration: defaults + overrides file + environment.

    Set refresh=True to drop the cache.
    """
    if refresh:
        _cached_effective_config.cache_clear()
    return copy.deepcopy(_cached_effective_config())


def get(path: str, default: Any = None) -> Any:
    return _get_by_path(effective_config(), path, default)


def load_config(refresh: bool = False, **overrides: Any) -> LinkedInConfig:
    """Build a validated LinkedInConfig; keyword overrides set to None are ignored.

    Keys may be dot-paths (e.g. ``selectors.list_item``) passed through a dict:
    ``load_config(**{'selectors.list_item': 'li.entry'})``.
    """
    data = effective_config(refresh=refresh)
    for path, value in overrides.items():
        if value is None:
            continue
        _set_by_path(data, path, value)
    return LinkedInConfig.model_validate(data)


def set_override(path: str, value: Any) -> None:
    """Persist an override at a dot-path.

    Writes to data/config/linkedin_overrides.json and clears cache.
    """
    os.makedirs(OVERRIDES_DIR, exist_ok=True)
    current = _file_overrides()
    _set_by_path(current, path, value)
    with open(OVERRIDES_PATH, 'w', encoding='utf-8') as f:
        json.dump(current, f, ensure_ascii=False, indent=2)
    _cached_effective_config.cache_clear()


__all__ = [
    'effective_config',
    'get',
    'load_config',
    'set_override',
]
