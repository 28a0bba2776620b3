"""Selectores de LinkedIn agrupados por fase (sesión, modal de reacciones, campos).

Cada categoría guarda una lista de candidatos; la versión permite saber con qué
juego de selectores se hizo un harvest cuando LinkedIn cambia su DOM.
"""
from typing import List, Dict, Any

SELECTOR_REGISTRY: Dict[str, Dict[str, Any]] = {
    "linkedin": {
        "version": "li-1",
        "session": {
            "logged_in": [
                "img[class='global-nav__me-photo evi-image ember-view']",
            ],
            "username_input": [
                "input[id='username']",
            ],
            "password_input": [
                "input[id='password']",
            ],
            "submit_button": [
                "button[aria-label='Sign in']",
            ],
        },
        "reactions": {
            "open_button": [
                "button[class*='social-details-reactors-facepile__reactions-modal-button']",
            ],
            "scroll_container": [
                "div[class='artdeco-modal__content social-details-reactors-modal__content ember-view']",
            ],
            "list_root": [
                "ul[class='artdeco-list artdeco-list--offset-1']",
            ],
            "list_item": [
                "li",
            ],
        },
        "fields": {
            "user_name": [
                "span[class='text-view-model']",
            ],
            "current_role": [
                "div[class='artdeco-entity-lockup__caption ember-view']",
            ],
            "profile_link": [
                "a[class='link-without-hover-state ember-view']",
            ],
            "reaction_type": [
                "img[data-test-reactions-icon-size='small']",
            ],
        }
    }
}

class SelectorRegistryError(LookupError):
    """Plataforma o categoría ausente en el registry."""


def _platform_entry(platform: str) -> Dict[str, Any]:
    try:
        return SELECTOR_REGISTRY[platform]
    except KeyError:
        raise SelectorRegistryError(f"No registry for platform={platform}") from None


def registry_version(platform: str) -> str:
    return _platform_entry(platform).get("version", "unknown")


def get_selectors(platform: str, category: str) -> List[str]:
    """Candidates for ``category``, a dot-path such as ``reactions.list_item``."""
    node: Any = _platform_entry(platform)
    for part in category.split('.'):
        node = node.get(part) if isinstance(node, dict) else None
        if node is None:
            raise SelectorRegistryError(f"Unknown selector category={category} platform={platform}")
    if not isinstance(node, list):
        raise SelectorRegistryError(f"Selector category={category} is a group, not a list (platform={platform})")
    return list(node)


def primary_selector(platform: str, category: str) -> str:
    """First registered candidate; Playwright locators take a single selector."""
    candidates = get_selectors(platform, category)
    if not candidates:
        raise SelectorRegistryError(f"Selector category={category} is empty for platform={platform}")
    return candidates[0]
