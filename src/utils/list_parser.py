from __future__ import annotations

from typing import Optional

from src.scrapers.types import ReactionRecord
from .url import absolute_profile_url


def _clean(value: Optional[str]) -> str:
    return (value or '').strip()


def build_reaction_record(
    index: int,
    reaction_type: Optional[str],
    user_name: Optional[str],
    current_role: Optional[str],
    profile_link: Optional[str],
) -> ReactionRecord:
    """Pure helper that builds a reaction record from the resolved pieces.

    Inputs:
    - index: 1-based position of the entry in list order
    - reaction_type / user_name / current_role: raw text, may be None
    - profile_link: href as read from the DOM, may be relative or None

    Every string field ends up as a stripped str; missing pieces become "".
    """
    if index < 1:
        raise ValueError(f"index must be 1-based, got {index}")
    return {
        'index': index,
        'reaction_type': _clean(reaction_type),
        'user_name': _clean(user_name),
        'current_role': _clean(current_role),
        'profile_link': absolute_profile_url(_clean(profile_link)),
    }
