from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse, urlunparse

LINKEDIN_BASE = 'https://www.linkedin.com'

LINKEDIN_HOSTS = {'linkedin.com', 'www.linkedin.com', 'm.linkedin.com'}

# https://www.linkedin.com/feed/update/urn:li:activity:<19 dígitos>/
POST_URL_RE = re.compile(r'^https://www\.linkedin\.com/feed/update/urn:li:(activity|share|ugcPost):\d{19}/?$')


def _ensure_https(url: str) -> str:
    if not url:
        return url
    if url.startswith(('http://', 'https://')):
        return url
    return 'https://' + url.lstrip('/')


def normalize_post_url(url: str) -> str:
    """Normalize a LinkedIn post URL.
    - Ensures https
    - Maps linkedin.com / m.linkedin.com to www.linkedin.com
    - Drops query string and fragment (tracking params)
    """
    if not url:
        return url
    p = urlparse(_ensure_https(url.strip()))
    host = (p.netloc or '').lower().split(':')[0]
    if host in LINKEDIN_HOSTS:
        host = 'www.linkedin.com'
    path = (p.path or '/').replace('//', '/')
    return urlunparse(('https', host, path, '', '', ''))


def is_linkedin_post_url(url: str) -> bool:
    return bool(url) and bool(POST_URL_RE.match(normalize_post_url(url)))


def absolute_profile_url(href: str) -> str:
    """Relative hrefs ('/in/usuario') become absolute; absolute ones are returned as-is."""
    if not href:
        return ""
    href = href.strip()
    if href.startswith('http'):
        return href
    return urljoin(LINKEDIN_BASE, href)
