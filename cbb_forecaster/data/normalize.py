"""Team identifier helpers.

Sports Reference keys a school three different ways: the slug in its links
(``/cbb/schools/north-carolina/men/2025.html``), the element-id token on
box-score pages (``box-score-basic-north-carolina``) and the display name
(``North Carolina``). Everything is reduced to one underscore-delimited ID so
the three can be compared.
"""

from __future__ import annotations

import html as _html
import re
import unicodedata
from typing import Optional

_SCHOOL_HREF_RE = re.compile(r"/cbb/schools/([^/]+)/")


def normalize_team_id(name: str) -> str:
    """Convert a slug or display name to a canonical underscore-delimited ID.

    Examples::

        >>> normalize_team_id("Texas A&amp;M")
        'texas_a_m'
        >>> normalize_team_id("san-jose-state")
        'san_jose_state'
        >>> normalize_team_id("San José State")
        'san_jose_state'
    """
    if not name:
        return ""
    s = _html.unescape(str(name))
    # NFKD decomposition + strip combining characters (accents)
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.lower()
    s = re.sub(r"[^a-z0-9]", "_", s)
    s = re.sub(r"_+", "_", s)
    return s.strip("_")


def school_slug(href: Optional[str]) -> Optional[str]:
    """Extract the school slug from a ``/cbb/schools/<slug>/...`` link."""
    if not href:
        return None
    match = _SCHOOL_HREF_RE.search(href)
    return match.group(1) if match else None


def team_id_from_url(url: Optional[str]) -> str:
    """Canonical team ID for a season page URL.

    Falls back to the last path component when the URL is not a school page.
    """
    slug = school_slug(url)
    if slug:
        return normalize_team_id(slug)
    if not url:
        return ""
    tail = url.rstrip("/").rsplit("/", 1)[-1]
    return normalize_team_id(tail.rsplit(".", 1)[0])
