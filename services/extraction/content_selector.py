# services/extraction/content_selector.py
"""
Heuristic to locate the primary job‑posting region of a parsed page.

The landmarks come from the extraction profile and are tried in order; the
first one that matches an element wins.  A landmark whose text is shorter
than ``min_landmark_chars`` is treated as a teaser (think "Apply now" banner
inside a ``<main>``) and the full body text is used instead.

Priority follows selector order, not document order: a teaser ``<article>``
that precedes ``<main>`` in the markup does not shadow ``<main>``.
"""

from typing import Optional

from bs4 import BeautifulSoup
from loguru import logger

from .config_loader import ExtractionProfile, get_extraction_profile
from .text_normalizer import collapse_whitespace, element_text, parse_document


def select_primary_content(
    soup: BeautifulSoup, profile: Optional[ExtractionProfile] = None
) -> str:
    """Return the text of the best content region, falling back to the body."""
    profile = profile or get_extraction_profile()

    for selector in profile.landmark_selectors:
        landmark = soup.select_one(selector)
        if landmark is None:
            continue
        text = element_text(landmark)
        if len(collapse_whitespace(text)) >= profile.min_landmark_chars:
            return text
        logger.warning(
            f"Landmark '{selector}' holds fewer than {profile.min_landmark_chars} "
            "characters, falling back to full body text"
        )
        break

    return element_text(soup.body or soup)


def extract_page_text(html: str, profile: Optional[ExtractionProfile] = None) -> str:
    """Parse *html*, pick its primary content and return it normalized."""
    profile = profile or get_extraction_profile()
    soup = parse_document(html, profile)
    return collapse_whitespace(select_primary_content(soup, profile))
