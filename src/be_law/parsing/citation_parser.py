"""Belgian statute citation parsing.

Accepted shapes, tried in this order (first match wins):
  - loi-1994-02-02-1994009284-fr, art. 1        (id first)
  - art. 1, loi-1994-02-02-1994009284-fr        (article first, id)
  - Loi du 2 fevrier 1994, art. 1               (title first)
  - article 10, Wet van 2 februari 1994         (article first, title)

Matching is case-insensitive. Titles are kept verbatim, accents included.
Article numbers are compacted and lowercased; '1er' becomes '1', while
'5bis' stays '5bis'.
"""
from __future__ import annotations
import re
from typing import Callable, List, Optional, Tuple

from be_law.schemas import ParsedCitation
from be_law.utils.text import compact

ARTICLE_NUMBER = r"(\d+(?:\s*[a-z]+)?(?:er)?)"
STATUTE_ID = r"((?:loi|wet)-\d{4}-\d{2}-\d{2}-\d{10}-(?:fr|nl))"
ARTICLE_MARKER = r"(?:art\.?|article)"

ID_FIRST_RE = re.compile(rf"^{STATUTE_ID}\s*,?\s*{ARTICLE_MARKER}\s*{ARTICLE_NUMBER}$", re.IGNORECASE)
ARTICLE_FIRST_ID_RE = re.compile(rf"^{ARTICLE_MARKER}\s*{ARTICLE_NUMBER}\s*,?\s*{STATUTE_ID}$", re.IGNORECASE)
TITLE_FIRST_RE = re.compile(rf"^(.+?)\s*,\s*{ARTICLE_MARKER}\s*{ARTICLE_NUMBER}$", re.IGNORECASE)
ARTICLE_FIRST_TITLE_RE = re.compile(rf"^{ARTICLE_MARKER}\s*{ARTICLE_NUMBER}\s*,\s*(.+?)$", re.IGNORECASE)

YEAR_RE = re.compile(r"(?:19|20)\d{2}")
ORDINAL_RE = re.compile(r"^(\d+)er$")

EMPTY_CITATION = 'Empty citation'

# (reference, raw article number)
Match = Tuple[str, str]


def _match_id_first(text: str) -> Optional[Match]:
    m = ID_FIRST_RE.match(text)
    return (m.group(1), m.group(2)) if m else None


def _match_article_first_id(text: str) -> Optional[Match]:
    m = ARTICLE_FIRST_ID_RE.match(text)
    return (m.group(2), m.group(1)) if m else None


def _match_title_first(text: str) -> Optional[Match]:
    m = TITLE_FIRST_RE.match(text)
    return (m.group(1).strip(), m.group(2)) if m else None


def _match_article_first_title(text: str) -> Optional[Match]:
    m = ARTICLE_FIRST_TITLE_RE.match(text)
    return (m.group(2).strip(), m.group(1)) if m else None


# Priority order; more specific (canonical id) forms first.
MATCHERS: List[Callable[[str], Optional[Match]]] = [
    _match_id_first,
    _match_article_first_id,
    _match_title_first,
    _match_article_first_title,
]


def normalize_article_number(value: str) -> str:
    return ORDINAL_RE.sub(r"\1", compact(value).lower())


def extract_year(value: str) -> Optional[int]:
    m = YEAR_RE.search(value)
    return int(m.group(0)) if m else None


def parse_citation(citation: Optional[str]) -> ParsedCitation:
    trimmed = (citation or '').strip()
    if not trimmed:
        return ParsedCitation(valid=False, type='unknown', error=EMPTY_CITATION)

    for matcher in MATCHERS:
        found = matcher(trimmed)
        if found is None:
            continue
        reference, article = found
        return ParsedCitation(
            valid=True,
            type='statute',
            title=reference,
            year=extract_year(reference),
            section=normalize_article_number(article),
        )

    return ParsedCitation(
        valid=False,
        type='unknown',
        error=f'Could not parse Belgian citation: "{trimmed}"',
    )


if __name__ == '__main__':
    for sample in ("Loi du 2 fevrier 1994, art. 1er", "art. 10, wet-1994-02-02-1994009284-nl"):
        print(parse_citation(sample).model_dump(exclude_none=True))
