"""Render a parsed citation back to canonical prose.

Styles:
  - full:     'Loi du 2 fevrier 1994, art. 1'
  - short:    'art. 1 Loi du 2 fevrier 1994'
  - pinpoint: 'art. 1'
Unknown styles fall back to full. An invalid citation, or one without an
article, renders as the empty string.
"""
from __future__ import annotations
from typing import Optional

from be_law.schemas import FormattedCitation, ParsedCitation
from be_law.parsing.citation_parser import parse_citation

STYLES = ('full', 'short', 'pinpoint')


def build_pinpoint(parsed: ParsedCitation) -> str:
    ref = parsed.section or ''
    if parsed.subsection:
        ref += f"({parsed.subsection})"
    if parsed.paragraph:
        ref += f"({parsed.paragraph})"
    return ref


def format_citation(parsed: ParsedCitation, style: Optional[str] = 'full') -> str:
    if not parsed.valid or not parsed.section:
        return ''
    pinpoint = f"art. {build_pinpoint(parsed)}"
    title = (parsed.title or '').strip()
    if style == 'pinpoint' or not title:
        return pinpoint
    if style == 'short':
        return f"{pinpoint} {title}"
    return f"{title}, {pinpoint}"


def format_citation_text(citation: Optional[str], style: Optional[str] = 'full') -> FormattedCitation:
    """Parse then format free text; blank input is reported, not raised."""
    parsed = parse_citation(citation)
    return FormattedCitation(
        input=citation or '',
        formatted=format_citation(parsed, style),
        valid=parsed.valid,
        error=parsed.error,
    )
