"""
Turns a free-text model reply into a score and a list of suggestions.

The reply is expected to follow the section layout requested by
``codelens.prompts``. When it does not, scoring degrades to a keyword
heuristic and suggestions degrade to a fixed generic list, so callers always
get a usable result.
"""

import re
from typing import Iterable, List, Optional

from codelens.constants import (
    BEST_PRACTICES_MARKER,
    DEFAULT_SUGGESTIONS,
    HEURISTIC_BASE_SCORE,
    HEURISTIC_KEYWORD_WEIGHTS,
    ISSUES_MARKER,
    SCORE_MARKER,
    SECURITY_MARKER,
    SUGGESTIONS_MARKER,
)
from codelens.models import clamp_score

BULLET_PREFIXES = ("* ", "- ")
CODE_FENCE = "```"

_SCORE_PATTERN = re.compile(re.escape(SCORE_MARKER) + r"[\s*]*(\d+)")
_BOLD_BULLET_PATTERNS = (
    re.compile(r"^\*\s*\*\*(.*?)\*\*:?\s*"),
    re.compile(r"^-\s*\*\*(.*?)\*\*:?\s*"),
)
_PLAIN_BULLET_PATTERNS = (
    re.compile(r"^\*\s*"),
    re.compile(r"^-\s*"),
)
# Leftover of the next section's heading, e.g. "##" or "### 3." before "BEST PRACTICES:".
_TRAILING_HEADING = re.compile(r"\n[ \t]*(?:#+|\*\*)[^\n]*\Z")


def score_from_marker(text: str) -> Optional[int]:
    """Return the integer after ``CODE QUALITY SCORE:``, or None when absent."""
    match = _SCORE_PATTERN.search(text)
    if match:
        return int(match.group(1))
    return None


def heuristic_score(text: str) -> int:
    """
    Keyword-based fallback score, clamped to [1, 10].

    This is a rough signal for replies that ignored the requested layout,
    not an assessment of the code.
    """
    lowered = text.lower()
    score = HEURISTIC_BASE_SCORE
    for keyword, weight in HEURISTIC_KEYWORD_WEIGHTS.items():
        if keyword in lowered:
            score += weight
    return clamp_score(score)


def extract_score(text: str) -> int:
    marker_score = score_from_marker(text)
    if marker_score is not None:
        return marker_score
    return heuristic_score(text)


def extract_suggestions(text: str) -> List[str]:
    """
    Collect bullet points from the SUGGESTIONS and BEST PRACTICES sections.

    Suggestions come first, best practices after. Falls back to
    ``DEFAULT_SUGGESTIONS`` so the result is never empty.
    """
    suggestions: List[str] = []

    section = find_section(text, SUGGESTIONS_MARKER, (BEST_PRACTICES_MARKER, ISSUES_MARKER, SECURITY_MARKER))
    if section is not None:
        suggestions.extend(parse_bullet_points(section))

    section = find_section(text, BEST_PRACTICES_MARKER, (SUGGESTIONS_MARKER, ISSUES_MARKER, SECURITY_MARKER))
    if section is not None:
        suggestions.extend(parse_bullet_points(section))

    return suggestions or list(DEFAULT_SUGGESTIONS)


def find_section(text: str, marker: str, terminators: Iterable[str]) -> Optional[str]:
    """Text between ``marker`` and the first of ``terminators`` (or the end)."""
    stops = "|".join(re.escape(t) for t in terminators)
    match = re.search(re.escape(marker) + r"(.*?)(?=" + stops + r"|\Z)", text, re.DOTALL)
    if not match:
        return None
    return _TRAILING_HEADING.sub("", match.group(1).rstrip())


def parse_bullet_points(text: str) -> List[str]:
    """
    Split a section into its ``*``/``-`` bullet points.

    A point runs until the next bullet. Continuation lines are kept trimmed;
    inside a fenced code block lines keep their indentation and blank lines
    are kept too. A bullet marker inside a code block stays code only while
    a closing fence is still ahead; otherwise it closes the block and starts
    a new point. Fences are counted per line, so inline pairs such as
    ``- Use ```f-strings``` here`` never open a block.
    """
    lines = text.split("\n")
    points: List[str] = []
    current: Optional[str] = None
    in_code_block = False

    for index, line in enumerate(lines):
        stripped = line.strip()
        opens_fence = stripped.count(CODE_FENCE) % 2 == 1

        if stripped.startswith(BULLET_PREFIXES) and not (in_code_block and _fence_ahead(lines, index)):
            if current is not None:
                points.append(current)
            current = clean_bullet_point(stripped)
            in_code_block = opens_fence
            continue

        if opens_fence:
            in_code_block = not in_code_block
            if current is not None:
                current += "\n" + line
            continue

        if in_code_block:
            if current is not None:
                current += "\n" + line
        elif current is not None and stripped:
            current += "\n" + stripped

    if current is not None:
        points.append(current)

    return [point.strip() for point in points if point.strip()]


def _fence_ahead(lines: List[str], index: int) -> bool:
    return any(CODE_FENCE in line for line in lines[index + 1:])


def clean_bullet_point(line: str) -> str:
    """``"* **Label**: text"`` -> ``"Label: text"``; plain bullets lose their glyph."""
    cleaned = line
    for pattern in _BOLD_BULLET_PATTERNS:
        cleaned = pattern.sub(r"\1: ", cleaned)
    for pattern in _PLAIN_BULLET_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()
