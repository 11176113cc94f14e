"""Markdown helpers for Starwind documentation.

``filter_by_topic`` narrows an llms.txt document to the sections relevant to a
topic. It is a single-pass heuristic, not a Markdown parser: inconsistently
nested headers may produce partial sections.

``parse_component_slugs`` derives the known component names from the
component links listed in llms.txt.
"""

from __future__ import annotations

import re

_HEADER_RE = re.compile(r"^(#{1,3})\s+(.+)")
_COMPONENT_LINK_RE = re.compile(r"\[[^\]]+?\]\([^)\s]*/components/([a-z0-9-]+)/?\)")

SUGGESTED_TOPICS = ("button", "accordion", "dialog", "card", "theming", "installation")


def not_found_message(topic: str) -> str:
    return (
        f'No documentation found for topic: "{topic}". '
        f"Try searching for: {', '.join(SUGGESTED_TOPICS)}, "
        "or use without a topic filter to see all available documentation."
    )


def _topic_sections(lines: list[str], topic: str) -> list[str]:
    """Capture every section whose header text contains ``topic``.

    A section starts at a matching H1–H3 header and runs until the next header
    of equal or shallower depth. Scanning continues afterwards so multiple
    matching sections are concatenated.
    """
    captured: list[str] = []
    capturing = False
    section_depth = 0

    in_code_block = False
    fence: str | None = None

    for line in lines:
        stripped = line.strip()

        # Fenced code: captured as content, never treated as a header
        if stripped.startswith("```") or stripped.startswith("~~~"):
            current_fence = stripped[:3]
            if not in_code_block:
                in_code_block = True
                fence = current_fence
            elif current_fence == fence:
                in_code_block = False
                fence = None
            if capturing:
                captured.append(line)
            continue

        match = None if in_code_block else _HEADER_RE.match(line)
        if match is None:
            if capturing:
                captured.append(line)
            continue

        depth = len(match.group(1))
        header_text = match.group(2).lower()

        if topic in header_text:
            capturing = True
            section_depth = depth
            captured.append(line)
        elif capturing and depth <= section_depth:
            capturing = False
        elif capturing:
            captured.append(line)

    return captured


def filter_by_topic(content: str, topic: str) -> str:
    """Return the parts of ``content`` relevant to ``topic``.

    Falls back from header sections, to individual matching lines, to a fixed
    not-found message naming the topic.
    """
    normalised = topic.lower().strip()
    if not normalised:
        return content

    lines = content.split("\n")

    sections = _topic_sections(lines, normalised)
    if sections:
        return "\n".join(sections)

    matching_lines = [line for line in lines if normalised in line.lower()]
    if matching_lines:
        return "\n".join(matching_lines)

    return not_found_message(topic)


def parse_component_slugs(content: str) -> list[str]:
    """Extract unique component slugs, in document order, from llms.txt links.

    Matches links of the form ``[Button](https://starwind.dev/docs/components/button)``.
    """
    slugs: list[str] = []
    seen: set[str] = set()
    for match in _COMPONENT_LINK_RE.finditer(content):
        slug = match.group(1)
        if slug not in seen:
            seen.add(slug)
            slugs.append(slug)
    return slugs
