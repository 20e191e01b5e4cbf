"""Canonical reply formatting.

Provider output is rewritten by an ordered pipeline of pure ``str -> str``
stages. The pipeline is idempotent: canonical text passes through unchanged.
"""

from __future__ import annotations

import re
from typing import Callable, Pattern, Sequence, Tuple

BULLET = "•"

_BOLD_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\*\*(.*?)\*\*"),
    re.compile(r"__(.*?)__"),
)
_ARTIFACT = re.compile(r"Question to continue conversation:\s*", re.IGNORECASE)
_BULLET_MARKER = re.compile(r"^[ \t]*[-*][ \t]+", re.MULTILINE)
_LIST_INTRO = re.compile(rf"^(?!{BULLET} )([^\n]*:)[ \t]*\n(?:[ \t]*\n)*(?={BULLET} )", re.MULTILINE)
_QUESTION_LEAD = r"(?:Your fun question:|(?:What|How|Where|Which|Do|Have|Are|Would)\b)"
_LEADS_WITH_QUESTION = re.compile(rf"^{_QUESTION_LEAD}")
_EMBEDDED_QUESTION = re.compile(rf"^(.*?[.!?])[ \t]+({_QUESTION_LEAD}.*\?.*)$")
_EXCESS_BREAKS = re.compile(r"\n{4,}")

MAX_PASSES = 8


def strip_emphasis(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        for pattern in _BOLD_PATTERNS:
            text = pattern.sub(r"\1", text)
    return text


def remove_artifacts(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        text = _ARTIFACT.sub("", text)
    return text


def normalize_bullets(text: str) -> str:
    return _BULLET_MARKER.sub(f"{BULLET} ", text)


def space_list_intros(text: str) -> str:
    return _LIST_INTRO.sub(r"\1\n\n", text)


def _is_question(line: str) -> bool:
    line = line.strip()
    if not line or line.startswith(BULLET):
        return False
    if line.endswith("?"):
        return True
    return bool(_LEADS_WITH_QUESTION.match(line)) and "?" in line


def space_trailing_question(text: str) -> str:
    """Put the closing question on its own line, two blank lines below the body."""
    body = text.rstrip()
    head, _, last = body.rpartition("\n")
    stripped = last.strip()
    if not _LEADS_WITH_QUESTION.match(stripped) and not stripped.startswith(BULLET):
        embedded = _EMBEDDED_QUESTION.match(last)
        if embedded:
            head = f"{head}\n{embedded.group(1)}" if head else embedded.group(1)
            last = embedded.group(2)
    if not _is_question(last) or not head.strip():
        return text
    return f"{head.rstrip()}\n\n\n{last.strip()}"


def collapse_breaks(text: str) -> str:
    return _EXCESS_BREAKS.sub("\n\n\n", text)


def trim(text: str) -> str:
    return text.strip()


PIPELINE: Tuple[Callable[[str], str], ...] = (
    strip_emphasis,
    remove_artifacts,
    normalize_bullets,
    space_list_intros,
    space_trailing_question,
    collapse_breaks,
    trim,
)


def normalize(text: str, stages: Sequence[Callable[[str], str]] = PIPELINE) -> str:
    """Run the pipeline until the text stops changing.

    A later stage can expose work for an earlier one, e.g. dropping the
    artifact phrase from ``*Question to continue conversation: ***`` leaves a
    fresh ``****`` pair, so a single pass is not enough.
    """
    if not text:
        return ""
    for _ in range(MAX_PASSES):
        previous = text
        for stage in stages:
            text = stage(text)
        if text == previous:
            break
    return text
