"""Markdown-to-plain-text conversion for the documentation popup.

Documentation arrives as Markdown-flavoured fragments (one per paragraph or
section). The popup draws plain text, so each fragment is run through a
fixed sequence of small rewriting steps that remove markup and keep the
words. Every step is a pure ``str -> str`` function; unmatched markers are
left alone.
"""

from __future__ import annotations

import re
import string
from typing import Callable, Iterable

SanitizeStep = Callable[[str], str]

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_FENCE_OPEN_RE = re.compile(r"```\w*\n?")
_INLINE_CODE_RE = re.compile(r"`(.*?)`", re.DOTALL)

_BOLD_STAR_RE = re.compile(r"\*\*([^*]+)\*\*")
_BOLD_UNDERSCORE_RE = re.compile(r"(?<!\w)__([^_]+)__(?!\w)")
_ITALIC_STAR_RE = re.compile(r"\*([^*]+)\*")
_ITALIC_UNDERSCORE_RE = re.compile(r"(?<!\w)_([^_]+)_(?!\w)")

_STRIKETHROUGH_RE = re.compile(r"~~(.*?)~~", re.DOTALL)

_IMAGE_RE = re.compile(r"!\[([^\]]+)\]\([^)]+\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")

# Order matters: "&amp;" goes last so "&amp;lt;" decodes once.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)

_BLOCKQUOTE_RE = re.compile(r"^>+", re.MULTILINE)
_BULLET_RE = re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE)
_ORDERED_RE = re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE)

_ESCAPED_PUNCT_RE = re.compile(r"\\([" + re.escape(string.punctuation) + r"])")

# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def strip_code_fences(text: str) -> str:
    """Drop ``` fences (with an optional language tag), keep the code."""
    return _FENCE_OPEN_RE.sub("", text).replace("```", "")


def unwrap_inline_code(text: str) -> str:
    return _INLINE_CODE_RE.sub(r"\1", text)


def unwrap_emphasis(text: str) -> str:
    """Remove bold and italic markers, bold first.

    Underscore markers only count outside words so identifiers like
    ``snake_case_name`` keep their underscores.
    """
    text = _BOLD_STAR_RE.sub(r"\1", text)
    text = _BOLD_UNDERSCORE_RE.sub(r"\1", text)
    text = _ITALIC_STAR_RE.sub(r"\1", text)
    return _ITALIC_UNDERSCORE_RE.sub(r"\1", text)


def unwrap_strikethrough(text: str) -> str:
    return _STRIKETHROUGH_RE.sub(r"\1", text)


def unwrap_links(text: str) -> str:
    """Replace images with their alt text and links with their label."""
    text = _IMAGE_RE.sub(r"\1", text)
    return _LINK_RE.sub(r"\1", text)


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def strip_blockquote(text: str) -> str:
    return _BLOCKQUOTE_RE.sub("", text)


def strip_list_marker(text: str) -> str:
    text = _BULLET_RE.sub("", text)
    return _ORDERED_RE.sub("", text)


def unescape_punctuation(text: str) -> str:
    return _ESCAPED_PUNCT_RE.sub(r"\1", text)


def trim(text: str) -> str:
    return text.strip()


SANITIZE_STEPS: tuple[SanitizeStep, ...] = (
    strip_code_fences,
    unwrap_inline_code,
    unwrap_emphasis,
    unwrap_strikethrough,
    unwrap_links,
    decode_entities,
    strip_blockquote,
    strip_list_marker,
    unescape_punctuation,
    trim,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sanitize_fragment(text: str) -> str:
    """Run a single fragment through every step in order."""
    for step in SANITIZE_STEPS:
        text = step(text)
    return text


def sanitize(fragments: Iterable[str]) -> list[str]:
    """Convert documentation fragments to plain-text lines.

    Returns exactly one line per fragment, including fragments that end up
    empty; dropping blank lines is left to the caller.
    """
    return [sanitize_fragment(fragment) for fragment in fragments]
