"""Mask ``"..."`` spans so multi-line labels survive line splitting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = "QUOTED_"

# A closing quote preceded by a backslash is part of the label.
_QUOTED_PATTERN = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_ESCAPED_QUOTE = re.compile(r'\\"')


@dataclass
class QuotedText:
    """Masked text plus the placeholder table needed to undo the masking."""

    masked: str
    strings: Dict[str, str] = field(default_factory=dict)
    fence: str = "__"

    def restore(self, text: str) -> str:
        """Substitute every placeholder in ``text`` with its original content."""

        if not self.strings:
            return text
        return self._placeholder_pattern().sub(
            lambda match: self.strings.get(match.group(0), match.group(0)), text
        )

    def is_placeholder(self, text: str) -> bool:
        return text.strip() in self.strings

    def _placeholder_pattern(self) -> "re.Pattern[str]":
        fence = re.escape(self.fence)
        return re.compile(rf"{fence}{PLACEHOLDER_MARKER}\d+{fence}")


class QuotedStringExtractor:
    """Replace quoted spans with ``__QUOTED_<n>__`` placeholders.

    Spans are non-greedy and may contain newlines; ``\\"`` inside a span is an
    escaped quote. A quote with no partner is left in place as a literal
    character.
    """

    def extract(self, raw: str) -> QuotedText:
        fence = _choose_fence(raw)
        strings: Dict[str, str] = {}

        def _mask(match: "re.Match[str]") -> str:
            placeholder = f"{fence}{PLACEHOLDER_MARKER}{len(strings)}{fence}"
            strings[placeholder] = _ESCAPED_QUOTE.sub('"', match.group(1))
            return placeholder

        masked = _QUOTED_PATTERN.sub(_mask, raw)
        if strings:
            logger.debug("Masked %d quoted string(s)", len(strings))
        if '"' in masked:
            logger.debug("Unterminated quote left as literal text")
        return QuotedText(masked=masked, strings=strings, fence=fence)


def _choose_fence(raw: str) -> str:
    """Widen the underscore fence until no placeholder can collide with ``raw``."""

    fence = "__"
    while f"{fence}{PLACEHOLDER_MARKER}" in raw:
        fence += "_"
    return fence
