"""Regex literal parser - turns "/pattern/flags" targets into compiled patterns."""

import logging
import re
from typing import NamedTuple, Optional, Pattern

logger = logging.getLogger(__name__)

LITERAL_PATTERN = re.compile(r"^/(.+)/([gimuy]*)$", re.DOTALL)

_FLAG_BITS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
}


class RegexLiteral(NamedTuple):
    """Pattern text plus the literal's flag letters."""
    pattern: str
    flags: str = ""

    @property
    def sticky(self) -> bool:
        """'y' anchors the test at the start of the input."""
        return "y" in self.flags


class CompiledRegex(NamedTuple):
    regex: Pattern
    sticky: bool = False

    def test(self, text: str) -> bool:
        if self.sticky:
            return self.regex.match(text) is not None
        return self.regex.search(text) is not None


def parse_regex_literal(text: str) -> RegexLiteral:
    """Split "/pattern/flags" into its parts; any other text is a bare pattern.

    Examples:
        "/^[0-9]+$/i" -> RegexLiteral("^[0-9]+$", "i")
        "^hello"      -> RegexLiteral("^hello", "")
    """
    match = LITERAL_PATTERN.match(text)
    if match:
        return RegexLiteral(match.group(1), match.group(2))
    return RegexLiteral(text)


def compile_regex(text: str) -> Optional[CompiledRegex]:
    """Compile a regex target, returning None when it is empty or invalid."""
    literal = parse_regex_literal(text)
    if not literal.pattern:
        return None
    bits = 0
    for flag in literal.flags:
        bits |= _FLAG_BITS.get(flag, 0)
    try:
        return CompiledRegex(re.compile(literal.pattern, bits), literal.sticky)
    except (re.error, OverflowError, RecursionError) as e:
        logger.warning("Invalid regex %r: %s", text, e)
        return None
