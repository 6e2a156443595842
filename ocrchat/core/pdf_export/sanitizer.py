"""
Character-set sanitization for the base-14 Helvetica fonts.

The fonts cover WinAnsi only; anything else is replaced with '?' before
it is measured or drawn.
"""

WINANSI_EXTRAS = frozenset(
    "€‚ƒ„…†‡ˆ‰Š‹ŒŽ"
    "‘’“”•–—˜™š›œžŸ"
)

REPLACEMENT_CHAR = "?"


def is_supported_char(char: str) -> bool:
    """True if the character can be rendered by the export fonts."""
    if char in "\n\r\t":
        return True
    code = ord(char)
    if 0x20 <= code <= 0x7E:
        return True
    if 0xA0 <= code <= 0xFF:
        return True
    return char in WINANSI_EXTRAS


def sanitize_for_winansi(text: str | None) -> str:
    """
    Replace every unsupported character with '?'.

    Args:
        text: Raw user-supplied or extracted text

    Returns:
        str: Text safe to measure and draw ("" for None)
    """
    if not text:
        return ""
    return "".join(char if is_supported_char(char) else REPLACEMENT_CHAR for char in text)
