"""Full-width / half-width text normalization."""

FULL_WIDTH_OFFSET = 0xFEE0
IDEOGRAPHIC_SPACE = "　"

# '!'..'~' <-> '！'..'～'
_TO_FULL = {code: code + FULL_WIDTH_OFFSET for code in range(0x21, 0x7F)}
_TO_FULL[ord(" ")] = ord(IDEOGRAPHIC_SPACE)
_TO_HALF = {full: half for half, full in _TO_FULL.items()}


def to_full_width(text: str) -> str:
    """Map printable ASCII (and space) to full-width forms."""
    return text.translate(_TO_FULL)


def to_half_width(text: str) -> str:
    """Map full-width forms (and the ideographic space) back to ASCII."""
    return text.translate(_TO_HALF)


def normalize_for_match(text: str) -> str:
    """Half-width, case-folded form used for keyword comparison."""
    return to_half_width(text).lower()


def get_search_variants(text: str) -> list[str]:
    """Expand a keyword into its original, full-width and half-width variants.

    Blank variants are dropped and order is stable (original first).
    """
    variants: list[str] = []
    for candidate in (text, to_full_width(text), to_half_width(text)):
        if candidate.strip() and candidate not in variants:
            variants.append(candidate)
    return variants
