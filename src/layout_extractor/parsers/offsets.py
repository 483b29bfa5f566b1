"""Byte offsets annotated as trailing comments, e.g. ``bool isRunning; // 0x0``."""

import re
from typing import Optional

OFFSET_PATTERN = re.compile(r"//\s*(?:0[xX])?([0-9a-fA-F]+)\b")


def parse_offset(comment: str) -> Optional[int]:
    """Extract the hexadecimal offset of a single-line comment.

    Args:
        comment: Comment text, including the leading ``//``

    Returns:
        Offset in bytes or None when the comment carries no offset
    """
    match = OFFSET_PATTERN.match(comment.strip())
    if not match:
        return None
    return int(match.group(1), 16)
