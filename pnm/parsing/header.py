"""
Header parser for PNM byte streams.

The parser walks an immutable buffer with an explicit cursor. It stops right
after the single whitespace byte that terminates the last structural token,
so binary payloads are never inspected (bytes that look like whitespace or
a comment marker stay in the payload).
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pnm.exceptions import ParserError
from pnm.formats.registry import (
    COMMENT_MARKER,
    MAX_VALUE_LIMIT,
    WHITESPACE,
    Encoding,
    LogicalType,
    lookup_magic,
    token_count,
)
from pnm.utils.debug import _dbg


_NUMBER_RE = re.compile(rb"[0-9]+")
_LINE_TERMINATORS = b"\r\n"
_MARKER = COMMENT_MARKER[0]


@dataclass
class ParsedHeader:
    """
    Result of parsing a PNM header.

    - magic: magic number, "P1".."P6"
    - width, height: image dimensions in pixels
    - max_value: maximum sample value (None for bilevel images)
    - comments: comment lines in order of appearance
    - payload: unconsumed bytes, starting at the first pixel-data byte
    - payload_offset: index of the first payload byte in the input
    """
    magic: str
    width: int
    height: int
    max_value: Optional[int]
    comments: List[str] = field(default_factory=list)
    payload: bytes = b""
    payload_offset: int = 0

    @property
    def image_type(self) -> LogicalType:
        return lookup_magic(self.magic)[0]

    @property
    def encoding(self) -> Encoding:
        return lookup_magic(self.magic)[1]


def _skip_whitespace(content: bytes, pos: int) -> int:
    """Return the index of the first non-whitespace byte at or after `pos`."""
    n = len(content)
    while pos < n and content[pos] in WHITESPACE:
        pos += 1
    return pos


def _next_token(content: bytes, pos: int) -> Optional[Tuple[bytes, int, bool]]:
    """
    Read one token starting at `pos`.

    Returns (token, end, is_comment) or None when the buffer is exhausted.
    `end` points at the terminator, which is not consumed. A comment runs to
    the next line terminator; any other token ends at whitespace or at a
    comment marker.
    """
    n = len(content)
    if pos >= n:
        return None

    end = pos
    if content[pos] == _MARKER:
        while end < n and content[end] not in _LINE_TERMINATORS:
            end += 1
        return content[pos:end], end, True

    while end < n and content[end] not in WHITESPACE and content[end] != _MARKER:
        end += 1
    return content[pos:end], end, False


def _comment_text(token: bytes, text_encoding: str) -> str:
    # Strip the marker and at most one following space.
    body = token[1:]
    if body[:1] == b" ":
        body = body[1:]
    return body.decode(text_encoding, errors="replace")


def _to_int(token: bytes, name: str) -> int:
    if not _NUMBER_RE.fullmatch(token):
        raise ParserError(f"invalid {name}: integer expected, got {token!r}")
    return int(token)


def parse(content: bytes, text_encoding: str = "utf-8") -> ParsedHeader:
    """
    Parse the header of a PNM image.

    Returns the header fields plus the remaining pixel payload.
    Raises ParserError for malformed or truncated headers.
    """
    content = bytes(content)
    comments: List[str] = []
    pos = 0

    # Step 1: leading comments, then the magic number
    magic: Optional[bytes] = None
    while magic is None:
        pos = _skip_whitespace(content, pos)
        token = _next_token(content, pos)
        if token is None:
            raise ParserError("not enough tokens: missing magic number")
        text, pos, is_comment = token
        if is_comment:
            comments.append(_comment_text(text, text_encoding))
        else:
            magic = text

    magic_str = magic.decode("ascii", errors="replace")
    image_type, _ = lookup_magic(magic_str)

    # Step 2: structural tokens, interleaved with comments
    needed = token_count(image_type)
    tokens: List[bytes] = []
    while len(tokens) < needed:
        pos = _skip_whitespace(content, pos)
        token = _next_token(content, pos)
        if token is None:
            raise ParserError("not enough tokens")
        text, end, is_comment = token
        if is_comment:
            comments.append(_comment_text(text, text_encoding))
        elif end >= len(content):
            # a token is only complete once its terminator has been seen
            raise ParserError("not enough tokens")
        else:
            tokens.append(text)
        pos = end

    # Step 3: consume exactly one separator byte before the payload
    if content[pos] in WHITESPACE:
        pos += 1

    # Step 4: validate structural tokens
    width = _to_int(tokens[0], "width")
    height = _to_int(tokens[1], "height")
    if width <= 0 or height <= 0:
        raise ParserError(f"invalid image dimensions: {width}x{height}")

    max_value: Optional[int] = None
    if len(tokens) > 2:
        max_value = _to_int(tokens[2], "max value")
        if not 1 <= max_value <= MAX_VALUE_LIMIT:
            raise ParserError(
                f"invalid max value: {max_value} (expected 1..{MAX_VALUE_LIMIT})"
            )

    _dbg(
        f"header {magic_str} {width}x{height} max={max_value} "
        f"comments={len(comments)} payload_offset={pos}"
    )

    return ParsedHeader(
        magic=magic_str,
        width=width,
        height=height,
        max_value=max_value,
        comments=comments,
        payload=content[pos:],
        payload_offset=pos,
    )
