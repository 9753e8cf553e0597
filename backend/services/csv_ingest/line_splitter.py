"""
Line Splitter

Tokenizes one line of broker text into fields. The delimiter is detected
once, from the header line, and reused for every data line:

    tab        if the header contains a tab
    semicolon  else if it contains a semicolon
    comma      otherwise

Double-quoted segments are honoured: delimiters inside quotes are literal,
and a doubled quote ("") inside a quoted segment is an escaped quote.
Values are returned untrimmed; trimming belongs to the row parser.
"""
import re
from typing import List

from constants import DELIMITER_PRIORITY, DEFAULT_DELIMITER

_LINE_BREAK = re.compile(r"\r?\n")


def detect_delimiter(header_line: str) -> str:
    """Pick the delimiter for a file from its header line."""
    for candidate in DELIMITER_PRIORITY:
        if candidate in header_line:
            return candidate
    return DEFAULT_DELIMITER


def split_lines(text: str) -> List[str]:
    """Split a text blob on \\n or \\r\\n line breaks."""
    return _LINE_BREAK.split(text)


def split_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split a line into field strings, respecting double-quoted segments.

    Examples:
        >>> split_line('a,"b, c",d')
        ['a', 'b, c', 'd']
        >>> split_line('"6"" slab",x')
        ['6" slab', 'x']
        >>> split_line('a\\tb', '\\t')
        ['a', 'b']
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current))
    return fields


def is_blank_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """True when a line holds nothing but delimiters and whitespace."""
    return line.replace(delimiter, '').strip() == ''
