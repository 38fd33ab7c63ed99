"""
Delimited-text parser for the published location sheet.

A single left-to-right scan with two modes (quoted / unquoted). Handles the
doubled-quote escape and any mix of ``\\n``, ``\\r\\n`` and bare ``\\r`` line
endings. It never raises: malformed input (for example an unterminated
quote) yields whatever fields were collected.
"""

from typing import List

FIELD_SEPARATOR = ","
QUOTE = '"'


def parse_records(text: str) -> List[List[str]]:
    """
    Split ``text`` into rows of raw (untrimmed) fields.

    A trailing row whose fields are all blank after trimming is dropped so a
    final newline does not produce an empty record.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    quoted = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == QUOTE:
            if quoted and i + 1 < n and text[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 1
            else:
                quoted = not quoted
        elif quoted:
            field.append(ch)
        elif ch == FIELD_SEPARATOR:
            row.append("".join(field))
            field = []
        elif ch == "\n" or ch == "\r":
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            field = []
            rows.append(row)
            row = []
        else:
            field.append(ch)
        i += 1

    row.append("".join(field))
    rows.append(row)

    if rows and all(not cell.strip() for cell in rows[-1]):
        rows.pop()
    return rows
