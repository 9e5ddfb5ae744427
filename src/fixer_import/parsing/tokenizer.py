from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """
    Split raw input into lines, dropping the ones that are blank after trimming.

    A trailing `\\r` is removed from each line so CRLF files behave like LF files.
    Quoted newlines are not joined back together: one line is one row.
    """
    lines: list[str] = []
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line.strip():
            lines.append(line)
    return lines


def split_line(line: str, delimiter: str = ",") -> list[str]:
    """
    Tokenize one line into fields.

    - a field may be wrapped in double quotes; the delimiter is literal inside quotes.
    - `""` inside a quoted field is one literal `"`.
    - any other `"` toggles the quote state, wherever it appears.
    - an unterminated quote runs to the end of the line.

    Never raises: malformed quoting degrades into literal text.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                # escaped quote
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    # last field, always present (an empty line yields `[""]`)
    fields.append("".join(current))
    return fields
