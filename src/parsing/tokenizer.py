"""
CSV line tokenizer.

Splits a single delimited line into fields, honouring double-quoted
values and doubled-quote escapes.
"""

from typing import List


def parse_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split one CSV line into raw (untrimmed) fields.

    Args:
        line: A single line of delimited text
        delimiter: Field separator

    Returns:
        Ordered list of field values. An empty line yields [""].

    An unmatched opening quote keeps the rest of the line inside the
    current field instead of raising.
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
                # Escaped quote inside a quoted field
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current))
    return fields
