"""
Quote-aware CSV tokenizer.

Handles quoted fields with embedded commas, newlines and doubled quotes.
Malformed quoting never raises; it only moves field boundaries.
"""
from typing import List, Optional

UNQUOTED = "unquoted"
QUOTED = "quoted"


def parse_rows(text: str) -> List[List[str]]:
    """
    Split CSV text into rows of fields.
    
    Unquoted text is stripped of surrounding whitespace; quoted text is
    kept verbatim. Blank lines are dropped.
    
    Args:
        text: Decoded CSV document
    
    Returns:
        List of rows, each a list of field strings
    """
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    quote_start: Optional[int] = None
    quote_end: Optional[int] = None
    state = UNQUOTED
    
    def end_field() -> None:
        nonlocal field, quote_start, quote_end
        value = "".join(field)
        if quote_start is None:
            row.append(value.strip())
        else:
            # Only the text between the first and last quote is kept verbatim
            end = len(value) if state == QUOTED or quote_end is None else quote_end
            row.append(value[:quote_start].lstrip() + value[quote_start:end] + value[end:].rstrip())
        field = []
        quote_start = None
        quote_end = None
    
    def end_row() -> None:
        nonlocal row
        if not (len(row) == 1 and row[0] == ""):
            rows.append(row)
        row = []
    
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        
        if state == QUOTED:
            if ch == '"':
                if i + 1 < length and text[i + 1] == '"':
                    field.append('"')
                    i += 1
                else:
                    state = UNQUOTED
                    quote_end = len(field)
            else:
                field.append(ch)
        elif ch == '"':
            state = QUOTED
            if quote_start is None:
                quote_start = len(field)
        elif ch == ",":
            end_field()
        elif ch == "\n":
            end_field()
            end_row()
        elif ch != "\r":
            field.append(ch)
        
        i += 1
    
    # Flush a last row that has no trailing newline
    if field or row:
        end_field()
        end_row()
    
    return rows
