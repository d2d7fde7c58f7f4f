"""
Statement row mapping.
Turns tokenized statement rows into TransactionRecord objects, dropping
header, footer and zero-amount rows.
"""
import math
import re
from typing import List, Optional, Sequence

from core.logger import setup_logger
from core.schema import TransactionRecord

logger = setup_logger(__name__)

DATE_PATTERN = re.compile(r"[0-9]{4}([/-])[0-9]{2}\1[0-9]{2}")
NUMBER_PATTERN = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
AMOUNT_NOISE = re.compile(r"[^0-9.\-]")

DATE_COLUMN = 0
STORE_COLUMN = 1
AMOUNT_COLUMN = 2
PAYMENT_AMOUNT_COLUMN = 5


def parse_amount(value: Optional[str]) -> float:
    """
    Parse a statement amount string into a non-negative float.
    
    Currency symbols, thousands separators and other noise are removed first.
    Anything that does not parse yields 0.0.
    
    Args:
        value: Raw amount string (e.g. "¥1,234", "-500")
    
    Returns:
        Absolute amount, or 0.0 if unparsable
    """
    if not value:
        return 0.0
    
    cleaned = AMOUNT_NOISE.sub("", value)
    match = NUMBER_PATTERN.match(cleaned)
    if not match:
        return 0.0
    
    try:
        result = float(match.group(0))
    except ValueError:
        return 0.0
    
    if not math.isfinite(result):
        return 0.0
    return abs(result)


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Return the date as YYYY-MM-DD, or None when it is not a statement date."""
    if value is None:
        return None
    candidate = value.strip()
    if not DATE_PATTERN.fullmatch(candidate):
        return None
    return candidate.replace("/", "-")


def _column(row: Sequence[str], index: int) -> str:
    if index < len(row):
        return row[index].strip()
    return ""


def map_row(row: Sequence[str], source_label: str) -> Optional[TransactionRecord]:
    """
    Map a single statement row.
    
    Returns None for non-data rows (headers, totals) and for rows whose
    amount is zero or unparsable.
    """
    if not row:
        return None
    
    date = normalize_date(row[DATE_COLUMN])
    if date is None:
        return None
    
    # Column 5 holds the amount billed this month; column 2 the usage amount
    amount_str = _column(row, PAYMENT_AMOUNT_COLUMN) or _column(row, AMOUNT_COLUMN)
    amount = parse_amount(amount_str)
    if amount == 0:
        return None
    
    return TransactionRecord(
        date=date,
        store=_column(row, STORE_COLUMN),
        amount=amount,
        source=source_label,
    )


def map_to_records(rows: Sequence[Sequence[str]], source_label: str) -> List[TransactionRecord]:
    """
    Map tokenized statement rows to transaction records.
    
    Args:
        rows: Rows from parse_rows
        source_label: Provenance label, usually the file name
    
    Returns:
        Records in row order
    """
    records: List[TransactionRecord] = []
    skipped = 0
    
    for row in rows:
        record = map_row(row, source_label)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    
    logger.debug(f"Mapped {len(records)} records from {source_label} (skipped {skipped} rows)")
    return records
