"""
Summary statistics over transaction records.
"""
from typing import List, Sequence

import pandas as pd

from core.schema import MonthlySummary, Summary, TransactionRecord


def summarize(records: Sequence[TransactionRecord]) -> Summary:
    """
    Count records and total their amounts.
    
    Args:
        records: Transaction records
    
    Returns:
        Summary with count and total (0 and 0.0 for no records)
    """
    return Summary(
        count=len(records),
        total=sum((record.amount for record in records), 0.0),
    )


def summarize_by_month(records: Sequence[TransactionRecord]) -> List[MonthlySummary]:
    """
    Group records by calendar month.
    
    Args:
        records: Transaction records
    
    Returns:
        One MonthlySummary per YYYY-MM present, ordered by month
    """
    if not records:
        return []
    
    df = pd.DataFrame(
        {
            "month": [record.date[:7] for record in records],
            "amount": [record.amount for record in records],
        }
    )
    grouped = (
        df.groupby("month", sort=True)["amount"]
        .agg(["count", "sum"])
        .reset_index()
    )
    
    return [
        MonthlySummary(month=row["month"], count=int(row["count"]), total=float(row["sum"]))
        for _, row in grouped.iterrows()
    ]
