"""
Ledger import CSV rendering.
Produces the fixed 16-column document the household ledger app imports.
"""
from decimal import Decimal
from typing import List, Sequence

from core.logger import setup_logger
from core.schema import ExportConfig, TransactionRecord

logger = setup_logger(__name__)

# Column labels are matched verbatim by the ledger app's importer
HEADER: List[str] = [
    "日付",
    "方法",
    "カテゴリ",
    "カテゴリの内訳",
    "支払元",
    "入金先",
    "品目",
    "メモ",
    "お店",
    "通貨",
    "収入",
    "支出",
    "振替",
    "残高調整",
    "通貨変換前の金額",
    "集計の設定",
]

UNNAMED_ITEM = "(品目なし)"
MEMO_SEPARATOR = " / "
LINE_TERMINATOR = "\r\n"


def escape_field(value: str) -> str:
    """Quote a field if it contains a comma, quote or newline."""
    if "," in value or '"' in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def format_amount(amount: float) -> str:
    """
    Format an amount as a plain decimal string.
    
    Whole numbers are written without a fractional part ("1000"),
    others with the shortest exact digits and never in exponent form
    ("12.5", "0.0000001").
    """
    if float(amount).is_integer():
        return str(int(amount))
    return format(Decimal(repr(float(amount))), "f")


def build_item(record: TransactionRecord, config: ExportConfig) -> str:
    prefix = config.item_prefix.strip()
    store = record.store.strip()
    if prefix:
        return f"{prefix} {store}".strip()
    if store:
        return store
    return UNNAMED_ITEM


def build_memo(record: TransactionRecord, config: ExportConfig) -> str:
    parts = []
    memo_prefix = config.memo_prefix.strip()
    if memo_prefix:
        parts.append(memo_prefix)
    if config.include_source_in_memo and record.source.strip():
        parts.append(record.source.strip())
    return MEMO_SEPARATOR.join(parts)


def build_row(record: TransactionRecord, config: ExportConfig) -> List[str]:
    """
    Build the 16 output fields for one record, in header order.
    
    Only expenses are emitted; income, transfer and balance adjustment
    are always zero.
    """
    expense = format_amount(record.amount)
    return [
        record.date,
        config.method.strip(),
        config.category.strip(),
        config.subcategory.strip(),
        config.payment_source.strip(),
        config.income_target.strip(),
        build_item(record, config),
        build_memo(record, config),
        record.store,
        config.currency.strip(),
        "0",
        expense,
        "0",
        "0",
        expense,
        config.aggregation_setting.strip(),
    ]


def render(records: Sequence[TransactionRecord], config: ExportConfig) -> str:
    """
    Render records as a ledger import CSV document.
    
    Records are written in the order given. An empty record list yields an
    empty string, meaning there is nothing to export.
    
    Args:
        records: Transaction records, already sorted by the caller
        config: Column values shared by every row
    
    Returns:
        CSV text with CRLF line endings and no trailing terminator
    """
    if not records:
        return ""
    
    lines = [",".join(escape_field(label) for label in HEADER)]
    for record in records:
        lines.append(",".join(escape_field(value) for value in build_row(record, config)))
    
    logger.debug(f"Rendered {len(records)} rows for export")
    return LINE_TERMINATOR.join(lines)
