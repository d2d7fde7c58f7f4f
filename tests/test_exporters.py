"""
Unit tests for the ledger import CSV writer.
"""
import pytest

from core.exporters import HEADER, escape_field, format_amount, render
from core.schema import ExportConfig, TransactionRecord
from core.tokenizer import parse_rows

HEADER_LINE = "日付,方法,カテゴリ,カテゴリの内訳,支払元,入金先,品目,メモ,お店,通貨,収入,支出,振替,残高調整,通貨変換前の金額,集計の設定"


@pytest.fixture
def config():
    return ExportConfig(
        method="payment",
        category="食費",
        subcategory="外食",
        payment_source="クレジットカード",
        income_target="",
        currency="JPY",
        aggregation_setting="常に集計に含める",
        item_prefix="",
        memo_prefix="カード明細",
        include_source_in_memo=True,
    )


def _record(store="Shop", amount=1000, source="feb.csv", date="2024-02-01"):
    return TransactionRecord(date=date, store=store, amount=amount, source=source)


def test_render_empty_returns_empty_string(config):
    """Nothing to export is signalled by an empty string."""
    assert render([], config) == ""
    assert render([], ExportConfig()) == ""


def test_header_is_exact(config):
    """The header labels are reproduced exactly."""
    assert len(HEADER) == 16
    output = render([_record()], config)
    assert output.split("\r\n")[0] == HEADER_LINE


def test_row_layout(config):
    """Each record becomes one fully populated 16-column row."""
    output = render([_record()], config)
    lines = output.split("\r\n")
    assert lines[1] == (
        "2024-02-01,payment,食費,外食,クレジットカード,,Shop,カード明細 / feb.csv,Shop,JPY,0,1000,0,0,1000,常に集計に含める"
    )


def test_crlf_without_trailing_terminator(config):
    """Rows are CRLF separated with nothing after the last row."""
    output = render([_record(), _record(store="Other")], config)
    assert output.count("\r\n") == 2
    assert not output.endswith("\r\n")


def test_item_prefix(config):
    """A non-blank item prefix is prepended to the store."""
    cfg = config.model_copy(update={"item_prefix": " カード "})
    row = parse_rows(render([_record(store="Cafe")], cfg))[1]
    assert row[6] == "カード Cafe"
    row = parse_rows(render([_record(store="")], cfg))[1]
    assert row[6] == "カード"


def test_item_fallback_for_unnamed_store(config):
    """A record without a store gets the fallback item label."""
    row = parse_rows(render([_record(store="")], config))[1]
    assert row[6] == "(品目なし)"
    assert row[8] == ""


def test_memo_variants(config):
    """Memo joins prefix and source only when each contributes."""
    no_source = config.model_copy(update={"include_source_in_memo": False})
    assert parse_rows(render([_record()], no_source))[1][7] == "カード明細"
    
    no_prefix = config.model_copy(update={"memo_prefix": "  "})
    assert parse_rows(render([_record()], no_prefix))[1][7] == "feb.csv"
    
    neither = no_source.model_copy(update={"memo_prefix": ""})
    assert parse_rows(render([_record()], neither))[1][7] == ""


def test_config_fields_trimmed(config):
    """Config values are written trimmed."""
    cfg = config.model_copy(update={"category": "  食費  ", "currency": " JPY"})
    row = render([_record()], cfg).split("\r\n")[1].split(",")
    assert row[2] == "食費"
    assert row[9] == "JPY"


@pytest.mark.parametrize("amount, expected", [(1000, "1000"), (1000.0, "1000"), (12.5, "12.5"), (0.1, "0.1"), (0.0000001, "0.0000001"), (1234.5678, "1234.5678")])
def test_format_amount(amount, expected):
    """Amounts are plain decimals without a redundant fraction."""
    assert format_amount(amount) == expected


def test_escape_field():
    """Only fields with comma, quote or newline are quoted."""
    assert escape_field("plain") == "plain"
    assert escape_field("a,b") == '"a,b"'
    assert escape_field('say "hi"') == '"say ""hi"""'
    assert escape_field("two\nlines") == '"two\nlines"'


def test_round_trip_through_tokenizer(config):
    """Escaped output re-tokenizes to the original store name."""
    store = 'He said, "hi"'
    rows = parse_rows(render([_record(store=store)], config))
    assert rows[1][8] == store
    assert rows[1][6] == store


def test_end_to_end_rows(config):
    """Two statement rows give two data rows with their expenses."""
    from core.mapping import map_to_records
    
    rows = [["2024/02/01", "Shop A", "", "", "", "1000"], ["2024/02/02", "Shop B", "", "", "", "2000"]]
    output = render(map_to_records(rows, "feb.csv"), config)
    parsed = parse_rows(output)
    assert len(parsed) == 3
    assert [row[11] for row in parsed[1:]] == ["1000", "2000"]
    assert all("カード明細" in row[7] for row in parsed[1:])


def test_tiny_amount_not_in_exponent_form(config):
    """Small parsed amounts are written as plain decimals."""
    from core.mapping import parse_amount
    
    row = parse_rows(render([_record(amount=parse_amount("0.0000001"))], config))[1]
    assert row[11] == "0.0000001"
    assert row[14] == "0.0000001"
