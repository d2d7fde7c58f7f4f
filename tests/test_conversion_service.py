"""
Unit tests for the conversion service.
"""
import asyncio

import pytest

from core.exceptions import BatchReadFailure
from core.schema import ExportConfig
from core.tokenizer import parse_rows
from services.conversion_service import ConversionService


class FakeUpload:
    """Minimal stand-in for an uploaded file."""
    
    def __init__(self, filename, content=b"", error=None):
        self.filename = filename
        self.content = content
        self.error = error
    
    async def read(self):
        if self.error:
            raise self.error
        return self.content


JAN = "2024/01/20,Shop B,,,,2000\n2024/01/05,Shop A,,,,1000\n合計,,,,,3000\n".encode("cp932")
FEB = "ご利用日,ご利用店名,ご利用金額\n2024/02/01,書店,1500\n".encode("utf-8")


def test_convert_batch_sorted_by_date():
    """Records from all files are merged and sorted by date."""
    result = ConversionService().convert([("jan.csv", JAN), ("feb.csv", FEB)])
    
    assert [r.date for r in result.records] == ["2024-01-05", "2024-01-20", "2024-02-01"]
    assert [r.source for r in result.records] == ["jan.csv", "jan.csv", "feb.csv"]
    assert result.summary.count == 3
    assert result.summary.total == 4500
    assert [m.month for m in result.monthly] == ["2024-01", "2024-02"]
    assert result.sources == ["jan.csv", "feb.csv"]


def test_convert_uses_given_config():
    """The supplied export config drives the output rows."""
    config = ExportConfig(category="食費", memo_prefix="テスト")
    result = ConversionService().convert([("jan.csv", JAN)], config)
    
    rows = parse_rows(result.csv)
    assert len(rows) == 3
    assert rows[1][2] == "食費"
    assert rows[1][7] == "テスト"


def test_convert_uses_default_config():
    """Without a config the configured defaults apply."""
    result = ConversionService().convert([("jan.csv", JAN)])
    rows = parse_rows(result.csv)
    assert rows[1][1] == "payment"
    assert rows[1][7] == "カード明細 / jan.csv"


def test_convert_nothing_to_export():
    """A file without transactions gives an empty CSV."""
    result = ConversionService().convert([("empty.csv", b"header,only\n")])
    assert result.records == []
    assert result.csv == ""
    assert result.summary.count == 0


def test_read_uploads_in_order():
    """Uploads are read into (name, bytes) pairs in order."""
    uploads = [FakeUpload("a.csv", b"1"), FakeUpload("b.csv", b"2")]
    sources = asyncio.run(ConversionService().read_uploads(uploads))
    assert sources == [("a.csv", b"1"), ("b.csv", b"2")]


def test_read_uploads_failure_abandons_batch():
    """One failed read fails the whole batch."""
    uploads = [FakeUpload("a.csv", JAN), FakeUpload("b.csv", error=OSError("disk error"))]
    with pytest.raises(BatchReadFailure) as exc_info:
        asyncio.run(ConversionService().read_uploads(uploads))
    assert exc_info.value.details["filename"] == "b.csv"
