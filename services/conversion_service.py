"""
Statement conversion service.
Runs a batch of statement files through the conversion pipeline.
"""
from typing import Any, List, Optional, Sequence, Tuple

from core.aggregate import summarize, summarize_by_month
from core.config import get_settings
from core.encoding import decode
from core.exceptions import BatchReadFailure
from core.exporters import render
from core.logger import setup_logger
from core.mapping import map_to_records
from core.schema import ConversionResult, ExportConfig, TransactionRecord
from core.tokenizer import parse_rows

logger = setup_logger(__name__)


class ConversionService:
    """Service for converting card statements into ledger import CSV."""
    
    def __init__(self):
        """Initialize conversion service."""
        self.settings = get_settings()
    
    async def read_uploads(self, files: Sequence[Any]) -> List[Tuple[str, bytes]]:
        """
        Read every uploaded file of a batch.
        
        Args:
            files: Upload objects exposing `filename` and async `read()`
        
        Returns:
            List of (file name, raw bytes) in upload order
        
        Raises:
            BatchReadFailure: If any file cannot be read; the whole batch is dropped
        """
        sources: List[Tuple[str, bytes]] = []
        for upload in files:
            name = upload.filename or ""
            try:
                content = await upload.read()
            except Exception as e:
                logger.error(f"Failed to read {name}, abandoning batch of {len(files)} files: {e}")
                raise BatchReadFailure(
                    "Failed to read uploaded file",
                    details={"filename": name, "error": str(e)}
                )
            sources.append((name, content))
        return sources
    
    def extract_records(self, sources: Sequence[Tuple[str, bytes]]) -> List[TransactionRecord]:
        """
        Decode, tokenize and map each source in order.
        
        Args:
            sources: (source label, raw bytes) pairs
        
        Returns:
            All records, stably sorted by date
        """
        records: List[TransactionRecord] = []
        for label, raw in sources:
            rows = parse_rows(decode(raw))
            file_records = map_to_records(rows, label)
            logger.info(f"{label}: {len(rows)} rows -> {len(file_records)} transactions")
            records.extend(file_records)
        
        records.sort(key=lambda record: record.date)
        return records
    
    def convert(
        self,
        sources: Sequence[Tuple[str, bytes]],
        config: Optional[ExportConfig] = None
    ) -> ConversionResult:
        """
        Convert a batch of statement files.
        
        Args:
            sources: (source label, raw bytes) pairs in caller order
            config: Export configuration (defaults to configured defaults)
        
        Returns:
            ConversionResult with records, summaries and the output CSV
        """
        config = config or self.settings.default_export_config()
        
        records = self.extract_records(sources)
        summary = summarize(records)
        
        logger.info(
            f"Converted {len(sources)} files: {summary.count} transactions, "
            f"total {summary.total:,.0f}"
        )
        
        return ConversionResult(
            records=records,
            summary=summary,
            monthly=summarize_by_month(records),
            csv=render(records, config),
            sources=[label for label, _ in sources],
        )
