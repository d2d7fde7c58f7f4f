"""
FastAPI routes for statement upload, conversion and download.
Thin HTTP layer: reads bytes, hands them to the conversion service.
"""
import asyncio
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from core.config import get_settings
from core.exceptions import BatchReadFailure
from core.logger import setup_logger
from core.schema import ConversionResult, ExportConfig
from services.conversion_service import ConversionService
from services.sample_client import SampleClient

logger = setup_logger(__name__)
settings = get_settings()

READ_FAILURE_MESSAGE = "ファイルの読み込みに失敗しました。"

# Initialize FastAPI app
app = FastAPI(
    title="Card Statement Converter",
    description="Convert credit card statement CSV into ledger import CSV",
    version="1.0.0"
)

# Service instance
conversion_service = ConversionService()


@app.exception_handler(BatchReadFailure)
async def batch_read_failure_handler(request: Request, exc: BatchReadFailure):
    """Report any read failure with one generic message."""
    logger.error(f"Batch abandoned: {exc.message} {exc.details}")
    return JSONResponse(status_code=500, content={"detail": READ_FAILURE_MESSAGE})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "card_statement_converter",
        "version": "1.0.0"
    }


@app.get("/favicon.ico")
async def favicon():
    """Return empty response for favicon to avoid 404 errors."""
    return Response(status_code=204)


def export_config_form(
    method: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    subcategory: Optional[str] = Form(None),
    paymentSource: Optional[str] = Form(None),
    incomeTarget: Optional[str] = Form(None),
    currency: Optional[str] = Form(None),
    aggregationSetting: Optional[str] = Form(None),
    itemPrefix: Optional[str] = Form(None),
    memoPrefix: Optional[str] = Form(None),
    includeSourceInMemo: Optional[bool] = Form(None),
) -> ExportConfig:
    """
    Build an ExportConfig from form fields.
    Fields left out of the form keep their configured defaults.
    """
    submitted = {
        "method": method,
        "category": category,
        "subcategory": subcategory,
        "payment_source": paymentSource,
        "income_target": incomeTarget,
        "currency": currency,
        "aggregation_setting": aggregationSetting,
        "item_prefix": itemPrefix,
        "memo_prefix": memoPrefix,
        "include_source_in_memo": includeSourceInMemo,
    }
    defaults = settings.default_export_config()
    return defaults.model_copy(update={k: v for k, v in submitted.items() if v is not None})


def validate_file_extension(filename: Optional[str]) -> None:
    """
    Validate file has correct extension.

    Args:
        filename: Name of file to validate

    Raises:
        HTTPException: If file extension is invalid
    """
    if not filename or not filename.lower().endswith(".csv"):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {filename}. Only .csv is supported."
        )


async def convert_uploads(files: List[UploadFile], config: ExportConfig) -> ConversionResult:
    logger.info(f"Received {len(files)} files: {[f.filename for f in files]}")
    for upload in files:
        validate_file_extension(upload.filename)

    sources = await conversion_service.read_uploads(files)
    return conversion_service.convert(sources, config)


@app.post("/convert", response_model=ConversionResult)
async def convert(
    files: List[UploadFile] = File(...),
    config: ExportConfig = Depends(export_config_form)
):
    """Convert uploaded statements and return records, summaries and CSV text."""
    return await convert_uploads(files, config)


@app.post("/convert/download")
async def convert_download(
    files: List[UploadFile] = File(...),
    config: ExportConfig = Depends(export_config_form)
):
    """
    Convert uploaded statements and return the ledger import CSV as a file.
    Responds 204 when no transactions were found.
    """
    result = await convert_uploads(files, config)
    if not result.csv:
        return Response(status_code=204)

    return Response(
        content=result.csv.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{settings.output_filename}"'}
    )


@app.get("/sample", response_model=ConversionResult)
async def sample():
    """Convert the sample statement with the default export configuration."""
    # Blocking download with retry backoff
    loop = asyncio.get_running_loop()
    label, content = await loop.run_in_executor(None, SampleClient(settings).fetch)
    return conversion_service.convert([(label, content)])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
