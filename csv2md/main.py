import csv
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from .convert import convert_csv_bytes
from .errors import NoFormatDataError
from .log import get_logger, setup_logging
from .models import ConvertOptions, ConvertResponse, HealthResponse, ReaderOptions

setup_logging()
logger = get_logger(__name__)

CSV_SUFFIXES = (".csv", ".tsv", ".txt")

app = FastAPI(
    title="csv2md",
    description="CSV to GitHub Flavored Markdown tables",
    version="0.1.0",
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConvertResponse)
async def convert_csv(
    file: UploadFile = File(...),
    format_file: Optional[UploadFile] = File(None),
    delimiter: str = Form(","),
    newline: str = Form("\n"),
    has_header_record: bool = Form(True),
    lazy_quotes: bool = Form(False),
    trim_leading_space: bool = Form(False),
    comment: Optional[str] = Form(None),
):
    if not file.filename or not file.filename.lower().endswith(CSV_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    try:
        options = ConvertOptions(
            reader=ReaderOptions(
                delimiter=delimiter,
                lazy_quotes=lazy_quotes,
                trim_leading_space=trim_leading_space,
                comment=comment,
            ),
            newline=newline,
            has_header_record=has_header_record,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    raw = await file.read()
    format_raw = await format_file.read() if format_file is not None else None

    try:
        return convert_csv_bytes(raw, format_raw, options)
    except NoFormatDataError as e:
        raise HTTPException(status_code=422, detail=f"format file: {e}")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=422, detail=f"format file is not UTF-8: {e}")
    except csv.Error as e:
        logger.info("rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=f"csv: {e}")
