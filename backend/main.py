"""FastAPI entrypoint exposing routes only.

Routes decode uploads and delegate to the core analysis engine.
"""
import logging

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.analysis import analyze as analyze_dataset
from .core.columns import classify_columns
from .core.config import settings
from .core.exceptions import BiasEngineError, ConfigurationError, MalformedInput, UnsupportedInputKind
from .core.schema import AnalysisReport, ColumnsResponse, RowsRequest
from .core.utils import analyze_dataset_structure, detect_input_kind, read_csv_frame, report_to_csv

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="DataBias Scanner API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    UnsupportedInputKind: 415,
    MalformedInput: 422,
    ConfigurationError: 400,
}


@app.exception_handler(BiasEngineError)
async def engine_error_handler(request: Request, exc: BiasEngineError):
    code = _ERROR_STATUS.get(type(exc), 400)
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc), "type": type(exc).__name__})


async def _read_upload(file: UploadFile) -> bytes:
    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Maximum file size is {settings.MAX_UPLOAD_MB}MB",
        )
    return content


@app.get("/")
def root():
    return {
        "message": "DataBias Scanner API",
        "routes": ["/upload", "/analyze", "/analyze/rows", "/report/csv"],
    }


@app.post("/upload", response_model=ColumnsResponse)
async def upload(file: UploadFile = File(...)):
    content = await _read_upload(file)
    df = read_csv_frame(content)
    detected = classify_columns(df.columns)
    return ColumnsResponse(
        detected_attributes={a.value: col for a, col in detected.items()},
        dataset_analysis=analyze_dataset_structure(df),
    )


@app.post("/analyze", response_model=AnalysisReport)
async def analyze(file: UploadFile = File(...)):
    kind = detect_input_kind(file.filename, file.content_type)
    if kind != "csv":
        raise UnsupportedInputKind(f"Bias analysis is not available for {kind} uploads")
    content = await _read_upload(file)
    df = read_csv_frame(content)
    logger.info("Analyzing %s (%d bytes)", file.filename, len(content))
    return analyze_dataset(df, thresholds=settings.risk_thresholds())


@app.post("/analyze/rows", response_model=AnalysisReport)
def analyze_rows(payload: RowsRequest):
    return analyze_dataset(
        payload.rows,
        declared_attribute_keywords=payload.attribute_keywords,
        thresholds=settings.risk_thresholds(),
    )


@app.post("/report/csv")
def export_report(report: AnalysisReport):
    return Response(
        content=report_to_csv(report),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="bias_report.csv"'},
    )
