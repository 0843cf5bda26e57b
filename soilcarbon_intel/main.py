import logging
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, File, HTTPException, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from .config import Settings, get_settings
from .export import export_csv, to_csv
from .gemini import ApiKeyMissingError, GeminiClient
from .models import (
    ConfigResponse,
    ExportRequest,
    ExtractRequest,
    HealthResponse,
    ProcessedPaper,
    RawPaper,
    RunResponse,
    SearchRequest,
)
from .normalize import decode_abstract_bytes
from .pipeline import process_paper, run_pipeline
from .rules import CSV_HEADERS, CSV_MEDIA_TYPE, DEFAULT_QUERY

STATIC_DIR = Path(__file__).parent / "static"

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="soilcarbon-intel",
    description="Bibliometric & chemometric metadata extraction for soil carbon spectroscopy literature",
    version="1.0.0",
)


def get_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    try:
        return GeminiClient.from_settings(settings)
    except ApiKeyMissingError as e:
        raise HTTPException(status_code=503, detail=str(e))


@app.get("/", include_in_schema=False)
def index():
    return FileResponse(STATIC_DIR / "index.html")

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.get("/config", response_model=ConfigResponse)
def config(settings: Settings = Depends(get_settings)):
    return {
        "model": settings.model,
        "api_key_configured": settings.api_key_configured,
        "headers": CSV_HEADERS,
        "default_query": DEFAULT_QUERY,
    }

@app.post("/search", response_model=List[RawPaper])
def search(req: SearchRequest, client: GeminiClient = Depends(get_client)):
    try:
        return client.simulate_search(req.query)
    except Exception as e:
        raise HTTPException(status_code=502, detail=f"Search simulation failed: {e}")

@app.post("/extract", response_model=ProcessedPaper)
def extract(req: ExtractRequest, client: GeminiClient = Depends(get_client)):
    paper = RawPaper(id="manual-0", text=req.text)
    return process_paper(client, paper)

@app.post("/extract/file", response_model=ProcessedPaper)
async def extract_file(file: UploadFile = File(...), client: GeminiClient = Depends(get_client)):
    if not (file.filename or "").lower().endswith(".txt"):
        raise HTTPException(status_code=422, detail="Only plain-text (.txt) abstracts are supported")

    raw = await file.read()
    text, report = decode_abstract_bytes(raw)
    logger.info("Decoded %s as %s", file.filename, report["decode_used"])
    if not text:
        raise HTTPException(status_code=422, detail="Uploaded abstract is empty")

    paper = RawPaper(id=f"upload-{Path(file.filename).stem}", text=text)
    return await run_in_threadpool(process_paper, client, paper)

@app.post("/run", response_model=RunResponse)
def run(req: SearchRequest, client: GeminiClient = Depends(get_client)):
    return run_pipeline(client, req.query)

@app.post("/export")
def export(req: ExportRequest, settings: Settings = Depends(get_settings)):
    content = to_csv(req.records)
    if content is None:
        return Response(status_code=204)

    filename = Path(req.filename).name or "export.csv"
    if req.save:
        export_csv(req.records, settings.export_dir / filename)

    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
