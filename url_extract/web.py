from fastapi import FastAPI, HTTPException, Body, File, Form, UploadFile
from url_extract.config import get_settings
from url_extract.processing.text_extraction import extract_urls_from_file, get_source_type
from url_extract.utils.logger import setup_logger
from url_extract.utils.urls import ExtractionAborted, extract_urls

# Fail at startup on a malformed environment rather than on the first request
get_settings()

app = FastAPI(title="URL Extract API")
logger = setup_logger()


@app.get("/")
def root():
    return {"status": "ok", "message": "URL extraction service running"}


@app.post("/api/extract")
def extract(payload: dict = Body(...)):
    text = payload.get("text")
    if not isinstance(text, str):
        raise HTTPException(status_code=400, detail="No text provided")

    strip_arguments = payload.get("strip_arguments")
    if strip_arguments is None:
        strip_arguments = get_settings().strip_arguments
    elif not isinstance(strip_arguments, bool):
        raise HTTPException(status_code=400, detail="strip_arguments must be a boolean")

    try:
        urls = extract_urls(text, strip_arguments)
    except ExtractionAborted as e:
        raise HTTPException(status_code=413, detail=str(e))

    logger.info(f"Extracted {len(urls)} URLs from {len(text)} characters")
    return {"urls": sorted(urls), "count": len(urls)}


@app.post("/api/extract-file")
def extract_file(
    file: UploadFile = File(...),
    strip_arguments: bool | None = Form(None),
):
    file_bytes = file.file.read()
    if not file_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if strip_arguments is None:
        strip_arguments = get_settings().strip_arguments

    filename = file.filename or "upload.txt"
    try:
        urls = extract_urls_from_file(filename, file_bytes, strip_arguments)
    except ExtractionAborted as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Extracted {len(urls)} URLs from upload {filename}")
    return {
        "filename": filename,
        "source_type": get_source_type(filename),
        "urls": sorted(urls),
        "count": len(urls),
    }


@app.get("/health")
def health_check():
    return {"health": "ok"}
