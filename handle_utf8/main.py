from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from .errors import InvalidDirection
from .models import NormalizeResponse, HealthResponse
from .normalize import normalize_json_bytes
from .rules import ACCEPTED_SUFFIX, DEFAULT_DIRECTION

app = FastAPI(
    title="handle-utf8",
    description="Mixed UTF-8/Latin-1 repair and encoding normalization for JSON documents",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_json(
    file: UploadFile = File(...),
    direction: str = Query(DEFAULT_DIRECTION.value),
    skip_repair: bool = Query(False),
):
    if not (file.filename or "").lower().endswith(ACCEPTED_SUFFIX):
        raise HTTPException(status_code=422, detail="Only JSON files are supported")

    raw = await file.read()
    try:
        return normalize_json_bytes(raw, direction=direction, skip_repair=skip_repair)
    except InvalidDirection as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid JSON document: {exc}")
