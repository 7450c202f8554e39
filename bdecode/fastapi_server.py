import logging
from typing import Optional

from fastapi import FastAPI
from fastapi import Form
from fastapi import UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .decoder import DEFAULT_MAX_DEPTH, decode_all
from .errors import DecodeError
from .render import render, render_error

logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class DecodeSummary(BaseModel):
    """decode endpoint model, without the rendered values"""
    filename: Optional[str] = None
    size: int
    count: int


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/decode")
async def decode_upload(file: UploadFile = File(...), max_depth: int = Form(DEFAULT_MAX_DEPTH, ge=1)):
    """decodes every bencoded value in an uploaded file"""
    data = await file.read()
    logger.info("[decode] %s: %d bytes", file.filename, len(data))

    try:
        values = decode_all(data, max_depth)
    except DecodeError as e:
        logger.warning("[decode] rejected %s: %s", file.filename, e)
        raise HTTPException(400, render_error(e))

    summary = DecodeSummary(filename=file.filename, size=len(data), count=len(values))
    content = summary.model_dump()
    # rendered trees nest ~3 containers per level, past pydantic's serializer depth
    content["values"] = [render(value) for value in values]
    return JSONResponse(content=content)
