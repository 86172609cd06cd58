# api/v1/endpoints/extraction.py
from fastapi import APIRouter, Depends, Request
from loguru import logger

from models.extraction import ExtractionInput
from services.extraction.pipeline import ExtractionPipeline

router = APIRouter()


def get_pipeline(request: Request) -> ExtractionPipeline:
    return request.app.state.pipeline


@router.post("/extract")
async def extract(
    payload: ExtractionInput,
    pipeline: ExtractionPipeline = Depends(get_pipeline),
):
    """
    Run one extraction and return the draft record (camelCase).

    Pipeline errors propagate to the app‑level exception handler, which
    renders them as ``{"error": {...}}`` with the error's status code.
    """
    logger.info(
        f"Processing extraction request (url={payload.url!r}, "
        f"pasted_text={len(payload.pasted_text or '')} chars)"
    )
    draft = await pipeline.run(payload)
    return draft.to_dict()
