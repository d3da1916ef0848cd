"""Moderation router -- image and text verdicts."""

from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException

from verdict.analyzers.fixture import signals_from_records
from verdict.config import load_config
from verdict.engine.aggregator import aggregate_image, aggregate_text
from verdict.engine.normalizer import normalize_safe_search
from verdict.engine.taxonomy import TaxonomyDomain
from verdict.errors import AnalysisError, ModerationError, ValidationError
from verdict.models.signals import SentimentReading
from verdict.report import summarize
from verdict.service import ImageModerationService, TextModerationService

from web.backend.app.models.api import (
    ImageEvaluationRequest,
    ImageModerationRequest,
    ModerationResponse,
    TextEvaluationRequest,
    TextModerationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/moderate", tags=["moderate"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _load_settings():
    try:
        config = load_config()
        return config, config.taxonomies()
    except ModerationError as e:
        raise HTTPException(status_code=500, detail=str(e))


def get_taxonomies():
    return _load_settings()[1]


def get_image_service() -> ImageModerationService:
    """Cloud Vision backed service; override in tests or deployments."""
    from verdict.analyzers.google_cloud import GoogleVisionAnalyzer

    config, taxonomies = _load_settings()
    try:
        analyzer = GoogleVisionAnalyzer(config.credentials_path or None)
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ImageModerationService(analyzer, taxonomies[TaxonomyDomain.IMAGE])


def get_text_service() -> TextModerationService:
    """Natural Language backed service; override in tests or deployments."""
    from verdict.analyzers.google_cloud import GoogleLanguageAnalyzer

    config, taxonomies = _load_settings()
    try:
        analyzer = GoogleLanguageAnalyzer(config.credentials_path or None)
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return TextModerationService(analyzer, taxonomies[TaxonomyDomain.TEXT])


def _to_http(e: ModerationError) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, AnalysisError):
        logger.error("%s", e)
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/text", response_model=ModerationResponse)
async def moderate_text(
    req: TextModerationRequest,
    service: TextModerationService = Depends(get_text_service),
):
    """Moderate text with the configured analyzer."""
    try:
        result = await service.moderate_async(req.text)
    except ModerationError as e:
        raise _to_http(e)
    return ModerationResponse(**summarize(result))


@router.post("/image", response_model=ModerationResponse)
async def moderate_image(
    req: ImageModerationRequest,
    service: ImageModerationService = Depends(get_image_service),
):
    """Moderate a base64-encoded image with the configured analyzer."""
    try:
        content = base64.b64decode(req.image_base64, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="image_base64 is not valid base64")
    try:
        result = await service.moderate_async(content)
    except ModerationError as e:
        raise _to_http(e)
    return ModerationResponse(**summarize(result))


@router.post("/evaluate/text", response_model=ModerationResponse)
async def evaluate_text(req: TextEvaluationRequest, taxonomies=Depends(get_taxonomies)):
    """Run the decision engine on caller-supplied text signals."""
    try:
        result = aggregate_text(
            req.text,
            SentimentReading(score=req.sentiment.score, magnitude=req.sentiment.magnitude),
            signals_from_records([c.model_dump() for c in req.categories]),
            taxonomies[TaxonomyDomain.TEXT],
        )
    except ModerationError as e:
        raise _to_http(e)
    return ModerationResponse(**summarize(result))


@router.post("/evaluate/image", response_model=ModerationResponse)
async def evaluate_image(req: ImageEvaluationRequest, taxonomies=Depends(get_taxonomies)):
    """Run the decision engine on caller-supplied image signals."""
    result = aggregate_image(
        normalize_safe_search(req.safe_search.model_dump()),
        signals_from_records([label.model_dump() for label in req.labels]),
        taxonomies[TaxonomyDomain.IMAGE],
    )
    return ModerationResponse(**summarize(result))
