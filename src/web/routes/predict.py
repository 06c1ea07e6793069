"""Prediction routes: classify an upload, list history."""

import uuid
from typing import Union

import structlog
from fastapi import APIRouter, Depends, File, UploadFile, status

from cli.config_models import ServiceConfig
from inference.diagnosis import diagnose, to_prediction_error
from inference.engine import InferenceEngine
from predictions.store import PredictionRecord, PredictionStore, utc_now_iso
from web.deps import get_config, get_engine, get_store, require_multipart
from web.models import (
    FailResponse,
    HistoryItem,
    HistoryResponse,
    PredictionData,
    PredictResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/predict", tags=["predict"])

FAIL_RESPONSES = {
    400: {"model": FailResponse},
    413: {"model": FailResponse},
    415: {"model": FailResponse},
    500: {"model": FailResponse},
}


def _read_image(image: Union[UploadFile, str, None]) -> bytes:
    """Upload bytes. A missing or text-valued field is an undecodable image."""
    if image is None or isinstance(image, str):
        raise TypeError(f"image field is not a file: {type(image).__name__}")
    return image.file.read()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PredictResponse,
    responses=FAIL_RESPONSES,
    dependencies=[Depends(require_multipart)],
)
def predict(
    image: Union[UploadFile, str, None] = File(None),
    engine: InferenceEngine = Depends(get_engine),
    store: PredictionStore = Depends(get_store),
    config: ServiceConfig = Depends(get_config),
):
    record_id = str(uuid.uuid4())
    created_at = utc_now_iso()
    try:
        payload = _read_image(image)
    except TypeError as e:
        raise to_prediction_error(e) from e

    diagnosis = diagnose(engine, payload, threshold=config.limits.confidence_threshold)

    record = PredictionRecord(
        id=record_id,
        result=diagnosis.result,
        suggestion=diagnosis.suggestion,
        created_at=created_at,
    )
    store.put(record.id, record)
    logger.info(
        "predict.created",
        id=record.id,
        result=record.result,
        confidence=round(diagnosis.confidence, 2),
        size=len(payload),
    )

    return PredictResponse(
        data=PredictionData(
            id=record.id,
            result=record.result,
            suggestion=record.suggestion,
            created_at=record.created_at,
        )
    )


@router.get(
    "/histories",
    response_model=HistoryResponse,
    responses={500: FAIL_RESPONSES[500]},
)
def histories(store: PredictionStore = Depends(get_store)):
    records = store.get_all()
    return HistoryResponse(data=[HistoryItem(**r.to_history()) for r in records])
