"""Pydantic response schemas for the web API."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

# --- Predict ---


class PredictionData(BaseModel):
    id: str
    result: Literal["Cancer", "Non-cancer"]
    suggestion: str
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class PredictResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str = "Model is predicted successfully"
    data: PredictionData


# --- History ---


class HistoryEntry(BaseModel):
    result: Optional[str] = None
    suggestion: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")

    model_config = {"populate_by_name": True}


class HistoryItem(BaseModel):
    id: str
    history: HistoryEntry


class HistoryResponse(BaseModel):
    status: Literal["success"] = "success"
    data: list[HistoryItem] = []


# --- Errors ---


class FailResponse(BaseModel):
    """Uniform error envelope."""

    status: Literal["fail"] = "fail"
    message: str
