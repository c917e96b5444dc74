"""
Markov Router
Train, sample, inspect and persist in-memory Markov chain models
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from markov_service.config import settings
from markov_service.services.markov import MarkovTextGenerator
from markov_service.services.markov_config import MarkovConfig
from markov_service.services.persistence import peek_order
from markov_service.services.text_source import read_all_text_async

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/markov", tags=["markov"])

# In-memory model cache (CPU-friendly)
MODEL_CACHE: Dict[str, MarkovTextGenerator] = {}


class MarkovRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str = "default"


class TrainRequest(MarkovRequest):
    corpus: List[str]
    order: Optional[int] = None
    reset: bool = False


class GenerateRequest(MarkovRequest):
    start_with: Optional[str] = None
    max_length: int = Field(default=100, ge=1)
    count: int = Field(default=1, ge=1, le=100)


class ProbabilitiesRequest(MarkovRequest):
    state: List[str]


class FileRequest(MarkovRequest):
    filename: Optional[str] = None


def _get_model(model_name: str) -> MarkovTextGenerator:
    model = MODEL_CACHE.get(model_name)
    if model is None:
        raise HTTPException(status_code=404, detail="model not found, train first")
    return model


def new_model(order: Optional[int] = None) -> MarkovTextGenerator:
    return MarkovTextGenerator(MarkovConfig.from_settings(settings, order=order))


def _model_path(req: FileRequest) -> Path:
    # Only a bare file name is honoured; models always live under MARKOV_MODEL_DIR
    filename = Path(req.filename or f"{req.model_name}.json").name
    return Path(settings.MARKOV_MODEL_DIR) / filename


def _summary(model_name: str, model: MarkovTextGenerator) -> dict:
    return {
        "model": model_name,
        "order": model.order,
        "states": model.state_count,
        "starting_states": model.starting_state_count,
    }


@router.post("/train")
async def train(req: TrainRequest):
    if not req.corpus:
        raise HTTPException(status_code=400, detail="corpus is empty")

    model = MODEL_CACHE.get(req.model_name)
    if model is None:
        # Cached up front: texts trained before a failing one are kept
        model = MODEL_CACHE[req.model_name] = new_model(req.order)
        trained = model.train_batch(req.corpus)
    else:
        if req.order is not None and req.order != model.order:
            raise HTTPException(
                status_code=400,
                detail=f"model '{req.model_name}' has order {model.order}, not {req.order}",
            )
        if req.reset:
            model.clear()
        trained = model.train_batch(req.corpus)

    logger.info(f"[Markov] Model '{req.model_name}' trained on {trained} texts")
    return {"ok": True, "data": {**_summary(req.model_name, model), "trained_texts": trained}}


@router.post("/generate")
async def generate(req: GenerateRequest):
    model = _get_model(req.model_name)
    texts = list(model.generate_texts(req.count, req.max_length, req.start_with))
    return {"ok": True, "data": {"text": texts[0], "texts": texts}}


@router.post("/probabilities")
async def probabilities(req: ProbabilitiesRequest):
    model = _get_model(req.model_name)
    distribution = model.get_next_token_probabilities(req.state)
    return {
        "ok": True,
        "data": {
            "state": req.state,
            "next_tokens": [{"token": t, "probability": p} for t, p in distribution],
        },
    }


@router.get("/stats/{model_name}")
async def stats(model_name: str, top_n: int = 10):
    model = _get_model(model_name)
    return {"ok": True, "data": model.get_statistics(top_n).to_dict()}


@router.post("/save")
async def save(req: FileRequest):
    model = _get_model(req.model_name)
    path = _model_path(req)
    await model.save_to_file_async(path)
    return {"ok": True, "data": {**_summary(req.model_name, model), "path": str(path)}}


@router.post("/load")
async def load(req: FileRequest):
    path = _model_path(req)
    text = await read_all_text_async(path)
    model = MODEL_CACHE.get(req.model_name)
    if model is None:
        model = new_model(peek_order(text, settings.MARKOV_ORDER))
    model.load_json(text)
    logger.info(f"[Markov] Model '{req.model_name}' loaded from {path}")
    MODEL_CACHE[req.model_name] = model
    return {"ok": True, "data": {**_summary(req.model_name, model), "path": str(path)}}


@router.delete("/{model_name}")
async def delete(model_name: str):
    model = _get_model(model_name)
    model.clear()
    del MODEL_CACHE[model_name]
    return {"ok": True, "data": {"model": model_name, "deleted": True}}
