"""
app/api/routers/assistant.py

Dataset assistant endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.schemas.ledger import AssistantRequest, AssistantResponse
from app.services.assistant_service import AssistantService, EmptyQuestionError, get_assistant_service
from db.repositories.errors import DataSetNotFoundError
from db.session import get_db
from llm_synthesis.adapter import LLMAdapterError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/analyze", response_model=AssistantResponse)
def analyze_data_set(
    payload: AssistantRequest,
    db: Session = Depends(get_db),
    service: AssistantService = Depends(get_assistant_service),
) -> AssistantResponse:
    """
    Answer a free-text question about one dataset.
    """

    try:
        answer = service.analyze(db=db, data_set_id=payload.data_set_id, question=payload.question)
    except EmptyQuestionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DataSetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except LLMAdapterError as exc:
        logger.exception("Assistant generation failed data_set_id=%s", payload.data_set_id)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to get a response from the language model.",
        ) from exc

    return AssistantResponse.from_answer(answer)
