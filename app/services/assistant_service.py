"""
app/services/assistant_service.py

Answers free-text questions about one dataset with a language model.

The whole ledger of every product goes into the prompt together with
per-product totals computed from the stored amounts. Nothing is written.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy.orm import Session

from app.config import get_assistant_settings
from app.domain.ledger import AssistantAnswer
from app.logging_utils import log_event
from db.models.product import Product
from db.repositories.data_set_repository import DataSetRepository
from ledger.aggregator import record_payload
from llm_synthesis.adapter import BaseLLMAdapter, build_adapter
from llm_synthesis.prompt_builder import AssistantPromptBuilder, ProductContext, clean_question

logger = logging.getLogger(__name__)


class EmptyQuestionError(ValueError):
    """
    Raised when the question is blank after normalization.
    """


def build_product_context(product: Product) -> ProductContext:
    records = list(product.daily_records)
    return ProductContext(
        name=product.name,
        total_sales=sum(record.sales_amount for record in records),
        total_procurement=sum(record.procurement_amount for record in records),
        daily_records=[record_payload(record) for record in records],
    )


class AssistantService:
    """
    Builds the dataset prompt and delegates generation to an LLM adapter.
    """

    def __init__(
        self,
        *,
        adapter: BaseLLMAdapter | None = None,
        prompt_builder: AssistantPromptBuilder | None = None,
    ) -> None:
        self._adapter = adapter
        self._prompt_builder = prompt_builder or AssistantPromptBuilder()

    @property
    def adapter(self) -> BaseLLMAdapter:
        if self._adapter is None:
            self._adapter = build_adapter(get_assistant_settings())
        return self._adapter

    def analyze(self, *, db: Session, data_set_id: int, question: str) -> AssistantAnswer:
        """
        Answer *question* about dataset *data_set_id*.

        Raises:
            EmptyQuestionError:   Question is blank.
            DataSetNotFoundError: Unknown dataset id.
            LLMAdapterError:      The language model call failed.
        """
        cleaned = clean_question(question or "")
        if not cleaned:
            raise EmptyQuestionError("Question is required.")

        data_set = DataSetRepository(db).get_data_set_with_ledgers(data_set_id)
        contexts = [build_product_context(product) for product in data_set.products]
        prompt = self._prompt_builder.build_prompt(data_set.name, contexts, cleaned)

        answer = self.adapter.generate(prompt)

        total_records = sum(len(context.daily_records) for context in contexts)
        log_event(
            logger,
            logging.INFO,
            "assistant_answered",
            data_set_id=data_set_id,
            products=len(contexts),
            prompt_chars=len(prompt),
        )
        return AssistantAnswer(
            answer=answer,
            data_set_name=data_set.name,
            total_products=len(contexts),
            total_records=total_records,
            created_at=data_set.created_at,
        )


@lru_cache(maxsize=1)
def get_assistant_service() -> AssistantService:
    return AssistantService()
