"""
tests/test_assistant.py

AssistantService, prompt building and adapter selection.

The language model is always the deterministic MockLLMAdapter.
"""

from __future__ import annotations

import json

import pytest
from sqlalchemy.orm import Session

from app.config import AssistantSettings
from app.services.assistant_service import AssistantService, EmptyQuestionError
from app.services.upload_service import LedgerUploadService
from db.repositories.errors import DataSetNotFoundError
from ledger.parser import SUPPORTED_EXTENSIONS
from llm_synthesis.adapter import BaseLLMAdapter, LLMAdapterError, MockLLMAdapter, build_adapter
from llm_synthesis.prompt_builder import AssistantPromptBuilder, ProductContext, clean_question


class _FailingAdapter(BaseLLMAdapter):
    def generate(self, prompt: str) -> str:
        raise LLMAdapterError("upstream unavailable")


@pytest.fixture()
def data_set_id(db_session: Session, sample_csv: bytes) -> int:
    service = LedgerUploadService(max_upload_bytes=1024 * 1024, allowed_extensions=SUPPORTED_EXTENSIONS)
    return service.ingest(content=sample_csv, file_name="stock.csv", db=db_session).data_set_id


def _dataset_payload(prompt: str) -> dict:
    start = prompt.index("```json\n") + len("```json\n")
    end = prompt.index("\n```", start)
    return json.loads(prompt[start:end])


class TestCleanQuestion:
    def test_replaces_typographic_characters(self) -> None:
        assert clean_question("  “Which” product’s best – really…  ") == "\"Which\" product's best - really..."

    def test_plain_text_unchanged(self) -> None:
        assert clean_question("How many apples?") == "How many apples?"


class TestPromptBuilder:
    def test_payload_shape(self) -> None:
        prompt = AssistantPromptBuilder().build_prompt(
            "Stock",
            [ProductContext(name="Apple", total_sales=12.345, total_procurement=10.0, daily_records=[{"day": 0}])],
            "What sold?",
        )

        payload = _dataset_payload(prompt)
        assert payload["datasetName"] == "Stock"
        assert payload["products"][0]["productName"] == "Apple"
        assert payload["products"][0]["summary"] == {"totalSales": 12.35, "totalProcurement": 10.0}
        assert payload["products"][0]["dailyData"] == [{"day": 0}]
        assert prompt.rstrip().endswith('"What sold?"')

    def test_deterministic(self) -> None:
        builder = AssistantPromptBuilder()
        products = [ProductContext(name="A", total_sales=1.0, total_procurement=2.0, daily_records=[])]
        assert builder.build_prompt("D", products, "Q") == builder.build_prompt("D", products, "Q")


class TestAssistantService:
    def test_answers_with_dataset_summary(self, db_session: Session, data_set_id: int) -> None:
        adapter = MockLLMAdapter()
        service = AssistantService(adapter=adapter)

        answer = service.analyze(db=db_session, data_set_id=data_set_id, question="Which product sold most?")

        assert answer.answer.startswith("Mock answer")
        assert answer.data_set_name == "stock.csv"
        assert answer.total_products == 2
        assert answer.total_records == 6
        assert answer.created_at is not None

        payload = _dataset_payload(adapter.prompts[0])
        apple = payload["products"][0]
        assert apple["productName"] == "Apple"
        assert apple["summary"] == {"totalSales": 24.0, "totalProcurement": 10.0}
        assert [entry["day"] for entry in apple["dailyData"]] == [0, 1, 2]
        assert apple["dailyData"][1]["salesAmount"] == 12.0

    def test_question_is_normalized_before_prompting(self, db_session: Session, data_set_id: int) -> None:
        adapter = MockLLMAdapter()
        AssistantService(adapter=adapter).analyze(db=db_session, data_set_id=data_set_id, question="What’s up?")
        assert "What's up?" in adapter.prompts[0]

    @pytest.mark.parametrize("question", ["", "   "])
    def test_empty_question(self, db_session: Session, data_set_id: int, question: str) -> None:
        adapter = MockLLMAdapter()
        with pytest.raises(EmptyQuestionError):
            AssistantService(adapter=adapter).analyze(db=db_session, data_set_id=data_set_id, question=question)
        assert adapter.prompts == []

    def test_unknown_data_set(self, db_session: Session) -> None:
        with pytest.raises(DataSetNotFoundError):
            AssistantService(adapter=MockLLMAdapter()).analyze(db=db_session, data_set_id=404, question="Hi")

    def test_adapter_failure_propagates(self, db_session: Session, data_set_id: int) -> None:
        with pytest.raises(LLMAdapterError):
            AssistantService(adapter=_FailingAdapter()).analyze(db=db_session, data_set_id=data_set_id, question="Hi")


class TestBuildAdapter:
    def test_mock_adapter(self) -> None:
        assert isinstance(build_adapter(AssistantSettings(adapter="mock")), MockLLMAdapter)

    def test_mock_answers_differ_per_prompt(self) -> None:
        adapter = MockLLMAdapter()
        assert adapter.generate("a") != adapter.generate("b")
        assert adapter.prompts == ["a", "b"]
