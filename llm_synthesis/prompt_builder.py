"""Prompt builder for dataset question answering."""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

_SYSTEM_INSTRUCTIONS = """\
You are an expert data analyst. Analyze the dataset below to answer the
user's question accurately and concisely.

RULES:
- Provide direct answers. Perform calculations if necessary.
- Use ONLY the data provided below.
- Day 0 is the opening balance; inventory is the closing balance of each day.
- A negative inventory means more units were sold than were on hand.
"""

_SECTION_TEMPLATE = """\
## {title}
```json
{data}
```
"""

_QUOTE_REPLACEMENTS = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
}


@dataclass(frozen=True)
class ProductContext:
    """One product's ledger as handed to the prompt."""

    name: str
    total_sales: float
    total_procurement: float
    daily_records: Sequence[dict[str, Any]]


def clean_question(text: str) -> str:
    """Replace typographic quotes, dashes and ellipses with ASCII forms."""
    cleaned = str(text)
    for source, target in _QUOTE_REPLACEMENTS.items():
        cleaned = cleaned.replace(source, target)
    return cleaned.strip()


class AssistantPromptBuilder:
    """Builds a deterministic prompt from a dataset ledger and a question.

    Every product contributes its precomputed totals plus the full daily
    history, serialized as JSON.
    """

    def build_prompt(
        self,
        dataset_name: str,
        products: Sequence[ProductContext],
        question: str,
    ) -> str:
        """Build the full prompt.

        Args:
            dataset_name: Display name of the dataset.
            products: Ledger context per product, in dataset order.
            question: The user's question, already cleaned.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        payload = {
            "datasetName": dataset_name,
            "products": [
                {
                    "productName": product.name,
                    "summary": {
                        "totalSales": round(product.total_sales, 2),
                        "totalProcurement": round(product.total_procurement, 2),
                    },
                    "dailyData": list(product.daily_records),
                }
                for product in products
            ],
        }
        dataset_section = _SECTION_TEMPLATE.format(
            title="Dataset",
            data=json.dumps(payload, indent=2, default=str),
        )
        return (
            f"{_SYSTEM_INSTRUCTIONS}\n"
            f"# PROVIDED DATA\n\n{dataset_section}\n"
            f"# QUESTION\n\n"
            f"Based on the complete dataset above, answer the following question:\n"
            f"{json.dumps(question, ensure_ascii=False)}"
        )
