"""
app/domain package marker.
"""

from app.domain.ledger import (
    AssistantAnswer,
    ChartData,
    ChartSummary,
    DeletedDataSet,
    ProductSummary,
    UploadSummary,
)

__all__ = [
    "AssistantAnswer",
    "ChartData",
    "ChartSummary",
    "DeletedDataSet",
    "ProductSummary",
    "UploadSummary",
]
