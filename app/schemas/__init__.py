"""
app/schemas package marker.
"""

from app.schemas.ledger import (
    AssistantRequest,
    AssistantResponse,
    ChartDataResponse,
    DataSetDeleteResponse,
    DataSetListResponse,
    DataSetRenameRequest,
    DataSetResponse,
    UploadSummaryResponse,
)

__all__ = [
    "AssistantRequest",
    "AssistantResponse",
    "ChartDataResponse",
    "DataSetDeleteResponse",
    "DataSetListResponse",
    "DataSetRenameRequest",
    "DataSetResponse",
    "UploadSummaryResponse",
]
