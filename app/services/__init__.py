"""
app/services package marker.
"""

from app.services.assistant_service import AssistantService, EmptyQuestionError, get_assistant_service
from app.services.chart_data_service import ChartDataService, get_chart_data_service
from app.services.data_set_service import DataSetNameError, DataSetService, get_data_set_service
from app.services.upload_service import LedgerUploadService, get_upload_service

__all__ = [
    "AssistantService",
    "ChartDataService",
    "DataSetNameError",
    "DataSetService",
    "EmptyQuestionError",
    "LedgerUploadService",
    "get_assistant_service",
    "get_chart_data_service",
    "get_data_set_service",
    "get_upload_service",
]
