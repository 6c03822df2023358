"""
app/api/routers package marker.
"""

from app.api.routers.assistant import router as assistant_router
from app.api.routers.chart_data import router as chart_data_router
from app.api.routers.datasets import router as datasets_router
from app.api.routers.upload import router as upload_router

__all__ = [
    "assistant_router",
    "chart_data_router",
    "datasets_router",
    "upload_router",
]
