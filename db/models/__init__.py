"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.daily_record import DailyRecord
from db.models.data_set import DataSet
from db.models.product import Product

__all__ = [
    "DataSet",
    "Product",
    "DailyRecord",
]
