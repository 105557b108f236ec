"""
StockChart Services

Service layer containing all indicator logic.
Each service has a defined interface (contract) and implementation.
"""

from stockchart.services.base import (
    BaseService,
    EmptySeriesError,
    InvalidParameterError,
    ServiceError,
    ValidationError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ValidationError",
    "InvalidParameterError",
    "EmptySeriesError",
]
