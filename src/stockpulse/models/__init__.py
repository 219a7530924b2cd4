"""
Models Package
===============
Record types and errors for the StockPulse inventory core.

Modules:
- entities: Product, sales, forecast, weather, sentiment, alert and
  recommendation records
- errors: NotFoundError / ValidationError taxonomy
"""

from stockpulse.models.entities import (
    Alert,
    AlertType,
    Forecast,
    ForecastFactors,
    Location,
    LocationType,
    Product,
    ReorderReasoning,
    ReorderRecommendation,
    SalesRecord,
    SentimentRecord,
    SentimentSources,
    Severity,
    WeatherCondition,
    WeatherRecord,
)
from stockpulse.models.errors import NotFoundError, StockPulseError, ValidationError

__all__ = [
    'Alert',
    'AlertType',
    'Forecast',
    'ForecastFactors',
    'Location',
    'LocationType',
    'Product',
    'ReorderReasoning',
    'ReorderRecommendation',
    'SalesRecord',
    'SentimentRecord',
    'SentimentSources',
    'Severity',
    'WeatherCondition',
    'WeatherRecord',
    'NotFoundError',
    'StockPulseError',
    'ValidationError',
]
