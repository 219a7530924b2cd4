# StockPulse Inventory Core

"""
StockPulse - Inventory Decision Core

Turns product, sales, forecast, weather and social-sentiment records into
reorder recommendations, inventory alerts, dashboard KPIs and reports.

Usage:
    from stockpulse import InventoryContext

    context = InventoryContext(seed=7)
    rec = context.reorder_recommendation("prod-0002")
    print(rec.recommended_quantity)
"""

__version__ = "1.0.0"

from stockpulse.context import InventoryContext
from stockpulse.models.errors import NotFoundError, StockPulseError, ValidationError
from stockpulse.services import (
    aggregate_signals,
    compute_alerts,
    compute_dashboard_summary,
    compute_reorder_recommendation,
    rank_trending_products
)

__all__ = [
    'InventoryContext',
    'NotFoundError',
    'StockPulseError',
    'ValidationError',
    'aggregate_signals',
    'compute_alerts',
    'compute_dashboard_summary',
    'compute_reorder_recommendation',
    'rank_trending_products'
]
