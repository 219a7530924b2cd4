"""
Services Package
=================
Core business logic services for the StockPulse inventory core.

Modules:
- data_generator: Seeded mock data source (products, sales, forecasts,
  weather, sentiment, locations)
- signal_aggregator: Demand, weather, social and trending signals
- reorder_engine: Reorder quantity recommendations and reorder planning
- alert_engine: Threshold and signal alerts, identity-stable alert store
- summary_aggregator: Dashboard KPIs
- product_store: Product CRUD, search, filtering and sorting
- inventory_analytics: Stock status, weather/demand and sentiment views
- report_builder: Sales/inventory/supplier reports and export
"""

from stockpulse.services.data_generator import DataSource, MockDataSource, StaticDataSource
from stockpulse.services.signal_aggregator import (
    SignalAggregator,
    Signals,
    TrendingProduct,
    aggregate_signals,
    rank_trending_products
)
from stockpulse.services.reorder_engine import (
    ReorderEngine,
    ReorderPlan,
    compute_reorder_recommendation,
    plan_reorders
)
from stockpulse.services.alert_engine import AlertEngine, AlertStore, compute_alerts
from stockpulse.services.summary_aggregator import DashboardSummary, compute_dashboard_summary
from stockpulse.services.product_store import ProductStore, filter_products, sort_products
from stockpulse.services.inventory_analytics import InventoryAnalytics
from stockpulse.services.report_builder import ReportBuilder

__all__ = [
    'DataSource',
    'MockDataSource',
    'StaticDataSource',
    'SignalAggregator',
    'Signals',
    'TrendingProduct',
    'aggregate_signals',
    'rank_trending_products',
    'ReorderEngine',
    'ReorderPlan',
    'compute_reorder_recommendation',
    'plan_reorders',
    'AlertEngine',
    'AlertStore',
    'compute_alerts',
    'DashboardSummary',
    'compute_dashboard_summary',
    'ProductStore',
    'filter_products',
    'sort_products',
    'InventoryAnalytics',
    'ReportBuilder'
]
