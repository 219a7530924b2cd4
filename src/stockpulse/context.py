"""
Inventory Context
==================
Composition root for the StockPulse core.

The context owns one data source, the dataset loaded from it, a product
store and an alert store. Callers create a context and pass it around
instead of relying on module-level state; two contexts never share data.

Usage:
    from stockpulse.context import InventoryContext

    context = InventoryContext(seed=42)
    summary = context.dashboard_summary()
    rec = context.reorder_recommendation("prod-0003")
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from stockpulse.config import DATA_CONFIG
from stockpulse.models.entities import (
    Alert,
    Forecast,
    Location,
    Product,
    ReorderRecommendation,
    SalesRecord,
    SentimentRecord,
    WeatherRecord,
)
from stockpulse.services.alert_engine import AlertEngine, AlertStore
from stockpulse.services.data_generator import DataSource, MockDataSource
from stockpulse.services.inventory_analytics import InventoryAnalytics
from stockpulse.services.product_store import ProductStore
from stockpulse.services.reorder_engine import ReorderEngine, ReorderPlan
from stockpulse.services.report_builder import ReportBuilder
from stockpulse.services.signal_aggregator import SignalAggregator, TrendingProduct
from stockpulse.services.summary_aggregator import DashboardSummary, compute_dashboard_summary
from stockpulse.utils.logger import LogContext, get_logger, log_collection_info

logger = get_logger(__name__)


@dataclass
class Dataset:
    """Time series loaded once per context."""
    sales_history: List[SalesRecord] = field(default_factory=list)
    forecasts: List[Forecast] = field(default_factory=list)
    weather: List[WeatherRecord] = field(default_factory=list)
    sentiment: List[SentimentRecord] = field(default_factory=list)
    locations: List[Location] = field(default_factory=list)


class InventoryContext:
    """
    Explicit state object behind every engine call.

    Parameters
    ----------
    source : DataSource, optional
        Where records come from (default: MockDataSource)
    seed : int, optional
        Seed for the default mock source (default: DATA_CONFIG["seed"])
    product_count : int, optional
        Products generated by the default mock source
    signal_aggregator : SignalAggregator, optional
        Signal settings; its trending_window also drives trending alerts
    reorder_engine, alert_engine : optional
        Engines to use; defaults are built from the constants
    """

    def __init__(
        self,
        source: Optional[DataSource] = None,
        seed: Optional[int] = None,
        product_count: Optional[int] = None,
        signal_aggregator: Optional[SignalAggregator] = None,
        reorder_engine: Optional[ReorderEngine] = None,
        alert_engine: Optional[AlertEngine] = None
    ):
        if source is None:
            source = MockDataSource(
                seed=seed if seed is not None else DATA_CONFIG["seed"],
                product_count=(
                    product_count if product_count is not None else DATA_CONFIG["product_count"]
                ),
            )
        self.source = source
        self.store = ProductStore()
        self.alert_store = AlertStore()
        self.signal_aggregator = signal_aggregator or SignalAggregator()
        self.reorder_engine = reorder_engine or ReorderEngine(
            factor_average_mode=self.signal_aggregator.config["factor_average_mode"]
        )
        self.alert_engine = alert_engine or AlertEngine(
            {"trending_window": self.signal_aggregator.config["trending_window"]}
        )

        self._dataset: Optional[Dataset] = None

    # -------------------------------------------------------------------------
    # Dataset
    # -------------------------------------------------------------------------

    @property
    def dataset(self) -> Dataset:
        """The cached dataset, loaded on first access."""
        self._ensure_loaded()
        return self._dataset

    def _ensure_loaded(self) -> None:
        if self._dataset is None:
            self.initialize()

    def initialize(self) -> None:
        """Load products and time series from the data source."""
        with LogContext(logger, "Loading inventory dataset"):
            if self.store.count() == 0:
                self.store.seed(self.source.load_products())
            products = self.store.list()

            self._dataset = Dataset(
                sales_history=self.source.load_sales_history(products),
                forecasts=self.source.load_forecasts(products),
                weather=self.source.load_weather(),
                sentiment=self.source.load_sentiment(products),
                locations=self.source.load_locations(),
            )

            log_collection_info(logger, "products", products)
            log_collection_info(logger, "sales_history", self._dataset.sales_history)
            log_collection_info(logger, "forecasts", self._dataset.forecasts)

    def reset(self) -> None:
        """Drop the cached dataset, products and alerts."""
        self.store = ProductStore()
        self.alert_store = AlertStore()
        self._dataset = None

    # -------------------------------------------------------------------------
    # Read model
    # -------------------------------------------------------------------------

    def products(self) -> List[Product]:
        self._ensure_loaded()
        return self.store.list()

    def product(self, product_id: str) -> Product:
        self._ensure_loaded()
        return self.store.get(product_id)

    def sales_history(self, product_id: Optional[str] = None) -> List[SalesRecord]:
        """All sales, or one product's sales (NotFoundError if unknown)."""
        if product_id is None:
            return list(self.dataset.sales_history)
        self.product(product_id)
        return [s for s in self.dataset.sales_history if s.product_id == product_id]

    def forecasts(self, product_id: Optional[str] = None) -> List[Forecast]:
        """All forecasts, or one product's forecasts (NotFoundError if unknown)."""
        if product_id is None:
            return list(self.dataset.forecasts)
        self.product(product_id)
        return [f for f in self.dataset.forecasts if f.product_id == product_id]

    def weather(self) -> List[WeatherRecord]:
        return list(self.dataset.weather)

    def sentiment(self) -> List[SentimentRecord]:
        return list(self.dataset.sentiment)

    def locations(self) -> List[Location]:
        return list(self.dataset.locations)

    # -------------------------------------------------------------------------
    # Alerts
    # -------------------------------------------------------------------------

    def refresh_alerts(self, now: Optional[datetime] = None) -> List[Alert]:
        """Re-evaluate alert rules and merge them into the alert store."""
        alerts = self.alert_engine.evaluate(
            self.products(), self.sentiment(), self.weather(), now
        )
        return self.alert_store.sync(alerts)

    def alerts(self) -> List[Alert]:
        """Alerts for the current products; rules are re-evaluated on every call."""
        return self.refresh_alerts()

    def mark_alert_read(self, alert_id: str) -> bool:
        self.alerts()
        return self.alert_store.mark_as_read(alert_id)

    # -------------------------------------------------------------------------
    # Engines
    # -------------------------------------------------------------------------

    def reorder_recommendation(self, product_id: str) -> ReorderRecommendation:
        return self.reorder_engine.recommend(product_id, self.products(), self.dataset.forecasts)

    def reorder_plan(self) -> ReorderPlan:
        return self.reorder_engine.plan(self.products(), self.dataset.forecasts)

    def dashboard_summary(self) -> DashboardSummary:
        return compute_dashboard_summary(
            self.products(), self.alerts(), self.dataset.sales_history
        )

    def trending_products(self, limit: Optional[int] = 5) -> List[TrendingProduct]:
        return self.signal_aggregator.rank_trending(self.products(), self.dataset.sentiment, limit)

    def analytics(self) -> InventoryAnalytics:
        data = self.dataset
        return InventoryAnalytics(
            self.products(), data.forecasts, data.sales_history, data.weather, data.sentiment
        )

    def report_builder(self, output_dir: Optional[Union[str, Path]] = None) -> ReportBuilder:
        return ReportBuilder(
            self.products(), self.dataset.sales_history, self.dataset.locations, output_dir
        )
