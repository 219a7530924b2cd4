"""
Inventory Analytics
====================
Analytics-ready views over the inventory records:
- Stock status breakdown (low / optimal / overstock) per location
- Weather vs predicted demand per location
- Social mention breakdown per platform
- Recent sales history joined with the upcoming forecast
"""

from typing import Dict, List, Optional, Sequence

import pandas as pd

from stockpulse.models.entities import (
    Forecast,
    Product,
    SalesRecord,
    SentimentRecord,
    WeatherRecord,
)
from stockpulse.services.product_store import stock_status
from stockpulse.utils.constants import STOCK_STATUSES
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)


class InventoryAnalytics:
    """Build analytics views for inventory monitoring pages and reports."""

    def __init__(
        self,
        products: Sequence[Product],
        forecasts: Sequence[Forecast] = (),
        sales_history: Sequence[SalesRecord] = (),
        weather: Sequence[WeatherRecord] = (),
        sentiment: Sequence[SentimentRecord] = ()
    ):
        """
        Initialize with the current records.

        Parameters:
        -----------
        products : Sequence[Product]
            Current product records
        forecasts, sales_history, weather, sentiment : Sequence
            Time series; views over an empty series come back empty
        """
        self.products = list(products)
        self.forecasts = list(forecasts)
        self.sales_history = list(sales_history)
        self.weather = list(weather)
        self.sentiment = list(sentiment)

    def stock_status_breakdown(self, location_id: Optional[str] = None) -> Dict[str, int]:
        """
        Count products per stock status.

        Parameters:
        -----------
        location_id : str, optional
            Only count products at this location (None or 'all' = every location)
        """
        counts = {status: 0 for status in STOCK_STATUSES}
        for product in self._products_at(location_id):
            counts[stock_status(product)] += 1
        return counts

    def _products_at(self, location_id: Optional[str]) -> List[Product]:
        if location_id in (None, "all"):
            return self.products
        return [p for p in self.products if p.location_id == location_id]

    def weather_demand_view(
        self,
        location_id: str,
        product_id: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Weather days at a location joined with predicted demand.

        Parameters:
        -----------
        location_id : str
            Location whose weather to show
        product_id : str, optional
            Product whose forecast to join; defaults to the first product
            with forecasts

        Returns:
        --------
        pd.DataFrame
            date, condition, temperature, precipitation, predicted_demand
            (0 when there is no forecast for the day), weather_impact_pct
        """
        columns = [
            "date", "condition", "temperature", "precipitation",
            "predicted_demand", "weather_impact_pct"
        ]
        weather = [w for w in self.weather if w.location_id == location_id]
        if not weather:
            return pd.DataFrame(columns=columns)

        if product_id is None and self.forecasts:
            product_id = self.forecasts[0].product_id

        weather_df = pd.DataFrame([
            {
                "date": w.date,
                "condition": w.condition.value,
                "temperature": w.temperature,
                "precipitation": w.precipitation,
                "weather_impact_pct": w.impact * 100,
            }
            for w in weather
        ])

        demand_df = pd.DataFrame(
            [
                {"date": f.date, "predicted_demand": f.predicted_demand}
                for f in self.forecasts if f.product_id == product_id
            ],
            columns=["date", "predicted_demand"]
        ).drop_duplicates(subset="date", keep="first")

        view = weather_df.merge(demand_df, on="date", how="left")
        view["predicted_demand"] = view["predicted_demand"].fillna(0.0)

        return view[columns]

    def sentiment_source_breakdown(self, product_id: str) -> Dict[str, int]:
        """Platform mention counts from the product's latest sentiment record."""
        records = [s for s in self.sentiment if s.product_id == product_id]
        if not records:
            return {}
        latest = max(records, key=lambda s: s.date)
        return latest.sources.to_dict()

    def demand_history_view(
        self,
        product_id: str,
        history_days: int = 14,
        forecast_days: int = 14
    ) -> pd.DataFrame:
        """
        Last `history_days` of actual sales followed by the first
        `forecast_days` of predicted demand.

        Returns:
        --------
        pd.DataFrame
            date, quantity, kind ('actual' or 'forecast')
        """
        actual = sorted(
            (s for s in self.sales_history if s.product_id == product_id),
            key=lambda s: s.date
        )[-history_days:] if history_days > 0 else []
        predicted = sorted(
            (f for f in self.forecasts if f.product_id == product_id),
            key=lambda f: f.date
        )[:forecast_days]

        rows = [{"date": s.date, "quantity": float(s.quantity), "kind": "actual"} for s in actual]
        rows += [{"date": f.date, "quantity": f.predicted_demand, "kind": "forecast"} for f in predicted]

        logger.debug(
            f"Demand history for {product_id}: {len(actual)} actual, {len(predicted)} forecast days"
        )

        return pd.DataFrame(rows, columns=["date", "quantity", "kind"])
