"""
Dashboard Summary Service
==========================
Roll product, alert and sales collections up into top-line KPIs.

KPIs:
- total_products, low_stock_count (stock < reorder_point),
  overstock_count (stock > max_stock_level)
- total_value: sum of price * stock_level
- alerts_count: unread alerts
- top_selling_products: top 5 products by units sold; ties keep the
  order in which products first appear in the sales history
- recent_alerts: 5 newest alerts

Every call recomputes from the input collections.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from stockpulse.models.entities import Alert, Product, SalesRecord
from stockpulse.services.alert_engine import sort_by_recency
from stockpulse.utils.constants import SUMMARY_CONFIG
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TopSeller:
    id: str
    name: str
    sales: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "sales": self.sales}


@dataclass
class DashboardSummary:
    """
    Top-line inventory KPIs.

    Attributes
    ----------
    total_products : int
        Number of products
    low_stock_count : int
        Products below their reorder point
    overstock_count : int
        Products above their max stock level
    total_value : float
        Stock value at list price
    alerts_count : int
        Unread alerts
    top_selling_products : List[TopSeller]
        Best sellers by units sold
    recent_alerts : List[Alert]
        Newest alerts first
    """
    total_products: int
    low_stock_count: int
    overstock_count: int
    total_value: float
    alerts_count: int
    top_selling_products: List[TopSeller] = field(default_factory=list)
    recent_alerts: List[Alert] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalProducts": self.total_products,
            "lowStockCount": self.low_stock_count,
            "overstockCount": self.overstock_count,
            "totalValue": round(self.total_value, 2),
            "alertsCount": self.alerts_count,
            "topSellingProducts": [t.to_dict() for t in self.top_selling_products],
            "recentAlerts": [a.to_dict() for a in self.recent_alerts],
        }


def sales_to_dataframe(sales_history: Iterable[SalesRecord]) -> pd.DataFrame:
    """Sales records as a DataFrame with date, product_id, quantity, revenue."""
    records = [
        {
            "date": s.date,
            "product_id": s.product_id,
            "quantity": s.quantity,
            "revenue": s.revenue,
        }
        for s in sales_history
    ]
    df = pd.DataFrame(records, columns=["date", "product_id", "quantity", "revenue"])
    df = df.astype({"product_id": "object", "quantity": "int64", "revenue": "float64"})
    df["date"] = pd.to_datetime(df["date"])
    return df


def top_selling_products(
    products: Sequence[Product],
    sales_history: Iterable[SalesRecord],
    top_n: int = 5,
    unknown_label: str = "Unknown Product"
) -> List[TopSeller]:
    """
    Products ranked by total units sold, descending.

    Parameters
    ----------
    products : Sequence[Product]
        Used to resolve product names
    sales_history : Iterable[SalesRecord]
        Sales records for any number of products
    top_n : int
        Number of entries to keep
    unknown_label : str
        Name used when a product id has no matching product

    Returns
    -------
    List[TopSeller]
        Best sellers; ties keep first-appearance order
    """
    sales_df = sales_to_dataframe(sales_history)
    if sales_df.empty:
        return []

    totals = (
        sales_df.groupby("product_id", sort=False)["quantity"]
        .sum()
        .sort_values(ascending=False, kind="stable")
        .head(top_n)
    )

    names = {p.id: p.name for p in products}
    return [
        TopSeller(id=product_id, name=names.get(product_id, unknown_label), sales=int(total))
        for product_id, total in totals.items()
    ]


def compute_dashboard_summary(
    products: Sequence[Product],
    alerts: Sequence[Alert],
    sales_history: Iterable[SalesRecord],
    config: Optional[Dict] = None
) -> DashboardSummary:
    """
    Compute dashboard KPIs.

    Parameters
    ----------
    products : Sequence[Product]
        Current product records
    alerts : Sequence[Alert]
        Current alerts (read and unread)
    sales_history : Iterable[SalesRecord]
        Historical sales
    config : dict, optional
        Overrides for SUMMARY_CONFIG

    Returns
    -------
    DashboardSummary
        Freshly computed KPIs
    """
    cfg = {**SUMMARY_CONFIG, **(config or {})}

    summary = DashboardSummary(
        total_products=len(products),
        low_stock_count=sum(1 for p in products if p.stock_level < p.reorder_point),
        overstock_count=sum(1 for p in products if p.stock_level > p.max_stock_level),
        total_value=sum(p.price * p.stock_level for p in products),
        alerts_count=sum(1 for a in alerts if not a.read),
        top_selling_products=top_selling_products(
            products, sales_history, cfg["top_selling_count"], cfg["unknown_product_label"]
        ),
        recent_alerts=sort_by_recency(alerts)[:cfg["recent_alerts_count"]],
    )

    logger.info(
        f"Dashboard summary: {summary.total_products} products, "
        f"{summary.low_stock_count} low stock, {summary.overstock_count} overstock, "
        f"{summary.alerts_count} unread alerts"
    )

    return summary
