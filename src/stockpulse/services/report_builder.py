"""
Report Builder Service
=======================
Sales, inventory and supplier report tables, exportable to CSV and JSON.

Capabilities:
- Sales reports: monthly summary, by product, by category, by location
- Date ranges: last30days, last3months, last6months, ytd, all
- Inventory status report per product, optionally for one location
- Supplier summary
- Export any report (or a summary dict) to the output directory

Output Structure:
outputs/
    reports/
        sales_monthly_last30days.csv
        inventory_status.json
        ...
"""

import json
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import pandas as pd

from stockpulse.config import OUTPUT_DIR
from stockpulse.models.entities import Location, Product, SalesRecord
from stockpulse.models.errors import ValidationError
from stockpulse.services.product_store import stock_status
from stockpulse.services.summary_aggregator import sales_to_dataframe
from stockpulse.utils.constants import REPORT_CONFIG
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)


class ReportBuilder:
    """
    Build report tables from the inventory records.

    Usage
    -----
    >>> builder = ReportBuilder(products, sales_history, locations)
    >>> monthly = builder.sales_report("monthly", "last3months")
    >>> builder.export(monthly, "sales_monthly", "csv")
    """

    def __init__(
        self,
        products: Sequence[Product],
        sales_history: Sequence[SalesRecord],
        locations: Sequence[Location] = (),
        output_dir: Optional[Union[str, Path]] = None,
        config: Optional[Dict] = None
    ):
        """
        Initialize the report builder.

        Parameters
        ----------
        products : Sequence[Product]
            Current product records
        sales_history : Sequence[SalesRecord]
            Historical sales
        locations : Sequence[Location]
            Used to label location reports
        output_dir : str or Path, optional
            Base directory for exports (default: OUTPUT_DIR)
        config : dict, optional
            Overrides for REPORT_CONFIG
        """
        self.config = {**REPORT_CONFIG, **(config or {})}
        self.products = list(products)
        self.sales_history = list(sales_history)
        self.locations = list(locations)
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR

        logger.info(
            f"ReportBuilder initialized: {len(self.products)} products, "
            f"{len(self.sales_history)} sales records"
        )

    def _products_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "product_id": p.id,
                    "name": p.name,
                    "category": p.category,
                    "supplier": p.supplier,
                    "location_id": p.location_id,
                }
                for p in self.products
            ],
            columns=["product_id", "name", "category", "supplier", "location_id"]
        )

    def _range_start(self, date_range: str, as_of: date) -> Optional[date]:
        if date_range == "all":
            return None
        if date_range == "ytd":
            return date(as_of.year, 1, 1)
        days = self.config["date_ranges"].get(date_range)
        if days is None:
            raise ValidationError(f"Unknown date range: {date_range}")
        return as_of - timedelta(days=days - 1)

    def sales_report(
        self,
        kind: str = "monthly",
        date_range: str = "last30days",
        as_of: Optional[date] = None
    ) -> pd.DataFrame:
        """
        Aggregate units and revenue.

        Parameters
        ----------
        kind : str
            'monthly', 'product', 'category' or 'location'
        date_range : str
            'last30days', 'last3months', 'last6months', 'ytd' or 'all'
        as_of : date, optional
            End of the reporting window (default: today)

        Returns
        -------
        pd.DataFrame
            One row per group with quantity and revenue; monthly reports are
            in calendar order, the others by revenue descending
        """
        if kind not in self.config["sales_kinds"]:
            raise ValidationError(f"Unknown sales report kind: {kind}")

        as_of = as_of or date.today()
        start = self._range_start(date_range, as_of)

        sales = sales_to_dataframe(self.sales_history)
        mask = sales["date"] <= pd.Timestamp(as_of)
        if start is not None:
            mask &= sales["date"] >= pd.Timestamp(start)
        sales = sales[mask]

        if kind == "monthly":
            sales = sales.assign(month=sales["date"].dt.strftime("%Y-%m"))
            report = (
                sales.groupby("month", as_index=False)[["quantity", "revenue"]]
                .sum()
                .sort_values("month")
            )
        else:
            merged = sales.merge(self._products_frame(), on="product_id", how="left")
            group_keys = {
                "product": ["product_id", "name"],
                "category": ["category"],
                "location": ["location_id"],
            }[kind]
            report = (
                merged.groupby(group_keys, as_index=False, dropna=False)[["quantity", "revenue"]]
                .sum()
                .sort_values("revenue", ascending=False, kind="stable")
            )
            if kind == "location":
                names = {loc.id: loc.name for loc in self.locations}
                report.insert(1, "location_name", report["location_id"].map(names))

        report = report.reset_index(drop=True)
        report["revenue"] = report["revenue"].round(2)

        logger.info(f"Sales report '{kind}' ({date_range}): {len(report)} rows")

        return report

    def inventory_status_report(self, location_id: Optional[str] = None) -> pd.DataFrame:
        """
        Stock position and status of every product.

        Parameters
        ----------
        location_id : str, optional
            Only include products at this location (None or 'all' = every location)
        """
        columns = [
            "product_id", "name", "location_id", "stock_level", "reorder_point",
            "max_stock_level", "status", "stock_value"
        ]
        products = self.products
        if location_id not in (None, "all"):
            products = [p for p in products if p.location_id == location_id]

        report = pd.DataFrame(
            [
                {
                    "product_id": p.id,
                    "name": p.name,
                    "location_id": p.location_id,
                    "stock_level": p.stock_level,
                    "reorder_point": p.reorder_point,
                    "max_stock_level": p.max_stock_level,
                    "status": stock_status(p),
                    "stock_value": round(p.stock_value, 2),
                }
                for p in products
            ],
            columns=columns
        )

        logger.info(f"Inventory status report: {len(report)} products")

        return report

    def supplier_report(self) -> pd.DataFrame:
        """Products, units, stock value and low-stock count per supplier."""
        columns = ["supplier", "product_count", "units_in_stock", "stock_value", "low_stock_count"]
        if not self.products:
            return pd.DataFrame(columns=columns)

        frame = pd.DataFrame([
            {
                "supplier": p.supplier,
                "stock_level": p.stock_level,
                "stock_value": p.stock_value,
                "low_stock": p.stock_level < p.reorder_point,
            }
            for p in self.products
        ])

        report = (
            frame.groupby("supplier", as_index=False)
            .agg(
                product_count=("stock_level", "size"),
                units_in_stock=("stock_level", "sum"),
                stock_value=("stock_value", "sum"),
                low_stock_count=("low_stock", "sum"),
            )
            .sort_values("stock_value", ascending=False, kind="stable")
            .reset_index(drop=True)
        )
        report["stock_value"] = report["stock_value"].round(2)
        report["low_stock_count"] = report["low_stock_count"].astype(int)

        return report[columns]

    def _reports_dir(self) -> Path:
        reports_dir = self.output_dir / "reports"
        reports_dir.mkdir(parents=True, exist_ok=True)
        return reports_dir

    def export(self, report: pd.DataFrame, name: str, fmt: str = "csv") -> Path:
        """
        Write a report table to the reports directory.

        Parameters
        ----------
        report : pd.DataFrame
            Report to export
        name : str
            File name without extension
        fmt : str
            'csv' or 'json'

        Returns
        -------
        Path
            The written file
        """
        if fmt not in self.config["formats"]:
            raise ValidationError(f"Unsupported report format: {fmt}")

        path = self._reports_dir() / f"{name}.{fmt}"

        if fmt == "csv":
            report.to_csv(
                path,
                index=self.config["csv_index"],
                encoding=self.config["csv_encoding"],
                float_format=self.config["float_format"]
            )
        else:
            report.to_json(path, orient="records", date_format="iso", indent=2)

        logger.info(f"Exported {len(report)} rows to {path}")

        return path

    def export_summary(self, summary: Dict[str, Any], name: str) -> Path:
        """Write a summary dict (e.g. DashboardSummary.to_dict()) as JSON."""
        path = self._reports_dir() / f"{name}.json"
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2, default=str)
        logger.info(f"Exported summary to {path}")
        return path
