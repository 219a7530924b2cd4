"""
Alert Engine Service
=====================
Evaluate stock thresholds and external signals into typed alerts.

Rules (evaluated independently per product, in this order):
1. low_stock:        stock < reorder_point
                     severity HIGH if stock < min_stock_level, else MEDIUM
2. overstock:        stock > max_stock_level, severity LOW
3. reorder:          reorder_point <= stock < reorder_point * 1.2, severity LOW
                     (disjoint from low_stock)
4. trending_product: product is trending on social media, severity MEDIUM
                     (at most 3 per pass, best-ranked first)
5. weather_alert:    severe weather in the forecast, at most one per pass,
                     severity MEDIUM

Identity:
Alert ids are derived from the alert's content (type + product, plus
location/date for weather), so re-evaluating unchanged inputs yields the same
ids. AlertStore keeps created_at and the read flag of an alert across
re-evaluations; alerts whose condition has cleared are dropped.
"""

import hashlib
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from stockpulse.models.entities import (
    Alert,
    AlertType,
    Product,
    SentimentRecord,
    Severity,
    WeatherRecord,
)
from stockpulse.models.errors import NotFoundError
from stockpulse.services.signal_aggregator import rank_trending_products
from stockpulse.utils.constants import ALERT_CONFIG
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)

_ID_PREFIX = {
    AlertType.LOW_STOCK: "low",
    AlertType.OVERSTOCK: "high",
    AlertType.REORDER: "reorder",
    AlertType.TRENDING_PRODUCT: "trend",
    AlertType.WEATHER_ALERT: "weather",
}


def make_alert_id(
    alert_type: AlertType,
    product_id: str,
    detail: str = "",
    hash_length: int = 10
) -> str:
    """Content-derived alert id, e.g. 'alert-low-3f1c9a0b2e'."""
    digest = hashlib.sha1(f"{alert_type.value}|{product_id}|{detail}".encode("utf-8"))
    return f"alert-{_ID_PREFIX[alert_type]}-{digest.hexdigest()[:hash_length]}"


def sort_by_recency(alerts: Iterable[Alert]) -> List[Alert]:
    """Newest first; alerts created at the same time keep their order."""
    return sorted(alerts, key=lambda a: a.created_at, reverse=True)


class AlertEngine:
    """
    Generate the current set of alerts for a product collection.

    Usage
    -----
    >>> engine = AlertEngine()
    >>> alerts = engine.evaluate(products, sentiment_data, weather_data)
    >>> high = [a for a in alerts if a.severity == Severity.HIGH]
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the alert engine.

        Parameters
        ----------
        config : dict, optional
            Overrides for ALERT_CONFIG
        """
        self.config = {**ALERT_CONFIG, **(config or {})}

    def evaluate(
        self,
        products: Sequence[Product],
        sentiment_data: Optional[Iterable[SentimentRecord]] = None,
        weather_data: Optional[Iterable[WeatherRecord]] = None,
        now: Optional[datetime] = None
    ) -> List[Alert]:
        """
        Evaluate every alert rule.

        Parameters
        ----------
        products : Sequence[Product]
            Current product records
        sentiment_data : Iterable[SentimentRecord], optional
            Enables trending_product alerts
        weather_data : Iterable[WeatherRecord], optional
            Enables the weather_alert
        now : datetime, optional
            Creation timestamp for the alerts (default: now)

        Returns
        -------
        List[Alert]
            Unread alerts in rule order, products in input order
        """
        now = now or datetime.now()
        alerts = []

        alerts.extend(self._low_stock_alerts(products, now))
        alerts.extend(self._overstock_alerts(products, now))
        alerts.extend(self._reorder_alerts(products, now))

        if sentiment_data is not None:
            alerts.extend(self._trending_alerts(products, sentiment_data, now))

        if weather_data is not None:
            weather_alert = self._weather_alert(products, weather_data, now)
            if weather_alert is not None:
                alerts.append(weather_alert)

        high = sum(1 for a in alerts if a.severity == Severity.HIGH)
        logger.info(
            f"Evaluated alerts for {len(products)} products: "
            f"{len(alerts)} alerts, {high} HIGH"
        )

        return alerts

    def _new_alert(
        self,
        alert_type: AlertType,
        product: Product,
        message: str,
        severity: Severity,
        now: datetime,
        detail: str = ""
    ) -> Alert:
        return Alert(
            id=make_alert_id(alert_type, product.id, detail, self.config["id_hash_length"]),
            type=alert_type,
            product_id=product.id,
            message=message,
            severity=severity,
            created_at=now,
            read=False,
        )

    def _low_stock_alerts(self, products: Sequence[Product], now: datetime) -> List[Alert]:
        alerts = []
        for product in products:
            if product.stock_level < product.reorder_point:
                severity = (
                    Severity.HIGH if product.stock_level < product.min_stock_level
                    else Severity.MEDIUM
                )
                alerts.append(self._new_alert(
                    AlertType.LOW_STOCK,
                    product,
                    f"{product.name} is below reorder point "
                    f"({product.stock_level}/{product.reorder_point})",
                    severity,
                    now,
                ))
        return alerts

    def _overstock_alerts(self, products: Sequence[Product], now: datetime) -> List[Alert]:
        alerts = []
        for product in products:
            if product.stock_level > product.max_stock_level:
                alerts.append(self._new_alert(
                    AlertType.OVERSTOCK,
                    product,
                    f"{product.name} exceeds maximum stock level "
                    f"({product.stock_level}/{product.max_stock_level})",
                    Severity.LOW,
                    now,
                ))
        return alerts

    def _reorder_alerts(self, products: Sequence[Product], now: datetime) -> List[Alert]:
        multiplier = self.config["reorder_band_multiplier"]
        alerts = []
        for product in products:
            if product.reorder_point <= product.stock_level < product.reorder_point * multiplier:
                alerts.append(self._new_alert(
                    AlertType.REORDER,
                    product,
                    f"Consider ordering {product.name} soon, approaching reorder point",
                    Severity.LOW,
                    now,
                ))
        return alerts

    def _trending_alerts(
        self,
        products: Sequence[Product],
        sentiment_data: Iterable[SentimentRecord],
        now: datetime
    ) -> List[Alert]:
        ranked = rank_trending_products(
            products, sentiment_data, window=self.config["trending_window"]
        )
        trending = [t for t in ranked if t.trending][:self.config["max_trending_alerts"]]

        return [
            self._new_alert(
                AlertType.TRENDING_PRODUCT,
                t.product,
                f"{t.product.name} is trending on social media, consider increasing stock",
                Severity.MEDIUM,
                now,
            )
            for t in trending
        ]

    def _is_severe(self, record: WeatherRecord) -> bool:
        return (
            record.condition.value in self.config["severe_conditions"]
            or record.impact <= self.config["severe_weather_impact"]
        )

    def _weather_alert(
        self,
        products: Sequence[Product],
        weather_data: Iterable[WeatherRecord],
        now: datetime
    ) -> Optional[Alert]:
        """
        One alert for the earliest severe weather day, if any.

        The alert references the first product stocked at the affected
        location, or the first product overall.
        """
        if len(products) == 0:
            return None

        severe = sorted(
            (w for w in weather_data if self._is_severe(w)),
            key=lambda w: w.date
        )
        if not severe:
            return None

        worst = severe[0]
        product = next(
            (p for p in products if p.location_id == worst.location_id),
            products[0]
        )

        return self._new_alert(
            AlertType.WEATHER_ALERT,
            product,
            f"{worst.condition.value.capitalize()} forecast at {worst.location_id} "
            f"on {worst.date.isoformat()} may affect delivery schedules",
            Severity.MEDIUM,
            now,
            detail=f"{worst.location_id}|{worst.date.isoformat()}",
        )


def compute_alerts(
    products: Sequence[Product],
    sentiment_data: Optional[Iterable[SentimentRecord]] = None,
    weather_data: Optional[Iterable[WeatherRecord]] = None,
    now: Optional[datetime] = None,
    config: Optional[Dict] = None
) -> List[Alert]:
    """Evaluate every alert rule; see AlertEngine.evaluate."""
    return AlertEngine(config).evaluate(products, sentiment_data, weather_data, now)


class AlertStore:
    """
    Identity-stable alert collection.

    sync() merges a fresh evaluation into the store: alerts seen before keep
    their created_at and read flag, new alerts are added, and alerts that
    no longer fire are resolved (removed).

    Usage
    -----
    >>> store = AlertStore()
    >>> store.sync(compute_alerts(products))
    >>> store.mark_as_read(store.all()[0].id)
    True
    """

    def __init__(self):
        self._alerts: Dict[str, Alert] = {}

    def __len__(self) -> int:
        return len(self._alerts)

    def sync(self, alerts: Iterable[Alert]) -> List[Alert]:
        """
        Merge freshly evaluated alerts into the store.

        Returns
        -------
        List[Alert]
            The stored alerts after the merge, in evaluation order
        """
        merged: Dict[str, Alert] = {}
        added = 0

        for alert in alerts:
            existing = self._alerts.get(alert.id)
            if existing is None:
                merged[alert.id] = Alert(**vars(alert))
                added += 1
            else:
                existing.message = alert.message
                existing.severity = alert.severity
                merged[alert.id] = existing

        resolved = len(set(self._alerts) - set(merged))
        self._alerts = merged

        logger.info(f"Alert store synced: {added} new, {resolved} resolved, {len(merged)} active")

        return self.all()

    def get(self, alert_id: str) -> Alert:
        try:
            return self._alerts[alert_id]
        except KeyError:
            raise NotFoundError("alert", alert_id) from None

    def mark_as_read(self, alert_id: str) -> bool:
        """Flag an alert as read. Returns False if the id is unknown."""
        alert = self._alerts.get(alert_id)
        if alert is None:
            return False
        alert.read = True
        return True

    def all(self) -> List[Alert]:
        return list(self._alerts.values())

    def unread(self) -> List[Alert]:
        return [a for a in self._alerts.values() if not a.read]

    def sorted_by_recency(self) -> List[Alert]:
        return sort_by_recency(self._alerts.values())
