"""
Inventory Entities
===================
Record types consumed and produced by the StockPulse core.

All entities are frozen dataclasses (immutable snapshots). The only mutable
state is Alert.read, which is flipped by the alert store.

to_dict() returns the exported camelCase record shape, with dates in ISO
format, so results can be written straight to JSON.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


class WeatherCondition(Enum):
    """Weather conditions produced by the weather simulation."""
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"


class LocationType(Enum):
    STORE = "store"
    WAREHOUSE = "warehouse"


class AlertType(Enum):
    """Types of alerts emitted by the alert engine."""
    LOW_STOCK = "low_stock"
    OVERSTOCK = "overstock"
    TRENDING_PRODUCT = "trending_product"
    WEATHER_ALERT = "weather_alert"
    REORDER = "reorder"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Product:
    """
    A stocked product.

    Attributes
    ----------
    id, sku, name, category, supplier, location_id : str
        Identity attributes
    price : float
        Unit price
    stock_level, min_stock_level, max_stock_level, reorder_point : int
        Stock attributes; min_stock_level <= reorder_point <= max_stock_level
    lead_time : int
        Days between placing and receiving a replenishment order
    sales_velocity : float
        Units sold per day
    last_reordered : date, optional
        Date of the most recent replenishment order
    """
    id: str
    sku: str
    name: str
    category: str
    supplier: str
    location_id: str
    price: float
    stock_level: int
    min_stock_level: int
    max_stock_level: int
    reorder_point: int
    lead_time: int
    sales_velocity: float
    last_reordered: Optional[date] = None

    @property
    def stock_value(self) -> float:
        return self.price * self.stock_level

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "sku": self.sku,
            "price": self.price,
            "stockLevel": self.stock_level,
            "reorderPoint": self.reorder_point,
            "minStockLevel": self.min_stock_level,
            "maxStockLevel": self.max_stock_level,
            "leadTime": self.lead_time,
            "supplier": self.supplier,
            "salesVelocity": self.sales_velocity,
            "lastReordered": _iso(self.last_reordered),
            "locationId": self.location_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a Product from an exported (camelCase) record."""
        last_reordered = data.get("lastReordered")
        if isinstance(last_reordered, str):
            last_reordered = date.fromisoformat(last_reordered)
        return cls(
            id=data["id"],
            sku=data["sku"],
            name=data["name"],
            category=data["category"],
            supplier=data["supplier"],
            location_id=data["locationId"],
            price=float(data["price"]),
            stock_level=int(data["stockLevel"]),
            min_stock_level=int(data["minStockLevel"]),
            max_stock_level=int(data["maxStockLevel"]),
            reorder_point=int(data["reorderPoint"]),
            lead_time=int(data["leadTime"]),
            sales_velocity=float(data["salesVelocity"]),
            last_reordered=last_reordered,
        )


@dataclass(frozen=True)
class SalesRecord:
    """Units sold and revenue for one product on one day."""
    date: date
    product_id: str
    quantity: int
    revenue: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": _iso(self.date),
            "productId": self.product_id,
            "quantity": self.quantity,
            "revenue": self.revenue,
        }


@dataclass(frozen=True)
class ForecastFactors:
    """Breakdown of the drivers behind a forecast value."""
    seasonal: float
    trend: float
    weather: Optional[float] = None
    social: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        factors = {"seasonal": self.seasonal, "trend": self.trend}
        if self.weather is not None:
            factors["weather"] = self.weather
        if self.social is not None:
            factors["social"] = self.social
        return factors


@dataclass(frozen=True)
class Forecast:
    """Predicted demand for one product on one future day."""
    date: date
    product_id: str
    predicted_demand: float
    confidence_score: float
    factors: ForecastFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": _iso(self.date),
            "productId": self.product_id,
            "predictedDemand": self.predicted_demand,
            "confidenceScore": self.confidence_score,
            "factors": self.factors.to_dict(),
        }


@dataclass(frozen=True)
class WeatherRecord:
    """
    Simulated weather for one location on one future day.

    impact is a normalized [-1, 1] estimate of how the condition
    shifts expected demand.
    """
    date: date
    location_id: str
    condition: WeatherCondition
    temperature: float
    precipitation: float
    impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": _iso(self.date),
            "locationId": self.location_id,
            "condition": self.condition.value,
            "temperature": self.temperature,
            "precipitation": self.precipitation,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class SentimentSources:
    """Mention counts per social platform."""
    twitter: int = 0
    instagram: int = 0
    facebook: int = 0
    tiktok: int = 0

    @property
    def total(self) -> int:
        return self.twitter + self.instagram + self.facebook + self.tiktok

    def to_dict(self) -> Dict[str, int]:
        return {
            "twitter": self.twitter,
            "instagram": self.instagram,
            "facebook": self.facebook,
            "tiktok": self.tiktok,
        }


@dataclass(frozen=True)
class SentimentRecord:
    """Social sentiment for one product on one day."""
    date: date
    product_id: str
    sentiment: float
    volume: int
    trending: bool
    sources: SentimentSources = field(default_factory=SentimentSources)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": _iso(self.date),
            "productId": self.product_id,
            "sentiment": self.sentiment,
            "volume": self.volume,
            "trending": self.trending,
            "sources": self.sources.to_dict(),
        }


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    type: LocationType
    address: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "address": self.address,
        }


@dataclass
class Alert:
    """
    An inventory alert.

    Attributes
    ----------
    id : str
        Stable identifier, unique per alert type and product
    type : AlertType
        Which rule produced the alert
    product_id : str
        Product the alert refers to
    message : str
        Human-readable description
    severity : Severity
        low, medium or high
    created_at : datetime
        When the alert was first raised
    read : bool
        Read flag; only ever flipped from False to True
    """
    id: str
    type: AlertType
    product_id: str
    message: str
    severity: Severity
    created_at: datetime
    read: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "productId": self.product_id,
            "message": self.message,
            "severity": self.severity.value,
            "createdAt": self.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            "read": self.read,
        }


@dataclass(frozen=True)
class ReorderReasoning:
    """Inputs behind a reorder recommendation."""
    current_stock: int
    avg_daily_demand: float
    lead_time: int
    safety_stock: float
    weather_impact: float
    social_impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentStock": self.current_stock,
            "avgDailyDemand": self.avg_daily_demand,
            "leadTime": self.lead_time,
            "safetyStock": self.safety_stock,
            "weatherImpact": self.weather_impact,
            "socialImpact": self.social_impact,
        }


@dataclass(frozen=True)
class ReorderRecommendation:
    """Recommended replenishment quantity for one product."""
    product_id: str
    recommended_quantity: int
    reasoning: ReorderReasoning

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "recommendedQuantity": self.recommended_quantity,
            "reasoning": self.reasoning.to_dict(),
        }
