"""
Reorder Engine Service
=======================
Turn current stock, lead time, and demand/external signals into a
recommended replenishment quantity with a structured rationale.

Design Principles:
- Pure: recommendations are recomputed on demand and never persisted
- Deterministic: same inputs, same quantity (half-up rounding)
- Fail fast: an unknown product id raises NotFoundError
- All policy constants live in REORDER_CONFIG

Formula:
    avg_daily_demand = mean predicted demand over the product's forecasts
    lead_time_demand = avg_daily_demand * lead_time
    safety_stock     = avg_daily_demand * 5
    quantity = round(max(0, lead_time_demand + safety_stock - stock_level
                            + weather_impact * 10 + social_impact * 15))

Reorder Planning:
Products at or below 1.2x their reorder point get a recommendation and are
bucketed as urgent (at or below min stock), recommended (at or below the
reorder point) or optimal (above the reorder point, within max stock).
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from stockpulse.models.entities import (
    Forecast,
    Product,
    ReorderReasoning,
    ReorderRecommendation,
)
from stockpulse.models.errors import NotFoundError
from stockpulse.services.signal_aggregator import aggregate_signals, group_by_product
from stockpulse.utils.constants import REORDER_CONFIG, SIGNAL_CONFIG
from stockpulse.utils.logger import get_logger
from stockpulse.utils.rounding import round_half_up

logger = get_logger(__name__)


def find_product(product_id: str, products: Iterable[Product]) -> Product:
    """Resolve a product id or raise NotFoundError."""
    for product in products:
        if product.id == product_id:
            return product
    raise NotFoundError("product", product_id)


@dataclass
class ReorderPlan:
    """
    Reorder recommendations grouped by urgency.

    Attributes
    ----------
    urgent : List[ReorderRecommendation]
        stock <= min_stock_level and a positive quantity
    recommended : List[ReorderRecommendation]
        min_stock_level < stock <= reorder_point and a positive quantity
    optimal : List[Product]
        reorder_point < stock <= max_stock_level
    recommendations : Dict[str, ReorderRecommendation]
        Every computed recommendation by product id
    """
    urgent: List[ReorderRecommendation] = field(default_factory=list)
    recommended: List[ReorderRecommendation] = field(default_factory=list)
    optimal: List[Product] = field(default_factory=list)
    recommendations: Dict[str, ReorderRecommendation] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "urgent": [r.to_dict() for r in self.urgent],
            "recommended": [r.to_dict() for r in self.recommended],
            "optimal": [p.id for p in self.optimal],
        }


class ReorderEngine:
    """
    Compute reorder recommendations.

    Usage
    -----
    >>> engine = ReorderEngine()
    >>> rec = engine.recommend("prod-0001", products, forecasts)
    >>> print(rec.recommended_quantity, rec.reasoning.safety_stock)
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        factor_average_mode: Optional[str] = None
    ):
        """
        Initialize the reorder engine.

        Parameters
        ----------
        config : dict, optional
            Overrides for REORDER_CONFIG
        factor_average_mode : str, optional
            Averaging mode for weather/social factors
            (default: SIGNAL_CONFIG["factor_average_mode"])
        """
        self.config = {**REORDER_CONFIG, **(config or {})}
        self.factor_average_mode = factor_average_mode or SIGNAL_CONFIG["factor_average_mode"]

        logger.debug(f"ReorderEngine initialized with config: {self.config}")

    def recommend(
        self,
        product_id: str,
        products: Iterable[Product],
        forecasts: Iterable[Forecast]
    ) -> ReorderRecommendation:
        """
        Recommend a reorder quantity for one product.

        Parameters
        ----------
        product_id : str
            Product to evaluate
        products : Iterable[Product]
            Current product records
        forecasts : Iterable[Forecast]
            Forecasts for any number of products

        Returns
        -------
        ReorderRecommendation
            Quantity (non-negative int) and reasoning

        Raises
        ------
        NotFoundError
            If product_id does not match any product
        """
        product = find_product(product_id, products)
        own_forecasts = [f for f in forecasts if f.product_id == product_id]
        return self.recommend_for(product, own_forecasts)

    def recommend_for(
        self,
        product: Product,
        forecasts: Sequence[Forecast]
    ) -> ReorderRecommendation:
        """Recommendation for a resolved product and its own forecasts."""
        signals = aggregate_signals(forecasts, self.factor_average_mode)

        lead_time_demand = signals.avg_daily_demand * product.lead_time
        safety_stock = signals.avg_daily_demand * self.config["safety_stock_days"]

        raw_quantity = (
            lead_time_demand
            + safety_stock
            - product.stock_level
            + signals.weather_impact * self.config["weather_weight"]
            + signals.social_impact * self.config["social_weight"]
        )
        quantity = round_half_up(max(0.0, raw_quantity))

        logger.debug(
            f"{product.id}: demand={signals.avg_daily_demand:.2f}/day, "
            f"lead_time_demand={lead_time_demand:.1f}, safety={safety_stock:.1f}, "
            f"stock={product.stock_level} -> order {quantity}"
        )

        return ReorderRecommendation(
            product_id=product.id,
            recommended_quantity=quantity,
            reasoning=ReorderReasoning(
                current_stock=product.stock_level,
                avg_daily_demand=signals.avg_daily_demand,
                lead_time=product.lead_time,
                safety_stock=safety_stock,
                weather_impact=signals.weather_impact,
                social_impact=signals.social_impact,
            ),
        )

    def is_candidate(self, product: Product) -> bool:
        """Products at or below reorder_point * 1.2 are checked for reorder."""
        return product.stock_level <= product.reorder_point * self.config["candidate_band_multiplier"]

    def plan(
        self,
        products: Sequence[Product],
        forecasts: Iterable[Forecast]
    ) -> ReorderPlan:
        """
        Recommend reorders for every candidate product and bucket them.

        Parameters
        ----------
        products : Sequence[Product]
            Current product records
        forecasts : Iterable[Forecast]
            Forecasts for any number of products

        Returns
        -------
        ReorderPlan
            urgent / recommended recommendations and optimal products
        """
        forecasts_by_product = group_by_product(forecasts)
        plan = ReorderPlan()

        for product in products:
            if self.is_candidate(product):
                rec = self.recommend_for(product, forecasts_by_product.get(product.id, []))
                plan.recommendations[product.id] = rec

                if rec.recommended_quantity > 0:
                    if product.stock_level <= product.min_stock_level:
                        plan.urgent.append(rec)
                    elif product.stock_level <= product.reorder_point:
                        plan.recommended.append(rec)

            if product.reorder_point < product.stock_level <= product.max_stock_level:
                plan.optimal.append(product)

        logger.info(
            f"Reorder plan: {len(plan.urgent)} urgent, {len(plan.recommended)} recommended, "
            f"{len(plan.optimal)} optimal out of {len(products)} products"
        )

        return plan

    def external_factor_adjustment(self, reasoning: ReorderReasoning) -> int:
        """Combined weather + social adjustment, in units, for display."""
        combined = reasoning.weather_impact + reasoning.social_impact
        return round_half_up(combined * self.config["external_factor_display_weight"])


def compute_reorder_recommendation(
    product_id: str,
    products: Iterable[Product],
    forecasts: Iterable[Forecast],
    config: Optional[Dict] = None,
    factor_average_mode: Optional[str] = None
) -> ReorderRecommendation:
    """
    Recommend a reorder quantity for product_id.

    Raises NotFoundError for an unknown product id.
    """
    return ReorderEngine(config, factor_average_mode).recommend(product_id, products, forecasts)


def plan_reorders(
    products: Sequence[Product],
    forecasts: Iterable[Forecast],
    config: Optional[Dict] = None,
    factor_average_mode: Optional[str] = None
) -> ReorderPlan:
    return ReorderEngine(config, factor_average_mode).plan(products, forecasts)


def days_until_reorder(product: Product) -> Optional[int]:
    """
    Days of sales until stock falls to the reorder point.

    None when the product does not sell (sales_velocity <= 0).
    """
    if product.sales_velocity <= 0:
        return None
    return round_half_up((product.stock_level - product.reorder_point) / product.sales_velocity)
