"""
Signal Aggregation Service
===========================
Reduce a product's forecast and sentiment time series into scalar
decision signals.

Signals:
1. Average daily demand: mean predicted_demand over the product's forecasts
2. Weather impact: mean of the forecasts' weather factor
3. Social impact: mean of the forecasts' social factor
4. Trending score: sentiment x volume over the most recent sentiment days,
   plus a trending flag

Averaging Rules:
- Empty series average to 0 (denominators are max(1, n))
- Weather/social factors are optional per forecast. In the default
  "all_forecasts" mode a missing factor counts as 0 and still counts
  towards the denominator; "present_only" averages over the forecasts
  that carry the factor.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from stockpulse.models.entities import Forecast, Product, SentimentRecord
from stockpulse.models.errors import ValidationError
from stockpulse.utils.constants import SIGNAL_CONFIG
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)

FACTOR_AVERAGE_MODES = ("all_forecasts", "present_only")


@dataclass(frozen=True)
class Signals:
    """Scalar signals derived from one product's forecasts."""
    avg_daily_demand: float
    weather_impact: float
    social_impact: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "avgDailyDemand": self.avg_daily_demand,
            "weatherImpact": self.weather_impact,
            "socialImpact": self.social_impact,
        }


@dataclass(frozen=True)
class TrendingScore:
    """
    Recent social signal for one product.

    score = avg_sentiment * avg_volume
    """
    avg_sentiment: float
    avg_volume: float
    trending: bool

    @property
    def score(self) -> float:
        return self.avg_sentiment * self.avg_volume


@dataclass(frozen=True)
class TrendingProduct:
    product: Product
    sentiment: float
    volume: float
    trending: bool

    @property
    def score(self) -> float:
        return self.sentiment * self.volume

    def to_dict(self) -> Dict:
        return {
            "id": self.product.id,
            "name": self.product.name,
            "sentiment": self.sentiment,
            "volume": self.volume,
            "trending": self.trending,
            "score": self.score,
        }


def average_daily_demand(forecasts: Sequence[Forecast]) -> float:
    """Mean predicted demand; 0 for an empty series."""
    total = sum(f.predicted_demand for f in forecasts)
    return total / max(1, len(forecasts))


def _factor_average(
    forecasts: Sequence[Forecast],
    factor: str,
    mode: str
) -> float:
    if mode not in FACTOR_AVERAGE_MODES:
        raise ValueError(f"Unknown factor_average_mode: {mode!r}")

    values = [getattr(f.factors, factor) for f in forecasts]
    present = [v for v in values if v is not None]

    denominator = len(forecasts) if mode == "all_forecasts" else len(present)
    return sum(present) / max(1, denominator)


def weather_impact_signal(
    forecasts: Sequence[Forecast],
    mode: str = "all_forecasts"
) -> float:
    """Mean weather factor over the forecasts (see module docstring)."""
    return _factor_average(forecasts, "weather", mode)


def social_impact_signal(
    forecasts: Sequence[Forecast],
    mode: str = "all_forecasts"
) -> float:
    """Mean social factor over the forecasts (see module docstring)."""
    return _factor_average(forecasts, "social", mode)


def aggregate_signals(
    forecasts: Sequence[Forecast],
    mode: Optional[str] = None
) -> Signals:
    """
    Compute every forecast-derived signal for one product.

    Parameters
    ----------
    forecasts : Sequence[Forecast]
        Forecasts of a single product
    mode : str, optional
        Factor averaging mode (default: SIGNAL_CONFIG["factor_average_mode"])

    Returns
    -------
    Signals
        avg_daily_demand, weather_impact, social_impact
    """
    mode = mode or SIGNAL_CONFIG["factor_average_mode"]
    return Signals(
        avg_daily_demand=average_daily_demand(forecasts),
        weather_impact=weather_impact_signal(forecasts, mode),
        social_impact=social_impact_signal(forecasts, mode),
    )


def trending_score(
    records: Sequence[SentimentRecord],
    window: Optional[int] = None
) -> Optional[TrendingScore]:
    """
    Score the most recent `window` sentiment records of one product.

    Records are ordered by date (stable, so same-day records keep their
    input order) before taking the tail. Returns None for an empty series;
    raises ValidationError for a window below 1.
    """
    if window is None:
        window = SIGNAL_CONFIG["trending_window"]
    if window < 1:
        raise ValidationError(f"trending window must be at least 1, got {window}")

    if len(records) == 0:
        return None

    recent = sorted(records, key=lambda r: r.date)[-window:]

    return TrendingScore(
        avg_sentiment=sum(r.sentiment for r in recent) / len(recent),
        avg_volume=sum(r.volume for r in recent) / len(recent),
        trending=any(r.trending for r in recent),
    )


def group_by_product(records: Iterable) -> Dict[str, List]:
    """Group records carrying a product_id, preserving input order."""
    grouped = defaultdict(list)
    for record in records:
        grouped[record.product_id].append(record)
    return grouped


def rank_trending_products(
    products: Sequence[Product],
    sentiment_data: Iterable[SentimentRecord],
    limit: Optional[int] = None,
    window: Optional[int] = None
) -> List[TrendingProduct]:
    """
    Order products by social momentum.

    Trending products always rank above non-trending ones; within each
    group products are ordered by sentiment x volume, descending. Ties keep
    the products' input order. Products without sentiment data are skipped.

    Parameters
    ----------
    products : Sequence[Product]
        Candidate products
    sentiment_data : Iterable[SentimentRecord]
        Sentiment records for any number of products
    limit : int, optional
        Keep only the first `limit` entries

    Returns
    -------
    List[TrendingProduct]
        Ranked products with their averaged sentiment and volume
    """
    by_product = group_by_product(sentiment_data)

    ranked = []
    for product in products:
        score = trending_score(by_product.get(product.id, []), window)
        if score is None:
            continue
        ranked.append(TrendingProduct(
            product=product,
            sentiment=score.avg_sentiment,
            volume=score.avg_volume,
            trending=score.trending,
        ))

    ranked.sort(key=lambda t: (not t.trending, -t.score))

    logger.debug(
        f"Ranked {len(ranked)} products by sentiment, "
        f"{sum(1 for t in ranked if t.trending)} trending"
    )

    return ranked[:limit] if limit is not None else ranked


class SignalAggregator:
    """
    Config-carrying wrapper over the signal functions.

    Usage
    -----
    >>> aggregator = SignalAggregator({"factor_average_mode": "present_only"})
    >>> signals = aggregator.for_product("prod-0001", forecasts)
    """

    def __init__(self, config: Optional[Dict] = None):
        self.config = {**SIGNAL_CONFIG, **(config or {})}
        if self.config["factor_average_mode"] not in FACTOR_AVERAGE_MODES:
            raise ValueError(
                f"Unknown factor_average_mode: {self.config['factor_average_mode']!r}"
            )
        if self.config["trending_window"] < 1:
            raise ValidationError(
                f"trending_window must be at least 1, got {self.config['trending_window']}"
            )

    def for_product(self, product_id: str, forecasts: Iterable[Forecast]) -> Signals:
        """Signals for one product out of a mixed forecast collection."""
        own = [f for f in forecasts if f.product_id == product_id]
        return aggregate_signals(own, self.config["factor_average_mode"])

    def rank_trending(
        self,
        products: Sequence[Product],
        sentiment_data: Iterable[SentimentRecord],
        limit: Optional[int] = None
    ) -> List[TrendingProduct]:
        return rank_trending_products(
            products, sentiment_data, limit, self.config["trending_window"]
        )
