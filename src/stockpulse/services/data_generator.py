"""
Mock Data Source
=================
Synthetic products, sales history, forecasts, weather, social sentiment and
locations for running the inventory core without a real backend.

Design Principles:
- Every generator takes an explicit numpy Generator: same seed, same data
- Dates are anchored on an explicit as_of date, never on a hidden clock
- Generated records respect the same invariants as real ones
  (min_stock_level <= reorder_point <= max_stock_level, sources >= 0)
- The core depends on the DataSource interface, not on the generators,
  so tests can feed fixed records through StaticDataSource

Simulation Model:
1. Sales: sales_velocity +/-50% noise, x1.5 on weekends, +20% linear trend
2. Forecasts: sales_velocity, +30% linear trend, x1.5 on weekends;
   30% of days carry a weather factor, 30% a social factor
3. Weather: random condition per location/day with condition-dependent
   impact, precipitation and temperature
4. Sentiment: random-walk sentiment, volume growing 10%/day over the last
   10 days for trending products, trending flag on the last 4 days
"""

import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

import numpy as np

from stockpulse.models.entities import (
    Forecast,
    ForecastFactors,
    Location,
    LocationType,
    Product,
    SalesRecord,
    SentimentRecord,
    SentimentSources,
    WeatherCondition,
    WeatherRecord,
)
from stockpulse.models.errors import ValidationError
from stockpulse.utils.constants import SIMULATION_CONFIG
from stockpulse.utils.logger import get_logger
from stockpulse.utils.rounding import round_half_up

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def get_dates_array(days: int, as_of: date) -> List[date]:
    """The `days` dates ending on (and including) as_of, oldest first."""
    return [as_of - timedelta(days=days - i - 1) for i in range(days)]


def get_future_dates_array(days: int, as_of: date) -> List[date]:
    """The `days` dates starting on as_of."""
    return [as_of + timedelta(days=i) for i in range(days)]


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def _random_token(rng: np.random.Generator, length: int = 6) -> str:
    indexes = rng.integers(0, len(_ID_ALPHABET), size=length)
    return ''.join(_ID_ALPHABET[i] for i in indexes)


def generate_product_id(rng: Optional[np.random.Generator] = None) -> str:
    """New product id: 'prod-' followed by 6 base-36 characters."""
    rng = rng if rng is not None else np.random.default_rng()
    return f"prod-{_random_token(rng)}"


def generate_products(
    rng: np.random.Generator,
    count: int = 20,
    as_of: Optional[date] = None,
    config: Optional[Dict] = None
) -> List[Product]:
    """
    Generate `count` products with consistent stock thresholds.

    Parameters
    ----------
    rng : np.random.Generator
        Random source
    count : int
        Number of products
    as_of : date, optional
        Reference date for last_reordered (default: today)
    config : dict, optional
        Simulation configuration (default: SIMULATION_CONFIG)

    Returns
    -------
    List[Product]
        Products with ids prod-0000, prod-0001, ...
    """
    cfg = config or SIMULATION_CONFIG
    as_of = as_of or date.today()
    location_ids = [loc["id"] for loc in cfg["locations"]]
    low_price, high_price = cfg["price_range"]
    low_max, high_max = cfg["max_stock_range"]
    low_lead, high_lead = cfg["lead_time_range"]

    products = []
    for i in range(count):
        category = str(rng.choice(cfg["categories"]))
        min_stock = int(rng.integers(0, cfg["min_stock_max"]))
        reorder_point = int(rng.integers(min_stock, max(min_stock, cfg["reorder_point_max"]) + 1))
        max_stock = int(rng.integers(low_max, high_max))

        last_reordered = None
        if rng.random() < cfg["last_reordered_probability"]:
            days_ago = int(rng.integers(0, cfg["last_reordered_window_days"]))
            last_reordered = as_of - timedelta(days=days_ago)

        products.append(Product(
            id=f"prod-{i:04d}",
            sku=f"SKU-{_random_token(rng).upper()}",
            name=f"{category} Item {i + 1}",
            category=category,
            supplier=str(rng.choice(cfg["suppliers"])),
            location_id=str(rng.choice(location_ids)),
            price=round(low_price + rng.random() * (high_price - low_price), 2),
            stock_level=int(rng.integers(*cfg["stock_range"])),
            min_stock_level=min_stock,
            max_stock_level=max_stock,
            reorder_point=reorder_point,
            lead_time=int(rng.integers(low_lead, high_lead)),
            sales_velocity=round(rng.random() * cfg["sales_velocity_max"], 2),
            last_reordered=last_reordered,
        ))

    return products


def generate_sales_history(
    products: List[Product],
    rng: np.random.Generator,
    days: int = 90,
    as_of: Optional[date] = None,
    config: Optional[Dict] = None
) -> List[SalesRecord]:
    """
    One SalesRecord per product per day over the last `days` days.

    quantity = velocity * (1 +/- 0.5 noise), x1.5 on weekends,
    then scaled by a linear trend reaching +20% at the end of the window.
    """
    cfg = config or SIMULATION_CONFIG
    dates = get_dates_array(days, as_of or date.today())
    sales = []

    for product in products:
        for index, day in enumerate(dates):
            quantity = max(0, round_half_up(product.sales_velocity * (1 + (rng.random() - 0.5))))

            if _is_weekend(day):
                quantity = round_half_up(quantity * cfg["weekend_multiplier"])

            trend_factor = 1 + (index / len(dates)) * cfg["history_trend"]
            quantity = round_half_up(quantity * trend_factor)

            sales.append(SalesRecord(
                date=day,
                product_id=product.id,
                quantity=quantity,
                revenue=round(quantity * product.price, 2),
            ))

    return sales


def generate_forecasts(
    products: List[Product],
    rng: np.random.Generator,
    days: int = 30,
    as_of: Optional[date] = None,
    config: Optional[Dict] = None
) -> List[Forecast]:
    """
    One Forecast per product per future day.

    predicted_demand = velocity * trend * seasonal, where the trend rises
    linearly to +30% and seasonal is 1.5 on weekends.
    """
    cfg = config or SIMULATION_CONFIG
    future_dates = get_future_dates_array(days, as_of or date.today())
    low_conf, high_conf = cfg["confidence_range"]
    forecasts = []

    for product in products:
        for index, day in enumerate(future_dates):
            trend_factor = 1 + (index / len(future_dates)) * cfg["forecast_trend"]
            seasonal = cfg["weekend_multiplier"] if _is_weekend(day) else 1.0
            predicted_demand = product.sales_velocity * trend_factor * seasonal

            confidence = low_conf + rng.random() * (high_conf - low_conf)

            weather = None
            if rng.random() < cfg["factor_probability"]:
                weather = round(rng.random() * cfg["weather_factor_max"], 2)
            social = None
            if rng.random() < cfg["factor_probability"]:
                social = round(rng.random() * cfg["social_factor_max"], 2)

            forecasts.append(Forecast(
                date=day,
                product_id=product.id,
                predicted_demand=round(predicted_demand, 2),
                confidence_score=round(confidence, 2),
                factors=ForecastFactors(
                    seasonal=seasonal,
                    trend=trend_factor,
                    weather=weather,
                    social=social,
                ),
            ))

    return forecasts


def generate_weather_data(
    rng: np.random.Generator,
    days: int = 7,
    as_of: Optional[date] = None,
    config: Optional[Dict] = None
) -> List[WeatherRecord]:
    """
    One WeatherRecord per location per future day.

    Impact by condition: sunny +0.2, cloudy 0, rainy -0.2, stormy -0.5,
    snowy -0.4. Rain and storms cool the day; snow draws its own
    temperature between -5 and 5 degrees.
    """
    cfg = config or SIMULATION_CONFIG
    future_dates = get_future_dates_array(days, as_of or date.today())
    conditions = list(WeatherCondition)
    low_temp, high_temp = cfg["base_temperature_range"]
    weather = []

    for location in cfg["locations"]:
        for day in future_dates:
            condition = conditions[int(rng.integers(0, len(conditions)))]
            profile = cfg["weather_profiles"][condition.value]

            temperature = float(rng.integers(low_temp, high_temp))
            if profile["temp_offset"] is None:
                low_snow, high_snow = cfg["snow_temperature_range"]
                temperature = low_snow + rng.random() * (high_snow - low_snow)
            else:
                temperature += profile["temp_offset"]

            low_precip, high_precip = profile["precipitation"]
            precipitation = low_precip + rng.random() * (high_precip - low_precip)

            weather.append(WeatherRecord(
                date=day,
                location_id=location["id"],
                condition=condition,
                temperature=round(temperature, 1),
                precipitation=round(precipitation, 2),
                impact=profile["impact"],
            ))

    return weather


def _split_volume(volume: int, rng: np.random.Generator) -> SentimentSources:
    """Distribute mentions across platforms; shares are normalized to 1."""
    shares = np.array([
        0.3 + rng.random() * 0.2,   # twitter
        0.2 + rng.random() * 0.2,   # instagram
        0.3 + rng.random() * 0.2,   # facebook
        0.1 + rng.random() * 0.2,   # tiktok
    ])
    shares = shares / shares.sum()
    counts = np.floor(volume * shares).astype(int)
    return SentimentSources(
        twitter=int(counts[0]),
        instagram=int(counts[1]),
        facebook=int(counts[2]),
        tiktok=int(counts[3]),
    )


def generate_social_sentiment(
    products: List[Product],
    rng: np.random.Generator,
    days: int = 30,
    as_of: Optional[date] = None,
    config: Optional[Dict] = None
) -> List[SentimentRecord]:
    """
    One SentimentRecord per product per day over the last `days` days.

    Each product gets a baseline sentiment in [-0.5, 0.5) that drifts by up
    to +/-0.05 a day, and a baseline volume of 10-999 mentions. 20% of
    products are trending: their volume grows 10% a day over the last 9 days
    and the trending flag is set on the last 4 days.
    """
    cfg = config or SIMULATION_CONFIG
    dates = get_dates_array(days, as_of or date.today())
    low_volume, high_volume = cfg["base_volume_range"]
    sentiment = []

    for product in products:
        base_sentiment = -0.5 + rng.random()
        base_volume = float(rng.integers(low_volume, high_volume))
        trending = rng.random() < cfg["trending_probability"]

        for index, day in enumerate(dates):
            drift = (rng.random() - 0.5) * cfg["sentiment_drift"]
            base_sentiment = float(np.clip(base_sentiment + drift, -1, 1))

            if trending and index > len(dates) - cfg["trending_growth_days"]:
                base_volume *= cfg["trending_volume_growth"]

            noise = (rng.random() - 0.5) * cfg["sentiment_noise"]
            value = float(np.clip(round(base_sentiment + noise, 2), -1, 1))
            volume = int(np.floor(base_volume * (0.9 + rng.random() * 0.2)))

            sentiment.append(SentimentRecord(
                date=day,
                product_id=product.id,
                sentiment=value,
                volume=volume,
                trending=trending and index > len(dates) - cfg["trending_flag_days"],
                sources=_split_volume(volume, rng),
            ))

    return sentiment


def generate_locations(config: Optional[Dict] = None) -> List[Location]:
    cfg = config or SIMULATION_CONFIG
    return [
        Location(
            id=loc["id"],
            name=loc["name"],
            type=LocationType(loc["type"]),
            address=loc["address"],
        )
        for loc in cfg["locations"]
    ]


# =============================================================================
# DATA SOURCES
# =============================================================================

class DataSource(ABC):
    """
    Where the inventory context gets its records from.

    Sales, forecasts and sentiment are generated for a given product list,
    so a source can be re-pointed at the products held in a store.
    """

    @abstractmethod
    def load_products(self) -> List[Product]:
        ...

    @abstractmethod
    def load_sales_history(self, products: List[Product]) -> List[SalesRecord]:
        ...

    @abstractmethod
    def load_forecasts(self, products: List[Product]) -> List[Forecast]:
        ...

    @abstractmethod
    def load_weather(self) -> List[WeatherRecord]:
        ...

    @abstractmethod
    def load_sentiment(self, products: List[Product]) -> List[SentimentRecord]:
        ...

    @abstractmethod
    def load_locations(self) -> List[Location]:
        ...


class MockDataSource(DataSource):
    """
    Seeded synthetic data source.

    Usage
    -----
    >>> source = MockDataSource(seed=42)
    >>> products = source.load_products()
    >>> forecasts = source.load_forecasts(products)
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        product_count: Optional[int] = None,
        as_of: Optional[date] = None,
        config: Optional[Dict] = None
    ):
        self.config = config or SIMULATION_CONFIG
        self.seed = seed
        self.product_count = (
            product_count if product_count is not None else self.config["product_count"]
        )
        if self.product_count < 0:
            raise ValidationError(f"product_count must be non-negative, got {self.product_count}")
        self.as_of = as_of or date.today()
        self.rng = np.random.default_rng(seed)

        logger.info(
            f"MockDataSource initialized: seed={seed}, "
            f"products={self.product_count}, as_of={self.as_of}"
        )

    def load_products(self) -> List[Product]:
        return generate_products(self.rng, self.product_count, self.as_of, self.config)

    def load_sales_history(self, products: List[Product]) -> List[SalesRecord]:
        return generate_sales_history(
            products, self.rng, self.config["history_days"], self.as_of, self.config
        )

    def load_forecasts(self, products: List[Product]) -> List[Forecast]:
        return generate_forecasts(
            products, self.rng, self.config["forecast_days"], self.as_of, self.config
        )

    def load_weather(self) -> List[WeatherRecord]:
        return generate_weather_data(
            self.rng, self.config["weather_days"], self.as_of, self.config
        )

    def load_sentiment(self, products: List[Product]) -> List[SentimentRecord]:
        return generate_social_sentiment(
            products, self.rng, self.config["sentiment_days"], self.as_of, self.config
        )

    def load_locations(self) -> List[Location]:
        return generate_locations(self.config)


@dataclass
class StaticDataSource(DataSource):
    """Serves fixed records; used for deterministic runs and tests."""
    products: List[Product] = field(default_factory=list)
    sales_history: List[SalesRecord] = field(default_factory=list)
    forecasts: List[Forecast] = field(default_factory=list)
    weather: List[WeatherRecord] = field(default_factory=list)
    sentiment: List[SentimentRecord] = field(default_factory=list)
    locations: List[Location] = field(default_factory=list)

    def load_products(self) -> List[Product]:
        return list(self.products)

    def load_sales_history(self, products: List[Product]) -> List[SalesRecord]:
        return list(self.sales_history)

    def load_forecasts(self, products: List[Product]) -> List[Forecast]:
        return list(self.forecasts)

    def load_weather(self) -> List[WeatherRecord]:
        return list(self.weather)

    def load_sentiment(self, products: List[Product]) -> List[SentimentRecord]:
        return list(self.sentiment)

    def load_locations(self) -> List[Location]:
        return list(self.locations)
