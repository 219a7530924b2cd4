"""Mock data source unit tests."""

from datetime import date

import numpy as np
import pytest

from stockpulse.models.entities import LocationType
from stockpulse.models.errors import ValidationError
from stockpulse.services.data_generator import (
    MockDataSource,
    StaticDataSource,
    generate_forecasts,
    generate_locations,
    generate_products,
    generate_product_id,
    generate_social_sentiment,
    generate_weather_data,
    get_dates_array,
    get_future_dates_array,
)
from stockpulse.utils.validators import ProductValidator

from tests.factories import AS_OF, make_product


@pytest.fixture
def rng():
    return np.random.default_rng(2024)


class TestDates:

    def test_history_dates_end_on_as_of(self):
        dates = get_dates_array(3, AS_OF)
        assert dates == [date(2026, 2, 28), date(2026, 3, 1), date(2026, 3, 2)]

    def test_future_dates_start_on_as_of(self):
        dates = get_future_dates_array(2, AS_OF)
        assert dates == [date(2026, 3, 2), date(2026, 3, 3)]


class TestGenerateProducts:

    def test_same_seed_same_products(self):
        first = MockDataSource(seed=5, product_count=10, as_of=AS_OF).load_products()
        second = MockDataSource(seed=5, product_count=10, as_of=AS_OF).load_products()
        assert first == second

    def test_products_satisfy_invariants(self, rng):
        products = generate_products(rng, count=50, as_of=AS_OF)
        result = ProductValidator().validate_collection(products)

        assert result.is_valid, result.errors
        assert [p.id for p in products[:3]] == ["prod-0000", "prod-0001", "prod-0002"]
        for product in products:
            assert product.min_stock_level <= product.reorder_point <= product.max_stock_level
            assert 3 <= product.lead_time <= 16
            assert product.location_id in {"store-001", "store-002", "warehouse-main"}

    def test_product_id_format(self, rng):
        product_id = generate_product_id(rng)
        assert product_id.startswith("prod-")
        assert len(product_id) == 11


class TestGenerateSeries:

    def test_sales_history_size_and_values(self):
        source = MockDataSource(seed=1, product_count=4, as_of=AS_OF)
        products = source.load_products()
        sales = source.load_sales_history(products)

        assert len(sales) == 4 * 90
        assert max(s.date for s in sales) == AS_OF
        assert all(s.quantity >= 0 for s in sales)
        assert all(isinstance(s.quantity, int) for s in sales)

    def test_forecast_weekend_seasonality(self, rng):
        product = make_product(sales_velocity=2.0)
        forecasts = generate_forecasts([product], rng, days=7, as_of=AS_OF)

        assert len(forecasts) == 7
        for forecast in forecasts:
            expected = 1.5 if forecast.date.weekday() >= 5 else 1.0
            assert forecast.factors.seasonal == expected
            assert 0.7 <= forecast.confidence_score <= 1.0
            if forecast.factors.weather is not None:
                assert 0 <= forecast.factors.weather <= 0.4
            if forecast.factors.social is not None:
                assert 0 <= forecast.factors.social <= 0.3

    def test_weather_per_location_and_day(self, rng):
        weather = generate_weather_data(rng, days=7, as_of=AS_OF)
        impacts = {"sunny": 0.2, "cloudy": 0.0, "rainy": -0.2, "stormy": -0.5, "snowy": -0.4}

        assert len(weather) == 3 * 7
        for record in weather:
            assert record.impact == impacts[record.condition.value]
            assert record.precipitation >= 0
            if record.condition.value == "snowy":
                assert -5 <= record.temperature <= 5

    def test_sentiment_sources_are_non_negative(self, rng):
        products = [make_product(f"prod-000{i}") for i in range(10)]
        sentiment = generate_social_sentiment(products, rng, days=30, as_of=AS_OF)

        assert len(sentiment) == 10 * 30
        for record in sentiment:
            counts = record.sources.to_dict().values()
            assert all(c >= 0 for c in counts)
            assert record.volume - 4 <= record.sources.total <= record.volume
            assert -1 <= record.sentiment <= 1

    def test_trending_flag_only_on_recent_days(self, rng):
        products = [make_product(f"prod-00{i:02d}") for i in range(30)]
        sentiment = generate_social_sentiment(products, rng, days=30, as_of=AS_OF)
        recent_cutoff = get_dates_array(30, AS_OF)[-4]

        assert all(r.date >= recent_cutoff for r in sentiment if r.trending)


class TestDataSources:

    def test_locations(self):
        locations = generate_locations()
        assert [loc.id for loc in locations] == ["store-001", "store-002", "warehouse-main"]
        assert locations[2].type == LocationType.WAREHOUSE

    def test_static_source_returns_copies(self):
        product = make_product()
        source = StaticDataSource(products=[product])
        loaded = source.load_products()
        loaded.clear()
        assert source.load_products() == [product]

    def test_explicit_zero_products(self):
        source = MockDataSource(seed=1, product_count=0, as_of=AS_OF)
        assert source.product_count == 0
        assert source.load_products() == []

    def test_negative_product_count_rejected(self):
        with pytest.raises(ValidationError):
            MockDataSource(seed=1, product_count=-1)
