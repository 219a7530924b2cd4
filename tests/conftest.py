"""Shared fixtures: a small fixed inventory served through StaticDataSource."""

import pytest

from stockpulse.context import InventoryContext
from stockpulse.models.entities import WeatherCondition
from stockpulse.services.data_generator import StaticDataSource, generate_locations

from tests.factories import (
    make_forecast,
    make_product,
    make_sale,
    make_sentiment,
    make_weather,
)


@pytest.fixture
def products():
    return [
        # below min stock -> low_stock HIGH, urgent
        make_product("prod-0001", name="Widget", stock_level=3, min_stock_level=5,
                     reorder_point=10, price=20.0),
        # between min and reorder point -> low_stock MEDIUM, recommended
        make_product("prod-0002", name="Gadget", stock_level=8, min_stock_level=5,
                     reorder_point=10, category="Sports", supplier="Mega Wholesale",
                     location_id="store-002"),
        # inside the reorder band
        make_product("prod-0003", name="Doohickey", stock_level=11, reorder_point=10,
                     category="Food", location_id="warehouse-main"),
        # healthy
        make_product("prod-0004", name="Gizmo", stock_level=50, reorder_point=10,
                     price=5.0, category="Sports"),
        # overstock
        make_product("prod-0005", name="Thingamajig", stock_level=150, max_stock_level=100,
                     price=2.0, supplier="Mega Wholesale"),
    ]


@pytest.fixture
def forecasts(products):
    return [
        make_forecast(p.id, 5.0, day=day)
        for p in products
        for day in range(10)
    ]


@pytest.fixture
def sales_history():
    return [
        make_sale("prod-0001", 4, day=1, price=20.0),
        make_sale("prod-0002", 7, day=1),
        make_sale("prod-0001", 3, day=2, price=20.0),
        make_sale("prod-0004", 2, day=40, price=5.0),
    ]


@pytest.fixture
def sentiment():
    records = []
    for day in range(6):
        records.append(make_sentiment("prod-0004", 0.6, 500, day=day, trending=day < 2))
        records.append(make_sentiment("prod-0002", 0.2, 100, day=day))
    return records


@pytest.fixture
def weather():
    return [
        make_weather("store-002", WeatherCondition.SUNNY, day=0),
        make_weather("store-002", WeatherCondition.STORMY, day=2),
        make_weather("store-001", WeatherCondition.CLOUDY, day=1),
    ]


@pytest.fixture
def static_source(products, sales_history, forecasts, weather, sentiment):
    return StaticDataSource(
        products=products,
        sales_history=sales_history,
        forecasts=forecasts,
        weather=weather,
        sentiment=sentiment,
        locations=generate_locations(),
    )


@pytest.fixture
def context(static_source):
    return InventoryContext(source=static_source)
