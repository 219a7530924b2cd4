"""Reorder engine unit tests."""

import pytest

from stockpulse.models.errors import NotFoundError
from stockpulse.services.data_generator import MockDataSource
from stockpulse.services.reorder_engine import (
    ReorderEngine,
    compute_reorder_recommendation,
    days_until_reorder,
    plan_reorders,
)

from tests.factories import AS_OF, make_forecast, make_product


class TestReorderQuantity:

    def test_lead_time_plus_safety_minus_stock(self):
        product = make_product(stock_level=20, lead_time=7)
        forecasts = [make_forecast(product.id, 10.0, day=d) for d in range(3)]

        rec = compute_reorder_recommendation(product.id, [product], forecasts)

        # 10 * 7 + 10 * 5 - 20
        assert rec.recommended_quantity == 100
        assert rec.reasoning.avg_daily_demand == pytest.approx(10.0)
        assert rec.reasoning.safety_stock == pytest.approx(50.0)
        assert rec.reasoning.current_stock == 20
        assert rec.reasoning.lead_time == 7

    def test_no_forecasts_means_no_order(self):
        product = make_product(stock_level=0)
        rec = compute_reorder_recommendation(product.id, [product], [])
        assert rec.recommended_quantity == 0
        assert rec.reasoning.avg_daily_demand == 0
        assert rec.reasoning.safety_stock == 0

    def test_never_negative(self):
        product = make_product(stock_level=500, max_stock_level=600)
        forecasts = [make_forecast(product.id, 10.0)]
        rec = compute_reorder_recommendation(product.id, [product], forecasts)
        assert rec.recommended_quantity == 0

    def test_external_factors_add_units(self):
        product = make_product(stock_level=20, lead_time=7)
        forecasts = [
            make_forecast(product.id, 10.0, day=0, weather=0.4, social=0.2),
            make_forecast(product.id, 10.0, day=1),
            make_forecast(product.id, 10.0, day=2),
            make_forecast(product.id, 10.0, day=3, weather=0.2),
        ]

        rec = compute_reorder_recommendation(product.id, [product], forecasts)

        # 100 + 0.15 * 10 + 0.05 * 15 = 102.25
        assert rec.recommended_quantity == 102
        assert rec.reasoning.weather_impact == pytest.approx(0.15)
        assert rec.reasoning.social_impact == pytest.approx(0.05)

    def test_present_only_factor_mode(self):
        product = make_product(stock_level=20, lead_time=7)
        forecasts = [
            make_forecast(product.id, 10.0, day=0, weather=0.4, social=0.2),
            make_forecast(product.id, 10.0, day=1),
            make_forecast(product.id, 10.0, day=2),
            make_forecast(product.id, 10.0, day=3, weather=0.2),
        ]

        engine = ReorderEngine(factor_average_mode="present_only")
        rec = engine.recommend(product.id, [product], forecasts)

        # 100 + 0.3 * 10 + 0.2 * 15 = 106
        assert rec.recommended_quantity == 106

    def test_function_form_accepts_factor_mode(self):
        product = make_product(stock_level=10, lead_time=7)
        forecasts = [
            make_forecast(product.id, 10.0, day=0, weather=0.4, social=0.2),
            make_forecast(product.id, 10.0, day=1),
        ]

        rec = compute_reorder_recommendation(
            product.id, [product], forecasts, factor_average_mode="present_only"
        )
        plan = plan_reorders([product], forecasts, factor_average_mode="present_only")

        # 110 + 0.4 * 10 + 0.2 * 15 = 117
        assert rec.recommended_quantity == 117
        assert rec.reasoning.weather_impact == pytest.approx(0.4)
        assert plan.recommendations[product.id].recommended_quantity == 117

    def test_rounds_half_up(self):
        product = make_product(stock_level=2, lead_time=0)
        forecasts = [make_forecast(product.id, 0.5)]
        rec = compute_reorder_recommendation(product.id, [product], forecasts)
        # 0 + 2.5 - 2 = 0.5
        assert rec.recommended_quantity == 1
        assert isinstance(rec.recommended_quantity, int)

    def test_other_products_forecasts_ignored(self):
        product = make_product(stock_level=20)
        forecasts = [
            make_forecast(product.id, 10.0),
            make_forecast("prod-9999", 1000.0, weather=0.4),
        ]
        rec = compute_reorder_recommendation(product.id, [product], forecasts)
        assert rec.recommended_quantity == 100

    def test_unknown_product_raises(self):
        with pytest.raises(NotFoundError) as excinfo:
            compute_reorder_recommendation("prod-missing", [make_product()], [])
        assert str(excinfo.value) == "Product prod-missing not found"

    def test_config_override(self):
        product = make_product(stock_level=20, lead_time=7)
        forecasts = [make_forecast(product.id, 10.0)]
        rec = compute_reorder_recommendation(
            product.id, [product], forecasts, config={"safety_stock_days": 0}
        )
        assert rec.recommended_quantity == 50

    def test_generated_data_gives_non_negative_integers(self):
        source = MockDataSource(seed=3, product_count=12, as_of=AS_OF)
        products = source.load_products()
        forecasts = source.load_forecasts(products)
        engine = ReorderEngine()

        for product in products:
            rec = engine.recommend(product.id, products, forecasts)
            assert isinstance(rec.recommended_quantity, int)
            assert rec.recommended_quantity >= 0

    def test_to_dict_shape(self):
        product = make_product()
        rec = compute_reorder_recommendation(product.id, [product], [make_forecast(product.id, 2.0)])
        payload = rec.to_dict()
        assert payload["productId"] == product.id
        assert set(payload["reasoning"]) == {
            "currentStock", "avgDailyDemand", "leadTime",
            "safetyStock", "weatherImpact", "socialImpact"
        }


class TestReorderPlan:

    def test_buckets(self, products, forecasts):
        plan = plan_reorders(products, forecasts)

        assert [r.product_id for r in plan.urgent] == ["prod-0001"]
        assert [r.product_id for r in plan.recommended] == ["prod-0002"]
        assert [p.id for p in plan.optimal] == ["prod-0003", "prod-0004"]

    def test_candidates_get_recommendations(self, products, forecasts):
        plan = plan_reorders(products, forecasts)

        # stock <= reorder_point * 1.2
        assert set(plan.recommendations) == {"prod-0001", "prod-0002", "prod-0003"}
        assert plan.recommendations["prod-0001"].recommended_quantity == 57
        assert plan.recommendations["prod-0002"].recommended_quantity == 52

    def test_zero_quantity_not_urgent(self):
        product = make_product(stock_level=2)
        plan = plan_reorders([product], [])
        assert plan.urgent == []
        assert plan.recommended == []
        assert product.id in plan.recommendations

    def test_to_dict(self, products, forecasts):
        payload = plan_reorders(products, forecasts).to_dict()
        assert payload["optimal"] == ["prod-0003", "prod-0004"]
        assert payload["urgent"][0]["recommendedQuantity"] == 57


class TestReorderHelpers:

    def test_external_factor_adjustment(self):
        product = make_product()
        forecasts = [
            make_forecast(product.id, 1.0, day=0, weather=0.3, social=0.1),
            make_forecast(product.id, 1.0, day=1),
        ]
        engine = ReorderEngine()
        rec = engine.recommend(product.id, [product], forecasts)
        # (0.15 + 0.05) * 10
        assert engine.external_factor_adjustment(rec.reasoning) == 2

    def test_days_until_reorder(self):
        assert days_until_reorder(make_product(stock_level=30, reorder_point=10,
                                               sales_velocity=4.0)) == 5

    def test_days_until_reorder_without_sales(self):
        assert days_until_reorder(make_product(sales_velocity=0.0)) is None
