"""Inventory context integration tests."""

import dataclasses

import pytest

from stockpulse.context import InventoryContext
from stockpulse.models.entities import AlertType
from stockpulse.models.errors import NotFoundError
from stockpulse.services.signal_aggregator import SignalAggregator

from tests.factories import NOW


class TestReadModel:

    def test_loads_from_source(self, context):
        assert [p.id for p in context.products()] == [
            "prod-0001", "prod-0002", "prod-0003", "prod-0004", "prod-0005"
        ]
        assert len(context.locations()) == 3
        assert len(context.weather()) == 3

    def test_product_lookup(self, context):
        assert context.product("prod-0002").name == "Gadget"
        with pytest.raises(NotFoundError):
            context.product("prod-missing")

    def test_series_filtered_by_product(self, context):
        assert len(context.forecasts("prod-0001")) == 10
        assert all(s.product_id == "prod-0001" for s in context.sales_history("prod-0001"))

    def test_series_for_unknown_product(self, context):
        with pytest.raises(NotFoundError):
            context.forecasts("prod-missing")
        with pytest.raises(NotFoundError):
            context.sales_history("prod-missing")

    def test_reset(self, context):
        context.products()
        context.store.delete("prod-0005")
        context.reset()
        assert len(context.products()) == 5


class TestEngines:

    def test_reorder_recommendation(self, context):
        assert context.reorder_recommendation("prod-0001").recommended_quantity == 57

    def test_reorder_plan(self, context):
        plan = context.reorder_plan()
        assert [r.product_id for r in plan.urgent] == ["prod-0001"]

    def test_trending_products(self, context):
        (top,) = context.trending_products(limit=1)
        assert top.product.id == "prod-0004"

    def test_dashboard_summary(self, context):
        summary = context.dashboard_summary()
        assert summary.total_products == 5
        assert summary.alerts_count == 6
        assert summary.top_selling_products[0].id == "prod-0001"

    def test_analytics_and_reports_share_records(self, context, tmp_path):
        assert context.analytics().stock_status_breakdown()["overstock"] == 1
        assert len(context.report_builder(tmp_path).inventory_status_report()) == 5


class TestAlertLifecycle:

    def test_alerts_cover_every_rule(self, context):
        types = [a.type for a in context.alerts()]
        assert types.count(AlertType.LOW_STOCK) == 2
        assert AlertType.WEATHER_ALERT in types
        assert AlertType.TRENDING_PRODUCT in types

    def test_read_flag_survives_refresh(self, context):
        alert_id = context.alerts()[0].id
        assert context.mark_alert_read(alert_id) is True

        context.refresh_alerts(now=NOW)

        assert context.alert_store.get(alert_id).read is True
        assert context.dashboard_summary().alerts_count == 5

    def test_mark_unknown_alert(self, context):
        assert context.mark_alert_read("alert-low-missing") is False

    def test_restocking_resolves_alert(self, context):
        low_ids = {a.product_id for a in context.alerts() if a.type == AlertType.LOW_STOCK}
        assert "prod-0002" in low_ids

        product = context.product("prod-0002")
        context.store.update(dataclasses.replace(product, stock_level=50))

        low_ids = {a.product_id for a in context.alerts() if a.type == AlertType.LOW_STOCK}
        assert low_ids == {"prod-0001"}

    def test_summary_follows_product_edits(self, context):
        before = context.dashboard_summary()
        assert before.low_stock_count == 2

        product = context.product("prod-0002")
        context.store.update(dataclasses.replace(product, stock_level=50))
        after = context.dashboard_summary()

        low_alerts = {a.product_id for a in after.recent_alerts if a.type == AlertType.LOW_STOCK}
        assert after.low_stock_count == 1
        assert low_alerts == {"prod-0001"}
        assert after.alerts_count == before.alerts_count - 1

    def test_deleted_product_drops_its_alerts(self, context):
        assert any(a.product_id == "prod-0005" for a in context.alerts())

        context.store.delete("prod-0005")

        assert all(a.product_id != "prod-0005" for a in context.alerts())


class TestIsolation:

    def test_contexts_do_not_share_state(self, static_source):
        first = InventoryContext(source=static_source)
        second = InventoryContext(source=static_source)

        first.products()
        first.store.delete("prod-0001")

        assert len(first.products()) == 4
        assert len(second.products()) == 5

    def test_seeded_mock_context_is_reproducible(self):
        first = InventoryContext(seed=3, product_count=6)
        second = InventoryContext(seed=3, product_count=6)
        assert first.products() == second.products()
        assert [a.id for a in first.alerts()] == [a.id for a in second.alerts()]

    def test_explicit_zero_product_count(self):
        context = InventoryContext(seed=3, product_count=0)
        assert context.products() == []
        assert context.dashboard_summary().total_products == 0


class TestSignalSettings:

    def test_trending_window_reaches_ranking_and_alerts(self, static_source):
        narrow = InventoryContext(
            source=static_source, signal_aggregator=SignalAggregator({"trending_window": 1})
        )
        default = InventoryContext(source=static_source)

        assert narrow.alert_engine.config["trending_window"] == 1
        assert default.alert_engine.config["trending_window"] == 5
        assert [t.product.id for t in narrow.trending_products(limit=None)] == [
            t.product.id for t in narrow.signal_aggregator.rank_trending(
                narrow.products(), narrow.sentiment()
            )
        ]

    def test_factor_mode_reaches_reorder_engine(self, static_source):
        context = InventoryContext(
            source=static_source,
            signal_aggregator=SignalAggregator({"factor_average_mode": "present_only"}),
        )
        assert context.reorder_engine.factor_average_mode == "present_only"
