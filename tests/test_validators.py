"""Product validation and error taxonomy tests."""

import pytest

from stockpulse.models.entities import Product
from stockpulse.models.errors import NotFoundError, StockPulseError, ValidationError
from stockpulse.utils.rounding import round_half_up
from stockpulse.utils.validators import ProductValidator, validate_product, validate_products

from tests.factories import make_product


class TestProductValidator:

    def test_valid_product(self):
        result = ProductValidator().validate(make_product())
        assert result.is_valid is True
        assert result.to_dict()["errors"] == []

    def test_missing_fields(self):
        record = make_product().to_dict()
        del record["supplier"]
        result = ProductValidator().validate_record(record)
        assert result.is_valid is False
        assert "supplier" in result.errors[0]

    def test_negative_values(self):
        result = ProductValidator().validate(make_product(price=-1.0, lead_time=-2))
        assert len(result.errors) == 2

    def test_non_integer_stock(self):
        record = make_product().to_dict()
        record["stockLevel"] = 2.5
        assert ProductValidator().validate_record(record).is_valid is False

    def test_reorder_point_above_max(self):
        result = ProductValidator().validate(make_product(reorder_point=120, max_stock_level=100))
        assert result.is_valid is False
        assert "maxStockLevel" in result.errors[0]

    def test_duplicate_ids_in_collection(self):
        result = ProductValidator().validate_collection([make_product(), make_product()])
        assert result.is_valid is False
        assert result.info["product_count"] == 2

    def test_validate_products_raises_with_all_errors(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_products([
                make_product("prod-0001", price=-1.0),
                make_product("prod-0002", min_stock_level=50, reorder_point=10),
            ])
        assert len(excinfo.value.errors) == 2

    def test_validate_product_passes(self):
        validate_product(make_product())


class TestProductRecords:

    def test_from_dict_round_trip(self):
        product = make_product(last_reordered=None)
        assert Product.from_dict(product.to_dict()) == product

    def test_stock_value(self):
        assert make_product(price=2.5, stock_level=4).stock_value == pytest.approx(10.0)


class TestErrors:

    def test_not_found_is_key_error(self):
        error = NotFoundError("product", "prod-0009")
        assert isinstance(error, KeyError)
        assert isinstance(error, StockPulseError)
        assert str(error) == "Product prod-0009 not found"
        assert error.entity_id == "prod-0009"

    def test_validation_error_is_value_error(self):
        error = ValidationError("bad record")
        assert isinstance(error, ValueError)
        assert error.errors == ["bad record"]


@pytest.mark.parametrize("value, expected", [
    (0.5, 1),
    (1.5, 2),
    (2.5, 3),
    (2.49, 2),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
