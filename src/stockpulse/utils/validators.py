"""
Data Validation Utilities
==========================
Schema and invariant checks for product records.

Design Principles:
- Checks collect every problem into a ValidationResult before deciding
- ValidationError is raised only at write boundaries (the product store)
- Messages name the product and the offending field
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from stockpulse.models.entities import Product
from stockpulse.models.errors import ValidationError
from stockpulse.utils.constants import PRODUCT_SCHEMA
from stockpulse.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """
    Structured result of a validation operation.

    Attributes
    ----------
    is_valid : bool
        Overall validation status
    errors : List[str]
        Critical issues that prevent processing
    warnings : List[str]
        Non-critical issues to be aware of
    info : Dict[str, Any]
        Additional validation metadata
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> None:
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def raise_if_invalid(self, subject: str) -> None:
        if not self.is_valid:
            raise ValidationError(
                f"Invalid {subject}: {'; '.join(self.errors)}",
                errors=self.errors
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info
        }


class ProductValidator:
    """
    Validates product records against PRODUCT_SCHEMA and stock invariants.

    Usage
    -----
    validator = ProductValidator()
    result = validator.validate_record(raw_dict)

    if not result.is_valid:
        print(f"Validation failed: {result.errors}")
    """

    def __init__(self, schema: Optional[Dict] = None):
        self.schema = schema or PRODUCT_SCHEMA

    def validate_record(self, record: Dict[str, Any]) -> ValidationResult:
        """
        Validate an exported (camelCase) product record.

        Parameters
        ----------
        record : dict
            Raw product record

        Returns
        -------
        ValidationResult
            Structured validation result with errors/warnings
        """
        result = ValidationResult()
        label = record.get("id", "<no id>")
        result.info["product_id"] = label

        missing = [f for f in self.schema["required_fields"] if record.get(f) is None]
        if missing:
            result.add_error(f"Product {label} is missing required fields: {missing}")
            return result

        for name in self.schema["non_negative_fields"]:
            value = record[name]
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                result.add_error(f"Product {label}: '{name}' must be numeric, got {value!r}")
            elif value < 0:
                result.add_error(f"Product {label}: '{name}' must be non-negative, got {value}")

        for name in self.schema["integer_fields"]:
            value = record[name]
            if isinstance(value, float) and not value.is_integer():
                result.add_error(f"Product {label}: '{name}' must be an integer, got {value}")

        if result.is_valid:
            self._check_thresholds(
                result, label,
                record["minStockLevel"], record["reorderPoint"], record["maxStockLevel"]
            )

        return result

    def validate(self, product: Product) -> ValidationResult:
        """Validate a Product instance."""
        return self.validate_record(product.to_dict())

    def validate_collection(self, products: Iterable[Product]) -> ValidationResult:
        """
        Validate every product plus id uniqueness across the collection.
        """
        result = ValidationResult()
        seen = set()
        count = 0

        for product in products:
            count += 1
            result.merge(self.validate(product))
            if product.id in seen:
                result.add_error(f"Duplicate product id: {product.id}")
            seen.add(product.id)

        result.info["product_count"] = count

        if result.is_valid:
            logger.debug(f"Validation PASSED for {count} products")
        else:
            logger.error(f"Validation FAILED for products: {result.errors}")

        for warning in result.warnings:
            logger.warning(warning)

        return result

    def _check_thresholds(
        self,
        result: ValidationResult,
        label: Any,
        min_stock: float,
        reorder_point: float,
        max_stock: float
    ) -> None:
        """min_stock_level <= reorder_point <= max_stock_level."""
        if min_stock > reorder_point:
            result.add_error(
                f"Product {label}: minStockLevel ({min_stock}) exceeds "
                f"reorderPoint ({reorder_point})"
            )
        if reorder_point > max_stock:
            result.add_error(
                f"Product {label}: reorderPoint ({reorder_point}) exceeds "
                f"maxStockLevel ({max_stock})"
            )


def validate_product(product: Product) -> None:
    """
    Raise ValidationError if the product breaks its schema or invariants.
    """
    ProductValidator().validate(product).raise_if_invalid(f"product {product.id}")


def validate_products(products: Iterable[Product]) -> None:
    """
    Raise ValidationError if any product is invalid or ids repeat.
    """
    ProductValidator().validate_collection(products).raise_if_invalid("product collection")
