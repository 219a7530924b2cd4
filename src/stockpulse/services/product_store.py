"""
Product Store Service
======================
In-memory product record store with create/read/update/delete, seeding,
and the search/filter/sort used by product tables.

Design Principles:
- Every write is validated (ValidationError on bad records)
- Missing ids raise NotFoundError; nothing is silently created
- Products are immutable; updates replace the stored record
- Insertion order is preserved for listing
"""

from typing import Any, Dict, Iterable, List, Optional

from stockpulse.models.entities import Product
from stockpulse.models.errors import NotFoundError, ValidationError
from stockpulse.services.data_generator import DataSource, generate_product_id
from stockpulse.utils.constants import STOCK_STATUSES
from stockpulse.utils.logger import get_logger
from stockpulse.utils.validators import validate_product

logger = get_logger(__name__)


class ProductStore:
    """
    Product records keyed by id.

    Usage
    -----
    >>> store = ProductStore()
    >>> store.seed_if_empty(MockDataSource(seed=1), count=15)
    15
    >>> product = store.get("prod-0003")
    >>> store.update(dataclasses.replace(product, stock_level=40))
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: Dict[str, Product] = {}
        if products is not None:
            self.seed(products)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products

    def count(self) -> int:
        return len(self._products)

    def seed(self, products: Iterable[Product]) -> int:
        """
        Add products to the store.

        Returns
        -------
        int
            Number of products added
        """
        added = 0
        for product in products:
            self.add(product)
            added += 1
        logger.info(f"Added {added} products to the store")
        return added

    def seed_if_empty(self, source: DataSource, count: Optional[int] = None) -> int:
        """
        Populate an empty store from a data source.

        Parameters
        ----------
        source : DataSource
            Where the sample products come from
        count : int, optional
            Keep only the first `count` products

        Returns
        -------
        int
            Number of products added (0 if the store already had products)
        """
        if self._products:
            logger.info(f"Store already contains {len(self._products)} products")
            return 0

        products = source.load_products()
        if count is not None:
            products = products[:count]
        return self.seed(products)

    def list(self) -> List[Product]:
        return list(self._products.values())

    def get(self, product_id: str) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise NotFoundError("product", product_id) from None

    def add(self, product: Product) -> str:
        """Add a new product; returns its id."""
        if product.id in self._products:
            raise ValidationError(f"Product {product.id} already exists")
        validate_product(product)
        self._products[product.id] = product
        logger.debug(f"Added product {product.id}")
        return product.id

    def update(self, product: Product) -> Product:
        """Replace an existing product record."""
        if product.id not in self._products:
            raise NotFoundError("product", product.id)
        validate_product(product)
        self._products[product.id] = product
        logger.debug(f"Updated product {product.id}")
        return product

    def delete(self, product_id: str) -> None:
        if product_id not in self._products:
            raise NotFoundError("product", product_id)
        del self._products[product_id]
        logger.debug(f"Deleted product {product_id}")

    def new_product_id(self) -> str:
        """A fresh 'prod-xxxxxx' id not used in this store."""
        product_id = generate_product_id()
        while product_id in self._products:
            product_id = generate_product_id()
        return product_id


# =============================================================================
# FILTERING AND SORTING
# =============================================================================

def stock_status(product: Product) -> str:
    """
    Classify stock as 'low' (at or below the reorder point), 'optimal'
    or 'overstock' (above max stock).
    """
    if product.stock_level <= product.reorder_point:
        return "low"
    if product.stock_level > product.max_stock_level:
        return "overstock"
    return "optimal"


def _matches_stock_filter(product: Product, status: str) -> bool:
    if status == "low":
        return product.stock_level <= product.min_stock_level
    if status == "optimal":
        return product.reorder_point < product.stock_level <= product.max_stock_level
    if status == "overstock":
        return product.stock_level > product.max_stock_level
    return True


def filter_products(
    products: Iterable[Product],
    search: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    stock_status: Optional[str] = None,
    supplier: Optional[str] = None
) -> List[Product]:
    """
    Filter products for a product table.

    Parameters
    ----------
    products : Iterable[Product]
        Products to filter
    search : str, optional
        Case-insensitive match on name, sku or category
    category, supplier : str, optional
        Exact match
    min_price, max_price : float, optional
        Inclusive price bounds
    stock_status : str, optional
        'low' (stock <= min_stock_level), 'optimal'
        (reorder_point < stock <= max_stock_level), 'overstock', or 'all'

    Returns
    -------
    List[Product]
        Matching products in input order
    """
    if stock_status not in (None, "all", *STOCK_STATUSES):
        raise ValidationError(f"Unknown stock status filter: {stock_status}")

    needle = search.lower() if search else None
    result = []

    for product in products:
        if needle and not (
            needle in product.name.lower()
            or needle in product.sku.lower()
            or needle in product.category.lower()
        ):
            continue
        if category and product.category != category:
            continue
        if min_price is not None and product.price < min_price:
            continue
        if max_price is not None and product.price > max_price:
            continue
        if stock_status and not _matches_stock_filter(product, stock_status):
            continue
        if supplier and product.supplier != supplier:
            continue
        result.append(product)

    return result


def sort_products(
    products: Iterable[Product],
    sort_by: str = "name",
    descending: bool = False
) -> List[Product]:
    """
    Sort by a Product field; strings compare case-insensitively and
    missing values sort after present ones (before them when descending).
    """
    if sort_by not in Product.__dataclass_fields__:
        raise ValidationError(f"Cannot sort products by unknown field: {sort_by}")

    def key(product: Product) -> Any:
        value = getattr(product, sort_by)
        if isinstance(value, str):
            value = value.lower()
        return (value is None, value)

    return sorted(products, key=key, reverse=descending)


def distinct_values(products: Iterable[Product], field_name: str) -> List[Any]:
    """Distinct values of a field in first-appearance order (filter options)."""
    seen = {}
    for product in products:
        seen.setdefault(getattr(product, field_name), None)
    return list(seen)
