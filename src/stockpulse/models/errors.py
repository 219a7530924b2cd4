"""
Error Taxonomy
===============
Exceptions raised by the StockPulse core.

- NotFoundError: a required entity (product, alert, location) is missing
- ValidationError: an input record or collection is malformed

Engines fail fast with these instead of substituting defaults.
"""

from typing import Any, List, Optional


class StockPulseError(Exception):
    """Base class for all StockPulse errors."""


class NotFoundError(StockPulseError, KeyError):
    """
    Raised when an id does not resolve to a known entity.

    Attributes
    ----------
    entity : str
        Kind of entity looked up ("product", "alert", ...)
    entity_id : Any
        The id that failed to resolve
    """

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} {entity_id} not found")

    def __str__(self) -> str:
        # KeyError repr-quotes its message otherwise
        return self.args[0]


class ValidationError(StockPulseError, ValueError):
    """
    Raised when input records violate their schema or invariants.

    Attributes
    ----------
    errors : List[str]
        Every problem found, in the order detected
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors) if errors else [message]
        super().__init__(message)
