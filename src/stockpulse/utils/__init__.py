"""
Utils Package
=============
Utility functions for the StockPulse inventory core.

Modules:
- logger: Centralized logging configuration
- rounding: Half-up rounding for unit quantities
- validators: Product schema and invariant validation
- constants: Policy constants and configurations
"""

from stockpulse.utils.logger import get_logger, set_log_level, LogContext
from stockpulse.utils.validators import (
    ProductValidator,
    ValidationResult,
    validate_product,
    validate_products
)
from stockpulse.utils.constants import (
    ALERT_CONFIG,
    PRODUCT_SCHEMA,
    REORDER_CONFIG,
    REPORT_CONFIG,
    SIGNAL_CONFIG,
    SIMULATION_CONFIG,
    SUMMARY_CONFIG
)

__all__ = [
    'get_logger',
    'set_log_level',
    'LogContext',
    'ProductValidator',
    'ValidationResult',
    'validate_product',
    'validate_products',
    'ALERT_CONFIG',
    'PRODUCT_SCHEMA',
    'REORDER_CONFIG',
    'REPORT_CONFIG',
    'SIGNAL_CONFIG',
    'SIMULATION_CONFIG',
    'SUMMARY_CONFIG'
]
