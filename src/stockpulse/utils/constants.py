"""
System-Wide Constants and Configurations
==========================================
Centralized location for policy constants, thresholds, and schemas.

Design Principles:
- All magic numbers are defined here
- Services take an optional config dict and fall back to these
- Schemas define the expected fields of input records
"""

from typing import Dict, List, Any

# =============================================================================
# RECORD SCHEMAS
# =============================================================================
# Expected fields of product records (camelCase, as exported).

PRODUCT_SCHEMA = {
    "name": "product",
    "required_fields": [
        "id", "name", "category", "sku", "price", "stockLevel",
        "reorderPoint", "minStockLevel", "maxStockLevel", "leadTime",
        "supplier", "salesVelocity", "locationId"
    ],
    "optional_fields": ["lastReordered"],
    "non_negative_fields": [
        "price", "stockLevel", "reorderPoint", "minStockLevel",
        "maxStockLevel", "leadTime", "salesVelocity"
    ],
    "integer_fields": [
        "stockLevel", "reorderPoint", "minStockLevel", "maxStockLevel", "leadTime"
    ]
}

# =============================================================================
# SIGNAL AGGREGATION
# =============================================================================

SIGNAL_CONFIG = {
    # Number of most recent sentiment records used for trending scores
    "trending_window": 5,

    # How weather/social factors are averaged over a product's forecasts:
    # "all_forecasts" divides by every forecast (records missing the factor
    # count as zero), "present_only" divides by records carrying the factor.
    "factor_average_mode": "all_forecasts",
}

# =============================================================================
# REORDER POLICY
# =============================================================================

REORDER_CONFIG = {
    # Fixed buffer of average daily demand held as safety stock
    "safety_stock_days": 5,

    # Unit adjustment per point of weather / social impact score
    "weather_weight": 10,
    "social_weight": 15,

    # Products at or below reorder_point * multiplier get a recommendation
    "candidate_band_multiplier": 1.2,

    # Display multiplier for the combined external factor adjustment
    "external_factor_display_weight": 10,
}

# =============================================================================
# ALERT RULES
# =============================================================================

ALERT_CONFIG = {
    # reorder_point <= stock < reorder_point * multiplier => "reorder" notice
    "reorder_band_multiplier": 1.2,

    # Maximum trending_product alerts per pass
    "max_trending_alerts": 3,

    # Sentiment records scored per product for trending alerts
    "trending_window": SIGNAL_CONFIG["trending_window"],

    # Weather that triggers the (single) weather alert
    "severe_conditions": ["stormy", "snowy"],
    "severe_weather_impact": -0.4,

    # Length of the content hash used in alert ids
    "id_hash_length": 10,
}

# =============================================================================
# DASHBOARD SUMMARY
# =============================================================================

SUMMARY_CONFIG = {
    "top_selling_count": 5,
    "recent_alerts_count": 5,
    "unknown_product_label": "Unknown Product",
}

# =============================================================================
# SIMULATION (MOCK DATA SOURCE)
# =============================================================================

SIMULATION_CONFIG: Dict[str, Any] = {
    "product_count": 30,
    "history_days": 90,
    "forecast_days": 30,
    "weather_days": 7,
    "sentiment_days": 30,

    "categories": ["Electronics", "Clothing", "Food", "Home Goods", "Sports"],
    "suppliers": [
        "Acme Inc", "Global Supply Co", "Quality Products Ltd",
        "Prime Distributors", "Mega Wholesale"
    ],
    "locations": [
        {"id": "store-001", "name": "Downtown Store", "type": "store",
         "address": "123 Main St, New York, NY 10001"},
        {"id": "store-002", "name": "Westside Location", "type": "store",
         "address": "456 Park Ave, New York, NY 10002"},
        {"id": "warehouse-main", "name": "Central Distribution Center", "type": "warehouse",
         "address": "789 Industrial Pkwy, Newark, NJ 07102"},
    ],

    # Product attribute ranges
    "price_range": (10.0, 100.0),
    "stock_range": (0, 100),
    "min_stock_max": 10,
    "reorder_point_max": 25,
    "max_stock_range": (100, 150),
    "lead_time_range": (3, 17),
    "sales_velocity_max": 5.0,
    "last_reordered_probability": 0.3,
    "last_reordered_window_days": 30,

    # Sales / forecast shape
    "weekend_multiplier": 1.5,
    "history_trend": 0.2,          # +20% across the history window
    "forecast_trend": 0.3,         # +30% across the forecast window
    "confidence_range": (0.7, 1.0),
    "factor_probability": 0.3,     # chance a forecast carries weather/social
    "weather_factor_max": 0.4,
    "social_factor_max": 0.3,

    # Weather: impact, precipitation range, temperature offset per condition
    "weather_profiles": {
        "sunny": {"impact": 0.2, "precipitation": (0.0, 0.0), "temp_offset": 0},
        "cloudy": {"impact": 0.0, "precipitation": (0.0, 0.5), "temp_offset": 0},
        "rainy": {"impact": -0.2, "precipitation": (2.0, 10.0), "temp_offset": -5},
        "stormy": {"impact": -0.5, "precipitation": (10.0, 30.0), "temp_offset": -8},
        "snowy": {"impact": -0.4, "precipitation": (5.0, 20.0), "temp_offset": None},
    },
    "base_temperature_range": (15, 35),
    "snow_temperature_range": (-5.0, 5.0),

    # Sentiment
    "trending_probability": 0.2,
    "base_volume_range": (10, 1000),
    "sentiment_drift": 0.1,
    "sentiment_noise": 0.2,
    "trending_volume_growth": 1.1,
    "trending_growth_days": 10,
    "trending_flag_days": 5,
    "platforms": ["twitter", "instagram", "facebook", "tiktok"],
}

# =============================================================================
# REPORTS
# =============================================================================

REPORT_CONFIG = {
    "date_ranges": {
        "last30days": 30,
        "last3months": 91,
        "last6months": 182,
    },
    "sales_kinds": ["monthly", "product", "category", "location"],
    "formats": ["csv", "json"],

    # CSV export settings
    "csv_encoding": "utf-8",
    "csv_index": False,
    "float_format": "%.2f",
}

STOCK_STATUSES: List[str] = ["low", "optimal", "overstock"]
