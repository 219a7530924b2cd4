# StockPulse Configuration
# Centralized runtime settings for the StockPulse inventory core

"""
Runtime settings for StockPulse.
Values can be overridden with environment variables:

- STOCKPULSE_LOG_LEVEL   logging level name (default INFO)
- STOCKPULSE_LOG_FILE    optional log file path
- STOCKPULSE_OUTPUT_DIR  directory for exported reports
- STOCKPULSE_SEED        seed for the mock data source (unset = random)
"""

import os
from pathlib import Path

# Output Paths
OUTPUT_DIR = Path(os.environ.get("STOCKPULSE_OUTPUT_DIR", Path.cwd() / "outputs"))

_seed = os.environ.get("STOCKPULSE_SEED")

# Data Configuration
DATA_CONFIG = {
    "seed": int(_seed) if _seed not in (None, "") else None,
    "product_count": 30,        # population served by the mock data source
}

# Logging Configuration
LOGGING_CONFIG = {
    "level": os.environ.get("STOCKPULSE_LOG_LEVEL", "INFO"),
    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S",
    "log_file": os.environ.get("STOCKPULSE_LOG_FILE") or None,
}
