"""
Project settings.
Values come from the environment (a local .env file is loaded first).
"""

import os

from dotenv import load_dotenv

load_dotenv()


# History
XCHANGE_HISTORY_FILE = os.getenv("XCHANGE_HISTORY_FILE", "conversion_history.txt")
XCHANGE_HISTORY_FORMAT = os.getenv("XCHANGE_HISTORY_FORMAT", "jsonl")
XCHANGE_HISTORY_LIMIT = int(os.getenv("XCHANGE_HISTORY_LIMIT", "20"))

# Rates: "static" or "currency_layer"
XCHANGE_RATE_SOURCE = os.getenv("XCHANGE_RATE_SOURCE", "static")

CURRENCY_LAYER_URL = os.getenv("CURRENCY_LAYER_URL", "https://api.currencylayer.com")
CURRENCY_LAYER_API_KEY = os.getenv("CURRENCY_LAYER_API_KEY", "")
CURRENCY_LAYER_TIMEOUT = float(os.getenv("CURRENCY_LAYER_TIMEOUT", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("LOG_FILE") or None
