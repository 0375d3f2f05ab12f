"""Application settings."""

import os
from pathlib import Path

# Cache
CACHE_DB_PATH = os.getenv("DELTA_CACHE_DB_PATH", "delta_cache.duckdb")
CACHE_PREFIX = "@delta_insights"
CACHE_TTL = 5 * 60

# Logging
LOG_DIR = Path("logs")

# API
API_BASE_URL = os.getenv("DELTA_API_BASE_URL", "https://delta-80ht.onrender.com")
API_TIMEOUT = int(os.getenv("DELTA_API_TIMEOUT", "45"))
MAX_CONCURRENT = 10

# Deadlines (ms)
FAST_DEADLINE_MS = 5000
MULTI_STEP_DEADLINE_MS = 8000
LLM_DEADLINE_MS = 20000
