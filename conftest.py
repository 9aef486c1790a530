"""Global pytest configuration."""

import os

# Keep provider timeouts short and fallback output reproducible in tests before any imports
os.environ.setdefault("PROVIDER_TIMEOUT_SECONDS", "0.5")
os.environ.setdefault("FALLBACK_SEED", "42")
