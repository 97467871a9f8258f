"""
Handover Selector - Configuration
"""

import os

# Configuration
PROFILES_FILE = os.getenv("HANDOVER_PROFILES_FILE", "")
DEFAULT_PROFILE = os.getenv("HANDOVER_DEFAULT_PROFILE", "web")
TICK_SECONDS = float(os.getenv("HANDOVER_TICK_SECONDS", "2.0"))
LOG_LEVEL = os.getenv("HANDOVER_LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("HANDOVER_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("HANDOVER_API_PORT", "8092"))
