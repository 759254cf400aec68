"""
Configuration-related constants and resource limits.
"""

# Maximum config file size (10MB) to prevent DoS attacks
MAX_CONFIG_SIZE_BYTES = 10 * 1024 * 1024

DEFAULT_ENV_PREFIX = "PATHMUX_"

DEFAULT_ADDRESS = ":8080"
