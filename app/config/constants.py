"""
Application constants.

Centralized constants for the application.
"""

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

# Blockchain operation timeouts (in seconds)
BLOCKCHAIN_TIMEOUT = 30.0  # Standard RPC calls (gas price, nonce, submission)
BLOCKCHAIN_RPC_TIMEOUT = 30  # RPC provider HTTP timeout

# Plain ETH transfer costs exactly 21000 gas
DEFAULT_GAS_LIMIT = 21000

# ========================================================================
# BALANCE LOOKUP CONSTANTS
# ========================================================================

DEFAULT_BALANCE_API_URL = "https://api.etherscan.io/api"
BALANCE_API_USER_AGENT = "EthereumPaymentProcessor/1.0"
BALANCE_API_SUCCESS_STATUS = "1"
HTTP_TOO_MANY_REQUESTS = 429

# ========================================================================
# SCHEDULER CONSTANTS
# ========================================================================

DEFAULT_POLLING_INTERVAL_MS = 30_000
MIN_POLLING_INTERVAL_MS = 5_000
PAYMENT_MONITOR_JOB_ID = "payment_monitor"

# ========================================================================
# HTTP API CONSTANTS
# ========================================================================

DEFAULT_API_PORT = 3000
API_SHUTDOWN_TIMEOUT = 5  # seconds
