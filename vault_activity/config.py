"""Central configuration for the vault activity feed.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Endpoints and RPC URIs are read from environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Feed view settings
# ---------------------------------------------------------------------------
# Activities shown per page. Fixed for the whole pipeline.
PAGE_SIZE = 6

# Viewports wider than this (pixels) get the desktop table layout.
DESKTOP_MIN_WIDTH = _env_int("VAULT_DESKTOP_MIN_WIDTH", 768)

# Loading indicator frames and the delay between them.
LOADING_TEXT_FRAMES = ("Loading", "Loading .", "Loading ..", "Loading ...")
LOADING_TEXT_INTERVAL_MS = 250

# Shown in place of the pagination control when nothing matches.
EMPTY_FEED_MESSAGE = "There is currently no vault activity"


# ---------------------------------------------------------------------------
# Activity source settings
# ---------------------------------------------------------------------------
# Base URL of the vault activity API. Activities are read from
# ``{VAULT_ACTIVITY_API_URL}/vaults/<vault option>/activity``.
VAULT_ACTIVITY_API_URL = os.getenv(
    "VAULT_ACTIVITY_API_URL", "https://api.ribbon.finance/v1"
).rstrip("/")

# Known vault identifiers accepted by the CLI.
VAULT_OPTIONS = ("rETH-THETA", "rBTC-THETA", "rUSDC-ETH-P-THETA")

# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = 4
HTTP_POOL_MAXSIZE = 4

# Request timeout in seconds.
REQUEST_TIMEOUT = _env_int("VAULT_REQUEST_TIMEOUT", 15)

# Retry/backoff behaviour for the activity fetch loop.
# ACTIVITY_MAX_RETRIES covers network failures, 5xx, or bad payloads.
ACTIVITY_MAX_RETRIES = _env_int("VAULT_ACTIVITY_MAX_RETRIES", 3)
# ACTIVITY_BACKOFF_MAX_SECONDS caps the exponential backoff per attempt.
ACTIVITY_BACKOFF_MAX_SECONDS = _env_float("VAULT_ACTIVITY_BACKOFF_MAX_SECONDS", 4.0)

# Seconds between background refreshes when polling is enabled.
ACTIVITY_POLL_INTERVAL_SECONDS = _env_float("VAULT_ACTIVITY_POLL_INTERVAL", 30.0)


# ---------------------------------------------------------------------------
# Wallet connectors
# ---------------------------------------------------------------------------
# Development builds talk to the Kovan testnet, everything else to mainnet.
VAULT_ENV = os.getenv("VAULT_ENV", "production").strip().lower()
IS_DEVELOPMENT = _env_bool("VAULT_DEVELOPMENT", VAULT_ENV == "development")

MAINNET_CHAIN_ID = 1
TESTNET_CHAIN_ID = 42

MAINNET_URI = os.getenv("VAULT_MAINNET_URI", "")
TESTNET_URI = os.getenv("VAULT_TESTNET_URI", "")

WALLETLINK_APP_NAME = "Ribbon Finance"
