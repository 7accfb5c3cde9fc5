from decimal import Decimal
import os
from types import MappingProxyType
from dotenv import load_dotenv
load_dotenv()
# ---- Helius ----
HELIUS_API_KEY = os.environ.get("HELIUS_API_KEY")
HELIUS_BASE_URL = os.environ.get("HELIUS_BASE_URL", "https://api.helius.xyz/v0")

HELIUS_REQUESTS_PER_SEC = float(os.environ.get("HELIUS_REQUESTS_PER_SEC", "5.0"))
HELIUS_TIMEOUT_SEC = 15
HELIUS_MAX_RETRIES = 5
HELIUS_MAX_PAGE_SIZE = 200      # over-fetch cap per page (spam gets filtered after)

DEFAULT_TX_LIMIT = 100

# ---- Solana ----
LAMPORTS_PER_SOL = Decimal("1000000000")

# native transfers at or below this are dust (0.00001 SOL)
FUNDING_DUST_LAMPORTS = 10000

# Known spam senders. Transactions touching these are dropped on fetch.
SPAM_ADDRESSES = frozenset({
    "5Hr7wZg7oBpVhH5nngRqzr5W7ZFUfCsfEhbziZJak7fr",
    "FLiPGqowc82LLR173hKiFYBq2fCxLZEST5iHbHwj8xKb",
    "FLiPgGTXtBtEJoytikaywvWgbz5a56DdHKZU72HSYMFF",
})

# Well-known SPL mints: mint -> (symbol, decimals). Read-only.
TOKEN_MINTS = MappingProxyType({
    "So11111111111111111111111111111111111111112": ("SOL", 9),
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": ("USDC", 6),
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": ("USDT", 6),
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": ("BONK", 5),
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": ("mSOL", 9),
    "DUSTawucrTsGU8hcqRdHDCbuYhCPADMLM2VcCb8VnFnQ": ("DUST", 9),
    "7i5KKsX2weiTkry7jA4ZwSuXGhs5eJBEjY8vVxR4pfRx": ("GMT", 9),
    "EPeUFDgHRxs9xxEPVaL6kfGQvCon7jmAWKVUHuux1Tpz": ("BAT", 8),
    "J7KzeAgcSWbAnLXQXiTfCy4gNa28YSRwiXJKE5dP51kS": ("PUNK", 9),
})

# ----- Timeline / heatmap -----
ACTIVITY_MEDIUM_THRESHOLD = int(os.environ.get("ACTIVITY_MEDIUM_THRESHOLD", "5"))
ACTIVITY_HIGH_THRESHOLD = int(os.environ.get("ACTIVITY_HIGH_THRESHOLD", "20"))
HEATMAP_WINDOW_DAYS = int(os.environ.get("HEATMAP_WINDOW_DAYS", "365"))
