# Fixed point scale factors
WAD = 1_000_000_000_000_000_000  # 1e18, amounts of collateral and stablecoin
BPS_SCALE = 10_000  # Basis points (100% = 10000)
PERCENT_SCALE = 100  # Collateral ratios are whole percents (120 = 120%)
UINT256_MAX = 2**256 - 1

# Accounts
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Token metadata
TOKEN_NAME = "FreeEUR"
TOKEN_SYMBOL = "frEUR"
TOKEN_DECIMALS = 18

# Time constants
DAY_IN_SECONDS = 24 * 60 * 60

# Governance defaults
DEFAULT_BURN_FEE = 100                          # 1% in bps
DEFAULT_COLL_RATIO = 120                        # 120%
DEFAULT_MAX_INSTALMENT_PERIOD = 30 * DAY_IN_SECONDS
DEFAULT_MIN_INSTALMENT_AMOUNT = 10 * WAD        # 10 frEUR

# Oracle
DEFAULT_COLLATERAL_PRICE = 500  # frEUR per 1 whole unit of collateral

# Engine
EVENT_LOG_SIZE = 10_000  # most recent committed events kept in memory
