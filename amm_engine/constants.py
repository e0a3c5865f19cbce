"""Protocol constants for the AMM pricing engine.

These values mirror the deployed pair contracts. Changing any of them breaks
bit-for-bit parity with on-chain quotes.
"""

# Fee rates are expressed in parts per FEE_ACCURACY (1_000_000 = 100%)
FEE_ACCURACY = 1_000_000

# Default swap fee for new pairs (3000 = 0.3%)
DEFAULT_SWAP_FEE = 3000

# LP units permanently locked by the first deposit
MINIMUM_LIQUIDITY = 1000

# Curve discriminants used by the pair factory
CONSTANT_PRODUCT_CURVE_ID = 0
STABLE_CURVE_ID = 1

# Stable curve parameters
N_COINS = 2
A_PRECISION = 100
MAX_LOOP_LIMIT = 256
DEFAULT_AMPLIFICATION_COEFFICIENT_PRECISE = 1000 * A_PRECISION

# Fixed-point scale of the stable math (balances are normalized to 18 decimals)
INTERNAL_DECIMALS = 18

# Largest decimals a token amount can have and still fit a uint256
MAX_TOKEN_DECIMALS = 77

# Protocol fee share: phantom LP = ts * (rootK - rootKLast) / (5 * rootK + rootKLast)
PROTOCOL_FEE_DIVISOR = 5

# Liquidity token metadata
LIQUIDITY_TOKEN_DECIMALS = 18
LIQUIDITY_TOKEN_SYMBOL = "AMM-LP"
LIQUIDITY_TOKEN_NAME = "AMM LP Token"

# Placeholder address for pairs whose deployed address is not known
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
