"""Constants used throughout the simulator.

Numeric conventions shared by the cost models, the paper trader and the
snapshot parser live here so they are tuned in one place.
"""

# Fee schedule
BPS_DENOMINATOR = 10000.0  # 1 bps = 0.01%
DEFAULT_MAKER_FEE_BPS = 0
DEFAULT_TAKER_FEE_BPS = 200

# Binary arbitrage is modelled as two offsetting legs
DEFAULT_FEE_LEGS = 2

# Outcome index convention for binary markets
YES_INDEX = 0
NO_INDEX = 1

# Constraint checking
DEFAULT_MIN_SPREAD = 0.02
BALANCED_TOLERANCE = 1e-9

# Relative float leftover ignored when walking book depth
FILL_TOLERANCE = 1e-9

# Price bounds for demo data
MIN_PRICE = 0.01
MAX_PRICE = 0.99
