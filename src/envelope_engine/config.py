from decimal import Decimal

# Currency resolution
AMOUNT_QUANTUM = Decimal("0.01")
MIN_SHARE = Decimal("0.01")

# Failure model (slow mode only)
FAILURE_RATE_DIVISOR = 7
MAX_FAILURE_RATE = 100.0

# Participants who always win the largest share (case-insensitive match)
PRIVILEGED_NAMES = frozenset({
    "谭煜昇",
    "yisheng",
    "医生",
    "一声",
})

FAIL_REASON = "arrived too late"
PLACEHOLDER_NAME = "User{position}"

# Luck rating: (upper bound of actual/expected average %, level, description).
# The last tier has no upper bound.
RATING_TIERS = [
    (50.0, "Penniless Wanderer", "Crumbs and trifles for now, the road is long!"),
    (80.0, "Plain Commoner", "Neither hot nor cold, room to improve."),
    (100.0, "Lucky Star", "Fortune smiles on you, a fine hand indeed!"),
    (120.0, "Fortune Flowing", "Blessed by the envelope gods, deep luck!"),
    (None, "Koi Blessed", "Luck beyond measure, the envelope king is you!"),
]

ZERO_SUCCESS_TIER = (
    "Forsaken by Fate",
    "The envelopes were never meant for you, alas!",
)

# Defaults for callers that leave fields unset
DEFAULT_ROUND_COUNT = 10
DEFAULT_MODE = "normal"
