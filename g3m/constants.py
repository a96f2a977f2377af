"""Engine constants.

Centralizes tolerances and solver limits shared by every curve family.
"""

# Invariant tolerance in wei: |invariant| < EPSILON counts as on-curve
EPSILON = 30

# Bisection runs to single-wei precision, capped at 256 rounds
BISECTION_TOLERANCE = 1
BISECTION_MAX_ITERATIONS = 256

# Liquidity bracket expansion: 0.1% per step
BRACKET_STEP_BPS = 10
BPS = 10_000

# 20,000 steps of 0.1% spans a factor of roughly e^20 in either direction
MAX_BRACKET_STEPS = 20_000
