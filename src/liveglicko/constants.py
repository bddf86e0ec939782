# src/liveglicko/constants.py

"""Fixed constants of the Glicko-2 model and default tuning values."""

from datetime import timedelta

# Conversion between the public (Glicko) scale and the internal Glicko-2 scale.
SCALE_FACTOR = 173.7178
RATING_ORIGIN = 1500.0

# Starting values for a competitor nobody knows anything about.
DEFAULT_RATING = 1500.0
DEFAULT_DEVIATION = 350.0
DEFAULT_VOLATILITY = 0.06

# The system constant, tau, constrains the change in volatility over time.
# A typical value is between 0.3 and 1.2.
DEFAULT_TAU = 0.5

DEFAULT_CONVERGENCE_TOLERANCE = 0.000001
DEFAULT_MAX_ITERATIONS = 10_000

DEFAULT_RATING_PERIOD = timedelta(days=1)
