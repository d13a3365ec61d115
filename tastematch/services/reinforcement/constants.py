from typing import Final

ALPHA: Final[float] = 0.18  # me: pull the embedding toward the candidate
ALPHA_MAYBE: Final[float] = 0.05
GAMMA: Final[float] = 0.14  # notMe / style returns: pull the anti-embedding

# Stability smoothing. Tunable heuristics.
STABILITY_PRIOR_WEIGHT: Final[float] = 0.9
STABILITY_UPDATE_WEIGHT: Final[float] = 0.1
STABILITY_DELTA_SCALE: Final[float] = 10.0
