from typing import Final

PROJECTION_SEED: Final[int] = 1337
LCG_MULTIPLIER: Final[int] = 6364136223846793005
LCG_INCREMENT: Final[int] = 1442695040888963407
