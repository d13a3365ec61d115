"""
Profile axis mapping.

Reduces weighted tag and axis vectors to named axis scores and derives
alternative vectors for exploration.
"""

from tastematch.services.profile.axis_mapping import AxisMapper
from tastematch.services.profile.variants import TasteVariant, generate_variants

__all__ = [
    "AxisMapper",
    "TasteVariant",
    "generate_variants",
]
