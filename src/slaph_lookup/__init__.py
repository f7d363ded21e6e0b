"""
slaph_lookup: lookup tables for stochastic LapH contractions

Enumerates the quantum numbers of the requested correlation functions and
deduplicates the operators, random-vector index combinations, quarklines and
correlators they need, so that each is computed exactly once.
"""

from . import config

__version__ = "0.1.0"
__all__ = ["config"]
