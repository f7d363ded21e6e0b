"""
Exceptions raised while building the lookup tables.

Both kinds are terminal: the driver in ``slaph_lookup.run`` reports them and
aborts the run. Nothing in the package catches them.
"""


class ConfigurationError(ValueError):
    """Malformed quark, operator or correlator descriptor, or unknown tag."""


class InsufficientRandomVectorsError(RuntimeError):
    """A diagram needs more distinct random vectors than are configured."""
