"""
Arithmetic on integer lattice 3-vectors.

Momenta and displacements are plain ``(x, y, z)`` tuples so that they can be
compared and used as dictionary keys directly.
"""

from ..config import Momentum


def change_sign_array(p: Momentum) -> Momentum:
    """Return -p."""
    return (-p[0], -p[1], -p[2])


def compute_norm_squ(p: Momentum) -> int:
    """Return |p|^2."""
    return p[0] * p[0] + p[1] * p[1] + p[2] * p[2]


def add_momenta(p1: Momentum, p2: Momentum) -> Momentum:
    """Return p1 + p2."""
    return (p1[0] + p2[0], p1[1] + p2[1], p1[2] + p2[2])


def add_momenta_squared(p1: Momentum, p2: Momentum) -> int:
    """Return |p1 + p2|^2."""
    return compute_norm_squ(add_momenta(p1, p2))


def is_opposite(p1: Momentum, p2: Momentum) -> bool:
    """True if p1 == -p2 (momentum conservation between source and sink)."""
    return p1 == change_sign_array(p2)
