"""
Random number generation utilities.

Board generation never calls Python's ``random`` module. Functions that
need randomness take an explicit ``prng`` argument and fall back to the
process-wide Alea generator held here.
"""

from typing import Optional

from ..core.alea_prng import AleaPRNG

# Global PRNG instance
_prng: Optional[AleaPRNG] = None


def set_random_seed(seed: str) -> AleaPRNG:
    """
    Reseed the process-wide generator.

    Args:
        seed: Seed string to use

    Returns:
        The new AleaPRNG instance
    """
    global _prng
    _prng = AleaPRNG(seed)
    return _prng


def get_prng() -> AleaPRNG:
    """
    Get the current process-wide generator, creating a default one lazily.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG("default")
    return _prng


def resolve_prng(prng: Optional[AleaPRNG] = None) -> AleaPRNG:
    """Return ``prng`` when given, otherwise the process-wide generator."""
    return prng if prng is not None else get_prng()
