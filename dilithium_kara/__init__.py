"""Dilithium post-quantum signatures with Karatsuba polynomial multiplication."""

__version__ = "0.1.0"
__all__ = [
    "bitpack",
    "karatsuba",
    "ntt",
    "packing",
    "params",
    "poly",
    "polyvec",
    "reduce",
    "rounding",
    "sign",
    "symmetric",
]