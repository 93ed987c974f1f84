"""Polynomial commitments, transcripts and Sonic-style unhelped arguments over a toy pairing engine."""

__version__ = "0.1.0"

__all__ = [
    "field",
    "source",
    "srs",
    "util",
    "transcript",
    "wellformed",
    "s2_proof",
    "grand_product",
    "permutation",
]