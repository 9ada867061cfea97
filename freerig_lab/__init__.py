"""Free rig lab: congruences on the free idempotent rig with two generators.

This package implements:
- Coefficient-vector arithmetic on the seven reduced monomials 1, a, b, ab, ba, aba, bab
- Free-band word reduction and a check of the closed-form product table
- Finite universes (full or multiplicatively closed sub-bases) with numpy row evaluation
- Minimum-root union-find partitions over universe indices
- Saturation of a seed relation into the coarsest congruence for add / multiply
- Class-size reports and the induced quotient operations

Designed to support exhaustive, reproducible runs of the squares congruence x ~ x*x.
"""

__all__ = [
    "rig",
    "words",
    "algebra",
    "partitions",
    "congruence",
    "report",
    "quotient",
]
