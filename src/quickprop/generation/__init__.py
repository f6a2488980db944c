"""Value generation: generators, shrink candidates, printers and arbitraries.

Modules are imported qualified (``from quickprop.generation import gen``)
since several of them define combinators with the same names (``pair``,
``list_of``, ``option``...).
"""

from quickprop.generation.arbitrary import Arbitrary, GeneratedFunction
from quickprop.generation.candidates import Candidates
from quickprop.generation.gen import Gen

__all__ = [
    "Arbitrary",
    "Candidates",
    "Gen",
    "GeneratedFunction",
]
