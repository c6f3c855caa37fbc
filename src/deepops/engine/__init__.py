"""The four structural engines: equality, ordering, hashing, and copy.

Architecture Note:
    Each engine is a set of pure functions dispatching on the value category.
    They share only the schema layer, the override resolver and the per-call
    TraversalContext; none of them mutates its inputs.
"""

from deepops.engine.copying import copy_deep, copy_into
from deepops.engine.equality import equal_deep
from deepops.engine.hashing import hash_deep, text_digest
from deepops.engine.operators import install_operators
from deepops.engine.ordering import compare_deep, sorted_keys

__all__ = [
    "equal_deep",
    "compare_deep",
    "hash_deep",
    "copy_deep",
    "copy_into",
    "install_operators",
    "sorted_keys",
    "text_digest",
]
