"""
In-memory index structures for object spaces.

Every space owns an ordered list of indexes built from IndexSpecs. Index 0
is the primary key. The space keeps all of them consistent: a tuple is
either present in every index or in none.

    IndexSpec ──build_index()──▶ Index (abstract)
                                   ├── TreeIndex  (ordered, unique or not)
                                   └── HashIndex  (unique, point lookups)
"""
from .index_spec import IndexType, KeyField, IndexSpec
from .index import Index
from .tree_index import TreeIndex
from .hash_index import HashIndex


def build_index(index_no: int, spec: IndexSpec) -> Index:
    """Create the index structure a spec declares."""
    if spec.type == IndexType.TREE:
        return TreeIndex(index_no, spec)
    if spec.type == IndexType.HASH:
        return HashIndex(index_no, spec)
    raise ValueError(f"Unknown index type: {spec.type}")


__all__ = [
    "IndexType",
    "KeyField",
    "IndexSpec",
    "Index",
    "TreeIndex",
    "HashIndex",
    "build_index",
]
