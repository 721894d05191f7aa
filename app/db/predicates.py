import json
from typing import Iterable


def at(path: str, value) -> str:
    """Equality predicate, e.g. ``[at(document.type, "posts")]``."""
    return f"[at({path}, {json.dumps(value)})]"


def build_query(predicates: Iterable[str]) -> str:
    return "[" + "".join(predicates) + "]"
