"""ID helpers for generated index prefixes.

Provides:
- ``new_index_prefix(length)``: returns a random lower-case hex prefix ending
  in a dash (e.g., ``3f2a9c1b-``), safe to use in an Elasticsearch index name.
"""

from __future__ import annotations

import uuid


def new_index_prefix(length: int = 8) -> str:
    """Generate a random index prefix.

    Format: ``{hex}-`` where ``hex`` has ``length`` characters (max 32).
    """
    if length < 1 or length > 32:
        raise ValueError("length must be between 1 and 32")
    return f"{uuid.uuid4().hex[:length]}-"
