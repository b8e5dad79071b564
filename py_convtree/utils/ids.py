"""Node identifier generation."""

import uuid


def new_node_id() -> str:
    """Return a fresh random node id."""
    return str(uuid.uuid4())
