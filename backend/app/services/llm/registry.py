"""
Embedding Model Registry

Maps embedding model IDs to the vector dimension they produce.
The dimension must match the Atlas vector index on container-vectors,
so the pipeline checks every returned vector against it.
"""


# ── Model Registry ────────────────────────────────────────────────────────────
# Each entry maps an OpenAI embedding model id to:
#   - dimensions:  Length of the returned vector

EMBEDDING_MODEL_REGISTRY: dict[str, dict] = {
    "text-embedding-3-small": {
        "dimensions": 1536,
    },
    "text-embedding-3-large": {
        "dimensions": 3072,
    },
    "text-embedding-ada-002": {
        "dimensions": 1536,
    },
}

# Dimension assumed for models missing from the registry
DEFAULT_DIMENSIONS = 1536


def get_embedding_dimensions(model_id: str, override: int | None = None) -> int:
    """
    Resolve the vector dimension for an embedding model.

    Args:
        model_id: The embedding model identifier (e.g., "text-embedding-3-small")
        override: Explicitly configured dimension; wins when set

    Returns:
        The expected embedding length
    """
    if override:
        return override
    info = EMBEDDING_MODEL_REGISTRY.get(model_id)
    if info is None:
        print(
            f"[OpenAI] Unknown embedding model {model_id}; "
            f"assuming {DEFAULT_DIMENSIONS} dimensions"
        )
        return DEFAULT_DIMENSIONS
    return info["dimensions"]
