"""
Configuration management for refgen.

Loads environment variables and provides configuration defaults.
"""

import os

from dotenv import load_dotenv

from refgen.constants import DEFAULT_GRAPH_TIMEOUT_MS, DEFAULT_MAX_DESCRIPTION_SIZE

# Load environment variables from .env file
load_dotenv()

def _get_non_negative_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value

# Algorithm configuration
def get_graph_timeout_ms() -> int:
    """Get the graph search wall-clock budget in milliseconds."""
    return _get_non_negative_int("REFGEN_GRAPH_TIMEOUT_MS", DEFAULT_GRAPH_TIMEOUT_MS)

def get_max_description_size() -> int:
    """Get the largest description size the constraint search will try."""
    return _get_non_negative_int("REFGEN_MAX_DESCRIPTION_SIZE", DEFAULT_MAX_DESCRIPTION_SIZE)

# Neo4j configuration
def get_neo4j_uri() -> str:
    """Get Neo4j URI from environment or default."""
    return os.getenv("NEO4J_URI", "bolt://localhost:7687")

def get_neo4j_user() -> str:
    """Get Neo4j username from environment or default."""
    return os.getenv("NEO4J_USER", "neo4j")

def get_neo4j_password() -> str:
    """Get Neo4j password from environment."""
    password = os.getenv("NEO4J_PASSWORD", "")
    if not password:
        raise ValueError("NEO4J_PASSWORD not set in .env file")
    return password

def get_neo4j_database() -> str:
    """Get Neo4j database name from environment or default."""
    return os.getenv("NEO4J_DATABASE", "neo4j")
