"""Neo4j connection utilities."""

from refgen.neo4j.connection import (
    get_neo4j_driver,
    verify_connection,
)

__all__ = [
    "get_neo4j_driver",
    "verify_connection",
]
