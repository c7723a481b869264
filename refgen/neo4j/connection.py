"""
Neo4j connection management.

Provides utilities for creating and verifying Neo4j driver connections.
"""

import logging
from typing import Optional

from neo4j import GraphDatabase

from refgen.config import (
    get_neo4j_database,
    get_neo4j_password,
    get_neo4j_uri,
    get_neo4j_user,
)

logger = logging.getLogger(__name__)


def get_neo4j_driver(database: Optional[str] = None):
    """
    Get Neo4j driver connection.

    Args:
        database: Optional database name override (only used for logging;
            sessions pick their database explicitly)

    Returns:
        Neo4j driver instance

    Raises:
        ValueError: If NEO4J_PASSWORD is not set
    """
    uri = get_neo4j_uri()
    user = get_neo4j_user()
    password = get_neo4j_password()
    db = database or get_neo4j_database()

    logger.debug(f"Connecting to Neo4j at {uri} (database: {db})")

    return GraphDatabase.driver(uri, auth=(user, password))


def verify_connection(driver, database: Optional[str] = None) -> bool:
    """
    Verify Neo4j connection is working.

    Args:
        driver: Neo4j driver instance
        database: Database to open the probe session on

    Returns:
        True if connection is valid, False otherwise
    """
    try:
        with driver.session(database=database) as session:
            session.run("RETURN 1")
        return True
    except Exception as e:
        logger.error(f"Neo4j connection verification failed: {e}")
        return False
