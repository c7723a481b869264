"""
Read-only fact store over a Neo4j database.

Facts are expected in this shape:

    (:Resource {uri})-[:FACT {predicate}]->(:Resource {uri})
    (:Resource {uri})-[:FACT {predicate}]->(:Literal {value, datatype, language})

Blank nodes are stored with a ``_:`` prefixed uri.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from rdflib.term import BNode, Literal, Node, URIRef

from refgen.constants import (
    NEO4J_FACT_RELATIONSHIP,
    NEO4J_LITERAL_LABEL,
    NEO4J_RESOURCE_LABEL,
)
from refgen.retry import retry_neo4j
from refgen.store.base import Triple

logger = logging.getLogger(__name__)

STATEMENTS_QUERY = f"""
MATCH (s:{NEO4J_RESOURCE_LABEL})-[r:{NEO4J_FACT_RELATIONSHIP}]->(o)
WHERE ($subject IS NULL OR s.uri = $subject)
  AND ($predicate IS NULL OR r.predicate = $predicate)
  AND ($object_uri IS NULL OR o.uri = $object_uri)
  AND ($object_value IS NULL OR (o:{NEO4J_LITERAL_LABEL}
       AND o.value = $object_value
       AND coalesce(o.datatype, '') = $object_datatype
       AND coalesce(o.language, '') = $object_language))
RETURN s.uri AS subject, r.predicate AS predicate, o.uri AS object_uri,
       o.value AS value, o.datatype AS datatype, o.language AS language
"""


def term_to_uri(term: Node) -> str:
    if isinstance(term, BNode):
        return f"_:{term}"
    return str(term)


def uri_to_term(uri: str) -> Node:
    if uri.startswith("_:"):
        return BNode(uri[2:])
    return URIRef(uri)


def object_params(obj: Optional[Node]) -> Dict[str, Optional[str]]:
    """Query parameters selecting an object (resource, literal or wildcard)."""
    params: Dict[str, Optional[str]] = {
        "object_uri": None,
        "object_value": None,
        "object_datatype": "",
        "object_language": "",
    }
    if obj is None:
        return params
    if isinstance(obj, Literal):
        params["object_value"] = str(obj)
        params["object_datatype"] = str(obj.datatype) if obj.datatype else ""
        params["object_language"] = obj.language or ""
    else:
        params["object_uri"] = term_to_uri(obj)
    return params


def row_to_triple(row: Dict[str, Any]) -> Triple:
    """Convert a result row of STATEMENTS_QUERY into a Triple."""
    if row.get("object_uri") is not None:
        obj: Node = uri_to_term(row["object_uri"])
    elif row.get("language"):
        obj = Literal(row["value"], lang=row["language"])
    elif row.get("datatype"):
        obj = Literal(row["value"], datatype=URIRef(row["datatype"]))
    else:
        obj = Literal(row["value"])
    return Triple(uri_to_term(row["subject"]), URIRef(row["predicate"]), obj)


class Neo4jFactStore:
    """
    Fact store answering lookups with Cypher queries.

    The driver's lifecycle belongs to the caller: open it before resolving,
    close it afterwards.
    """

    def __init__(self, driver, database: Optional[str] = None):
        self.driver = driver
        self.database = database

    @retry_neo4j
    def _fetch(self, params: Dict[str, Optional[str]]) -> List[Dict[str, Any]]:
        with self.driver.session(database=self.database) as session:
            result = session.run(STATEMENTS_QUERY, **params)
            return [dict(record) for record in result]

    def statements(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[URIRef] = None,
        object: Optional[Node] = None,
    ) -> Iterator[Triple]:
        params: Dict[str, Optional[str]] = {
            "subject": term_to_uri(subject) if subject is not None else None,
            "predicate": str(predicate) if predicate is not None else None,
        }
        params.update(object_params(object))
        rows = self._fetch(params)
        logger.debug(f"Neo4j returned {len(rows)} facts for ({subject}, {predicate}, {object})")
        for row in rows:
            yield row_to_triple(row)
