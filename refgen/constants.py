"""
Constants for the refgen package.

Centralizes magic numbers and configuration defaults.
"""

# Graph search wall-clock budget
DEFAULT_GRAPH_TIMEOUT_MS = 60_000

# Constraint search: largest description size tried (inclusive)
DEFAULT_MAX_DESCRIPTION_SIZE = 10

# Suffix marking an inverse predicate in priority lists ("birthPlace-1")
INVERSE_SUFFIX = "-1"

# Default RDF serialization for fact files
DEFAULT_RDF_FORMAT = "nt"

# Placeholder shown for the referent in printed descriptions
REFERENT_PLACEHOLDER = "<referent>"

# Neo4j fact model
NEO4J_FACT_RELATIONSHIP = "FACT"
NEO4J_RESOURCE_LABEL = "Resource"
NEO4J_LITERAL_LABEL = "Literal"
