#!/usr/bin/env python3
"""
Generate a referring expression from an RDF file or a Neo4j database.

Usage:
    python scripts/generate_referring_expression.py --rdf facts.nt \
        --referent http://example.org/a --confusors http://example.org/b \
        --algorithm graph --verify
"""

import sys

from refgen.cli import main

if __name__ == "__main__":
    sys.exit(main())
