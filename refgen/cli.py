"""
Command line driver for refgen.

Provides:
- Logging setup for scripts (console, plus JSON log files on request)
- The ``refgen`` command: load facts, run a selector, print the description
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rdflib.namespace import RDF
from rdflib.term import URIRef

from refgen.algorithms import ALGORITHMS, create_algorithm
from refgen.config import get_neo4j_database
from refgen.constants import DEFAULT_RDF_FORMAT
from refgen.errors import ReferringExpressionError
from refgen.logging import setup_structured_logging
from refgen.neo4j import get_neo4j_driver, verify_connection
from refgen.priorities import default_priorities, load_priority_config
from refgen.resolver import picks_out
from refgen.store import Neo4jFactStore, OverlayFactStore, RdfFactStore, Triple


def setup_logging(
    script_name: str,
    verbose: bool = False,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging for a script.

    Args:
        script_name: Name of the script (for the logger name)
        verbose: If True, log at DEBUG, otherwise at INFO
        log_dir: If given, also write JSON log files there

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    setup_structured_logging("refgen", level=level, log_dir=log_dir, json_output=True)
    return logging.getLogger(f"refgen.{script_name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refgen",
        description="Generate a referring expression that singles out an entity among confusors",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--rdf", type=Path, help="RDF file holding the facts")
    source.add_argument(
        "--neo4j", action="store_true", help="Read facts from Neo4j (NEO4J_* settings)"
    )
    parser.add_argument("--referent", required=True, help="URI of the entity to describe")
    parser.add_argument(
        "--confusors", nargs="+", required=True, metavar="URI", help="URIs to rule out"
    )
    parser.add_argument(
        "--algorithm",
        choices=sorted(ALGORITHMS),
        default="incremental",
        help="Selection algorithm (default: incremental)",
    )
    parser.add_argument("--type", help="Assert this rdf:type for the referent before resolving")
    parser.add_argument(
        "--priorities", type=Path, help="JSON priority file (default: built-in DBpedia tables)"
    )
    parser.add_argument("--timeout-ms", type=int, help="Graph search budget in milliseconds")
    parser.add_argument("--max-size", type=int, help="Largest description the constraint search tries")
    parser.add_argument(
        "--format",
        default=DEFAULT_RDF_FORMAT,
        help=f"rdflib parser for --rdf (default: {DEFAULT_RDF_FORMAT})",
    )
    parser.add_argument("--json", action="store_true", help="Print the description as JSON")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check that the description picks out exactly the referent",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-dir", type=Path, help="Also write JSON logs to this directory")
    parser.add_argument("--env-file", type=Path, help="Load settings from this .env file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line driver.

    Returns:
        0 on success, 1 when no description could be produced (or Neo4j is
        unreachable), 2 when --verify finds the description ambiguous
    """
    args = build_parser().parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file, override=True)
    logger = setup_logging("generate_referring_expression", args.verbose, args.log_dir)

    config = load_priority_config(args.priorities) if args.priorities else default_priorities()
    referent = URIRef(args.referent)
    confusors = [URIRef(c) for c in args.confusors]

    driver = None
    try:
        if args.neo4j:
            try:
                driver = get_neo4j_driver()
            except ValueError as e:
                logger.error(str(e))
                return 1
            database = get_neo4j_database()
            if not verify_connection(driver, database):
                logger.error("✗ Could not connect to Neo4j")
                return 1
            store = Neo4jFactStore(driver, database)
        else:
            store = RdfFactStore.load(args.rdf, args.format)
            logger.info(f"Loaded {len(store)} facts from {args.rdf}")

        if args.type:
            store = OverlayFactStore(store, [Triple(referent, RDF.type, URIRef(args.type))])

        algorithm = create_algorithm(
            args.algorithm, config, max_size=args.max_size, timeout_ms=args.timeout_ms
        )

        start = time.monotonic()
        try:
            expression = algorithm.resolve(referent, confusors, store)
        except ReferringExpressionError as e:
            logger.error(
                f"✗ {e}", extra={"referent": str(referent), "algorithm": args.algorithm}
            )
            return 1
        duration_ms = (time.monotonic() - start) * 1000.0
        logger.info(
            f"✓ {args.algorithm}: {len(expression)} facts in {duration_ms:.0f} ms",
            extra={
                "referent": str(referent),
                "algorithm": args.algorithm,
                "count": len(expression),
                "duration_ms": round(duration_ms, 2),
            },
        )

        if args.json:
            print(json.dumps(expression.to_dict(), indent=2))
        else:
            print(expression)

        if args.verify:
            if not picks_out(expression, referent, confusors, store):
                logger.error("✗ Description does not pick out exactly the referent")
                return 2
            logger.info("✓ Description picks out exactly the referent")
        return 0
    finally:
        if driver is not None:
            driver.close()


# CLI entry point for pyproject.toml [project.scripts]


def run_generate():
    """Entry point for refgen command."""
    sys.exit(main())
