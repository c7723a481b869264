"""
Pytest configuration and shared fixtures for refgen tests.

The three reference scenarios live here:
- balls: incremental selection over color and distance
- board members: a single negative type fact (constraint selection)
- chihuahuas: two dogs and two doghouses (graph search)
"""

import os
from pathlib import Path

import pytest
from rdflib.namespace import RDF
from rdflib.term import Literal, URIRef

from refgen.priorities import PriorityConfig
from refgen.store import RdfFactStore

# Set test environment variables if not already set
if not os.getenv("NEO4J_URI"):
    os.environ["NEO4J_URI"] = "bolt://localhost:7687"
if not os.getenv("NEO4J_USER"):
    os.environ["NEO4J_USER"] = "neo4j"
if not os.getenv("NEO4J_DATABASE"):
    os.environ["NEO4J_DATABASE"] = "neo4j"


def uri(name: str) -> URIRef:
    return URIRef(f"http://alusivo/{name}")


@pytest.fixture
def test_data_dir():
    """Get path to test data directory."""
    return Path(__file__).parent / "data"


# Balls


@pytest.fixture
def balls_store():
    referent = uri("redmiddle")
    far = uri("ballfar")
    close = uri("redballclose")
    ball, color, distance = uri("ball"), uri("color"), uri("distance")
    return RdfFactStore.from_triples(
        [
            (referent, RDF.type, ball),
            (far, RDF.type, ball),
            (close, RDF.type, ball),
            (referent, color, Literal("red")),
            (far, color, Literal("black")),
            (close, color, Literal("red")),
            (referent, distance, Literal("middle")),
            (far, distance, Literal("far")),
            (close, distance, Literal("close")),
        ]
    )


@pytest.fixture
def balls_priorities():
    return PriorityConfig(priorities={str(uri("ball")): ["type", "color", "distance"]})


@pytest.fixture
def balls(balls_store, balls_priorities):
    """(referent, confusors, store, priorities)"""
    return uri("redmiddle"), [uri("ballfar"), uri("redballclose")], balls_store, balls_priorities


# Board members


@pytest.fixture
def board_store():
    people = [uri(f"x{i}") for i in range(1, 7)]
    store = RdfFactStore()
    for i, person in enumerate(people):
        store.add(person, RDF.type, uri("person"))
        store.add(person, RDF.type, uri("member"))
        if i != 5:
            store.add(person, RDF.type, uri("boardmember"))
    store.add(people[0], RDF.type, uri("president"))
    store.add(people[1], RDF.type, uri("secretary"))
    store.add(people[2], RDF.type, uri("treasurer"))
    return store


@pytest.fixture
def board_priorities():
    return PriorityConfig(priorities={str(uri("person")): ["type"]})


@pytest.fixture
def board_members(board_store, board_priorities):
    """(referent, confusors, store, priorities); the referent is the only non board member."""
    return uri("x6"), [uri(f"x{i}") for i in range(1, 6)], board_store, board_priorities


# Chihuahuas


@pytest.fixture
def chihuahua_store():
    d1, d2, d3, d4 = (uri(f"d{i}") for i in range(1, 5))
    dog, chihuahua, doghouse = uri("dog"), uri("chihuahua"), uri("doghouse")
    small, large, brown, white = uri("small"), uri("large"), uri("brown"), uri("white")
    left_of, right_of, next_to = uri("left_of"), uri("right_of"), uri("next_to")
    contains, inside = uri("contains"), uri("in")

    facts = []
    for d in (d1, d2):
        facts += [(d, dog, d), (d, small, d), (d, brown, d), (d, chihuahua, d)]
    for d in (d3, d4):
        facts += [(d, doghouse, d), (d, white, d), (d, large, d)]
    facts += [
        (d1, next_to, d2),
        (d1, left_of, d2),
        (d2, next_to, d1),
        (d2, right_of, d1),
        (d1, inside, d3),
        (d3, contains, d1),
        (d2, next_to, d4),
        (d2, left_of, d4),
        (d4, next_to, d2),
        (d4, right_of, d2),
        (d3, next_to, d4),
        (d3, left_of, d4),
        (d4, next_to, d3),
        (d4, right_of, d3),
    ]
    return RdfFactStore.from_triples(facts)


@pytest.fixture
def chihuahua_priorities():
    order = [
        "dog",
        "small",
        "large",
        "brown",
        "white",
        "left_of",
        "right_of",
        "next_to",
        "contains",
        "in",
    ]
    return PriorityConfig(priorities={str(uri("dog")): order, str(uri("doghouse")): order})


@pytest.fixture
def chihuahuas(chihuahua_store, chihuahua_priorities):
    """(referent, confusors, store, priorities); the referent is the dog in the doghouse."""
    return uri("d1"), [uri("d2"), uri("d3"), uri("d4")], chihuahua_store, chihuahua_priorities
