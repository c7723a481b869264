"""
Tests for the constraint based (Gardent) selector.
"""

import pytest
from rdflib.namespace import RDF
from rdflib.term import Literal, URIRef

from refgen.algorithms.constraint import ConstraintSelector, Feature, feature_of
from refgen.errors import NoInformationForConfusor, NoSolutionFound
from refgen.priorities import PriorityConfig
from refgen.resolver import apply, picks_out
from refgen.store import RdfFactStore, Triple

EX = "http://example.org/"


def ex(name):
    return URIRef(EX + name)


class TestBoardMembers:
    def test_single_negative_boardmember(self, board_members):
        referent, confusors, store, priorities = board_members

        result = ConstraintSelector(priorities).resolve(referent, confusors, store)

        assert result.has_negatives()
        assert len(result) == 1
        predicate = result.predicates[0]
        assert predicate.negative
        assert predicate.predicate == RDF.type
        assert predicate.object == URIRef("http://alusivo/boardmember")
        assert predicate.subject is None

    def test_description_picks_out_referent(self, board_members):
        referent, confusors, store, priorities = board_members

        result = ConstraintSelector(priorities).resolve(referent, confusors, store)

        assert picks_out(result, referent, confusors, store)

    def test_deterministic(self, board_members):
        referent, confusors, store, priorities = board_members

        first = ConstraintSelector(priorities).resolve(referent, confusors, store).to_dict()
        second = ConstraintSelector(priorities).resolve(referent, confusors, store).to_dict()

        assert first == second


class TestRelationalFeatures:
    def test_confusor_fact_about_the_referent_stays_concrete(self):
        store = RdfFactStore.from_triples(
            [
                (ex("r"), RDF.type, ex("Person")),
                (ex("c"), RDF.type, ex("Person")),
                (ex("c"), ex("knows"), ex("r")),
            ]
        )
        config = PriorityConfig(priorities={EX + "Person": ["type", "knows"]})

        result = ConstraintSelector(config).resolve(ex("r"), [ex("c")], store)

        assert len(result) == 1
        predicate = result.predicates[0]
        assert predicate.negative
        assert predicate.subject is None
        assert predicate.object == ex("r")
        assert apply(result, [ex("c"), ex("r")], store) == [ex("r")]

    @pytest.mark.parametrize(
        "facts,priorities",
        [
            # the referent knows itself, the confusor knows the referent
            (
                [
                    ("r", RDF.type, "Person"),
                    ("c", RDF.type, "Person"),
                    ("r", "knows", "r"),
                    ("c", "knows", "r"),
                ],
                ["type", "knows", "knows-1"],
            ),
            # the referent is named by a capital fact, the confusor is part of a region
            (
                [
                    ("r", RDF.type, "City"),
                    ("c", RDF.type, "City"),
                    ("x", "capital", "r"),
                    ("c", "partOf", "y"),
                ],
                ["type", "capital-1", "partOf"],
            ),
            # referent and confusor point at each other
            (
                [
                    ("r", RDF.type, "Person"),
                    ("c", RDF.type, "Person"),
                    ("r", "manages", "c"),
                    ("c", "reportsTo", "r"),
                ],
                ["type", "manages", "reportsTo", "manages-1", "reportsTo-1"],
            ),
        ],
        ids=["self-loop", "inverse", "mutual"],
    )
    def test_description_filters_down_to_referent(self, facts, priorities):
        def term(value):
            return value if isinstance(value, URIRef) else ex(value)

        store = RdfFactStore.from_triples([tuple(term(v) for v in fact) for fact in facts])
        type_name = next(str(term(o)) for s, p, o in facts if s == "r" and p == RDF.type)
        config = PriorityConfig(priorities={type_name: priorities})

        result = ConstraintSelector(config).resolve(ex("r"), [ex("c")], store)

        assert len(result) >= 1
        assert apply(result, [ex("c"), ex("r")], store) == [ex("r")]


class TestMinimality:
    def test_balls_need_only_distance(self, balls):
        referent, confusors, store, priorities = balls

        result = ConstraintSelector(priorities).resolve(referent, confusors, store)

        assert len(result) == 1
        predicate = result.predicates[0]
        assert not predicate.negative
        assert predicate.predicate == URIRef("http://alusivo/distance")
        assert predicate.object == Literal("middle")
        assert picks_out(result, referent, confusors, store)

    def test_no_confusors_gives_empty_description(self, balls):
        referent, _, store, priorities = balls

        result = ConstraintSelector(priorities).resolve(referent, [], store)

        assert len(result) == 0

    def test_size_bound_is_respected(self, balls):
        referent, confusors, store, priorities = balls

        with pytest.raises(NoSolutionFound) as exc_info:
            ConstraintSelector(priorities, max_size=0).resolve(referent, confusors, store)

        assert exc_info.value.max_size == 0

    def test_default_size_bound_from_environment(self, monkeypatch):
        monkeypatch.setenv("REFGEN_MAX_DESCRIPTION_SIZE", "3")

        assert ConstraintSelector(PriorityConfig()).max_size == 3


class TestExactlyOne:
    @pytest.fixture
    def grid(self):
        """r: a=1 b=1; c1: a=2 b=1; c2: a=1 b=2; c3: a=2 b=2"""
        values = {"r": (1, 1), "c1": (2, 1), "c2": (1, 2), "c3": (2, 2)}
        store = RdfFactStore()
        for name, (a, b) in values.items():
            store.add(ex(name), RDF.type, ex("Cell"))
            store.add(ex(name), ex("a"), Literal(a))
            store.add(ex(name), ex("b"), Literal(b))
        config = PriorityConfig(priorities={EX + "Cell": ["type", "a", "b"]})
        return ex("r"), [ex("c1"), ex("c2"), ex("c3")], store, config

    def test_each_confusor_must_differ_by_exactly_one_selected_feature(self, grid):
        # a=1 and b=1 together would tell every confusor apart, but c3 differs
        # from the referent on both, so no selection differs by exactly one
        referent, confusors, store, config = grid

        with pytest.raises(NoSolutionFound):
            ConstraintSelector(config, max_size=4).resolve(referent, confusors, store)

    def test_solvable_without_the_doubly_different_confusor(self, grid):
        referent, confusors, store, config = grid

        result = ConstraintSelector(config).resolve(referent, confusors[:2], store)

        assert len(result) == 2
        assert picks_out(result, referent, confusors[:2], store)


class TestFeatures:
    def test_subject_fact(self):
        fact = Triple(ex("a"), ex("color"), Literal("red"))

        assert feature_of(fact, ex("a")) == Feature(ex("color"), Literal("red"), False)

    def test_self_loop_has_no_value(self):
        fact = Triple(ex("a"), ex("dog"), ex("a"))

        assert feature_of(fact, ex("a")) == Feature(ex("dog"), None, False)

    def test_object_fact_is_inverse(self):
        fact = Triple(ex("x"), ex("capital"), ex("a"))

        feature = feature_of(fact, ex("a"))

        assert feature == Feature(ex("capital"), ex("x"), True)
        assert feature.key == "capital-1"

    def test_inverse_features_are_used(self):
        store = RdfFactStore.from_triples(
            [
                (ex("a"), RDF.type, ex("City")),
                (ex("b"), RDF.type, ex("City")),
                (ex("x"), ex("capital"), ex("a")),
                (ex("y"), ex("capital"), ex("b")),
            ]
        )
        config = PriorityConfig(priorities={EX + "City": ["type", "capital-1"]})

        result = ConstraintSelector(config).resolve(ex("a"), [ex("b")], store)

        assert len(result) == 1
        assert result.predicates[0].object is None
        assert picks_out(result, ex("a"), [ex("b")], store)

    def test_ignored_predicates_are_never_used(self, balls):
        referent, confusors, store, _ = balls
        config = PriorityConfig(
            priorities={"http://alusivo/ball": ["type", "color", "distance"]},
            ignored={"http://alusivo/ball": ["distance"]},
        )

        # without distance, nothing tells the two red balls apart
        with pytest.raises(NoSolutionFound):
            ConstraintSelector(config).resolve(referent, confusors, store)


class TestErrors:
    def test_confusor_without_facts(self, board_members):
        referent, confusors, store, priorities = board_members

        with pytest.raises(NoInformationForConfusor):
            ConstraintSelector(priorities).resolve(referent, confusors + [ex("ghost")], store)
