"""
Unit tests for refgen.resolver module.
"""

from unittest.mock import MagicMock

from rdflib.namespace import RDF
from rdflib.term import Literal, URIRef

from refgen.expression import ReferringExpression
from refgen.resolver import apply, picks_out
from refgen.store import RdfFactStore

EX = "http://example.org/"


def ex(name):
    return URIRef(EX + name)


def make_store():
    return RdfFactStore.from_triples(
        [
            (ex("a"), ex("color"), Literal("red")),
            (ex("b"), ex("color"), Literal("red")),
            (ex("c"), ex("color"), Literal("blue")),
            (ex("b"), RDF.type, ex("Special")),
        ]
    )


def test_apply_keeps_matching_candidates_in_order():
    expression = ReferringExpression()
    expression.add_positive(None, ex("color"), Literal("red"))

    assert apply(expression, [ex("c"), ex("b"), ex("a")], make_store()) == [ex("b"), ex("a")]


def test_apply_and_semantics_with_negative():
    expression = ReferringExpression()
    expression.add_positive(None, ex("color"), Literal("red"))
    expression.add_negative(None, RDF.type, ex("Special"))

    assert apply(expression, [ex("a"), ex("b"), ex("c")], make_store()) == [ex("a")]


def test_empty_expression_keeps_everything():
    assert apply(ReferringExpression(), [ex("a"), ex("c")], make_store()) == [ex("a"), ex("c")]


def test_short_circuits_once_empty():
    """Test that later predicates are not evaluated when nothing is left."""
    store = make_store()
    spy = MagicMock(wraps=store)
    expression = ReferringExpression()
    expression.add_positive(None, ex("color"), Literal("green"))
    expression.add_positive(None, ex("size"), Literal("big"))

    assert apply(expression, [ex("a"), ex("b")], spy) == []
    assert spy.statements.call_count == 2


def test_picks_out():
    store = make_store()
    expression = ReferringExpression(ex("a"))
    expression.add_positive(None, ex("color"), Literal("red"))

    assert not picks_out(expression, ex("a"), [ex("b"), ex("c")], store)

    expression.add_negative(None, RDF.type, ex("Special"))
    assert picks_out(expression, ex("a"), [ex("b"), ex("c")], store)
