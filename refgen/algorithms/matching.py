"""
Structural matching of a candidate subgraph into the full relation graph.

A node ``v`` is a distractor for a candidate when the candidate can be laid
over the full graph with the referent on ``v``: an injective node mapping
under which every self-loop label set of the candidate is contained in the
image's self-loop label set, and every label set between two candidate nodes
is contained in the label set between their images, in both directions.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from rdflib.term import Node

from refgen.algorithms.budget import Deadline
from refgen.algorithms.relation_graph import RelationGraph, Subgraph

logger = logging.getLogger(__name__)


class StructureMatcher:
    """Backtracking search for an injective label preserving mapping."""

    def __init__(self, graph: RelationGraph, deadline: Optional[Deadline] = None):
        self.graph = graph
        self.deadline = deadline or Deadline(None)

    def is_distractor(self, candidate: Subgraph, node: Node) -> bool:
        """True if the candidate also fits the full graph with its referent on ``node``."""
        self.deadline.check()
        if node == candidate.referent:
            return False
        mapping = {candidate.referent: node}
        if not self._fits(candidate, candidate.referent, node, {}):
            return False
        return self._extend(candidate, candidate.bfs_order(), 1, mapping)

    def find_distractors(self, candidate: Subgraph) -> List[Node]:
        result = []
        for node in self.graph.nodes:
            self.deadline.check()
            if self.is_distractor(candidate, node):
                result.append(node)
        return result

    def _extend(
        self, candidate: Subgraph, order: List[Node], position: int, mapping: Dict[Node, Node]
    ) -> bool:
        self.deadline.check()
        if position == len(order):
            return True

        current = order[position]
        used = set(mapping.values())
        for image in self.graph.nodes:
            self.deadline.check()
            if image in used or not self._fits(candidate, current, image, mapping):
                continue
            mapping[current] = image
            if self._extend(candidate, order, position + 1, mapping):
                return True
            del mapping[current]
        return False

    def _fits(
        self, candidate: Subgraph, current: Node, image: Node, mapping: Dict[Node, Node]
    ) -> bool:
        if not candidate.labels(current, current) <= self.graph.labels(image, image):
            return False
        for mapped, mapped_image in mapping.items():
            if not candidate.labels(current, mapped) <= self.graph.labels(image, mapped_image):
                return False
            if not candidate.labels(mapped, current) <= self.graph.labels(mapped_image, image):
                return False
        return True
