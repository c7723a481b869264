"""
Predicate priorities per entity type.

For each type (keyed by the full type URI) an ordered list of predicate
local names says which facts are preferred when describing an entity of that
type; a name ending in "-1" refers to facts where the entity is the object.
A separate ignore list names predicates that are known but never used, so
they are not reported as coverage gaps.

The built-in DBpedia table follows Pacheco et al. (2012), "On the feasibility
of open domain referring expression generation using large scale
folksonomies", NAACL-HLT 2012.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple, Union

DBPEDIA_PERSON = "http://dbpedia.org/ontology/Person"
DBPEDIA_CITY = "http://dbpedia.org/ontology/City"
DBPEDIA_COUNTRY = "http://dbpedia.org/ontology/Country"
DBPEDIA_ORGANISATION = "http://dbpedia.org/ontology/Organisation"

_DBPEDIA_RESOURCE = "dbpedia_priorities.json"


@dataclass(frozen=True)
class PriorityConfig:
    """Immutable per-type priority lists and ignore lists."""

    priorities: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    ignored: Mapping[str, FrozenSet[str]] = field(default_factory=dict)

    def __post_init__(self):
        priorities = {
            str(type_name): tuple(dict.fromkeys(names))
            for type_name, names in (self.priorities or {}).items()
        }
        ignored = {
            str(type_name): frozenset(names) for type_name, names in (self.ignored or {}).items()
        }
        object.__setattr__(self, "priorities", MappingProxyType(priorities))
        object.__setattr__(self, "ignored", MappingProxyType(ignored))

    def priorities_for(self, type_name: str) -> Optional[Tuple[str, ...]]:
        """Ordered predicate names for a type, or None when the type is unknown."""
        return self.priorities.get(str(type_name))

    def ignored_for(self, type_name: str) -> FrozenSet[str]:
        return self.ignored.get(str(type_name), frozenset())

    @property
    def types(self) -> Tuple[str, ...]:
        return tuple(self.priorities)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriorityConfig":
        """
        Build a config from ``{"priorities": {type: [...]}, "ignored": {type: [...]}}``.

        Raises:
            ValueError: If the structure is not two objects of string lists
        """
        if not isinstance(data, Mapping):
            raise ValueError("Priority config must be an object")
        unknown = set(data) - {"priorities", "ignored"}
        if unknown:
            raise ValueError(f"Unknown priority config keys: {sorted(unknown)}")
        sections = {}
        for section in ("priorities", "ignored"):
            value = data.get(section, {})
            if not isinstance(value, Mapping):
                raise ValueError(f"'{section}' must map type URIs to lists of predicate names")
            for type_name, names in value.items():
                if isinstance(names, str) or not isinstance(names, Sequence):
                    raise ValueError(f"'{section}' entry for {type_name} must be a list")
                if not all(isinstance(name, str) for name in names):
                    raise ValueError(f"'{section}' entry for {type_name} must only hold strings")
            sections[section] = value
        return cls(priorities=sections["priorities"], ignored=sections["ignored"])

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            "priorities": {t: list(names) for t, names in self.priorities.items()},
            "ignored": {t: sorted(names) for t, names in self.ignored.items()},
        }


def load_priority_config(path: Union[str, Path]) -> PriorityConfig:
    """Load a priority config from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return PriorityConfig.from_dict(json.load(f))


@lru_cache(maxsize=1)
def default_priorities() -> PriorityConfig:
    """The built-in DBpedia priorities (Person, City, Country, Organisation)."""
    text = resources.files("refgen.data").joinpath(_DBPEDIA_RESOURCE).read_text(encoding="utf-8")
    return PriorityConfig.from_dict(json.loads(text))
