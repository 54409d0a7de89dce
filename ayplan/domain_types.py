"""Indexing of domain types and constants, and the subtype closure over them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ayplan.action import Constant

TypeDeclaration = tuple[Sequence[str], Sequence[str]]
"""A parsed ``(:types ...)`` group: its parent types (none or one), then its members."""

ConstantDeclaration = tuple[Sequence[str], Sequence[Constant]]
"""A parsed ``(:constants ...)`` group: its types (none or one), then its constants."""


def _single_parent(parents: Sequence[str], what: str) -> str | None:
    if len(parents) > 1:
        raise ValueError(
            f"a group of {what} can only be declared to be of one type, got {list(parents)}"
        )
    return parents[0] if parents else None


def _closure_step(
    relation: dict[int, set[int]], key: int
) -> set[int]:
    """Members reachable in two steps from ``key`` that are not yet direct members."""
    direct = relation.get(key, set())
    reached: set[int] = set()
    for member in direct:
        reached |= relation.get(member, set())
    return reached - direct


class TypeHierarchy:
    """Types and constants of a domain, each given an integer id.

    ``types_to_types`` maps a type id to the ids of its subtypes,
    ``types_to_constants`` a type id to the ids of its constants, and
    ``constants_to_types`` a constant id to the ids of its types. The
    unwind methods close these relations under the subtype relation, and
    the mirrors hold them as sorted lists indexed by id.
    """

    def __init__(self) -> None:
        self.parsed_types: list[TypeDeclaration] | None = None
        self.parsed_constants: list[ConstantDeclaration] | None = None

        self.types: list[str] = []
        self.type_index: dict[str, int] = {}
        self.types_to_types: dict[int, set[int]] = {}
        self.mirror_types_to_types: list[list[int]] = []

        self.constants: list[Constant] = []
        self.constant_index: dict[Constant, int] = {}
        self.types_to_constants: dict[int, set[int]] = {}
        self.constants_to_types: dict[int, set[int]] = {}
        self.mirror_types_to_constants: list[list[int]] = []
        self.mirror_constants_to_types: list[list[int]] = []

    def set_types(self, types: Iterable[TypeDeclaration] | None) -> None:
        """Record the parsed type declarations."""
        self.parsed_types = None if types is None else [
            (tuple(parents), tuple(members)) for parents, members in types
        ]

    def set_constants(self, constants: Iterable[ConstantDeclaration] | None) -> None:
        """Record the parsed constant declarations."""
        self.parsed_constants = None if constants is None else [
            (tuple(kinds), tuple(members)) for kinds, members in constants
        ]

    def _index_type(self, name: str) -> int:
        index = self.type_index.get(name)
        if index is None:
            index = len(self.types)
            self.types.append(name)
            self.type_index[name] = index
        return index

    def _type_id(self, name: str) -> int:
        try:
            return self.type_index[name]
        except KeyError:
            raise ValueError(f"unknown type {name!r}") from None

    def configure_types(self) -> None:
        """Index every declared type and record each parent's direct subtypes."""
        if self.parsed_types is None:
            return

        for parents, members in self.parsed_types:
            for name in (*parents, *members):
                self._index_type(name)

        for parents, members in self.parsed_types:
            parent = _single_parent(parents, "types")
            if parent is None:
                continue
            parent_id = self._type_id(parent)
            children = self.types_to_types.setdefault(parent_id, set())
            children.update(self._type_id(member) for member in members)

    def unwind_types(self) -> None:
        """Close ``types_to_types`` transitively: a subtype of a subtype is a subtype."""
        changed = True
        while changed:
            changed = False
            for type_id in list(self.types_to_types):
                additions = _closure_step(self.types_to_types, type_id)
                if additions:
                    self.types_to_types[type_id] |= additions
                    changed = True

    def configure_constants(self) -> None:
        """Index every declared constant and record the types it is declared with.

        Call after :meth:`configure_types`, since constant types must be known.
        """
        if self.parsed_constants is None:
            return

        for _, members in self.parsed_constants:
            for constant in members:
                if not isinstance(constant, Constant):
                    raise TypeError(f"{constant!r} is not a constant")
                if constant not in self.constant_index:
                    self.constant_index[constant] = len(self.constants)
                    self.constants.append(constant)

        for kinds, members in self.parsed_constants:
            kind = _single_parent(kinds, "constants")
            if kind is None:
                continue
            type_id = self._type_id(kind)
            for constant in members:
                constant_id = self.constant_index[constant]
                self.types_to_constants.setdefault(type_id, set()).add(constant_id)
                self.constants_to_types.setdefault(constant_id, set()).add(type_id)

    def unwind_constants(self) -> None:
        """Give each constant every supertype of its types.

        Call after :meth:`unwind_types`.
        """
        changed = True
        while changed:
            changed = False
            for constant_id, kinds in self.constants_to_types.items():
                additions = {
                    parent
                    for parent, children in self.types_to_types.items()
                    if parent not in kinds and not kinds.isdisjoint(children)
                }
                if additions:
                    changed = True
                    kinds |= additions
                    for parent in additions:
                        self.types_to_constants.setdefault(parent, set()).add(constant_id)

    def initialise_mirrors(self) -> None:
        """Build the sorted list mirrors of the three relations."""

        def mirror(relation: dict[int, set[int]], size: int, what: str) -> list[list[int]]:
            result: list[list[int]] = [[] for _ in range(size)]
            for key, values in relation.items():
                if not 0 <= key < size:
                    raise ValueError(f"{what} id {key} is out of range")
                result[key] = sorted(values)
            return result

        self.mirror_types_to_types = mirror(self.types_to_types, len(self.types), "type")
        self.mirror_types_to_constants = mirror(
            self.types_to_constants, len(self.types), "type"
        )
        self.mirror_constants_to_types = mirror(
            self.constants_to_types, len(self.constants), "constant"
        )