import pytest

from ayplan.action import Constant
from ayplan.domain_types import TypeHierarchy

TYPES = [(["object"], ["boolean", "vehicle"]), (["vehicle"], ["truck"])]
T1, O1, O2 = Constant("t1"), Constant("o1"), Constant("o2")
CONSTANTS = [(["truck"], [T1]), (["boolean"], [O1, O2])]


def build(types=TYPES, constants=CONSTANTS, unwind=True):
    hierarchy = TypeHierarchy()
    hierarchy.set_types(types)
    hierarchy.set_constants(constants)
    hierarchy.configure_types()
    if unwind:
        hierarchy.unwind_types()
    hierarchy.configure_constants()
    if unwind:
        hierarchy.unwind_constants()
    hierarchy.initialise_mirrors()
    return hierarchy


def tid(h, name):
    return h.type_index[name]


def cid(h, constant):
    return h.constant_index[constant]


def test_types_indexed_in_declaration_order():
    h = build()
    assert h.types == ["object", "boolean", "vehicle", "truck"]
    assert all(h.types[i] == name for name, i in h.type_index.items())


def test_direct_subtypes_without_unwinding():
    h = build(unwind=False)
    assert h.types_to_types[tid(h, "object")] == {tid(h, "boolean"), tid(h, "vehicle")}
    assert h.types_to_types[tid(h, "vehicle")] == {tid(h, "truck")}


def test_unwind_types_is_transitive():
    h = build()
    assert tid(h, "truck") in h.types_to_types[tid(h, "object")]
    for parent, children in h.types_to_types.items():
        for child in children:
            assert h.types_to_types.get(child, set()) <= children


def test_constants_indexed_once_in_order():
    h = build(constants=CONSTANTS + [(["vehicle"], [T1])])
    assert h.constants == [T1, O1, O2]
    assert cid(h, T1) == 0
    assert tid(h, "vehicle") in h.constants_to_types[cid(h, T1)]


def test_unwind_constants_adds_supertypes():
    h = build()
    t1_types = h.constants_to_types[cid(h, T1)]
    assert t1_types == {tid(h, "truck"), tid(h, "vehicle"), tid(h, "object")}
    assert h.constants_to_types[cid(h, O1)] == {tid(h, "boolean"), tid(h, "object")}
    assert cid(h, T1) in h.types_to_constants[tid(h, "object")]
    assert cid(h, O2) not in h.types_to_constants.get(tid(h, "vehicle"), set())


def test_without_unwinding_constants_have_declared_type_only():
    h = build(unwind=False)
    assert h.constants_to_types[cid(h, T1)] == {tid(h, "truck")}


def test_relations_are_mutually_consistent():
    h = build()
    for type_id, constant_ids in h.types_to_constants.items():
        for constant_id in constant_ids:
            assert type_id in h.constants_to_types[constant_id]
    for constant_id, type_ids in h.constants_to_types.items():
        for type_id in type_ids:
            assert constant_id in h.types_to_constants[type_id]


def test_mirrors_are_sorted_and_complete():
    h = build()
    assert len(h.mirror_types_to_types) == len(h.types)
    assert len(h.mirror_types_to_constants) == len(h.types)
    assert len(h.mirror_constants_to_types) == len(h.constants)
    for i, row in enumerate(h.mirror_types_to_types):
        assert row == sorted(h.types_to_types.get(i, set()))
    for i, row in enumerate(h.mirror_constants_to_types):
        assert row == sorted(h.constants_to_types.get(i, set()))
    assert h.mirror_types_to_types[tid(h, "truck")] == []


def test_no_declarations_gives_empty_hierarchy():
    h = TypeHierarchy()
    h.configure_types()
    h.unwind_types()
    h.configure_constants()
    h.unwind_constants()
    h.initialise_mirrors()
    assert h.types == []
    assert h.constants == []
    assert h.mirror_constants_to_types == []


def test_untyped_constants_are_indexed_without_types():
    h = build(types=None, constants=[([], [O1])])
    assert h.constants == [O1]
    assert h.mirror_constants_to_types == [[]]


def test_two_parent_types_rejected():
    h = TypeHierarchy()
    h.set_types([(["a", "b"], ["c"])])
    with pytest.raises(ValueError):
        h.configure_types()


def test_constant_of_unknown_type_rejected():
    h = TypeHierarchy()
    h.set_types(TYPES)
    h.set_constants([(["plane"], [O1])])
    h.configure_types()
    with pytest.raises(ValueError):
        h.configure_constants()


def test_non_constant_rejected():
    h = TypeHierarchy()
    h.set_constants([([], ["o1"])])
    with pytest.raises(TypeError):
        h.configure_constants()


def test_mirror_rejects_out_of_range_ids():
    h = build()
    h.types_to_types[len(h.types)] = {0}
    with pytest.raises(ValueError):
        h.initialise_mirrors()