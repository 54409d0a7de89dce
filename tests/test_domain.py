import pytest

from ayplan.action import Constant, SignedPredicate, Variable
from ayplan.domain import Domain, FunctionKind, Requires

B = Variable("?b")
B1 = Variable("?b1")
B2 = Variable("?b2")


def switch_domain() -> Domain:
    domain = Domain("switch")
    domain.predicates = {"on", "off", "related", "unrelated"}
    domain.add_action(
        "switch-on",
        [B1, B2],
        [SignedPredicate("off", (B1,)), SignedPredicate("related", (B1, B2))],
        [
            SignedPredicate("off", (B1,), positive=False),
            SignedPredicate("off", (B2,)),
            SignedPredicate("on", (B2,), positive=False),
            SignedPredicate("on", (B1,)),
        ],
    )
    domain.add_action(
        "unrelated-switch-on",
        [B],
        [SignedPredicate("off", (B,)), SignedPredicate("unrelated", (B,))],
        [SignedPredicate("off", (B,), positive=False), SignedPredicate("on", (B,))],
    )
    return domain


def test_requires_empty_rendering():
    assert str(Requires()) == "(:requirements  ) "


def test_requires_action_costs_rendering():
    text = str(Requires(action_costs=True, typing=True))
    assert text.startswith("(:requirements :action-costs \n")
    assert ":typing \n" in text
    assert text.endswith(" ) ")


def test_requires_strips_quirk_kept():
    assert "strips: " in str(Requires(strips=True))


def test_classification_of_switch_domain():
    domain = switch_domain()
    domain.process_actions_for_symbol_types()
    assert domain.many_time_fluent_symbols == {"on", "off"}
    assert domain.constant_symbols == {"related", "unrelated"}
    assert domain.increase_one_time_fluent_symbols == set()
    assert domain.decrease_one_time_fluent_symbols == set()
    assert domain.is_fluent("on")
    assert domain.is_constant(SignedPredicate("related", (B1, B2)))
    assert not domain.is_constant("off")


def test_one_time_fluents():
    domain = Domain("d")
    domain.predicates = {"made", "used", "fixed"}
    domain.add_action(
        "work",
        [B],
        [SignedPredicate("fixed", (B,))],
        [SignedPredicate("made", (B,)), SignedPredicate("used", (B,), positive=False)],
    )
    domain.process_actions_for_symbol_types()
    assert domain.is_fluent_to_positive("made")
    assert domain.is_fluent_to_negative("used")
    assert not domain.is_fluent("made")
    assert domain.constant_symbols == {"fixed"}


def test_classes_are_disjoint_and_cover_predicates():
    domain = switch_domain()
    domain.process_actions_for_symbol_types()
    groups = [
        domain.constant_symbols,
        domain.many_time_fluent_symbols,
        domain.increase_one_time_fluent_symbols,
        domain.decrease_one_time_fluent_symbols,
    ]
    assert sum(len(g) for g in groups) == len(set().union(*groups))
    assert domain.predicates <= set().union(*groups)


def test_process_without_predicates_raises():
    with pytest.raises(ValueError):
        Domain("empty").process_actions_for_symbol_types()


def test_add_action_keeps_cost_and_order():
    domain = Domain("d")
    evaluator = SignedPredicate("switch-cost", (B,))
    first = domain.add_action("a", [B], [], [], cost=7)
    second = domain.add_action("b", [B], [], [], cost_evaluator=evaluator)
    assert domain.actions == [first, second]
    assert first.cost == 7
    assert second.cost_evaluator == evaluator
    assert second.variables_in_order == (B,)


def test_add_function_goes_to_list_by_kind():
    domain = Domain("d")
    positive = domain.add_function("total-cost")
    integer = domain.add_function("delta", (B,), FunctionKind.INTEGER)
    real = domain.add_function("weight", (Constant("o1"),), FunctionKind.REAL)
    assert domain.positive_integer_functions == [positive]
    assert domain.integer_functions == [integer]
    assert domain.real_functions == [real]
    assert real.range_type is float
    assert positive.range_type is int


def test_str_contains_header_and_mirrors():
    domain = switch_domain()
    hierarchy = domain.type_hierarchy
    hierarchy.set_types([(["object"], ["boolean"])])
    hierarchy.set_constants([(["boolean"], [Constant("o1")])])
    hierarchy.configure_types()
    hierarchy.configure_constants()
    hierarchy.unwind_types()
    hierarchy.unwind_constants()
    hierarchy.initialise_mirrors()
    text = str(domain)
    assert text.startswith("(define (domain switch)(:requirements ")
    assert "Type of types :: \n0 := :1, \n1 := :\n" in text
    assert "Constant of types :: \n0 := :0, 1, \n" in text
    assert "(switch-on ?b1 ?b2)" in text