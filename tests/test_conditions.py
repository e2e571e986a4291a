import pytest

from operatorapi.conditions import (
    DEPENDENCIES_INSTALLED,
    DEPLOYMENTS_AVAILABLE,
    INSTALL_SUCCEEDED,
    READY,
    VERSION_MIGRATION_ELIGIBLE,
    Condition,
    ConditionStatus,
    Severity,
    Status,
    new_living_condition_set,
)

DEPENDENTS = (
    DEPENDENCIES_INSTALLED,
    DEPLOYMENTS_AVAILABLE,
    INSTALL_SUCCEEDED,
    VERSION_MIGRATION_ELIGIBLE,
)


@pytest.fixture
def condset():
    return new_living_condition_set(*DEPENDENTS)


@pytest.fixture
def status():
    return Status()


def test_living_set_happy_is_ready(condset):
    assert condset.happy == READY
    assert condset.dependents == DEPENDENTS


def test_living_set_drops_duplicates_and_happy():
    cs = new_living_condition_set(INSTALL_SUCCEEDED, READY, INSTALL_SUCCEEDED)
    assert cs.dependents == (INSTALL_SUCCEEDED,)


def test_initialize_sets_all_unknown(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    types = [c.type for c in status.conditions]
    assert set(types) == {READY, *DEPENDENTS}
    assert all(c.is_unknown() for c in status.conditions)
    assert not mgr.is_happy()


def test_conditions_are_sorted_by_type(condset, status):
    condset.manage(status).initialize_conditions()
    types = [c.type for c in status.conditions]
    assert types == sorted(types)


def test_initialize_keeps_existing(condset, status):
    status.conditions.append(
        Condition(type=INSTALL_SUCCEEDED, status=ConditionStatus.FALSE, reason="r")
    )
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    cond = mgr.get_condition(INSTALL_SUCCEEDED)
    assert cond.is_false()
    assert cond.reason == "r"


def test_initialize_with_true_happy_initializes_terminals_true(condset, status):
    status.conditions.append(Condition(type=READY, status=ConditionStatus.TRUE))
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    assert all(mgr.get_condition(t).is_true() for t in DEPENDENTS)
    assert mgr.is_happy()


def test_missing_condition_is_none(condset, status):
    assert condset.manage(status).get_condition(INSTALL_SUCCEEDED) is None


def test_mark_true_all_makes_happy(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    for t in DEPENDENTS[:-1]:
        mgr.mark_true(t)
        assert not mgr.is_happy()
    mgr.mark_true(DEPENDENTS[-1])
    assert mgr.is_happy()
    assert mgr.get_condition(READY).is_true()


def test_mark_false_propagates_to_happy(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    for t in DEPENDENTS:
        mgr.mark_true(t)
    mgr.mark_false(DEPLOYMENTS_AVAILABLE, "NotReady", "waiting")
    dep = mgr.get_condition(DEPLOYMENTS_AVAILABLE)
    happy = mgr.get_condition(READY)
    assert dep.is_false()
    assert (happy.status, happy.reason, happy.message) == (
        ConditionStatus.FALSE,
        "NotReady",
        "waiting",
    )
    assert not mgr.is_happy()


def test_mark_unknown_does_not_override_failed_terminal(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    mgr.mark_false(INSTALL_SUCCEEDED, "Error", "boom")
    mgr.mark_unknown(DEPLOYMENTS_AVAILABLE, "Pending", "later")
    assert mgr.get_condition(DEPLOYMENTS_AVAILABLE).is_unknown()
    assert mgr.get_condition(READY).is_false()


def test_mark_unknown_terminal_sets_happy_unknown(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    for t in DEPENDENTS:
        mgr.mark_true(t)
    mgr.mark_unknown(INSTALL_SUCCEEDED, "Pending", "later")
    happy = mgr.get_condition(READY)
    assert happy.is_unknown()
    assert happy.reason == "Pending"


def test_non_terminal_condition_is_info_and_ignored(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    for t in DEPENDENTS:
        mgr.mark_true(t)
    mgr.mark_false("Extra", "Whatever", "detail")
    assert mgr.get_condition("Extra").severity is Severity.INFO
    assert mgr.is_happy()


def test_terminal_conditions_have_error_severity(condset, status):
    mgr = condset.manage(status)
    mgr.initialize_conditions()
    mgr.mark_false(INSTALL_SUCCEEDED, "Error", "boom")
    assert mgr.get_condition(INSTALL_SUCCEEDED).severity is Severity.ERROR


def test_setting_identical_condition_keeps_transition_time(condset, status):
    mgr = condset.manage(status)
    mgr.mark_true(INSTALL_SUCCEEDED)
    first = mgr.get_condition(INSTALL_SUCCEEDED).last_transition_time
    mgr.mark_true(INSTALL_SUCCEEDED)
    assert mgr.get_condition(INSTALL_SUCCEEDED).last_transition_time == first
    assert len([c for c in status.conditions if c.type == INSTALL_SUCCEEDED]) == 1


def test_condition_predicates():
    cond = Condition(type=READY, status=ConditionStatus.FALSE)
    assert (cond.is_true(), cond.is_false(), cond.is_unknown()) == (False, True, False)


def test_condition_equality_ignores_time():
    from datetime import datetime, timezone

    a = Condition(type=READY, last_transition_time=datetime.now(timezone.utc))
    b = Condition(type=READY)
    assert a == b