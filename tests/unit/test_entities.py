"""
Unit tests for TestRail entities.
"""
import dataclasses

import pytest

from testrail_reporter.core.domain import (
    Milestone, Plan, Run, Section, Suite, TestCase,
    LinkageResult, ReportState,
)
from testrail_reporter.core.exceptions import MissingLinkageError


RUN_PAYLOAD = {
    'id': 81,
    'suite_id': 4,
    'name': 'Checkout',
    'description': None,
    'milestone_id': None,
    'assignedto_id': None,
    'include_all': True,
    'is_completed': False,
    'completed_on': None,
    'passed_count': 2,
    'blocked_count': 1,
    'untested_count': 3,
    'retest_count': 0,
    'failed_count': 1,
    'project_id': 1,
    'plan_id': None,
    'created_on': 1700000000,
    'created_by': 7,
    'url': 'https://example.testrail.io/index.php?/runs/view/81',
}


class TestFromDict:
    """Building entities from API payloads."""

    def test_run_round_trip(self):
        """Every known field survives from_dict/to_dict unchanged."""
        run = Run.from_dict(RUN_PAYLOAD)

        assert run.to_dict() == RUN_PAYLOAD

    def test_unknown_keys_ignored(self):
        payload = {'id': 5, 'title': 'Login works', 'suite_id': 2, 'custom_steps': 'x'}

        case = TestCase.from_dict(payload)

        assert case.id == 5
        assert case.title == 'Login works'
        assert 'custom_steps' not in case.to_dict()

    def test_missing_keys_default(self):
        suite = Suite.from_dict({'id': 3, 'name': 'Checkout'})

        assert suite.description is None
        assert suite.is_completed is False

    @pytest.mark.parametrize("entity_cls, payload", [
        (Suite, {'id': 3, 'name': 'Checkout', 'description': 'd', 'project_id': 1,
                 'is_master': True, 'is_baseline': False, 'is_completed': False,
                 'completed_on': None, 'url': 'u'}),
        (Section, {'id': 9, 'suite_id': 3, 'name': 'cart', 'description': '/cart',
                   'parent_id': None, 'depth': 0, 'display_order': 1}),
        (Milestone, {'id': 2, 'name': '[Auto] 2.2', 'description': None, 'start_on': None,
                     'started_on': None, 'is_started': False, 'due_on': 1700000000,
                     'is_completed': False, 'completed_on': None, 'project_id': 1,
                     'parent_id': None, 'url': 'u'}),
    ])
    def test_field_mapping(self, entity_cls, payload):
        """Fields map one-to-one onto the API keys."""
        assert entity_cls.from_dict(payload).to_dict() == payload

    def test_plan_keeps_entries(self):
        plan = Plan.from_dict({'id': 1, 'name': 'p', 'entries': [{'id': 'abc'}]})

        assert plan.entries == [{'id': 'abc'}]
        assert hash(plan)


class TestEntityBehaviour:
    """Entity invariants."""

    def test_entities_are_immutable(self):
        run = Run.from_dict(RUN_PAYLOAD)

        with pytest.raises(dataclasses.FrozenInstanceError):
            run.id = 99

    def test_run_total_count(self):
        run = Run.from_dict(RUN_PAYLOAD)

        assert run.total_count == 7


class TestLinkageResult:
    """Typed result of resolving a test's TestRail linkage."""

    def test_ok_result_unwraps(self):
        state = ReportState(suite=Suite(id=1, name='S'), case=TestCase(id=2, title='T'))
        result = LinkageResult(state=state)

        assert result.ok
        assert result.unwrap() is state

    def test_failed_result_raises_on_unwrap(self):
        result = LinkageResult(error=MissingLinkageError('Checkout'))

        assert not result.ok
        with pytest.raises(MissingLinkageError, match='Checkout suite'):
            result.unwrap()

    def test_with_run_returns_new_state(self):
        state = ReportState(suite=Suite(id=1, name='S'), case=TestCase(id=2, title='T'))
        run = Run(id=10, suite_id=1, name='S')

        updated = state.with_run(run)

        assert updated.run is run
        assert state.run is None
