"""
Unit tests for milestone, plan, suite and section provisioning.
"""
from itertools import count
from unittest.mock import Mock

import pytest

from testrail_reporter.core.domain import Milestone, Plan, Run, Section, Suite, TestCase
from testrail_reporter.core.interfaces import ITestRailApi
from testrail_reporter.core.services.provisioning import (
    MILESTONE_DESCRIPTION,
    TestRailProvisioner,
    split_path,
)

SUITE = Suite(id=4, name='Checkout')


@pytest.fixture
def api():
    api = Mock(spec=ITestRailApi)
    ids = count(200)

    def add_section(suite_id, name, description, parent_id=0):
        return Section(id=next(ids), suite_id=suite_id, name=name,
                       description=description, parent_id=parent_id or None)

    api.add_section.side_effect = add_section
    api.get_sections.return_value = {}
    return api


@pytest.fixture
def provisioner(api):
    return TestRailProvisioner(api, 'Release/2.2')


class TestMilestones:
    """Milestone per version."""

    def test_reuses_existing_milestone(self, provisioner, api):
        existing = Milestone(id=3, name='[Auto] Release/2.2')
        api.get_milestones.return_value = {3: existing, 4: Milestone(id=4, name='[Auto] 2.1')}

        assert provisioner.ensure_milestone() is existing
        api.add_milestone.assert_not_called()

    def test_creates_missing_milestone(self, provisioner, api):
        api.get_milestones.return_value = {}
        api.add_milestone.return_value = Milestone(id=8, name='[Auto] Release/2.2')

        milestone = provisioner.ensure_milestone()

        api.add_milestone.assert_called_once_with('[Auto] Release/2.2', MILESTONE_DESCRIPTION)
        assert milestone.id == 8


class TestPlans:
    """Numbered regression plans."""

    def test_first_plan_is_run_one(self, provisioner, api):
        api.get_plans.return_value = {}

        name = provisioner.next_plan_name('Checkout')

        assert name == '[Auto] Regression Plan [Checkout] Release/2.2, run #1'

    def test_next_plan_number_follows_highest(self, provisioner):
        prefix = '[Auto] Regression Plan [Checkout] Release/2.2'
        plans = {
            1: Plan(id=1, name=f'{prefix}, run #2'),
            2: Plan(id=2, name=f'{prefix}, run #5'),
            3: Plan(id=3, name='[Auto] Regression Plan [Search] Release/2.2, run #9'),
        }

        assert provisioner.next_plan_name('Checkout', plans).endswith('run #6')

    def test_create_plan_links_milestone(self, provisioner, api):
        api.get_plans.return_value = {}
        api.add_plan.return_value = Plan(id=11, name='p')

        provisioner.create_plan('Checkout', Milestone(id=3, name='m'))

        name, description, milestone_id = api.add_plan.call_args[0]
        assert name.endswith('run #1')
        assert description.startswith('Automatically created ')
        assert milestone_id == 3

    def test_add_suite_run(self, provisioner, api):
        api.add_plan_entry.return_value = Run(id=90, suite_id=4, name='Run suite Checkout')

        run = provisioner.add_suite_run(Plan(id=11, name='p'), SUITE, Milestone(id=3, name='m'))

        api.add_plan_entry.assert_called_once_with(11, 'Run suite Checkout', '', 3, 4)
        assert run.id == 90


class TestSuites:
    """Suite lookup by name."""

    def test_finds_suite_by_name(self, provisioner, api):
        api.get_suites.return_value = {4: SUITE}

        assert provisioner.ensure_suite('Checkout') is SUITE

    def test_creates_missing_suite(self, provisioner, api):
        api.get_suites.return_value = {}
        api.add_suite.return_value = Suite(id=5, name='Search')

        provisioner.ensure_suite('Search')

        api.add_suite.assert_called_once_with('Search', 'Search')


class TestSections:
    """Section chains mirroring folder paths."""

    def test_split_path(self):
        assert split_path('/checkout//cart/') == ['checkout', 'cart']

    def test_creates_nested_chain(self, provisioner, api):
        leaf = provisioner.ensure_section_path(SUITE, 'checkout/cart')

        first, second = api.add_section.call_args_list
        assert first.args == (4, 'checkout', '/checkout', 0)
        assert second.args == (4, 'cart', '/checkout/cart', 200)
        assert leaf.description == '/checkout/cart'

    def test_reuses_existing_sections(self, provisioner, api):
        api.get_sections.return_value = {
            50: Section(id=50, suite_id=4, name='checkout', description='/checkout'),
        }

        leaf = provisioner.ensure_section_path(SUITE, 'checkout/cart')

        api.add_section.assert_called_once_with(4, 'cart', '/checkout/cart', 50)
        assert leaf.parent_id == 50

    def test_empty_path_rejected(self, provisioner):
        with pytest.raises(ValueError):
            provisioner.ensure_section_path(SUITE, '/')

    def test_ensure_case_uses_leaf_section(self, provisioner, api):
        api.add_case.return_value = TestCase(id=7, title='Pay with card')

        case = provisioner.ensure_case(SUITE, 'Pay with card', 'checkout')

        api.add_case.assert_called_once_with(200, 'Pay with card', '/checkout')
        assert case.id == 7
