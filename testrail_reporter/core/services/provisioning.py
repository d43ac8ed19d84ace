"""
Provisioning of milestones, plans, suites, sections and cases.

Creates the TestRail structure an automated regression run is filed under:
a milestone per version, a numbered plan per suite and version, one plan
entry per suite, and sections mirroring the test folder layout.
"""
from datetime import datetime
from typing import Dict, List, Optional

from ..domain.entities import Milestone, Plan, Run, Section, Suite, TestCase
from ..interfaces.repository import ITestRailApi
from .metrics import get_logger

MILESTONE_PREFIX = '[Auto] '
PLAN_PREFIX = '[Auto] Regression Plan '
RUN_PREFIX = 'Run suite '
MILESTONE_DESCRIPTION = 'Created automatically by extension'
PLAN_DESCRIPTION_PREFIX = 'Automatically created '


def split_path(path: str) -> List[str]:
    """Split a '/'-separated folder path into its non-empty parts."""
    return [part for part in path.split('/') if part]


class TestRailProvisioner:
    """Finds or creates the TestRail entities a version's runs belong to."""
    __test__ = False

    def __init__(self, api: ITestRailApi, version: str):
        self._api = api
        self._version = version
        self._log = get_logger()

    @property
    def milestone_name(self) -> str:
        return MILESTONE_PREFIX + self._version

    def ensure_milestone(self) -> Milestone:
        """Return the milestone for the current version, creating it if needed."""
        for milestone in self._api.get_milestones().values():
            if milestone.name == self.milestone_name:
                return milestone

        milestone = self._api.add_milestone(self.milestone_name, MILESTONE_DESCRIPTION)
        self._log.info("milestone_created", milestone_id=milestone.id, milestone_name=milestone.name)
        return milestone

    def plan_name_prefix(self, suite_name: str) -> str:
        return f"{PLAN_PREFIX}[{suite_name}] {self._version}"

    def next_plan_name(self, suite_name: str, plans: Optional[Dict[int, Plan]] = None) -> str:
        """Name the next plan for a suite: '..., run #N' with N one past the highest existing."""
        prefix = self.plan_name_prefix(suite_name)
        if plans is None:
            plans = self._api.get_plans()

        max_postfix = 0
        for plan in plans.values():
            if not plan.name.startswith(prefix):
                continue
            postfix = plan.name.rsplit('#', 1)[-1]
            if postfix.isdigit():
                max_postfix = max(max_postfix, int(postfix))

        return f"{prefix}, run #{max_postfix + 1}"

    def create_plan(self, suite_name: str, milestone: Milestone) -> Plan:
        """Create the next numbered regression plan for a suite."""
        name = self.next_plan_name(suite_name)
        description = PLAN_DESCRIPTION_PREFIX + datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        plan = self._api.add_plan(name, description, milestone.id)
        self._log.info("plan_created", plan_id=plan.id, plan_name=plan.name)
        return plan

    def add_suite_run(self, plan: Plan, suite: Suite, milestone: Milestone) -> Run:
        """Add the suite's run to a plan."""
        return self._api.add_plan_entry(
            plan.id,
            RUN_PREFIX + suite.name,
            '',
            milestone.id,
            suite.id
        )

    def ensure_suite(self, name: str) -> Suite:
        """Return the suite with the given name, creating it if needed."""
        for suite in self._api.get_suites().values():
            if suite.name == name:
                return suite

        suite = self._api.add_suite(name, name)
        self._log.info("suite_created", suite_id=suite.id, suite_name=suite.name)
        return suite

    def ensure_section_path(self, suite: Suite, path: str) -> Section:
        """Create the nested section chain for a folder path.

        Sections are matched by description, which holds the cumulative
        path ('/a', '/a/b', ...). Existing sections are reused.

        Args:
            suite: Suite the sections live in
            path: Folder path relative to the suite, e.g. 'checkout/cart'

        Returns:
            The leaf section
        """
        folders = split_path(path)
        if not folders:
            raise ValueError("Section path must contain at least one folder")

        by_description = {
            section.description: section
            for section in self._api.get_sections(suite.id).values()
            if section.description
        }

        parent_id = 0
        cumulative = ''
        section = None
        for folder in folders:
            cumulative += '/' + folder
            section = by_description.get(cumulative)
            if section is None:
                section = self._api.add_section(suite.id, folder, cumulative, parent_id)
                by_description[cumulative] = section
            parent_id = section.id

        return section

    def ensure_case(self, suite: Suite, title: str, path: str) -> TestCase:
        """Create a case under the section matching the folder path."""
        section = self.ensure_section_path(suite, path)
        file_path = '/' + '/'.join(split_path(path))
        return self._api.add_case(section.id, title, file_path)
