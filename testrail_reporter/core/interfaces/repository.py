"""
Repository interface for TestRail data access.

The reporter depends on this abstraction, not on the HTTP implementation.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..domain.entities import Milestone, Plan, Run, Section, Suite, TestCase


class ITestRailApi(ABC):
    """Interface for TestRail entity access scoped to one project."""

    @abstractmethod
    def get_case(self, case_id: int) -> TestCase:
        """Retrieve a test case by ID."""
        pass

    @abstractmethod
    def get_cases(self, suite_id: int) -> Dict[int, TestCase]:
        """List the cases of a suite, keyed by case ID."""
        pass

    @abstractmethod
    def add_case(self, section_id: int, title: str, file_path: str, type_id: int = 9) -> TestCase:
        """Create a case under a section."""
        pass

    @abstractmethod
    def add_run(self, suite_id: int, name: str, description: str) -> Run:
        """Create a run including every case of the suite."""
        pass

    @abstractmethod
    def get_runs(self) -> Dict[int, Run]:
        """List open runs of the project, keyed by suite ID."""
        pass

    @abstractmethod
    def get_run(self, run_id: int) -> Run:
        """Retrieve a run by ID."""
        pass

    @abstractmethod
    def close_run(self, run_id: int) -> Run:
        """Close a run; it can no longer receive results."""
        pass

    @abstractmethod
    def add_result_for_case(
        self,
        run_id: int,
        case_id: int,
        status_id: int,
        comment: str,
        version: str,
        elapsed: str
    ) -> Dict[str, Any]:
        """Record a result for a case within a run."""
        pass

    @abstractmethod
    def get_sections(self, suite_id: int) -> Dict[int, Section]:
        """List sections of a suite, keyed by section ID."""
        pass

    @abstractmethod
    def add_section(self, suite_id: int, name: str, description: str, parent_id: int = 0) -> Section:
        """Create a section, nested under parent_id when non-zero."""
        pass

    @abstractmethod
    def get_plans(self) -> Dict[int, Plan]:
        """List plans of the project, keyed by plan ID."""
        pass

    @abstractmethod
    def add_plan(self, name: str, description: str, milestone_id: int) -> Plan:
        """Create a plan linked to a milestone."""
        pass

    @abstractmethod
    def add_plan_entry(
        self,
        plan_id: int,
        name: str,
        description: str,
        milestone_id: int,
        suite_id: int
    ) -> Run:
        """Add a run for a suite to a plan."""
        pass

    @abstractmethod
    def get_milestones(self) -> Dict[int, Milestone]:
        """List milestones of the project, keyed by milestone ID."""
        pass

    @abstractmethod
    def add_milestone(self, name: str, description: str) -> Milestone:
        """Create a milestone."""
        pass

    @abstractmethod
    def get_suite(self, suite_id: int) -> Suite:
        """Retrieve a suite by ID."""
        pass

    @abstractmethod
    def get_suites(self) -> Dict[int, Suite]:
        """List suites of the project, keyed by suite ID."""
        pass

    @abstractmethod
    def add_suite(self, name: str, description: str) -> Suite:
        """Create a suite."""
        pass
