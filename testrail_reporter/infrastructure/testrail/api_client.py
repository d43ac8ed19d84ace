"""
TestRail API client - maps TestRail endpoints to typed entities.

Implements ITestRailApi on top of TestRailHttpClient for a single project.
"""
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from ...core.domain.entities import Entity, Milestone, Plan, Run, Section, Suite, TestCase
from ...core.interfaces.repository import ITestRailApi
from .http_client import TestRailHttpClient

E = TypeVar('E', bound=Entity)

# Default case type for automatically created cases ("Automated")
AUTOMATED_CASE_TYPE_ID = 9


def _by_id(entity_cls: Type[E], items: Iterable[Dict[str, Any]]) -> Dict[int, E]:
    entities = {}
    for item in items:
        entity = entity_cls.from_dict(item)
        entities[entity.id] = entity
    return entities


class TestRailApi(ITestRailApi):
    """TestRail implementation of the entity repository."""
    __test__ = False

    def __init__(self, client: TestRailHttpClient):
        """Initialize the API with a configured HTTP client.

        Args:
            client: HTTP client bound to base URL, credentials and project
        """
        self._client = client
        self._project_id = client.project_id

    @classmethod
    def create(
        cls,
        base_url: str,
        username: str,
        password: str,
        project_id: int,
        timeout: int = 30
    ) -> 'TestRailApi':
        """Build the API together with its HTTP client."""
        return cls(TestRailHttpClient(
            base_url=base_url,
            username=username,
            password=password,
            project_id=project_id,
            timeout=timeout
        ))

    @property
    def project_id(self) -> int:
        return self._project_id

    def _get_all(
        self,
        endpoint: str,
        key: str,
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Collect every item of a list endpoint.

        Accepts bare lists and paginated responses ({'cases': [...], '_links': {...}}).
        Pages are followed by offset while '_links.next' is set.
        """
        query = dict(params or {})
        items: List[Dict[str, Any]] = []
        while True:
            result = self._client.get(endpoint, query) if query else self._client.get(endpoint)
            if not isinstance(result, dict):
                items.extend(result or [])
                return items

            page = result.get(key, [])
            items.extend(page)
            next_link = (result.get('_links') or {}).get('next')
            if not page or not next_link:
                return items
            query = dict(query, offset=(result.get('offset') or 0) + len(page))

    # Test Cases

    def get_case(self, case_id: int) -> TestCase:
        return TestCase.from_dict(self._client.get(f"get_case/{case_id}"))

    def get_cases(self, suite_id: int) -> Dict[int, TestCase]:
        items = self._get_all(f"get_cases/{self._project_id}", 'cases', {'suite_id': suite_id})
        return _by_id(TestCase, items)

    def add_case(
        self,
        section_id: int,
        title: str,
        file_path: str,
        type_id: int = AUTOMATED_CASE_TYPE_ID
    ) -> TestCase:
        data = self._client.post(f"add_case/{section_id}", {
            'title': title,
            'type_id': type_id,
            'custom_file_path': file_path,
        })
        return TestCase.from_dict(data)

    # Test Runs

    def add_run(self, suite_id: int, name: str, description: str) -> Run:
        data = self._client.post(f"add_run/{self._project_id}", {
            'suite_id': suite_id,
            'name': name,
            'description': description,
            'include_all': True,
        })
        return Run.from_dict(data)

    def list_runs(self, is_completed: Optional[bool] = False) -> List[Run]:
        """List runs of the project, optionally filtered by completion."""
        params = {}
        if is_completed is not None:
            params['is_completed'] = int(is_completed)
        items = self._get_all(f"get_runs/{self._project_id}", 'runs', params)
        return [Run.from_dict(item) for item in items]

    def get_runs(self) -> Dict[int, Run]:
        """Open runs keyed by suite ID; the most recently created run wins."""
        runs: Dict[int, Run] = {}
        for run in sorted(self.list_runs(is_completed=False), key=lambda r: r.id):
            runs[run.suite_id] = run
        return runs

    def get_run(self, run_id: int) -> Run:
        return Run.from_dict(self._client.get(f"get_run/{run_id}"))

    def close_run(self, run_id: int) -> Run:
        return Run.from_dict(self._client.post(f"close_run/{run_id}"))

    # Test Results

    def add_result_for_case(
        self,
        run_id: int,
        case_id: int,
        status_id: int,
        comment: str,
        version: str,
        elapsed: str
    ) -> Dict[str, Any]:
        return self._client.post(f"add_result_for_case/{run_id}/{case_id}", {
            'status_id': status_id,
            'comment': comment,
            'version': version,
            'elapsed': elapsed,
        })

    # Sections

    def get_sections(self, suite_id: int) -> Dict[int, Section]:
        items = self._get_all(f"get_sections/{self._project_id}", 'sections', {'suite_id': suite_id})
        return _by_id(Section, items)

    def add_section(self, suite_id: int, name: str, description: str, parent_id: int = 0) -> Section:
        data = {
            'name': name,
            'description': description,
            'suite_id': suite_id,
        }
        if parent_id:
            data['parent_id'] = parent_id
        return Section.from_dict(self._client.post(f"add_section/{self._project_id}", data))

    # Plans

    def get_plans(self) -> Dict[int, Plan]:
        return _by_id(Plan, self._get_all(f"get_plans/{self._project_id}", 'plans'))

    def add_plan(self, name: str, description: str, milestone_id: int) -> Plan:
        data = self._client.post(f"add_plan/{self._project_id}", {
            'name': name,
            'description': description,
            'milestone_id': milestone_id,
        })
        return Plan.from_dict(data)

    def add_plan_entry(
        self,
        plan_id: int,
        name: str,
        description: str,
        milestone_id: int,
        suite_id: int
    ) -> Run:
        data = self._client.post(f"add_plan_entry/{plan_id}", {
            'name': name,
            'description': description,
            'suite_id': suite_id,
            'milestone_id': milestone_id,
        })
        return Run.from_dict(data['runs'][0])

    # Milestones

    def get_milestones(self) -> Dict[int, Milestone]:
        return _by_id(Milestone, self._get_all(f"get_milestones/{self._project_id}", 'milestones'))

    def add_milestone(self, name: str, description: str) -> Milestone:
        data = self._client.post(f"add_milestone/{self._project_id}", {
            'name': name,
            'description': description,
        })
        return Milestone.from_dict(data)

    # Test Suites

    def get_suite(self, suite_id: int) -> Suite:
        return Suite.from_dict(self._client.get(f"get_suite/{suite_id}"))

    def get_suites(self) -> Dict[int, Suite]:
        return _by_id(Suite, self._get_all(f"get_suites/{self._project_id}", 'suites'))

    def add_suite(self, name: str, description: str) -> Suite:
        data = self._client.post(f"add_suite/{self._project_id}", {
            'name': name,
            'description': description,
        })
        return Suite.from_dict(data)
