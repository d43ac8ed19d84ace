"""
TestRail entities.

Immutable records populated from TestRail JSON payloads. Field names follow
the API keys so that from_dict/to_dict stay a straight mapping.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Type, TypeVar

T = TypeVar('T', bound='Entity')


@dataclass(frozen=True)
class Entity:
    """Base for all TestRail records. The id is assigned by the server."""
    id: int

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Build the record from an API payload, ignoring unknown keys."""
        known = {}
        for f in fields(cls):
            if f.name in data:
                known[f.name] = data[f.name]
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the API representation."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class TestCase(Entity):
    """One test in TestRail."""
    __test__ = False  # not a pytest test class

    title: Optional[str] = None
    section_id: Optional[int] = None
    template_id: Optional[int] = None
    type_id: Optional[int] = None
    priority_id: Optional[int] = None
    milestone_id: Optional[int] = None
    created_by: Optional[int] = None
    created_on: Optional[int] = None
    estimate: Optional[str] = None
    estimate_forecast: Optional[str] = None
    suite_id: Optional[int] = None


@dataclass(frozen=True)
class Run(Entity):
    """A test execution session for a suite."""
    suite_id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    milestone_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    include_all: bool = True
    is_completed: bool = False
    completed_on: Optional[int] = None
    passed_count: int = 0
    blocked_count: int = 0
    untested_count: int = 0
    retest_count: int = 0
    failed_count: int = 0
    project_id: Optional[int] = None
    plan_id: Optional[int] = None
    created_on: Optional[int] = None
    created_by: Optional[int] = None
    url: Optional[str] = None

    @property
    def total_count(self) -> int:
        """Sum of all status counters."""
        return (
            self.passed_count + self.blocked_count + self.untested_count
            + self.retest_count + self.failed_count
        )


@dataclass(frozen=True)
class Suite(Entity):
    """Grouping of cases."""
    name: str = ""
    description: Optional[str] = None
    project_id: Optional[int] = None
    is_master: bool = False
    is_baseline: bool = False
    is_completed: bool = False
    completed_on: Optional[int] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Plan(Entity):
    """Optional grouping of runs."""
    name: str = ""
    description: Optional[str] = None
    milestone_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    is_completed: bool = False
    completed_on: Optional[int] = None
    passed_count: int = 0
    blocked_count: int = 0
    untested_count: int = 0
    retest_count: int = 0
    failed_count: int = 0
    project_id: Optional[int] = None
    created_on: Optional[int] = None
    created_by: Optional[int] = None
    url: Optional[str] = None
    entries: Optional[List[Dict[str, Any]]] = field(default=None, hash=False)


@dataclass(frozen=True)
class Milestone(Entity):
    """Release or iteration marker grouping plans."""
    name: str = ""
    description: Optional[str] = None
    start_on: Optional[int] = None
    started_on: Optional[int] = None
    is_started: bool = False
    due_on: Optional[int] = None
    is_completed: bool = False
    completed_on: Optional[int] = None
    project_id: Optional[int] = None
    parent_id: Optional[int] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Section(Entity):
    """Hierarchical grouping of cases within a suite."""
    suite_id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    parent_id: Optional[int] = None
    depth: Optional[int] = None
    display_order: Optional[int] = None
