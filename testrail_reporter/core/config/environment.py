"""
Reporter configuration - loaded from environment variables, a YAML file, or a mapping.
"""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from ..exceptions import ConfigurationError

# Load environment variables from a .env file in the working directory if it exists
_env_path = Path.cwd() / '.env'
if _env_path.is_file():
    load_dotenv(dotenv_path=_env_path)

DEFAULT_TIMEOUT = 30


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Expected an integer, got {value!r}") from e


@dataclass(frozen=True)
class TestRailConfig:
    """TestRail reporter configuration.

    An empty ``version`` disables the reporter entirely.
    """
    __test__ = False

    version: str = ""
    url: str = ""
    username: str = ""
    password: str = ""
    project_id: Optional[int] = None
    timeout: int = DEFAULT_TIMEOUT

    @property
    def enabled(self) -> bool:
        return bool(self.version)

    @classmethod
    def from_env(cls) -> 'TestRailConfig':
        """Create config from environment variables."""
        return cls(
            version=os.getenv("TESTRAIL_VERSION", ""),
            url=os.getenv("TESTRAIL_URL", ""),
            username=os.getenv("TESTRAIL_USERNAME", ""),
            password=os.getenv("TESTRAIL_PASSWORD", ""),
            project_id=_to_int(os.getenv("TESTRAIL_PROJECT_ID")),
            timeout=_to_int(os.getenv("TESTRAIL_TIMEOUT")) or DEFAULT_TIMEOUT,
        )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> 'TestRailConfig':
        """Create config from a mapping using the extension's keys.

        Both ``projectId`` and ``project_id`` are accepted.
        """
        project_id = data.get("projectId", data.get("project_id"))
        return cls(
            version=str(data.get("version") or ""),
            url=data.get("url") or "",
            username=data.get("username") or "",
            password=data.get("password") or "",
            project_id=_to_int(project_id),
            timeout=_to_int(data.get("timeout")) or DEFAULT_TIMEOUT,
        )

    @classmethod
    def from_yaml(cls, path: str) -> 'TestRailConfig':
        """Load the ``testrail:`` section of a YAML file.

        Credentials missing from the file are taken from the environment.
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"TestRail config file not found: {path}")

        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        section = raw.get("testrail", raw)
        if not isinstance(section, dict):
            raise ConfigurationError(f"Invalid TestRail config in {path}")

        section = dict(section)
        section["username"] = section.get("username") or os.getenv("TESTRAIL_USERNAME", "")
        section["password"] = section.get("password") or os.getenv("TESTRAIL_PASSWORD", "")
        return cls.from_mapping(section)

    def merged(self, **overrides: Any) -> 'TestRailConfig':
        """Return a copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v not in (None, "")}
        if "project_id" in changes:
            changes["project_id"] = _to_int(changes["project_id"])
        return replace(self, **changes)

    def validate(self) -> None:
        """Check that an enabled configuration can reach TestRail.

        Raises:
            ConfigurationError: If url, credentials or project id are missing
        """
        if not self.enabled:
            return
        missing = [
            name for name, value in (
                ("url", self.url),
                ("username", self.username),
                ("password", self.password),
                ("projectId", self.project_id),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(
                f"TestRail reporting is enabled but {', '.join(missing)} not set"
            )
