"""Pytest configuration and shared fixtures."""
import copy
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from apikeyguard.domain.interfaces.filter import ResourceTransport
from apikeyguard.domain.interfaces.salt_generator import SaltGenerator
from apikeyguard.domain.models.resource_data import ResourceDataRequest, ResourceDataResult

# Load .env file from project root before running tests
project_root = Path(__file__).parent.parent.parent.parent
env_path = project_root / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    # Fallback: try loading from packages/core
    core_env_path = project_root / "packages" / "core" / ".env"
    if core_env_path.exists():
        load_dotenv(core_env_path)


class RecordingTransport(ResourceTransport):
    """Terminal transport that records requests and returns a canned payload."""

    def __init__(self) -> None:
        self.payload: dict[str, Any] = {}
        self.error: Exception | None = None
        self.requests: list[ResourceDataRequest] = []
        self.results: list[ResourceDataResult] = []

    def execute(self, request: ResourceDataRequest) -> ResourceDataResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        result = ResourceDataResult(
            action=request.action,
            uri=request.uri,
            resource_class=request.resource_class,
            data=copy.deepcopy(self.payload),
        )
        self.results.append(result)
        return result

    @property
    def last_request(self) -> ResourceDataRequest:
        return self.requests[-1]


class SequenceSaltGenerator(SaltGenerator):
    """Deterministic salts: salt-1, salt-2, ..."""

    def __init__(self) -> None:
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return f"salt-{self.calls}"


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a recording transport."""
    return RecordingTransport()


@pytest.fixture
def salt_generator() -> SequenceSaltGenerator:
    """Create a deterministic salt generator."""
    return SequenceSaltGenerator()
