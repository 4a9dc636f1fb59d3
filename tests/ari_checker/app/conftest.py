"""Shared fixtures for app-level tests."""
import pytest
from dependency_injector import providers

from ari_checker.app.config import AppConfig, DirectoryConfig, GitHubConfig, LLMConfig
from ari_checker.app.container import Container
from ari_checker.core.domain.models import AuditReport, LintReport

from fakes import (
    EXPLANATION_JSON,
    FakeAcquirer,
    FakeAuditRunner,
    FakeInstaller,
    FakeLintRunner,
    FakeLLM,
)


class MockContentClient:
    """Stands in for GitHubContentClient; serves one file per repo name."""

    files = {
        "widget": '{"name": "widget", "version": "1.2.3"}',
        "broken": "{not json",
    }

    def __init__(self, **kwargs):
        pass

    def fetch_file(self, owner, repo, path, branch="main"):
        return self.files.get(repo)


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        llm=LLMConfig(api_key="test-key", provider_name="openai", model_name="gpt-4o-mini"),
        github=GitHubConfig(token="test-token"),
    )


def _create_mocked_container(tmp_path, *, acquirer_error=None, manifest_files=None):
    container = Container()
    container.acquirer.override(
        providers.Factory(FakeAcquirer, tmp_path / "areas", error=acquirer_error, files=manifest_files)
    )
    container.installer.override(providers.Factory(FakeInstaller))
    container.lint_runner.override(providers.Factory(FakeLintRunner, LintReport(errors=10, warnings=8)))
    container.audit_runner.override(providers.Factory(FakeAuditRunner, AuditReport(critical=1, high=2)))
    container.llm.override(providers.Factory(FakeLLM, EXPLANATION_JSON))
    container.content_client.override(providers.Singleton(MockContentClient))
    return container


@pytest.fixture
def mock_container(tmp_path, monkeypatch):
    """Patch Container in the CLI and the facade to return a mocked instance.

    Returns a dict whose entries tweak the next container built.
    """
    options = {}

    def factory():
        return _create_mocked_container(tmp_path, **options)

    monkeypatch.setattr("ari_checker.app.cli.Container", factory)
    monkeypatch.setattr("ari_checker.app.main.Container", factory)
    return options

