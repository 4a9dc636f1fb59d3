"""Tests for RepositoryAcquirer against local git remotes."""
import pytest

from ari_checker.core.domain.exceptions import (
    InvalidManifestError,
    InvalidRepositoryError,
    RepositoryNotFoundError,
    RepositorySizeExceededError,
)
from ari_checker.core.services import AnalysisOrchestrator, ExplanationService, JsonExtractor
from ari_checker.infra.workspace import RepositoryAcquirer, WorkingArea

from fakes import FakeAuditRunner, FakeInstaller, FakeLintRunner, FakeLLM, FakeLogger, FakeValidator
from helpers import make_remote_repo


@pytest.fixture
def remotes(tmp_path):
    base = tmp_path / "remotes"
    base.mkdir()
    return base


def _acquirer(tmp_path, remotes, **kwargs):
    return RepositoryAcquirer(
        workspaces_dir=tmp_path / "workspaces",
        logger=kwargs.pop("logger", FakeLogger()),
        clone_base_url=remotes.as_uri(),
        **kwargs,
    )


def test_clone_url_layout(tmp_path):
    acquirer = RepositoryAcquirer(workspaces_dir=tmp_path, logger=FakeLogger(), clone_base_url="https://github.com/")

    assert acquirer.clone_url("acme", "widget") == "https://github.com/acme/widget.git"


def test_acquire_clones_and_cleans_up(tmp_path, remotes):
    make_remote_repo(remotes, "acme", "widget", {"package.json": '{"name": "widget"}', "index.js": "module.exports = 1;\n"})
    logger = FakeLogger()
    acquirer = _acquirer(tmp_path, remotes, logger=logger)

    with acquirer.acquire("acme", "widget") as area:
        workdir = area.path
        assert (workdir / "package.json").read_text(encoding="utf-8") == '{"name": "widget"}'
        assert (workdir / "index.js").is_file()
        assert workdir.parent == tmp_path / "workspaces"

    assert not workdir.exists()
    assert "workspace_released" in logger.messages("info")


def test_acquire_cleans_up_when_body_raises(tmp_path, remotes):
    make_remote_repo(remotes, "acme", "widget", {"package.json": "{}"})
    acquirer = _acquirer(tmp_path, remotes)

    with pytest.raises(RuntimeError):
        with acquirer.acquire("acme", "widget") as area:
            workdir = area.path
            raise RuntimeError("stage failed")

    assert not workdir.exists()


def test_concurrent_working_areas_are_distinct(tmp_path, remotes):
    make_remote_repo(remotes, "acme", "widget", {"package.json": "{}"})
    acquirer = _acquirer(tmp_path, remotes)

    with acquirer.acquire("acme", "widget") as first, acquirer.acquire("acme", "widget") as second:
        assert first.path != second.path
        assert first.exists and second.exists


def test_missing_repository_is_not_found(tmp_path, remotes):
    logger = FakeLogger()
    acquirer = _acquirer(tmp_path, remotes, logger=logger)

    with pytest.raises(RepositoryNotFoundError) as exc_info:
        with acquirer.acquire("acme", "missing"):
            pytest.fail("body must not run")

    assert exc_info.value.kind == "not_found"
    assert "acme/missing" in exc_info.value.message
    assert "clone_failed" in logger.messages("warning")
    workspaces = tmp_path / "workspaces"
    assert not workspaces.exists() or list(workspaces.iterdir()) == []


def test_oversized_repository_is_rejected_and_removed(tmp_path, remotes):
    make_remote_repo(remotes, "acme", "huge", {"package.json": "{}", "blob.txt": "x" * 4096})
    acquirer = _acquirer(tmp_path, remotes, max_repo_bytes=1024)

    with pytest.raises(RepositorySizeExceededError) as exc_info:
        with acquirer.acquire("acme", "huge"):
            pytest.fail("body must not run")

    assert exc_info.value.kind == "size_exceeded"
    assert exc_info.value.limit_bytes == 1024
    assert exc_info.value.size_bytes > 1024
    assert list((tmp_path / "workspaces").iterdir()) == []


@pytest.mark.parametrize(
    "owner,repo",
    [
        ("", "widget"),
        ("acme", ""),
        ("..", "widget"),
        ("acme", "."),
        ("acme/evil", "widget"),
        ("acme", "widget;rm -rf"),
        ("acme", "../etc"),
    ],
)
def test_invalid_names_are_rejected_before_cloning(tmp_path, remotes, owner, repo):
    acquirer = _acquirer(tmp_path, remotes)

    with pytest.raises(InvalidRepositoryError):
        with acquirer.acquire(owner, repo):
            pytest.fail("body must not run")

    assert not (tmp_path / "workspaces").exists()


def test_destroy_is_idempotent(tmp_path):
    area = WorkingArea(path=tmp_path / "area")
    area.path.mkdir()
    (area.path / "file.txt").write_text("x", encoding="utf-8")

    area.destroy()
    area.destroy()

    assert not area.exists


def test_destroy_never_created_area(tmp_path):
    area = WorkingArea(path=tmp_path / "never")

    area.destroy()

    assert not area.exists


@pytest.fixture
def failing_destroy(monkeypatch):
    def _destroy(self):
        raise PermissionError(13, "Permission denied", str(self.path))

    monkeypatch.setattr(WorkingArea, "destroy", _destroy)


def test_cleanup_failure_is_logged_not_raised(tmp_path, remotes, failing_destroy):
    make_remote_repo(remotes, "acme", "widget", {"package.json": "{}"})
    logger = FakeLogger()
    acquirer = _acquirer(tmp_path, remotes, logger=logger)

    with acquirer.acquire("acme", "widget") as area:
        seen = (area.path / "package.json").read_text(encoding="utf-8")

    assert seen == "{}"
    assert "workspace_cleanup_error" in logger.messages("exception")
    assert "workspace_released" not in logger.messages("info")


def test_cleanup_failure_keeps_size_rejection(tmp_path, remotes, failing_destroy):
    make_remote_repo(remotes, "acme", "huge", {"package.json": "{}", "blob.txt": "x" * 4096})
    logger = FakeLogger()
    acquirer = _acquirer(tmp_path, remotes, logger=logger, max_repo_bytes=1024)

    with pytest.raises(RepositorySizeExceededError):
        with acquirer.acquire("acme", "huge"):
            pytest.fail("body must not run")

    assert "workspace_cleanup_error" in logger.messages("exception")


def test_cleanup_failure_keeps_not_found_rejection(tmp_path, remotes, failing_destroy):
    logger = FakeLogger()
    acquirer = _acquirer(tmp_path, remotes, logger=logger)

    with pytest.raises(RepositoryNotFoundError):
        with acquirer.acquire("acme", "missing"):
            pytest.fail("body must not run")

    assert "workspace_cleanup_error" in logger.messages("exception")


def _orchestrator(acquirer, logger, validator=None):
    return AnalysisOrchestrator(
        acquirer=acquirer,
        validator=validator or FakeValidator(),
        installer=FakeInstaller(),
        lint_runner=FakeLintRunner(),
        audit_runner=FakeAuditRunner(),
        explainer=ExplanationService(llm=FakeLLM(), logger=logger, json_extractor=JsonExtractor(), enabled=False),
        logger=logger,
    )


def test_cleanup_failure_does_not_mask_accepted_run(tmp_path, remotes, failing_destroy):
    make_remote_repo(remotes, "acme", "widget", {"package.json": '{"name": "widget"}'})
    logger = FakeLogger()

    result = _orchestrator(_acquirer(tmp_path, remotes, logger=logger), logger).run(owner="acme", repo="widget")

    assert result.is_valid
    assert result.score is not None
    assert "workspace_cleanup_error" in logger.messages("exception")


def test_cleanup_failure_does_not_mask_rejection(tmp_path, remotes, failing_destroy):
    make_remote_repo(remotes, "acme", "widget", {"README.md": "# no manifest"})
    logger = FakeLogger()
    validator = FakeValidator(error=InvalidManifestError("'package.json' not found in the repository."))

    result = _orchestrator(_acquirer(tmp_path, remotes, logger=logger), logger, validator).run(
        owner="acme", repo="widget"
    )

    assert not result.is_valid
    assert result.error_kind == "invalid_manifest"
    assert result.message == "'package.json' not found in the repository."
    assert "workspace_cleanup_error" in logger.messages("exception")
