"""Shared fakes for port-level tests."""
from contextlib import contextmanager
from pathlib import Path

from ari_checker.core.domain.models import AuditReport, LintReport, Manifest


class FakeLogger:
    """Fake logger recording (level, message, fields)."""

    def __init__(self):
        self.records = []

    def debug(self, message: str, **kwargs) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self.records.append(("error", message, kwargs))

    def exception(self, message: str, **kwargs) -> None:
        self.records.append(("exception", message, kwargs))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]

    def stages(self) -> list[str]:
        return [kw["stage"] for _, m, kw in self.records if m == "stage"]


class FakeArea:
    def __init__(self, path: Path):
        self.path = path
        self.destroy_calls = 0

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def destroy(self) -> None:
        self.destroy_calls += 1
        if self.path.exists():
            for child in self.path.iterdir():
                child.unlink()
            self.path.rmdir()


class FakeAcquirer:
    """Creates a real directory so tests can assert it is gone afterwards."""

    def __init__(self, base: Path, *, error: Exception | None = None, files: dict[str, str] | None = None):
        self._base = base
        self._error = error
        self._files = files if files is not None else {"package.json": '{"name": "demo"}'}
        self.areas: list[FakeArea] = []

    @contextmanager
    def acquire(self, owner: str, repo: str):
        area = FakeArea(self._base / f"{owner}__{repo}__{len(self.areas)}")
        self.areas.append(area)
        area.path.mkdir(parents=True)
        try:
            if self._error is not None:
                raise self._error
            for name, content in self._files.items():
                (area.path / name).write_text(content, encoding="utf-8")
            yield area
        finally:
            area.destroy()


class FakeValidator:
    def __init__(self, *, error: Exception | None = None, has_tests: bool = True):
        self._error = error
        self._has_tests = has_tests
        self.validated: list[Path] = []

    def validate(self, workdir: Path) -> Manifest:
        self.validated.append(workdir)
        if self._error is not None:
            raise self._error
        return Manifest(data={"name": "demo"}, has_tests=self._has_tests)


class FakeInstaller:
    def __init__(self, ok: bool = True):
        self._ok = ok
        self.calls: list[Path] = []

    def install(self, workdir: Path) -> bool:
        self.calls.append(workdir)
        return self._ok


class FakeLintRunner:
    def __init__(self, report: LintReport | None = None, *, error: Exception | None = None):
        self._report = report or LintReport(errors=0, warnings=0)
        self._error = error
        self.calls: list[Path] = []

    def run(self, workdir: Path) -> LintReport:
        self.calls.append(workdir)
        if self._error is not None:
            raise self._error
        return self._report


class FakeAuditRunner:
    def __init__(self, report: AuditReport | None = None, *, error: Exception | None = None):
        self._report = report or AuditReport(critical=0, high=0)
        self._error = error
        self.calls: list[Path] = []

    def run(self, workdir: Path) -> AuditReport:
        self.calls.append(workdir)
        if self._error is not None:
            raise self._error
        return self._report


class FakeLLM:
    def __init__(self, text: str = "", *, error: Exception | None = None):
        self._text = text
        self._error = error
        self.prompts: list[tuple[str, str]] = []

    def complete(self, *, system: str, user: str) -> str:
        self.prompts.append((system, user))
        if self._error is not None:
            raise self._error
        return self._text


EXPLANATION_JSON = (
    '{"summary": "Moderate readiness.",'
    ' "top_risks": ["1 critical vulnerability"],'
    ' "why_score_is_low_or_high": ["Lint errors reduce the score"],'
    ' "improvement_suggestions": ["Run npm audit fix"]}'
)
