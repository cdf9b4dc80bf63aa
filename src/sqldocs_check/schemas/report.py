"""Check result and report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field


class Failure(BaseModel):
    """A single failed check within a document."""

    model_config = ConfigDict(frozen=True)

    section: str
    kind: str
    reason: str
    line: int | None = None


class CheckResult(BaseModel):
    """Outcome of checking one document."""

    model_config = ConfigDict(frozen=True)

    document: str
    failures: tuple[Failure, ...] = ()
    warnings: tuple[str, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return not self.failures


class Report(BaseModel):
    """Results of one run, in input order."""

    model_config = ConfigDict(frozen=True)

    results: tuple[CheckResult, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.passed)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return self.failed == 0
