"""Shared fixtures for the test suite."""

import pytest

from leftover_checker.issue import Issue, IssueKind, SourceRange
from leftover_checker.metrics_store import MetricsStore


def make_issue(kind: IssueKind, line: int = 1) -> Issue:
    return Issue(
        kind=kind,
        message=kind.value,
        range=SourceRange.from_lines(line, 1, line, 2),
        severity=kind.default_severity,
    )


@pytest.fixture
def issue_factory():
    return make_issue


@pytest.fixture
def metrics_store(tmp_path):
    store = MetricsStore(tmp_path / "quality_metrics.db")
    yield store
    store.close()
