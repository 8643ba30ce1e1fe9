"""Tests for pizzaria-deploy data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pizzaria_deploy.models import (
    UNKNOWN,
    DeploymentResult,
    Lock,
    ProbeResult,
    Revision,
    StatusReport,
    UpdateCheck,
)

SHA_A = "a" * 40
SHA_B = "b" * 40


@pytest.mark.unit
class TestRevision:
    """Tests for Revision value type."""

    def test_equality_by_sha(self) -> None:
        assert Revision(sha=SHA_A) == Revision(sha=SHA_A)
        assert Revision(sha=SHA_A) != Revision(sha=SHA_B)

    def test_short(self) -> None:
        rev = Revision(sha="0123456789abcdef")
        assert rev.short == "0123456"
        assert str(rev) == "0123456"

    def test_frozen(self) -> None:
        rev = Revision(sha=SHA_A)
        with pytest.raises(ValidationError):
            rev.sha = SHA_B

    def test_empty_sha_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Revision(sha="")


@pytest.mark.unit
class TestUpdateCheck:
    """Tests for UpdateCheck.available."""

    def test_equal_revisions(self) -> None:
        check = UpdateCheck(local=Revision(sha=SHA_A), remote=Revision(sha=SHA_A))
        assert check.available is False

    def test_different_revisions(self) -> None:
        check = UpdateCheck(local=Revision(sha=SHA_A), remote=Revision(sha=SHA_B))
        assert check.available is True

    def test_unknown_local(self) -> None:
        assert UpdateCheck(remote=Revision(sha=SHA_A)).available is True

    def test_missing_checkout(self) -> None:
        assert UpdateCheck(checkout_missing=True).available is True


@pytest.mark.unit
class TestDeploymentResult:
    """Tests for DeploymentResult."""

    def test_healthy_without_probes(self) -> None:
        assert DeploymentResult(running=1).healthy is True

    def test_unhealthy_when_any_probe_fails(self) -> None:
        result = DeploymentResult(
            running=2,
            probes=[
                ProbeResult(service="frontend", ok=True),
                ProbeResult(service="backend", ok=False),
            ],
        )
        assert result.healthy is False


@pytest.mark.unit
def test_lock_round_trip() -> None:
    lock = Lock(pid=1234, command="deploy --force")
    assert Lock.model_validate_json(lock.model_dump_json()) == lock


@pytest.mark.unit
def test_status_report_fallbacks() -> None:
    report = StatusReport(project_dir=Path("/opt/pizzaria"))
    assert report.branch == UNKNOWN
    assert report.containers is None
    assert report.urls == []
