"""Tests for git branch detection and the provenance fragment."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sossdocs.config import SossConfig
from sossdocs.sections import ProvenanceInfo, build_provenance, detect_git_branch
from sossdocs.sections.provenance import provenance_text
from tests.conftest import make_session

RUN = "sossdocs.sections.provenance.subprocess.run"


def _completed(stdout: str) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    return result


class TestDetectGitBranch:
    """Test detect_git_branch()."""

    def test_branch_from_git(self) -> None:
        with patch(RUN, return_value=_completed("feature/docs\n")) as run:
            branch = detect_git_branch(SossConfig(), environ={})

        assert branch == "feature/docs"
        assert run.call_args.args[0] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]

    def test_git_missing_falls_back_to_default(self) -> None:
        with patch(RUN, side_effect=FileNotFoundError("git")):
            assert detect_git_branch(SossConfig(), environ={}) == "main"

    def test_git_not_executable_falls_back(self) -> None:
        environ = {"BRANCH_NAME": "ci-branch"}
        with patch(RUN, side_effect=PermissionError(13, "Permission denied")):
            assert detect_git_branch(SossConfig(), environ=environ) == "ci-branch"

    def test_git_error_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        error = subprocess.CalledProcessError(128, ["git"], stderr="not a git repository")
        with patch(RUN, side_effect=error):
            detect_git_branch(SossConfig(), environ={})

        assert "Could not determine Git branch" in caplog.text

    def test_detached_head_uses_environment(self) -> None:
        environ = {"CI_COMMIT_REF_NAME": "release", "BRANCH_NAME": "other"}
        with patch(RUN, return_value=_completed("HEAD\n")):
            assert detect_git_branch(SossConfig(), environ=environ) == "release"

    def test_environment_order(self) -> None:
        environ = {"GITHUB_REF_NAME": "gh", "CI_COMMIT_REF_NAME": "gl"}
        with patch(RUN, side_effect=subprocess.TimeoutExpired(["git"], 5)):
            assert detect_git_branch(SossConfig(), environ=environ) == "gh"

    def test_configured_default_branch(self) -> None:
        config = SossConfig(default_branch="develop")
        with patch(RUN, return_value=_completed("")):
            assert detect_git_branch(config, environ={}) == "develop"


class TestProvenanceText:
    """Test the provenance sentence."""

    def test_links_use_branch_and_relative_paths(self, tmp_path: Path) -> None:
        config = SossConfig(repository_url="https://github.com/org/repo/")
        info = ProvenanceInfo(
            template_path=tmp_path / "docs" / "profile-text.md",
            profile_path=tmp_path / "profile" / "ro-crate-metadata.json",
            branch="main",
            base_dir=tmp_path,
        )

        text = provenance_text(config, info)

        assert text == (
            "This document was compiled using "
            "[cli.py](https://github.com/org/repo/blob/main/src/sossdocs/cli.py), "
            "based on [docs/profile-text.md]"
            "(https://github.com/org/repo/blob/main/docs/profile-text.md) "
            "using a SoSS+ Schema defined in [profile/ro-crate-metadata.json]"
            "(https://github.com/org/repo/blob/main/profile/ro-crate-metadata.json)."
        )

    def test_fragment_empty_without_info(self) -> None:
        session = make_session()

        build_provenance(session)

        assert session.fragments["provenance"] == ""

    def test_fragment_written(self, tmp_path: Path) -> None:
        session = make_session()
        session.provenance = ProvenanceInfo(
            template_path=tmp_path / "t.md",
            profile_path=tmp_path / "p.json",
            branch="dev",
            base_dir=tmp_path,
        )

        build_provenance(session)

        assert "/blob/dev/t.md" in session.fragments["provenance"]
