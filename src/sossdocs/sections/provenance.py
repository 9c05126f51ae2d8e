"""Provenance sentence and git branch discovery."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from sossdocs.logger import get_logger
from sossdocs.models import clean

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sossdocs.config import SossConfig
    from sossdocs.sections.base import GenerationSession, ProvenanceInfo

DETACHED_HEAD = "HEAD"


def _branch_from_env(config: SossConfig, environ: Mapping[str, str]) -> str:
    for name in config.branch_env_vars:
        value = environ.get(name)
        if value:
            return value
    return config.default_branch


def detect_git_branch(
    config: SossConfig,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Get the current git branch name.

    Falls back to the CI environment variables named in the config, then to
    the configured default branch, when git fails or HEAD is detached.
    Failures are logged as warnings and never raised.
    """
    env = os.environ if environ is None else environ
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5.0,
            cwd=cwd,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
        get_logger().warning(f"Warning: Could not determine Git branch: {e}")
        return _branch_from_env(config, env)

    branch = result.stdout.strip()
    if not branch or branch == DETACHED_HEAD:
        return _branch_from_env(config, env)
    return branch


def _relative(path: Path, base_dir: Path) -> str:
    return Path(os.path.relpath(Path(path).resolve(), base_dir.resolve())).as_posix()


def provenance_text(config: SossConfig, info: ProvenanceInfo) -> str:
    """Build the sentence naming the script, template and profile used."""
    repo_url = f"{config.repository_url.rstrip('/')}/blob/{clean(info.branch)}"
    script = config.script_path
    script_name = Path(script).name
    template = _relative(info.template_path, info.base_dir)
    profile = _relative(info.profile_path, info.base_dir)
    return (
        f"This document was compiled using [{script_name}]({repo_url}/{clean(script)}), "
        f"based on [{clean(template)}]({repo_url}/{clean(template)}) "
        f"using a SoSS+ Schema defined in [{clean(profile)}]({repo_url}/{clean(profile)})."
    )


def build_provenance(session: GenerationSession) -> None:
    """Write the ``provenance`` fragment (empty when no provenance info is given)."""
    if session.provenance is None:
        session.fragments.set("provenance", "")
        return
    session.fragments.set("provenance", provenance_text(session.config, session.provenance))
