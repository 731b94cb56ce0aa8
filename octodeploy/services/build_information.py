"""
Build Information Service

Generates the ``octopus.buildinfo`` JSON document uploaded by
push-build-information, reading commit details from git.
"""

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from octodeploy.constants import BUILD_ENVIRONMENT, BUILD_INFORMATION_FILE
from octodeploy.logger import BuildLogger
from octodeploy.utils import inject_environment_variables, is_blank

_FIELD_SEPARATOR = "\x1f"
_RECORD_SEPARATOR = "\x1e"


@dataclass
class Commit:
    """Single VCS commit"""

    id: str
    comment: str

    def to_dict(self) -> Dict[str, str]:
        return {"Id": self.id, "Comment": self.comment}


@dataclass
class BuildInformation:
    """Build metadata attached to a package version on the server"""

    build_number: str = ""
    build_url: Optional[str] = None
    branch: Optional[str] = None
    vcs_type: str = "Unknown"
    vcs_root: Optional[str] = None
    vcs_commit_number: Optional[str] = None
    commits: List[Commit] = field(default_factory=list)
    build_environment: str = BUILD_ENVIRONMENT

    def to_dict(self) -> Dict:
        return {
            "BuildEnvironment": self.build_environment,
            "BuildNumber": self.build_number,
            "BuildUrl": self.build_url,
            "Branch": self.branch,
            "VcsType": self.vcs_type,
            "VcsRoot": self.vcs_root,
            "VcsCommitNumber": self.vcs_commit_number,
            "Commits": [commit.to_dict() for commit in self.commits],
        }


class BuildInformationService:
    """Collects build information from a git workspace."""

    def __init__(
        self,
        logger: BuildLogger,
        workspace: Path,
        environment: Optional[Mapping[str, str]] = None,
    ):
        self.logger = logger
        self.workspace = Path(workspace)
        self.environment = dict(environment or {})

    def _git(self, *args: str) -> Optional[str]:
        """Run a git command in the workspace; None when it fails."""
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.workspace,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            self.logger.warning(f"git is not available: {e}")
            return None

        if result.returncode != 0:
            self.logger.log(
                f"git {' '.join(args)} failed: {result.stderr.strip()}", "DEBUG"
            )
            return None
        return result.stdout.strip()

    def _setting(self, explicit: Optional[str], env_name: str) -> Optional[str]:
        if not is_blank(explicit):
            return inject_environment_variables(explicit, self.environment)
        value = self.environment.get(env_name)
        return value if not is_blank(value) else None

    def get_commits(self, commit: str, since: Optional[str] = None) -> List[Commit]:
        """
        Commits after ``since`` up to ``commit``, newest first.

        Without ``since`` only ``commit`` itself is returned.
        """
        revision = f"{since}..{commit}" if since else commit
        args = ["log", f"--format=%H{_FIELD_SEPARATOR}%B{_RECORD_SEPARATOR}", revision]
        if not since:
            args.insert(1, "-n1")

        output = self._git(*args)
        if not output:
            return []

        commits = []
        for record in output.split(_RECORD_SEPARATOR):
            record = record.strip()
            if not record:
                continue
            commit_id, _, message = record.partition(_FIELD_SEPARATOR)
            commits.append(Commit(id=commit_id.strip(), comment=message.strip()))
        return commits

    def collect(
        self,
        git_url: Optional[str] = None,
        git_commit: Optional[str] = None,
        since_commit: Optional[str] = None,
        build_number: Optional[str] = None,
        build_url: Optional[str] = None,
    ) -> BuildInformation:
        """
        Gather build information for the workspace.

        Explicit values win; CI variables (GIT_URL, GIT_COMMIT, GIT_BRANCH,
        GIT_PREVIOUS_SUCCESSFUL_COMMIT, BUILD_NUMBER, BUILD_URL) come next;
        git itself fills the rest.
        """
        vcs_root = self._setting(git_url, "GIT_URL") or self._git(
            "config", "--get", "remote.origin.url"
        )
        commit = self._setting(git_commit, "GIT_COMMIT") or self._git("rev-parse", "HEAD")
        branch = self._setting(None, "GIT_BRANCH") or self._git(
            "rev-parse", "--abbrev-ref", "HEAD"
        )
        since = self._setting(since_commit, "GIT_PREVIOUS_SUCCESSFUL_COMMIT")

        return BuildInformation(
            build_number=self._setting(build_number, "BUILD_NUMBER") or "",
            build_url=self._setting(build_url, "BUILD_URL"),
            branch=branch,
            vcs_type="Git" if commit or vcs_root else "Unknown",
            vcs_root=vcs_root,
            vcs_commit_number=commit,
            commits=self.get_commits(commit, since) if commit else [],
        )

    def write(
        self, information: BuildInformation, file_name: str = BUILD_INFORMATION_FILE
    ) -> Path:
        """Write the build information JSON into the workspace."""
        path = self.workspace / file_name
        self.logger.log(f"Creating {file_name} in {self.workspace}")
        with open(path, "w") as f:
            json.dump(information.to_dict(), f, indent=2)
        return path
