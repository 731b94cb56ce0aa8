"""
Operation Models

Operations, dialects and the parameter records that flow into the argument builders.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from octodeploy.constants import MASK
from octodeploy.exceptions import InvalidArgumentError


class Operation(Enum):
    """Deployment operation requested by the caller."""

    PACK = "pack"
    PUSH = "push"
    PUSH_BUILD_INFORMATION = "push-build-information"
    CREATE_RELEASE = "create-release"
    DEPLOY_RELEASE = "deploy-release"


class Dialect(Enum):
    """Octopus CLI flavour installed on the build node."""

    LEGACY = "legacy"
    CURRENT = "current"

    @classmethod
    def parse(cls, value: str) -> "Dialect":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown Octopus CLI dialect: '{value}'",
                context=f"Expected one of: {', '.join(d.value for d in cls)}",
            )


class OverwriteMode(Enum):
    """Behaviour when a package or build information entry already exists."""

    FAIL_IF_EXISTS = "FailIfExists"
    OVERWRITE_EXISTING = "OverwriteExisting"
    IGNORE_IF_EXISTS = "IgnoreIfExists"

    @property
    def current_value(self) -> str:
        """Value understood by the Go-based CLI."""
        return _CURRENT_OVERWRITE_VALUES[self]

    @classmethod
    def parse(cls, value: str) -> "OverwriteMode":
        """Accept either the legacy name or the current keyword, any case."""
        wanted = value.strip().lower()
        for mode in cls:
            if wanted in (mode.value.lower(), mode.current_value):
                return mode
        raise InvalidArgumentError(
            f"Unknown overwrite mode: '{value}'",
            context=f"Expected one of: {', '.join(m.value for m in cls)}",
        )


_CURRENT_OVERWRITE_VALUES = {
    OverwriteMode.FAIL_IF_EXISTS: "fail",
    OverwriteMode.OVERWRITE_EXISTING: "overwrite",
    OverwriteMode.IGNORE_IF_EXISTS: "ignore",
}


@dataclass(frozen=True)
class ServerContext:
    """Connection details shared by every call in one build step."""

    url: Optional[str] = None
    api_key: Optional[str] = None
    space_id: Optional[str] = None
    ignore_ssl_errors: bool = False
    verbose: bool = False

    def __repr__(self) -> str:
        api_key = MASK if self.api_key else None
        return (
            f"ServerContext(url={self.url!r}, api_key={api_key!r}, "
            f"space_id={self.space_id!r}, ignore_ssl_errors={self.ignore_ssl_errors}, "
            f"verbose={self.verbose})"
        )

    __str__ = __repr__


@dataclass(frozen=True)
class OperationParameters:
    """
    Flat bag of inputs for every operation.

    Each builder reads only the fields its operation uses; required fields
    are checked per operation.
    """

    # pack
    package_id: Optional[str] = None
    package_version: Optional[str] = None
    package_format: Optional[str] = None
    source_path: Optional[str] = None
    include_paths: tuple[str, ...] = ()
    output_path: Optional[str] = None
    overwrite_existing: bool = False

    # push / build information
    package_paths: tuple[str, ...] = ()
    overwrite_mode: Optional[OverwriteMode] = None
    package_ids: tuple[str, ...] = ()
    build_information_file: Optional[str] = None

    # releases
    project: Optional[str] = None
    version: Optional[str] = None
    channel: Optional[str] = None
    release_notes: Optional[str] = None
    default_package_version: Optional[str] = None
    packages: tuple[str, ...] = ()
    git_ref: Optional[str] = None
    git_commit: Optional[str] = None

    # deployments
    environment: Optional[str] = None
    deploy_to_environment: Optional[str] = None
    tenant: Optional[str] = None
    tenant_tag: Optional[str] = None
    variables: tuple[str, ...] = ()
    wait_for_deployment: bool = False
    deployment_timeout: Optional[str] = None
    cancel_on_timeout: bool = False

    additional_args: Optional[str] = None
