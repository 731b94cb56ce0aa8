"""Adapter for the legacy .NET ``octo`` CLI: one process per operation."""

from octodeploy.core import legacy_arguments
from octodeploy.models import Dialect, ExecutionResult, OperationParameters
from octodeploy.services.adapters.base import CliAdapter


class LegacyCliAdapter(CliAdapter):
    dialect = Dialect.LEGACY

    @property
    def inline_credentials(self) -> bool:
        return not self.invoker.credentials_in_environment

    def pack(self, params: OperationParameters) -> ExecutionResult:
        return self.run(
            legacy_arguments.build_pack(params, self.server, self.inline_credentials)
        )

    def push(self, params: OperationParameters) -> ExecutionResult:
        return self.run(
            legacy_arguments.build_push(params, self.server, self.inline_credentials)
        )

    def push_build_information(self, params: OperationParameters) -> ExecutionResult:
        return self.run(
            legacy_arguments.build_push_build_information(
                params, self.server, self.inline_credentials
            )
        )

    def create_release(self, params: OperationParameters) -> ExecutionResult:
        # deploy-to, wait and variables ride on the same call
        return self.run(
            legacy_arguments.build_create_release(
                params, self.server, self.inline_credentials
            )
        )

    def deploy_release(self, params: OperationParameters) -> ExecutionResult:
        return self.run(
            legacy_arguments.build_deploy_release(
                params, self.server, self.inline_credentials
            )
        )
