"""
Adapter for the Go-based ``octopus`` CLI.

Every server-bound operation starts with ``login``. Deployments are
issued with ``release deploy`` and, when waiting, followed by ``task wait``
on the server task ids the deploy call prints as JSON.
"""

import dataclasses
import json
from typing import Any, List, Optional

from octodeploy.constants import SERVER_TASK_ID_FIELD, VERSION_FIELD
from octodeploy.core import current_arguments
from octodeploy.exceptions import UnparsableOutputError
from octodeploy.models import Dialect, ExecutionResult, OperationParameters
from octodeploy.services.adapters.base import ChainState, CliAdapter, CommandChain
from octodeploy.utils import is_blank, timespan_to_seconds


def _load_json(output: str) -> Optional[Any]:
    """First JSON document in the output, skipping any leading log lines."""
    text = output.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        pass

    decoder = json.JSONDecoder()
    offset = 0
    for line in text.splitlines(keepends=True):
        if line.lstrip().startswith(("[", "{")):
            try:
                return decoder.raw_decode(text[offset:].lstrip())[0]
            except ValueError:
                pass
        offset += len(line)
    return None


def _records(data: Any) -> List[dict]:
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    return []


def parse_task_ids(output: str) -> List[str]:
    """
    Server task ids from ``release deploy`` JSON output.

    Raises:
        UnparsableOutputError: If no ServerTaskId is present
    """
    task_ids = []
    for record in _records(_load_json(output)):
        task_id = record.get(SERVER_TASK_ID_FIELD)
        if isinstance(task_id, str) and task_id.strip():
            task_ids.append(task_id.strip())
    if not task_ids:
        raise UnparsableOutputError(SERVER_TASK_ID_FIELD, output)
    return task_ids


def parse_version(output: str) -> str:
    """
    Release version from ``release create`` JSON output.

    Raises:
        UnparsableOutputError: If no Version is present
    """
    for record in _records(_load_json(output)):
        version = record.get(VERSION_FIELD)
        if isinstance(version, str) and version.strip():
            return version.strip()
    raise UnparsableOutputError(VERSION_FIELD, output)


class CurrentCliAdapter(CliAdapter):
    dialect = Dialect.CURRENT

    def _login(self, chain: CommandChain) -> bool:
        self.logger.log(f"Logging in to {self.server.url}")
        return chain.run(current_arguments.build_login(self.server), ChainState.LOGGED_IN)

    def _login_and_run(self, invocation) -> ExecutionResult:
        chain = self.chain()
        if self._login(chain):
            chain.run(invocation, ChainState.OPERATION_ISSUED)
        return chain.finish()

    def pack(self, params: OperationParameters) -> ExecutionResult:
        # local operation, no server session
        return self.run(current_arguments.build_pack(params, self.server))

    def push(self, params: OperationParameters) -> ExecutionResult:
        return self._login_and_run(current_arguments.build_push(params, self.server))

    def push_build_information(self, params: OperationParameters) -> ExecutionResult:
        return self._login_and_run(
            current_arguments.build_push_build_information(params, self.server)
        )

    def create_release(self, params: OperationParameters) -> ExecutionResult:
        """
        Create a release and, with a deploy-to environment, deploy it.

        Calls: login, create, then login, deploy and optionally task wait.
        When no version is given the created version is read from the
        create output.
        """
        create = current_arguments.build_create_release(params, self.server)
        deploy_params = None
        if not is_blank(params.deploy_to_environment):
            deploy_params = dataclasses.replace(
                params,
                environment=params.deploy_to_environment,
            )
            self._check_wait_inputs(deploy_params)

        chain = self.chain()
        if not self._login(chain):
            return chain.finish()
        if not chain.run(create, ChainState.OPERATION_ISSUED):
            return chain.finish()
        if deploy_params is None:
            return chain.finish()

        version = params.version
        if is_blank(version):
            version = self._read(chain, parse_version)
            self.logger.log(f"Created release {version}")

        return self.deploy_release(dataclasses.replace(deploy_params, version=version))

    def deploy_release(self, params: OperationParameters) -> ExecutionResult:
        """
        Deploy a release: login, deploy, then task wait when waiting.
        """
        deploy = current_arguments.build_deploy_release(params, self.server)
        self._check_wait_inputs(params)

        chain = self.chain()
        if not self._login(chain):
            return chain.finish()
        if not chain.run(deploy, ChainState.OPERATION_ISSUED):
            return chain.finish()
        if not params.wait_for_deployment:
            return chain.finish()

        task_ids = self._read(chain, parse_task_ids)
        self.logger.log(f"Waiting for {', '.join(task_ids)}")
        chain.run(
            current_arguments.build_task_wait(task_ids, params, self.server),
            ChainState.WAIT_ISSUED,
        )
        return chain.finish()

    @staticmethod
    def _check_wait_inputs(params: OperationParameters) -> None:
        if params.wait_for_deployment and not is_blank(params.deployment_timeout):
            timespan_to_seconds(params.deployment_timeout)

    @staticmethod
    def _read(chain: CommandChain, parser):
        """Parse the last call's output, failing the chain if it cannot."""
        try:
            return parser(chain.last_result.stdout)
        except UnparsableOutputError:
            chain.fail()
            raise
