"""
CLI Adapter Base

Common surface for both Octopus CLI dialects, plus the call chain that
sequences multi-call operations.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional

from octodeploy.models import (
    CommandInvocation,
    Dialect,
    ExecutionResult,
    Operation,
    OperationParameters,
    ServerContext,
)
from octodeploy.services.process_invoker import ProcessInvoker


class ChainState(Enum):
    """Progress of a multi-call operation."""

    INIT = "init"
    LOGGED_IN = "logged-in"
    OPERATION_ISSUED = "operation-issued"
    WAIT_ISSUED = "wait-issued"
    DONE = "done"
    FAILED = "failed"


class CommandChain:
    """
    Runs CLI calls in order and stops at the first failure.

    Each call names the state reached when it succeeds; a failing call
    moves the chain to FAILED and its result becomes the chain result.
    """

    def __init__(self, runner: Callable[[CommandInvocation], ExecutionResult]):
        self.runner = runner
        self.state = ChainState.INIT
        self.results: List[ExecutionResult] = []

    @property
    def failed(self) -> bool:
        return self.state == ChainState.FAILED

    @property
    def last_result(self) -> Optional[ExecutionResult]:
        return self.results[-1] if self.results else None

    def run(self, invocation: CommandInvocation, reached: ChainState) -> bool:
        """
        Issue one call unless an earlier call failed.

        Returns:
            True if the call succeeded
        """
        if self.state in (ChainState.FAILED, ChainState.DONE):
            raise RuntimeError(f"Cannot issue a call from state {self.state.value}")

        result = self.runner(invocation)
        self.results.append(result)
        self.state = reached if result.is_success else ChainState.FAILED
        return result.is_success

    def fail(self) -> None:
        """Mark the chain failed after a call whose output was unusable."""
        self.state = ChainState.FAILED

    def finish(self) -> ExecutionResult:
        """Close the chain and return the result of its last call."""
        if not self.failed:
            self.state = ChainState.DONE
        return self.last_result


class CliAdapter(ABC):
    """
    Drives one Octopus CLI installation for one server.

    Subclasses translate each operation into the CLI calls their dialect
    needs. Blank required inputs raise InvalidArgumentError before any
    process is started.
    """

    dialect: Dialect

    def __init__(
        self, executable: str, server: ServerContext, invoker: ProcessInvoker
    ):
        self.executable = executable
        self.server = server
        self.invoker = invoker
        self.logger = invoker.logger

    def run(self, invocation: CommandInvocation) -> ExecutionResult:
        """Run one CLI call through the invoker."""
        return self.invoker.invoke(self.executable, invocation, self.server)

    def chain(self) -> CommandChain:
        return CommandChain(self.run)

    def execute(
        self, operation: Operation, params: OperationParameters
    ) -> ExecutionResult:
        """Dispatch an operation to its adapter method."""
        handlers = {
            Operation.PACK: self.pack,
            Operation.PUSH: self.push,
            Operation.PUSH_BUILD_INFORMATION: self.push_build_information,
            Operation.CREATE_RELEASE: self.create_release,
            Operation.DEPLOY_RELEASE: self.deploy_release,
        }
        return handlers[operation](params)

    @abstractmethod
    def pack(self, params: OperationParameters) -> ExecutionResult:
        pass

    @abstractmethod
    def push(self, params: OperationParameters) -> ExecutionResult:
        pass

    @abstractmethod
    def push_build_information(self, params: OperationParameters) -> ExecutionResult:
        pass

    @abstractmethod
    def create_release(self, params: OperationParameters) -> ExecutionResult:
        pass

    @abstractmethod
    def deploy_release(self, params: OperationParameters) -> ExecutionResult:
        pass

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(executable={self.executable!r}, server={self.server})"
        )
