"""
Mock adapter — test double for command execution.

Records every context it receives and returns success unless a command
has been configured to fail.
"""

from __future__ import annotations

from bnrun.adapters.base import Adapter, ExecutionContext
from bnrun.core.models.receipt import StepReceipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured with
    custom responses per command text.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, StepReceipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Command texts in the order they were executed."""
        return [ctx.step.command for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, command: str, receipt: StepReceipt) -> None:
        """Set a custom response for a specific command."""
        self._responses[command] = receipt

    def set_failure(self, command: str, error: str = "Mock failure", return_code: int = 1) -> None:
        """Configure a specific command to fail."""
        self._responses[command] = StepReceipt.failure(
            adapter=self._name,
            script="",
            command=command,
            error=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> StepReceipt:
        self._call_log.append(context)
        step = context.step

        if step.command in self._responses:
            return self._responses[step.command].model_copy(update={"script": step.script})

        return StepReceipt.success(
            adapter=self._name,
            script=step.script,
            command=step.command,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
