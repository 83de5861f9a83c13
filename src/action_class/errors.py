"""Errors raised while resolving inputs, writing outputs and driving phases.

All of these are recovered exactly once, by :func:`action_class.runner.run_action`,
and turned into a single failure report on the host.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base class for every error raised by the action runtime."""


class InputError(ActionError):
    """An input could not be read; the message always names the input."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Error while reading input '{name}': {detail}")


class MissingRequiredInput(InputError):
    def __init__(self, name: str) -> None:
        super().__init__(name, f"Input is required: {name}")


class InputValidationFailure(InputError):
    pass


class InputConversionFailure(InputError):
    """A converter or validator raised while reading the input."""


class OutputConversionFailure(ActionError):
    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Error while converting output '{name}': {detail}")


class PhaseError(ActionError):
    pass


class UnsupportedPhaseTransition(PhaseError):
    """The persisted phase needs a hook the action does not implement."""

    def __init__(self, phase: str) -> None:
        self.phase = phase
        super().__init__(f"Action does not support {phase} phase")


class UnknownPhaseState(PhaseError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid action phase: {value}")


class UserHookFailure(ActionError):
    """Category for anything raised by user code (constructor, pre, main, post).

    User exceptions are reported as-is; this type exists so callers can raise
    a failure that is explicitly attributed to the action itself.
    """
