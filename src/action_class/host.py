"""Host channels: how an action talks to the workflow runner.

The runtime only depends on the :class:`Host` protocol. :class:`ActionsHost`
implements it on top of the GitHub Actions runner protocol:

- inputs arrive as ``INPUT_<NAME>`` environment variables
- outputs and phase state are appended to the files named by ``GITHUB_OUTPUT``
  and ``GITHUB_STATE`` (or written as workflow commands on older runners)
- saved state comes back as ``STATE_<name>`` environment variables
- log lines and failures are workflow commands on stdout
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from action_class.config import ActionSettings

logger = logging.getLogger(__name__)

TRUE_VALUES = frozenset({"true", "True", "TRUE"})
FALSE_VALUES = frozenset({"false", "False", "FALSE"})


@dataclass(frozen=True, slots=True)
class InputOptions:
    required: bool = False
    trim_whitespace: bool = True


class InputNotSupplied(ValueError):
    """A required input has no value."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Input required and not supplied: {name}")


class InputFormatError(TypeError):
    """A boolean input holds something other than a YAML 1.2 core boolean."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
        )


class Host(Protocol):
    """The runner's interface for one process invocation."""

    def get_input(self, name: str, options: InputOptions | None = None) -> str: ...

    def get_multiline_input(
        self, name: str, options: InputOptions | None = None
    ) -> list[str]: ...

    def get_boolean_input(self, name: str, options: InputOptions | None = None) -> bool: ...

    def set_output(self, name: str, value: str) -> None: ...

    def get_state(self, name: str) -> str: ...

    def save_state(self, name: str, value: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def set_failed(self, error: BaseException | str) -> None: ...


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(command: str, properties: Mapping[str, str], message: str) -> str:
    """Render a ``::command key=value,...::message`` workflow command."""

    out = f"::{command}"
    if properties:
        out += " " + ",".join(f"{k}={escape_property(v)}" for k, v in properties.items())
    return f"{out}::{escape_data(message)}"


def input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def prepare_key_value_message(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    # Neither part may contain the delimiter.
    if delimiter in name:
        raise ValueError(f'Unexpected input: name should not contain the delimiter "{delimiter}"')
    if delimiter in value:
        raise ValueError(f'Unexpected input: value should not contain the delimiter "{delimiter}"')
    return f"{name}<<{delimiter}\n{value}\n{delimiter}"


class ActionsHost:
    """Host channels backed by the GitHub Actions runner protocol."""

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        output_file: Path | None = None,
        state_file: Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the host.

        Args:
            environ: Environment to read inputs and state from (defaults to ``os.environ``).
            output_file: The ``GITHUB_OUTPUT`` file command target, if any.
            state_file: The ``GITHUB_STATE`` file command target, if any.
            stream: Where workflow commands are written (defaults to ``sys.stdout``).
        """
        self._environ = os.environ if environ is None else environ
        self._output_file = output_file
        self._state_file = state_file
        self._stream = stream
        self.exit_code = 0

    @classmethod
    def from_settings(cls, settings: ActionSettings) -> ActionsHost:
        return cls(output_file=settings.github_output, state_file=settings.github_state)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _issue(self, command: str, message: str, **properties: str) -> None:
        self.stream.write(format_command(command, properties, message) + "\n")
        self.stream.flush()

    def _issue_file_command(self, path: Path, name: str, value: str) -> None:
        if not path.exists():
            raise FileNotFoundError(f"Missing file at path: {path}")
        with open(path, "a", encoding="utf-8") as f:
            f.write(prepare_key_value_message(name, value) + "\n")

    # Inputs

    def get_input(self, name: str, options: InputOptions | None = None) -> str:
        options = options or InputOptions()
        value = self._environ.get(input_env_name(name), "")
        if options.required and not value:
            raise InputNotSupplied(name)
        if not options.trim_whitespace:
            return value
        return value.strip()

    def get_multiline_input(self, name: str, options: InputOptions | None = None) -> list[str]:
        options = options or InputOptions()
        lines = [line for line in self.get_input(name, options).split("\n") if line != ""]
        if not options.trim_whitespace:
            return lines
        return [line.strip() for line in lines]

    def get_boolean_input(self, name: str, options: InputOptions | None = None) -> bool:
        value = self.get_input(name, options)
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise InputFormatError(name)

    # Outputs and state

    def set_output(self, name: str, value: str) -> None:
        if self._output_file is not None:
            self._issue_file_command(self._output_file, name, value)
            return
        self.stream.write("\n")
        self._issue("set-output", value, name=name)

    def get_state(self, name: str) -> str:
        return self._environ.get(f"STATE_{name}", "")

    def save_state(self, name: str, value: str) -> None:
        if self._state_file is not None:
            self._issue_file_command(self._state_file, name, value)
            return
        self._issue("save-state", value, name=name)

    # Logging

    def debug(self, message: str) -> None:
        self._issue("debug", message)

    def info(self, message: str) -> None:
        self.stream.write(message + "\n")
        self.stream.flush()

    def warning(self, message: str) -> None:
        self._issue("warning", message)

    def error(self, message: str) -> None:
        self._issue("error", message)

    def set_failed(self, error: BaseException | str) -> None:
        self.exit_code = 1
        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
        else:
            message = error
        logger.debug("Marking step as failed: %s", message)
        self.error(message)
