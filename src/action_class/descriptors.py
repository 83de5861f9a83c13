"""Declarative descriptors for action inputs and outputs.

Descriptors are plain data. They are consumed by the input resolver
(:mod:`action_class.inputs`), the output synthesizer (:mod:`action_class.outputs`)
and the metadata surface (:mod:`action_class.metadata`); nothing here talks to
the host.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class InputType(str, Enum):
    STRING = "string"
    STRING_ARRAY = "string[]"
    BOOLEAN = "boolean"
    NUMBER = "number"


class OutputType(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"


BrandingColor = Literal["white", "yellow", "blue", "green", "orange", "red", "purple", "gray-dark"]


class Branding(BaseModel):
    """Marketplace branding: a feather icon name and a background colour."""

    model_config = ConfigDict(frozen=True)

    color: BrandingColor
    icon: str = Field(min_length=1, description="Feather icon name")


@dataclass(frozen=True, slots=True)
class InputConverter:
    """Maps a raw input string to a typed value and back."""

    from_input: Callable[[str], Any]
    to_input: Callable[[Any], str]


Validator = Callable[[Any], bool | str]


@dataclass(frozen=True, slots=True)
class InputDescriptor:
    description: str = ""
    required: bool = False
    default: Any = None
    trim_whitespace: bool = True
    validate: Validator | None = None
    deprecation_message: str | None = None
    type: InputType | str | None = None
    converter: InputConverter | None = None

    @property
    def kind(self) -> InputType | None:
        """The declared type tag, or ``None`` when the input uses a converter.

        Without an explicit tag the kind follows the type of ``default``.
        """
        if self.converter is not None:
            return None
        if self.type is not None:
            return InputType(self.type)
        if isinstance(self.default, bool):
            return InputType.BOOLEAN
        if isinstance(self.default, (int, float)):
            return InputType.NUMBER
        if isinstance(self.default, (list, tuple)):
            return InputType.STRING_ARRAY
        return InputType.STRING


@dataclass(frozen=True, slots=True)
class OutputDescriptor:
    description: str = ""
    init_value: Any = None
    converter: Callable[[Any], str] | None = None
    type: OutputType | str | None = None


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """Everything known about an action before it runs."""

    name: str | None = None
    description: str | None = None
    author: str | None = None
    branding: Branding | None = None
    inputs: Mapping[str, InputDescriptor] = field(default_factory=dict)
    outputs: Mapping[str, OutputDescriptor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.branding, Mapping):
            object.__setattr__(self, "branding", Branding(**self.branding))
        object.__setattr__(self, "inputs", MappingProxyType(dict(self.inputs)))
        object.__setattr__(self, "outputs", MappingProxyType(dict(self.outputs)))
