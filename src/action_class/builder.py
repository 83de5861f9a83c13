"""Fluent construction of action descriptors.

    MyBase = (
        action_builder()
        .name("greet")
        .description("Says hello")
        .input("who", "Who to greet", True)
        .input("times", "How often", type="number", default=1)
        .output("greeting", "The greeting")
        .build()
    )

Re-declaring an input or output replaces the earlier entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from action_class.action import Action, action
from action_class.descriptors import (
    ActionDescriptor,
    Branding,
    BrandingColor,
    InputDescriptor,
    InputType,
    OutputDescriptor,
    OutputType,
)


class ActionBuilder:
    """Accumulates an :class:`ActionDescriptor` one call at a time."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._description: str | None = None
        self._author: str | None = None
        self._branding: Branding | None = None
        self._inputs: dict[str, InputDescriptor] = {}
        self._outputs: dict[str, OutputDescriptor] = {}

    def name(self, name: str) -> ActionBuilder:
        self._name = name
        return self

    def description(self, description: str) -> ActionBuilder:
        self._description = description
        return self

    def author(self, author: str, email: str | None = None) -> ActionBuilder:
        self._author = f"{author} <{email}>" if email else author
        return self

    def branding(self, color: BrandingColor, icon: str) -> ActionBuilder:
        self._branding = Branding(color=color, icon=icon)
        return self

    def input(
        self, name: str, description: str, required: bool = False, **options: Any
    ) -> ActionBuilder:
        """Declare (or replace) an input.

        Args:
            name: Input name as used in the workflow's ``with:`` block.
            description: Human readable description.
            required: Whether the workflow must supply a value.
            **options: Any other :class:`InputDescriptor` field.
        """
        typed = ("type", "converter", "default", "validate")
        if not any(options.get(k) is not None for k in typed):
            options["type"] = InputType.STRING
        self._inputs[name] = InputDescriptor(description=description, required=required, **options)
        return self

    def inputs(self, inputs: Mapping[str, InputDescriptor]) -> ActionBuilder:
        self._inputs.update(inputs)
        return self

    def output(self, name: str, description: str, **options: Any) -> ActionBuilder:
        if not any(options.get(k) is not None for k in ("type", "converter", "init_value")):
            options["type"] = OutputType.STRING
        self._outputs[name] = OutputDescriptor(description=description, **options)
        return self

    def outputs(self, outputs: Mapping[str, OutputDescriptor]) -> ActionBuilder:
        self._outputs.update(outputs)
        return self

    @property
    def descriptor(self) -> ActionDescriptor:
        return ActionDescriptor(
            name=self._name,
            description=self._description,
            author=self._author,
            branding=self._branding,
            inputs=self._inputs,
            outputs=self._outputs,
        )

    def build(self) -> type[Action]:
        return action(self.descriptor)


def action_builder() -> ActionBuilder:
    return ActionBuilder()
