"""Static metadata describing an action, as it would appear in ``action.yml``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from action_class.descriptors import ActionDescriptor, Branding, InputDescriptor
from action_class.outputs import stringify


class ActionInfoInput(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str
    required: bool | None = None
    default: str | None = None
    deprecation_message: str | None = Field(default=None, alias="deprecationMessage")


class ActionInfoOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str


class ActionInfo(BaseModel):
    """Read-only metadata attached to an action class as ``action_info``."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    author: str | None = None
    branding: Branding | None = None
    inputs: dict[str, ActionInfoInput] | None = None
    outputs: dict[str, ActionInfoOutput] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _input_default(descriptor: InputDescriptor) -> str | None:
    if descriptor.default is None:
        return None
    if descriptor.converter is not None:
        rendered = descriptor.converter.to_input(descriptor.default)
        if rendered is not None:
            return rendered
    return stringify(descriptor.default)


def build_action_info(descriptor: ActionDescriptor) -> ActionInfo:
    inputs = {
        name: ActionInfoInput(
            description=d.description,
            required=True if d.required else None,
            default=_input_default(d),
            deprecation_message=d.deprecation_message or None,
        )
        for name, d in descriptor.inputs.items()
    }
    outputs = {
        name: ActionInfoOutput(description=d.description)
        for name, d in descriptor.outputs.items()
    }
    return ActionInfo(
        name=descriptor.name or None,
        description=descriptor.description or None,
        author=descriptor.author or None,
        branding=descriptor.branding,
        inputs=inputs or None,
        outputs=outputs or None,
    )
