#!/usr/bin/env python3
"""Example action with pre, main and post phases.

Reference it from ``action.yml`` for all three phases::

    runs:
      using: docker
      image: Dockerfile
      pre-entrypoint: python examples/example_action.py
      entrypoint: python examples/example_action.py
      post-entrypoint: python examples/example_action.py

Each invocation runs exactly one phase; the runner carries the phase between
them through the saved state.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from action_class import (
    ActionDescriptor,
    InputConverter,
    InputDescriptor,
    InputType,
    OutputDescriptor,
    OutputType,
    action,
    run,
)

logger = logging.getLogger(__name__)


class ExampleAction(
    action(
        ActionDescriptor(
            name="example",
            description="Demonstrates typed inputs and outputs",
            author="action-class",
            branding={"color": "orange", "icon": "sunset"},
            inputs={
                "a": InputDescriptor("description a", required=True),
                "b": InputDescriptor(
                    "description b", type=InputType.STRING_ARRAY, trim_whitespace=False
                ),
                "c": InputDescriptor("description c", type=InputType.BOOLEAN, default=True),
                "d": InputDescriptor(
                    "description d",
                    default=123,
                    validate=lambda v: v > 0 or "Value must be greater than 0",
                ),
                "e": InputDescriptor(
                    "description e", type=InputType.NUMBER, deprecation_message="e is deprecated"
                ),
                "f": InputDescriptor(
                    "description f",
                    required=True,
                    converter=InputConverter(from_input=json.loads, to_input=json.dumps),
                ),
                "g": InputDescriptor(
                    "description g",
                    converter=InputConverter(
                        from_input=datetime.fromisoformat, to_input=lambda v: v.isoformat()
                    ),
                ),
            },
            outputs={
                "a": OutputDescriptor("description a"),
                "b": OutputDescriptor("description b", type=OutputType.BOOLEAN),
                "c": OutputDescriptor("description c", type=OutputType.NUMBER),
                "d": OutputDescriptor("description d", converter=json.dumps),
                "e": OutputDescriptor("description e", init_value=123),
            },
        )
    )
):
    async def pre(self) -> None:
        logger.info("pre job")

    async def main(self) -> None:
        logger.info("inputs: %s", dict(self.inputs))

        self.outputs.a = self.inputs.a
        self.outputs.b = self.inputs.c
        self.outputs.c = self.inputs.d
        self.outputs.d = self.inputs.f

    async def post(self) -> None:
        logger.info("post job")


if __name__ == "__main__":
    raise SystemExit(run(ExampleAction))
