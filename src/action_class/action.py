"""The action base class.

An action is declared once, as a class carrying an :class:`ActionDescriptor`::

    class Greet(Action, descriptor=ActionDescriptor(
        name="greet",
        inputs={"who": InputDescriptor("Who to greet", required=True)},
        outputs={"greeting": OutputDescriptor("The greeting")},
    )):
        async def main(self) -> None:
            self.outputs.greeting = f"Hello {self.inputs.who}"

Instantiating the class resolves all inputs against the host and writes any
initial output values. ``pre`` and ``post`` are optional coroutine hooks; see
:func:`action_class.runner.run_action` for how phases are selected.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from action_class.config import ActionSettings
from action_class.descriptors import ActionDescriptor
from action_class.host import ActionsHost, Host
from action_class.inputs import ResolvedInputs, resolve_inputs
from action_class.metadata import ActionInfo, build_action_info
from action_class.outputs import Outputs

logger = logging.getLogger(__name__)


class Action:
    descriptor: ClassVar[ActionDescriptor] = ActionDescriptor()
    action_info: ClassVar[ActionInfo] = ActionInfo()

    def __init_subclass__(cls, descriptor: ActionDescriptor | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if descriptor is not None:
            cls.descriptor = descriptor
        cls.action_info = build_action_info(cls.descriptor)

    def __init__(self, *, host: Host | None = None) -> None:
        self._host: Host = host if host is not None else ActionsHost.from_settings(ActionSettings())
        self._inputs = resolve_inputs(self.descriptor.inputs, self._host)
        self.outputs = Outputs(self.descriptor.outputs, self._host)
        logger.debug("Constructed %s with %d inputs", type(self).__name__, len(self._inputs))

    @property
    def inputs(self) -> ResolvedInputs:
        return self._inputs

    @property
    def host(self) -> Host:
        return self._host

    async def main(self) -> None:
        return None


def action(descriptor: ActionDescriptor) -> type[Action]:
    """Create an action base class for ``descriptor``.

    Subclass the result and implement ``main`` (and optionally ``pre``/``post``).
    """

    return type("Action", (Action,), {}, descriptor=descriptor)
