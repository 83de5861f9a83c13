"""Entry points driving one process invocation of an action."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from action_class.action import Action
from action_class.config import ActionSettings
from action_class.errors import UnsupportedPhaseTransition
from action_class.host import ActionsHost, Host
from action_class.logging import configure_logging
from action_class.phases import Phase, PhaseStateStore, phase_state_key

logger = logging.getLogger(__name__)


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str, ensure_ascii=False)


def _hook(instance: Action, phase: Phase) -> Callable[[], Awaitable[None] | None] | None:
    return getattr(instance, phase.value, None)


async def run_action(
    action_cls: type[Action],
    *args: Any,
    host: Host | None = None,
    settings: ActionSettings | None = None,
    **kwargs: Any,
) -> None:
    """Construct ``action_cls`` and run the hook for the current phase.

    Any error raised while constructing the action or running the hook is
    reported once through ``host.set_failed`` and is not re-raised.

    Args:
        action_cls: The action class to run.
        *args: Positional arguments for the action constructor.
        host: Host channels (defaults to the GitHub Actions runner).
        settings: Process settings (defaults to the environment).
        **kwargs: Keyword arguments for the action constructor.
    """
    settings = settings if settings is not None else ActionSettings()
    if settings.bypass:
        return

    host = host if host is not None else ActionsHost.from_settings(settings)
    try:
        instance = action_cls(*args, host=host, **kwargs)
        host.debug(f"evaluated inputs: {_to_json(dict(instance.inputs))}")

        store = PhaseStateStore(host, phase_state_key(action_cls))
        phase = store.load(has_pre=_hook(instance, Phase.PRE) is not None)
        host.debug(f"action phase: {phase.value}")

        store.advance(phase)
        hook = _hook(instance, phase)
        if hook is None:
            raise UnsupportedPhaseTransition(phase.value)

        result = hook()
        if inspect.isawaitable(result):
            await result

        if phase is Phase.MAIN:
            host.debug(f"outputs: {_to_json(instance.outputs.snapshot())}")
    except Exception as e:
        logger.debug("%s failed", action_cls.__name__, exc_info=True)
        host.set_failed(e)


def run(
    action_cls: type[Action],
    *args: Any,
    host: Host | None = None,
    settings: ActionSettings | None = None,
    **kwargs: Any,
) -> int:
    """Run an action from a script and return the process exit code.

    Typical use at the bottom of an action's entry module::

        if __name__ == "__main__":
            raise SystemExit(run(MyAction))
    """
    settings = settings if settings is not None else ActionSettings()
    if settings.bypass:
        return 0

    host = host if host is not None else ActionsHost.from_settings(settings)
    configure_logging(settings.effective_log_level, settings.log_format, host)

    asyncio.run(run_action(action_cls, *args, host=host, settings=settings, **kwargs))
    return int(getattr(host, "exit_code", 0))
