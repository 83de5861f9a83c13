"""Phase state machine for the pre/main/post lifecycle.

Each phase runs in its own process invocation. The phase about to run is
recorded in the host's state store *before* its hook is invoked, so an
invocation that crashes mid-hook never re-runs a completed phase.
"""

from __future__ import annotations

import logging
from enum import Enum

from action_class.errors import UnknownPhaseState
from action_class.host import Host

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    PRE = "pre"
    MAIN = "main"
    POST = "post"


# Phase persisted before the hook of the key phase runs; None means no write.
NEXT_PHASE: dict[Phase, Phase | None] = {
    Phase.PRE: Phase.MAIN,
    Phase.MAIN: Phase.POST,
    Phase.POST: None,
}


def phase_state_key(action_cls: type) -> str:
    return f"{action_cls.__name__}_action_phase"


def parse_phase(value: str) -> Phase:
    try:
        return Phase(value)
    except ValueError:
        raise UnknownPhaseState(value) from None


class PhaseStateStore:
    """Persist the current phase of one action in the host's state store."""

    def __init__(self, host: Host, key: str) -> None:
        self._host = host
        self.key = key

    def load(self, *, has_pre: bool) -> Phase:
        """Return the phase to run in this invocation.

        With nothing persisted yet, this is ``pre`` when the action has a pre
        hook and ``main`` otherwise.
        """
        raw = self._host.get_state(self.key)
        if not raw:
            return Phase.PRE if has_pre else Phase.MAIN
        return parse_phase(raw)

    def save(self, phase: Phase) -> None:
        self._host.save_state(self.key, phase.value)

    def advance(self, current: Phase) -> Phase | None:
        """Persist the phase that follows ``current``, if any."""

        following = NEXT_PHASE[current]
        if following is not None:
            logger.debug("Persisting next phase %s under %s", following.value, self.key)
            self.save(following)
        return following
