"""Output synthesizer: typed values in, immediate host writes out."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from decimal import Decimal
from typing import Any

from action_class.descriptors import OutputDescriptor
from action_class.errors import OutputConversionFailure
from action_class.host import Host

logger = logging.getLogger(__name__)


def _format_float(value: float) -> str:
    # Shortest round-trip digits, laid out as JavaScript's String() does.
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text = "".join(map(str, digits))
    k = len(text)
    n = k + exponent
    prefix = "-" if sign else ""
    if k <= n <= 21:
        return prefix + text + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + text[:n] + "." + text[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + text
    mantissa = text[0] + ("." + text[1:] if k > 1 else "")
    return f"{prefix}{mantissa}e{n - 1:+d}"


def stringify(value: Any) -> str:
    """Default coercion of a value to the host's string representation."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value == 0:
            return "0"
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    return str(value)


class OutputHandle:
    """A single output cell. Every ``set`` is written to the host."""

    def __init__(self, name: str, descriptor: OutputDescriptor, host: Host) -> None:
        self.name = name
        self.descriptor = descriptor
        self._host = host
        self._value: Any = None
        self._is_set = False

    @property
    def is_set(self) -> bool:
        return self._is_set

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        self._value = value
        self._is_set = True
        self._host.set_output(self.name, self.serialize(value))

    def serialize(self, value: Any) -> str:
        converter = self.descriptor.converter
        if converter is None:
            return stringify(value)
        try:
            return converter(value)
        except Exception as e:
            raise OutputConversionFailure(self.name, str(e)) from e


class Outputs:
    """Attribute-style access to the declared outputs of an action.

    ``outputs.result = 42`` and ``outputs.set("result", 42)`` are equivalent.
    Outputs whose names collide with a method (``get``, ``set``, ``snapshot``)
    are only reachable through ``get``/``set``.
    """

    __slots__ = ("_handles",)

    def __init__(self, descriptors: Mapping[str, OutputDescriptor], host: Host) -> None:
        object.__setattr__(
            self,
            "_handles",
            {name: OutputHandle(name, d, host) for name, d in descriptors.items()},
        )
        for name, descriptor in descriptors.items():
            if descriptor.init_value is not None:
                logger.debug("Initializing output %s", name)
                self.set(name, descriptor.init_value)

    def _handle(self, name: str) -> OutputHandle:
        try:
            return self._handles[name]
        except KeyError:
            raise AttributeError(f"Undeclared output: {name}") from None

    def get(self, name: str) -> Any:
        return self._handle(name).get()

    def set(self, name: str, value: Any) -> None:
        self._handle(name).set(value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._handle(name).get()

    def __setattr__(self, name: str, value: Any) -> None:
        # Names like "get" or "set" are shadowed by methods on read.
        if hasattr(type(self), name):
            raise AttributeError(
                f"Output {name!r} is not attribute-accessible; use outputs.set({name!r}, value)"
            )
        self._handle(name).set(value)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def snapshot(self) -> dict[str, Any]:
        """The outputs set so far, keyed by name."""

        return {name: h.get() for name, h in self._handles.items() if h.is_set}

    def __repr__(self) -> str:
        return f"Outputs({self.snapshot()!r})"
