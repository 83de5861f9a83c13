"""Input resolver: raw host strings in, typed and validated values out.

Each declared input is resolved independently:

1. read the raw value according to the input's kind
2. warn once if a deprecated input was supplied
3. fall back to the default, or fail if the input is required
4. run the validator, if any

Every failure is raised as an :class:`~action_class.errors.InputError` whose
message names the input.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterator, Mapping
from typing import Any

from action_class.descriptors import InputDescriptor, InputType
from action_class.errors import (
    InputConversionFailure,
    InputError,
    InputValidationFailure,
    MissingRequiredInput,
)
from action_class.host import Host, InputFormatError, InputNotSupplied, InputOptions
from action_class.outputs import stringify

logger = logging.getLogger(__name__)


class ResolvedInputs(Mapping[str, Any]):
    """Read-only snapshot of resolved inputs.

    Absent optional inputs are missing keys, never ``None`` values. Keys that
    are valid identifiers are also readable as attributes.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_values", dict(values or {}))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Resolved inputs are read-only")

    def __repr__(self) -> str:
        return f"ResolvedInputs({self._values!r})"


_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")
_RADIX = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def parse_number(raw: str) -> float:
    """Parse a number with JavaScript ``Number()`` semantics.

    Decimal and exponent forms, ``Infinity`` and ``0x``/``0o``/``0b`` integers
    are accepted. Anything else, including Python-only literal syntax such as
    ``1_000`` or ``inf``, is ``nan``.
    """
    text = raw.strip()
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text):
        return float(text)
    if _RADIX.fullmatch(text):
        return float(int(text, 0))
    return math.nan


def read_raw_value(name: str, descriptor: InputDescriptor, host: Host) -> Any:
    """Read one input from the host; ``None`` means the input is absent."""

    options = InputOptions(required=descriptor.required, trim_whitespace=descriptor.trim_whitespace)

    if descriptor.converter is not None:
        raw = host.get_input(name, options)
        return descriptor.converter.from_input(raw) if raw else None

    kind = descriptor.kind
    if kind is InputType.STRING_ARRAY:
        lines = host.get_multiline_input(name, options)
        return lines if lines else None
    if kind is InputType.BOOLEAN:
        try:
            return host.get_boolean_input(name, options)
        except InputFormatError:
            return None
    raw = host.get_input(name, options)
    if not raw:
        return None
    if kind is InputType.NUMBER:
        return parse_number(raw)
    return raw


def resolve_input(name: str, descriptor: InputDescriptor, host: Host) -> tuple[bool, Any]:
    """Resolve a single input.

    Returns:
        ``(present, value)``; ``present`` is false when the key must be omitted.
    """
    try:
        value = read_raw_value(name, descriptor, host)
    except InputNotSupplied:
        raise MissingRequiredInput(name) from None
    except InputError:
        raise
    except Exception as e:
        raise InputConversionFailure(name, str(e)) from e

    if value is not None and descriptor.deprecation_message:
        host.warning(f"Input '{name}' is deprecated: {descriptor.deprecation_message}")

    if value is None:
        if descriptor.required:
            raise MissingRequiredInput(name)
        if descriptor.default is None:
            return False, None
        value = descriptor.default

    if descriptor.validate is not None:
        try:
            result = descriptor.validate(value)
        except Exception as e:
            raise InputConversionFailure(name, str(e)) from e
        if isinstance(result, str):
            raise InputValidationFailure(name, f"Input validation failed: {result}")
        if not result:
            raise InputValidationFailure(
                name, f"Input validation failed: {name} = {stringify(value)}"
            )

    return True, value


def resolve_inputs(descriptors: Mapping[str, InputDescriptor], host: Host) -> ResolvedInputs:
    """Resolve every declared input, in declaration order."""

    values: dict[str, Any] = {}
    for name, descriptor in descriptors.items():
        present, value = resolve_input(name, descriptor, host)
        if present:
            values[name] = value
        else:
            logger.debug("Input %s not supplied, omitting", name)
    return ResolvedInputs(values)
