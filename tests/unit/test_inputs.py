"""Unit tests for the input resolver."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from unittest.mock import Mock, call

import pytest

from action_class.descriptors import InputConverter, InputDescriptor, InputType
from action_class.errors import (
    InputConversionFailure,
    InputValidationFailure,
    MissingRequiredInput,
)
from action_class.host import InputNotSupplied, InputOptions
from action_class.inputs import ResolvedInputs, resolve_inputs

DATE_CONVERTER = InputConverter(
    from_input=datetime.fromisoformat,
    to_input=lambda value: value.isoformat(),
)


def _inputs(values: dict[str, str]):
    return lambda name, options=None: values.get(name, "")


def test_resolves_each_kind(host: Mock) -> None:
    host.get_input.side_effect = _inputs(
        {
            "a": "foo",
            "d": "123",
            "e": "1984-02-22T13:59:00.000+00:00",
            "complex input-name": "bar",
        }
    )
    host.get_multiline_input.return_value = ["foo", "bar ", " baz"]
    host.get_boolean_input.side_effect = None
    host.get_boolean_input.return_value = True

    inputs = resolve_inputs(
        {
            "a": InputDescriptor(""),
            "b": InputDescriptor("", type=InputType.STRING_ARRAY, trim_whitespace=False),
            "c": InputDescriptor("", type=InputType.BOOLEAN),
            "d": InputDescriptor("", type=InputType.NUMBER),
            "e": InputDescriptor("", converter=DATE_CONVERTER),
            "defaulted": InputDescriptor("", type=InputType.STRING, default="default"),
            "complex input-name": InputDescriptor("", type="string"),
            "deprecated": InputDescriptor("", deprecation_message="deprecation message"),
        },
        host,
    )

    assert dict(inputs) == {
        "a": "foo",
        "b": ["foo", "bar ", " baz"],
        "c": True,
        "d": 123,
        "e": datetime.fromisoformat("1984-02-22T13:59:00.000+00:00"),
        "defaulted": "default",
        "complex input-name": "bar",
    }
    assert host.get_input.call_count == 6
    host.get_input.assert_any_call("a", InputOptions())
    host.get_multiline_input.assert_called_once_with("b", InputOptions(trim_whitespace=False))
    host.get_boolean_input.assert_called_once_with("c", InputOptions())
    host.warning.assert_not_called()


def test_absent_optional_input_is_omitted(host: Mock) -> None:
    inputs = resolve_inputs({"missing": InputDescriptor("")}, host)

    assert "missing" not in inputs
    assert len(inputs) == 0
    with pytest.raises(AttributeError):
        inputs.missing


def test_required_input_missing_fails(host: Mock) -> None:
    with pytest.raises(MissingRequiredInput) as excinfo:
        resolve_inputs({"token": InputDescriptor("", required=True)}, host)

    assert str(excinfo.value) == "Error while reading input 'token': Input is required: token"
    assert excinfo.value.name == "token"
    host.set_output.assert_not_called()
    host.save_state.assert_not_called()


def test_host_required_error_maps_to_missing_required_input(host: Mock) -> None:
    host.get_input.side_effect = InputNotSupplied("token")

    with pytest.raises(MissingRequiredInput):
        resolve_inputs({"token": InputDescriptor("", required=True)}, host)

    host.get_input.assert_called_once_with("token", InputOptions(required=True))


def test_default_substituted_when_absent(host: Mock) -> None:
    inputs = resolve_inputs(
        {
            "flag": InputDescriptor("", default=True),
            "count": InputDescriptor("", default=3),
            "names": InputDescriptor("", default=["x"]),
        },
        host,
    )

    assert inputs == {"flag": True, "count": 3, "names": ["x"]}
    # The kind follows the default when no type is declared.
    host.get_boolean_input.assert_called_once()
    host.get_multiline_input.assert_called_once()


def test_unrecognised_boolean_is_absent(host: Mock) -> None:
    inputs = resolve_inputs({"flag": InputDescriptor("", type=InputType.BOOLEAN)}, host)

    assert "flag" not in inputs


def test_non_numeric_number_is_nan(host: Mock) -> None:
    host.get_input.return_value = "abc"

    inputs = resolve_inputs({"n": InputDescriptor("", type=InputType.NUMBER)}, host)

    assert math.isnan(inputs["n"])


@pytest.mark.parametrize("raw", ["1_000", "inf", "infinity", "-inf", "nan", "1e", "0x", "12px"])
def test_python_only_number_syntax_is_nan(host: Mock, raw: str) -> None:
    host.get_input.return_value = raw

    inputs = resolve_inputs({"n": InputDescriptor("", type=InputType.NUMBER)}, host)

    assert math.isnan(inputs["n"])


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42.0),
        ("-1.5", -1.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("+3e2", 300.0),
        ("0x1F", 31.0),
        ("0b101", 5.0),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_number_syntax_accepted(host: Mock, raw: str, expected: float) -> None:
    host.get_input.return_value = raw

    inputs = resolve_inputs({"n": InputDescriptor("", type=InputType.NUMBER)}, host)

    assert inputs["n"] == expected


def test_converter_not_called_for_empty_input(host: Mock) -> None:
    from_input = Mock()
    converter = InputConverter(from_input=from_input, to_input=str)

    inputs = resolve_inputs({"x": InputDescriptor("", converter=converter)}, host)

    assert "x" not in inputs
    from_input.assert_not_called()


def test_converter_wins_over_type(host: Mock) -> None:
    host.get_input.return_value = "1984-02-22T13:59:00+00:00"

    inputs = resolve_inputs(
        {"when": InputDescriptor("", type=InputType.NUMBER, converter=DATE_CONVERTER)}, host
    )

    assert inputs.when == datetime.fromisoformat("1984-02-22T13:59:00+00:00")


def test_converter_parses_utc_designator(host: Mock) -> None:
    host.get_input.return_value = "1984-02-22T13:59:00.000Z"

    inputs = resolve_inputs({"when": InputDescriptor("", converter=DATE_CONVERTER)}, host)

    assert inputs.when == datetime(1984, 2, 22, 13, 59, tzinfo=timezone.utc)
    assert DATE_CONVERTER.to_input(inputs.when) == "1984-02-22T13:59:00+00:00"


def test_converter_error_is_wrapped(host: Mock) -> None:
    host.get_input.return_value = "not a date"

    with pytest.raises(InputConversionFailure) as excinfo:
        resolve_inputs({"when": InputDescriptor("", converter=DATE_CONVERTER)}, host)

    assert str(excinfo.value).startswith("Error while reading input 'when': ")
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert str(excinfo.value.__cause__) in str(excinfo.value)


def test_deprecated_input_warns_once_when_present(host: Mock) -> None:
    host.get_input.return_value = "foo"

    resolve_inputs({"old": InputDescriptor("", deprecation_message="use new")}, host)

    assert host.warning.call_args_list == [call("Input 'old' is deprecated: use new")]


def test_deprecated_input_silent_when_absent(host: Mock) -> None:
    resolve_inputs({"old": InputDescriptor("", deprecation_message="use new", default="x")}, host)

    host.warning.assert_not_called()


def test_validator_message_is_reported(host: Mock) -> None:
    host.get_input.return_value = "-1"
    descriptor = InputDescriptor(
        "",
        type=InputType.NUMBER,
        validate=lambda v: True if v > 0 else "Value must be greater than 0",
    )

    with pytest.raises(InputValidationFailure) as excinfo:
        resolve_inputs({"d": descriptor}, host)

    assert str(excinfo.value) == (
        "Error while reading input 'd': Input validation failed: Value must be greater than 0"
    )


def test_validator_false_reports_value(host: Mock) -> None:
    host.get_input.return_value = "2"
    descriptor = InputDescriptor("", type=InputType.NUMBER, validate=lambda v: v > 5)

    with pytest.raises(InputValidationFailure) as excinfo:
        resolve_inputs({"d": descriptor}, host)

    assert str(excinfo.value) == "Error while reading input 'd': Input validation failed: d = 2"


def test_validator_runs_on_default_but_not_on_omitted(host: Mock) -> None:
    validate = Mock(return_value=True)

    inputs = resolve_inputs(
        {
            "with_default": InputDescriptor("", default="x", validate=validate),
            "without": InputDescriptor("", validate=validate),
        },
        host,
    )

    assert inputs == {"with_default": "x"}
    validate.assert_called_once_with("x")


def test_validator_exception_is_wrapped(host: Mock) -> None:
    host.get_input.return_value = "foo"

    def boom(value: object) -> bool:
        raise RuntimeError("validator exploded")

    with pytest.raises(InputConversionFailure) as excinfo:
        resolve_inputs({"x": InputDescriptor("", validate=boom)}, host)

    assert str(excinfo.value) == "Error while reading input 'x': validator exploded"


def test_resolved_inputs_are_read_only() -> None:
    inputs = ResolvedInputs({"a": 1})

    with pytest.raises(AttributeError):
        inputs.a = 2  # type: ignore[misc]
    with pytest.raises(TypeError):
        inputs["a"] = 2  # type: ignore[index]
    assert inputs.a == 1
