"""Action Class.

Write GitHub Actions as Python classes:
- typed inputs resolved from the runner's string-only inputs
- outputs written to the runner as soon as they are assigned
- pre/main/post hooks, with the current phase persisted between invocations
"""

__version__ = "0.1.0"

from action_class.action import Action, action
from action_class.builder import ActionBuilder, action_builder
from action_class.config import ActionSettings
from action_class.descriptors import (
    ActionDescriptor,
    Branding,
    InputConverter,
    InputDescriptor,
    InputType,
    OutputDescriptor,
    OutputType,
)
from action_class.errors import (
    ActionError,
    InputConversionFailure,
    InputError,
    InputValidationFailure,
    MissingRequiredInput,
    OutputConversionFailure,
    UnknownPhaseState,
    UnsupportedPhaseTransition,
    UserHookFailure,
)
from action_class.host import ActionsHost, Host, InputOptions
from action_class.inputs import ResolvedInputs
from action_class.metadata import ActionInfo
from action_class.outputs import Outputs
from action_class.phases import Phase
from action_class.runner import run, run_action

__all__ = [
    "__version__",
    "Action",
    "ActionBuilder",
    "ActionDescriptor",
    "ActionError",
    "ActionInfo",
    "ActionSettings",
    "ActionsHost",
    "Branding",
    "Host",
    "InputConversionFailure",
    "InputConverter",
    "InputDescriptor",
    "InputError",
    "InputOptions",
    "InputType",
    "InputValidationFailure",
    "MissingRequiredInput",
    "OutputConversionFailure",
    "OutputDescriptor",
    "OutputType",
    "Outputs",
    "Phase",
    "ResolvedInputs",
    "UnknownPhaseState",
    "UnsupportedPhaseTransition",
    "UserHookFailure",
    "action",
    "action_builder",
    "run",
    "run_action",
]
