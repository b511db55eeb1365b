"""
Request validation: rules, validators, a registry and the pipeline.

A ``Validator`` is bound to exactly one payload model and holds an
ordered list of rules.  Rules are built with the helpers at the bottom
of this module (``not_empty``, ``greater_than_or_equal``, ``must``,
``must_async``, ``for_each`` ...).  Every rule runs, in declaration
order, and each failure adds one message under the field's wire name,
so a single payload can report several fields at once::

    {"FirstName": ["'First Name' must not be empty."],
     "LastName": ["'Last Name' must not be empty."]}

Rules that depend on stored state receive the identity of the record
being changed as an explicit ``record_id`` argument; nothing is read
from the request.

``ValidatorRegistry`` maps a payload type to its validator and is
filled once at startup.  ``ValidationPipeline`` looks the validator up
by the payload's exact type and runs it; a type with no validator
passes.
"""

import inspect
import logging
import re
from abc import ABC, abstractmethod
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    Union,
)

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ErrorReport = Dict[str, List[str]]
Failure = Tuple[str, str]

Predicate = Callable[[Any], Union[bool, Awaitable[bool]]]
RecordPredicate = Callable[[Any, Optional[int]], Union[bool, Awaitable[bool]]]


class ConfigurationError(Exception):
    """Raised when validators are wired incorrectly.

    This is a programming error detected at startup (duplicate
    registration, a rule naming an unknown field, a missing validator
    that was required), never a condition reported to API clients.
    """


class ValidationFailure(Exception):
    """Raised when a payload fails validation.

    ``errors`` holds the field-indexed report.
    """

    def __init__(self, errors: ErrorReport) -> None:
        super().__init__(f"Validation failed for {', '.join(errors)}")
        self.errors = errors


def split_pascal_case(name: str) -> str:
    """Turn a wire name into a display label: ``FirstName`` -> ``First Name``."""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name)


class Rule(ABC):
    """Base class for rules attached to a validator."""

    field: str
    property_name: str

    def bind(self, payload_type: Type[BaseModel]) -> None:
        """Resolve the wire name of ``field`` on ``payload_type``."""
        model_field = payload_type.model_fields.get(self.field)
        if model_field is None:
            raise ConfigurationError(
                f"{payload_type.__name__} has no field {self.field!r}"
            )
        self.property_name = model_field.alias or self.field

    @abstractmethod
    async def check(self, payload: BaseModel, record_id: Optional[int]) -> List[Failure]:
        """Return ``(key, message)`` pairs for every failure."""


class PropertyRule(Rule):
    """A predicate over one field's value.

    When ``needs_record`` is true the predicate is called as
    ``predicate(value, record_id)``; otherwise as ``predicate(value)``.
    Either form may return a bool or an awaitable resolving to one.
    The message is formatted with ``str.format`` using ``label``,
    ``value`` and any extra ``params``; literal braces must be doubled
    (``"{{" and "}}"``).
    """

    def __init__(
        self,
        field: str,
        predicate: Union[Predicate, RecordPredicate],
        message: str,
        needs_record: bool = False,
        **params: Any,
    ) -> None:
        self.field = field
        self.property_name = field
        self.predicate = predicate
        self.message = message
        self.needs_record = needs_record
        self.params = params

    async def check(self, payload: BaseModel, record_id: Optional[int]) -> List[Failure]:
        value = getattr(payload, self.field)
        if self.needs_record:
            result = self.predicate(value, record_id)
        else:
            result = self.predicate(value)
        if inspect.isawaitable(result):
            result = await result
        if result:
            return []
        message = self.message.format(**self.message_params(value))
        return [(self.property_name, message)]

    def message_params(self, value: Any) -> Dict[str, Any]:
        return {"label": split_pascal_case(self.property_name), "value": value, **self.params}


class ChildRule(Rule):
    """Run a validator over every item of a list field.

    Failures are keyed by position, e.g. ``Benefits[1].Cost``.
    """

    def __init__(self, field: str, validator: "Validator") -> None:
        self.field = field
        self.property_name = field
        self.validator = validator

    async def check(self, payload: BaseModel, record_id: Optional[int]) -> List[Failure]:
        failures: List[Failure] = []
        for index, item in enumerate(getattr(payload, self.field) or []):
            report = await self.validator.validate(item, record_id)
            for key, messages in report.items():
                failures.extend(
                    (f"{self.property_name}[{index}].{key}", message) for message in messages
                )
        return failures


class Validator:
    """An ordered set of rules for one payload type."""

    def __init__(self, payload_type: Type[BaseModel], rules: Iterable[Rule] = ()) -> None:
        self.payload_type = payload_type
        self.rules: List[Rule] = []
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> "Validator":
        rule.bind(self.payload_type)
        self.rules.append(rule)
        return self

    async def validate(self, payload: BaseModel, record_id: Optional[int] = None) -> ErrorReport:
        """Run every rule and collect failures; an empty dict means valid."""
        errors: ErrorReport = {}
        for rule in self.rules:
            for key, message in await rule.check(payload, record_id):
                errors.setdefault(key, []).append(message)
        return errors


class ValidatorRegistry:
    """Maps payload types to validators.

    Lookups match the exact type only; a validator registered for a base
    class does not apply to its subclasses.  Registering a second
    validator for a type raises ``ConfigurationError``.
    """

    def __init__(self) -> None:
        self._validators: Dict[type, Validator] = {}

    def register(self, payload_type: type, validator: Validator) -> None:
        if validator.payload_type is not payload_type:
            raise ConfigurationError(
                f"Validator for {validator.payload_type.__name__} "
                f"cannot be registered for {payload_type.__name__}"
            )
        if payload_type in self._validators:
            raise ConfigurationError(
                f"A validator for {payload_type.__name__} is already registered"
            )
        self._validators[payload_type] = validator
        logger.debug("Registered validator for %s", payload_type.__name__)

    def resolve(self, payload_type: type) -> Optional[Validator]:
        return self._validators.get(payload_type)

    def require(self, payload_type: type) -> Validator:
        validator = self.resolve(payload_type)
        if validator is None:
            raise ConfigurationError(f"No validator registered for {payload_type.__name__}")
        return validator


class ValidationPipeline:
    """Validates inbound payloads before an operation runs."""

    def __init__(self, registry: ValidatorRegistry) -> None:
        self.registry = registry

    async def validate(self, payload: BaseModel, record_id: Optional[int] = None) -> ErrorReport:
        validator = self.registry.resolve(type(payload))
        if validator is None:
            return {}
        errors = await validator.validate(payload, record_id)
        if errors:
            logger.info(
                "Validation failed for %s: %s", type(payload).__name__, ", ".join(errors)
            )
        return errors

    async def validate_arguments(
        self, arguments: Mapping[str, Any], record_id: Optional[int] = None
    ) -> ErrorReport:
        """Validate each non-null argument in turn.

        Stops at the first argument whose report is non-empty and
        returns that report.
        """
        for value in arguments.values():
            if value is None:
                continue
            errors = await self.validate(value, record_id)
            if errors:
                return errors
        return {}

    async def ensure_valid(
        self, arguments: Mapping[str, Any], record_id: Optional[int] = None
    ) -> None:
        """Raise ``ValidationFailure`` unless every argument is valid.

        ``arguments`` maps the parameter names of an operation to the
        values it is about to be called with.
        """
        errors = await self.validate_arguments(arguments, record_id)
        if errors:
            raise ValidationFailure(errors)


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def not_empty(field: str, message: str = "'{label}' must not be empty.") -> PropertyRule:
    """Fail on ``None``, blank strings and empty collections."""
    return PropertyRule(field, lambda value: not _is_empty(value), message)


def greater_than_or_equal(
    field: str,
    bound: Any,
    message: str = "'{label}' must be greater than or equal to '{bound}'.",
) -> PropertyRule:
    """Fail when the value is below ``bound``; ``None`` passes."""
    return PropertyRule(field, lambda value: value is None or value >= bound, message, bound=bound)


def less_than_or_equal(
    field: str,
    bound: Any,
    message: str = "'{label}' must be less than or equal to '{bound}'.",
) -> PropertyRule:
    """Fail when the value is above ``bound``; ``None`` passes."""
    return PropertyRule(field, lambda value: value is None or value <= bound, message, bound=bound)


def must(field: str, predicate: Predicate, message: str) -> PropertyRule:
    """Custom rule over the field value alone."""
    return PropertyRule(field, predicate, message)


def must_async(field: str, predicate: RecordPredicate, message: str) -> PropertyRule:
    """Custom rule that also receives the identity of the record being changed."""
    return PropertyRule(field, predicate, message, needs_record=True)


def for_each(field: str, validator: Validator) -> ChildRule:
    return ChildRule(field, validator)
