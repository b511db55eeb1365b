"""Tests for the generic validation machinery in core.validation."""

from typing import List, Optional

import pytest
from pydantic import BaseModel

from employee_api.app.core.validation import (
    ConfigurationError,
    Rule,
    ValidationFailure,
    ValidationPipeline,
    Validator,
    ValidatorRegistry,
    for_each,
    greater_than_or_equal,
    less_than_or_equal,
    must,
    must_async,
    not_empty,
    split_pascal_case,
)
from employee_api.app.schemas.employee import ApiModel


class Item(ApiModel):
    quantity: Optional[int] = None


class Order(ApiModel):
    customer_name: Optional[str] = None
    note: Optional[str] = None
    items: List[Item] = []


class SpecialOrder(Order):
    pass


class Plain(BaseModel):
    value: Optional[str] = None


def order_validator() -> Validator:
    return Validator(
        Order,
        [
            not_empty("customer_name"),
            not_empty("note"),
            for_each("items", Validator(Item, [greater_than_or_equal("quantity", 1)])),
        ],
    )


def test_split_pascal_case() -> None:
    assert split_pascal_case("FirstName") == "First Name"
    assert split_pascal_case("ZipCode") == "Zip Code"
    assert split_pascal_case("Address1") == "Address1"
    assert split_pascal_case("value") == "value"


def test_rule_on_unknown_field_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        Validator(Order, [not_empty("missing")])


def test_registry_rejects_duplicates() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    with pytest.raises(ConfigurationError):
        registry.register(Order, order_validator())


def test_registry_rejects_mismatched_type() -> None:
    registry = ValidatorRegistry()
    with pytest.raises(ConfigurationError):
        registry.register(SpecialOrder, order_validator())


def test_registry_resolves_exact_type_only() -> None:
    registry = ValidatorRegistry()
    validator = order_validator()
    registry.register(Order, validator)
    assert registry.resolve(Order) is validator
    assert registry.resolve(SpecialOrder) is None


def test_registry_require_missing_raises() -> None:
    with pytest.raises(ConfigurationError):
        ValidatorRegistry().require(Order)


@pytest.mark.asyncio
async def test_unregistered_payload_passes() -> None:
    pipeline = ValidationPipeline(ValidatorRegistry())
    assert await pipeline.validate(Order()) == {}


@pytest.mark.asyncio
async def test_all_rules_run_and_use_wire_names() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    pipeline = ValidationPipeline(registry)

    errors = await pipeline.validate(Order(customer_name="  ", items=[Item(quantity=2), Item(quantity=0)]))

    assert errors == {
        "CustomerName": ["'Customer Name' must not be empty."],
        "Note": ["'Note' must not be empty."],
        "Items[1].Quantity": ["'Quantity' must be greater than or equal to '1'."],
    }


@pytest.mark.asyncio
async def test_messages_for_one_field_keep_declaration_order() -> None:
    validator = Validator(
        Item,
        [
            greater_than_or_equal("quantity", 10),
            less_than_or_equal("quantity", 0),
            must("quantity", lambda value: value % 2 == 0, "'Quantity' must be even."),
        ],
    )
    errors = await validator.validate(Item(quantity=5))
    assert errors == {
        "Quantity": [
            "'Quantity' must be greater than or equal to '10'.",
            "'Quantity' must be less than or equal to '0'.",
            "'Quantity' must be even.",
        ]
    }


@pytest.mark.asyncio
async def test_must_async_receives_record_id() -> None:
    seen = []

    async def check(value, record_id) -> bool:
        seen.append((value, record_id))
        return record_id == 7

    validator = Validator(Plain, [must_async("value", check, "value rejected")])

    assert await validator.validate(Plain(value="x"), record_id=7) == {}
    assert await validator.validate(Plain(value="y"), record_id=8) == {"value": ["value rejected"]}
    assert seen == [("x", 7), ("y", 8)]


@pytest.mark.asyncio
async def test_ensure_valid_raises_with_report() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    pipeline = ValidationPipeline(registry)

    with pytest.raises(ValidationFailure) as excinfo:
        await pipeline.ensure_valid({"order": Order(note="n")})

    assert excinfo.value.errors == {"CustomerName": ["'Customer Name' must not be empty."]}


@pytest.mark.asyncio
async def test_ensure_valid_passes_silently() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    await ValidationPipeline(registry).ensure_valid({"order": Order(customer_name="Ann", note="n"), "item": None})


@pytest.mark.asyncio
async def test_validate_arguments_skips_none_and_stops_at_first_failure() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    registry.register(Item, Validator(Item, [greater_than_or_equal("quantity", 1)]))
    pipeline = ValidationPipeline(registry)

    errors = await pipeline.validate_arguments(
        {"missing": None, "item": Item(quantity=0), "order": Order()}
    )

    assert errors == {"Quantity": ["'Quantity' must be greater than or equal to '1'."]}
    assert await pipeline.validate_arguments({"item": Item(quantity=3), "other": None}) == {}


@pytest.mark.asyncio
async def test_ensure_valid_reports_first_failing_argument() -> None:
    registry = ValidatorRegistry()
    registry.register(Order, order_validator())
    registry.register(Item, Validator(Item, [greater_than_or_equal("quantity", 1)]))
    pipeline = ValidationPipeline(registry)

    with pytest.raises(ValidationFailure) as excinfo:
        await pipeline.ensure_valid({"item": Item(quantity=0), "order": Order()}, record_id=3)

    assert excinfo.value.errors == {"Quantity": ["'Quantity' must be greater than or equal to '1'."]}


def test_rule_base_class_is_abstract() -> None:
    with pytest.raises(TypeError):
        Rule()


@pytest.mark.asyncio
async def test_custom_message_with_doubled_braces() -> None:
    validator = Validator(Plain, [must("value", lambda value: False, "{label} must match {{pattern}}")])
    errors = await validator.validate(Plain(value="x"))
    assert errors == {"value": ["value must match {pattern}"]}
