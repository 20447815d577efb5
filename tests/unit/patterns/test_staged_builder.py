"""Unit tests for the generic StagedBuilder."""

from typing import Dict, FrozenSet, List, Optional, Tuple

import pytest
from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from creational.exceptions import (
    BuilderConsumedError,
    FieldValidationError,
    IncompleteStateError,
)
from creational.patterns.builder import StagedBuilder


class Ticket(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: str
    seat: int
    price: float = Field(default=0.0, ge=0)
    note: str = ""


class MutableTicket(BaseModel):
    event: str


class TaggedTicket(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: str
    tags: List[str] = []


class ImmutableCollectionsTicket(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: str
    tags: Tuple[str, ...] = ()
    zones: FrozenSet[str] = frozenset()
    note: Optional[str] = None


def positive(value):
    return value > 0


class TestStagedBuilderInit:
    """Tests for StagedBuilder construction."""

    def test_requires_product_type(self):
        """Test a builder without product type is rejected."""
        with pytest.raises(TypeError):
            StagedBuilder()

    def test_rejects_mutable_product(self):
        """Test the product model must be frozen."""
        with pytest.raises(TypeError, match="frozen"):
            StagedBuilder(MutableTicket)

    def test_rejects_mutable_container_field(self):
        """Test list fields are rejected since they stay mutable on frozen models."""
        with pytest.raises(TypeError, match="tags"):
            StagedBuilder(TaggedTicket)

    @pytest.mark.parametrize(
        "annotation",
        [dict, Dict[str, int], Optional[List[int]], Tuple[List[int], ...], set, bytearray],
    )
    def test_rejects_nested_mutable_containers(self, annotation):
        """Test mutable containers are found inside Optional and tuple arguments."""
        product = create_model(
            "Nested",
            __config__=ConfigDict(frozen=True),
            payload=(annotation, None),
        )
        with pytest.raises(TypeError, match="mutable containers"):
            StagedBuilder(product)

    def test_accepts_immutable_collections(self):
        """Test tuple and frozenset fields are allowed."""
        ticket = StagedBuilder(ImmutableCollectionsTicket).set("event", "Gig").set("tags", ("a",)).build()
        assert ticket.tags == ("a",)
        assert not hasattr(ticket.tags, "append")
        assert ticket.zones == frozenset()

    def test_rejects_validator_for_unknown_field(self):
        """Test validators must name real fields."""
        with pytest.raises(TypeError, match="unknown"):
            StagedBuilder(Ticket, validators={"row": positive})

    def test_required_fields_in_declaration_order(self):
        """Test required fields are the ones without defaults."""
        builder = StagedBuilder(Ticket)
        assert builder.required_fields() == ["event", "seat"]

    def test_reusable_default_from_settings(self, monkeypatch):
        """Test reusable comes from CREATIONAL_BUILDER_REUSABLE."""
        assert StagedBuilder(Ticket).reusable is True

        monkeypatch.setenv("CREATIONAL_BUILDER_REUSABLE", "false")
        from creational.config import reset_settings
        reset_settings()
        assert StagedBuilder(Ticket).reusable is False


class TestSet:
    """Tests for set and related accessors."""

    def test_set_returns_builder(self):
        """Test setters chain."""
        builder = StagedBuilder(Ticket)
        assert builder.set("event", "Concert") is builder

    def test_unknown_field_rejected(self):
        """Test setting a field the product does not have fails."""
        builder = StagedBuilder(Ticket)
        with pytest.raises(FieldValidationError) as exc_info:
            builder.set("row", 3)
        assert exc_info.value.field == "row"

    def test_validator_false_rejects_value(self):
        """Test a validator returning False rejects the value."""
        builder = StagedBuilder(Ticket, validators={"seat": positive})
        with pytest.raises(FieldValidationError) as exc_info:
            builder.set("seat", 0)
        assert exc_info.value.field == "seat"
        assert builder.is_set("seat") is False

    def test_validator_value_error_rejects_value(self):
        """Test a validator raising ValueError rejects the value with its message."""

        def no_vip(value):
            if value == "VIP":
                raise ValueError("VIP events are sold separately")
            return True

        builder = StagedBuilder(Ticket, validators={"event": no_vip})
        with pytest.raises(FieldValidationError, match="sold separately"):
            builder.set("event", "VIP")

    @pytest.mark.parametrize("value", ["", 0, 0.0, [], False])
    def test_falsy_validator_result_rejects_value(self, value):
        """Test any falsy non-None validator result rejects the value."""
        builder = StagedBuilder(Ticket, validators={"note": lambda v: value})
        with pytest.raises(FieldValidationError) as exc_info:
            builder.set("note", "anything")
        assert exc_info.value.reason == "rejected by validator"
        assert builder.is_set("note") is False

    def test_stripped_blank_string_rejected(self):
        """Test a validator returning the stripped string rejects blanks."""
        builder = StagedBuilder(Ticket, validators={"event": lambda v: v.strip()})
        with pytest.raises(FieldValidationError):
            builder.set("event", "   ")
        assert builder.set("event", " Opera ").is_set("event")

    def test_validator_returning_none_accepts_value(self):
        """Test raise-only validators that return None still pass valid values."""

        def check_seat(value):
            if value < 1:
                raise ValueError("seat numbers start at 1")

        builder = StagedBuilder(Ticket, validators={"seat": check_seat})
        assert builder.set("seat", 3).values()["seat"] == 3
        with pytest.raises(FieldValidationError, match="start at 1"):
            builder.set("seat", 0)

    def test_rejected_value_keeps_previous_value(self):
        """Test the last accepted value survives a rejected set."""
        builder = StagedBuilder(Ticket, validators={"seat": positive})
        builder.set("seat", 5)
        with pytest.raises(FieldValidationError):
            builder.set("seat", -1)
        assert builder.values()["seat"] == 5

    def test_values_returns_copy(self):
        """Test values() cannot mutate builder state."""
        builder = StagedBuilder(Ticket).set("event", "Play")
        builder.values()["event"] = "Other"
        assert builder.values()["event"] == "Play"

    def test_unset(self):
        """Test unset removes a value."""
        builder = StagedBuilder(Ticket).set("event", "Play").unset("event")
        assert builder.missing_fields() == ["event", "seat"]

    def test_setters_in_any_order(self):
        """Test no ordering constraint between setters."""
        first = StagedBuilder(Ticket).set("seat", 1).set("event", "A").build()
        second = StagedBuilder(Ticket).set("event", "A").set("seat", 1).build()
        assert first == second


class TestBuild:
    """Tests for build method."""

    def test_missing_required_field(self):
        """Test build fails naming every missing field."""
        builder = StagedBuilder(Ticket).set("price", 10.0)
        with pytest.raises(IncompleteStateError) as exc_info:
            builder.build()

        assert exc_info.value.missing_fields == ["event", "seat"]
        assert "'event'" in str(exc_info.value)
        assert exc_info.value.details["product"] == "Ticket"

    def test_build_success_uses_defaults(self):
        """Test optional fields fall back to model defaults."""
        ticket = StagedBuilder(Ticket).set("event", "Opera").set("seat", 12).build()
        assert ticket == Ticket(event="Opera", seat=12, price=0.0, note="")

    def test_product_is_immutable(self):
        """Test the built product rejects assignment."""
        ticket = StagedBuilder(Ticket).set("event", "Opera").set("seat", 12).build()
        with pytest.raises(ValidationError):
            ticket.seat = 13

    def test_model_validation_reported_as_field_error(self):
        """Test pydantic constraint failures surface as FieldValidationError."""
        builder = StagedBuilder(Ticket).set("event", "Opera").set("seat", 1).set("price", -5)
        with pytest.raises(FieldValidationError) as exc_info:
            builder.build()
        assert exc_info.value.field == "price"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_model_type_error_reported_as_field_error(self):
        """Test an uncoercible value fails at build time."""
        builder = StagedBuilder(Ticket).set("event", "Opera").set("seat", "front row")
        with pytest.raises(FieldValidationError) as exc_info:
            builder.build()
        assert exc_info.value.field == "seat"

    def test_reusable_builder_builds_repeatedly(self):
        """Test reusable builders can produce several products."""
        builder = StagedBuilder(Ticket, reusable=True).set("event", "Opera").set("seat", 1)
        first = builder.build()
        second = builder.set("seat", 2).build()

        assert first.seat == 1
        assert second.seat == 2

    def test_single_use_builder_is_consumed(self):
        """Test single-use builders refuse any use after build."""
        builder = StagedBuilder(Ticket, reusable=False).set("event", "Opera").set("seat", 1)
        builder.build()

        with pytest.raises(BuilderConsumedError):
            builder.build()
        with pytest.raises(BuilderConsumedError):
            builder.set("seat", 2)

    def test_failed_build_does_not_consume(self):
        """Test an incomplete single-use builder can still be completed."""
        builder = StagedBuilder(Ticket, reusable=False).set("event", "Opera")
        with pytest.raises(IncompleteStateError):
            builder.build()

        ticket = builder.set("seat", 4).build()
        assert ticket.seat == 4


class TestSubclassedBuilder:
    """Tests for builders declaring product_type and validators on the class."""

    class TicketBuilder(StagedBuilder[Ticket]):
        product_type = Ticket
        validators = {"seat": positive}

        def seat(self, number: int) -> "TestSubclassedBuilder.TicketBuilder":
            return self.set("seat", number)

    def test_class_attributes_used(self):
        """Test class-level product type and validators apply."""
        builder = self.TicketBuilder()
        with pytest.raises(FieldValidationError):
            builder.seat(0)

    def test_instance_validators_merge_over_class(self):
        """Test per-instance validators override class validators."""
        builder = self.TicketBuilder(validators={"seat": lambda v: v > 10})
        with pytest.raises(FieldValidationError):
            builder.seat(5)
        assert builder.seat(11).is_set("seat")

    def test_repr(self):
        """Test string representation shows set and missing fields."""
        builder = self.TicketBuilder().seat(3)
        repr_str = repr(builder)
        assert "product=Ticket" in repr_str
        assert "missing=['event']" in repr_str
