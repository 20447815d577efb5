"""Unit tests for the transport factory example."""

import pytest

from creational.demo.transport import (
    Airplane,
    DeliveryMode,
    Ship,
    Transport,
    Truck,
    build_transport_factory,
)
from creational.exceptions import NotFoundError


class TestTransportFactory:
    """Tests for build_transport_factory."""

    @pytest.mark.parametrize(
        "mode,expected",
        [("road", Truck), ("sea", Ship), ("air", Airplane)],
    )
    def test_create_by_mode(self, mode, expected):
        """Test each mode yields the matching transport."""
        factory = build_transport_factory()
        transport = factory.create(mode)
        assert isinstance(transport, expected)
        assert isinstance(transport, Transport)

    def test_enum_member_as_key(self):
        """Test DeliveryMode members work as discriminators."""
        factory = build_transport_factory()
        assert isinstance(factory.create(DeliveryMode.SEA), Ship)

    def test_callers_only_use_capability(self):
        """Test every product can deliver."""
        factory = build_transport_factory()
        for mode in factory.keys():
            assert "grain" in factory.create(mode).deliver("grain")

    def test_arguments_forwarded(self):
        """Test creator arguments reach the transport."""
        factory = build_transport_factory()
        assert factory.create("road", capacity=8).deliver("milk") == "Truck delivers milk by road (8t)"

    def test_unknown_mode(self):
        """Test unsupported modes fail with NotFoundError."""
        factory = build_transport_factory()
        with pytest.raises(NotFoundError, match="delivery mode 'rail'"):
            factory.create("rail")

    def test_invalid_capacity(self):
        """Test transport constructors validate their input."""
        with pytest.raises(ValueError):
            build_transport_factory().create("air", capacity=0)
