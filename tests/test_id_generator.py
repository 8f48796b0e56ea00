"""Tests for the ID generator utilities."""

import uuid

from src.dmx.utils.id_generator import generate_request_id, is_request_id


class TestGenerateRequestId:
    """Test suite for generate_request_id function."""

    def test_uuid4_format(self):
        """Test that IDs are UUID4 strings."""
        result = generate_request_id()

        assert isinstance(result, str)
        assert uuid.UUID(result).version == 4
        assert len(result) == 36

    def test_uniqueness(self):
        """Test that generated IDs are unique."""
        ids = {generate_request_id() for _ in range(100)}
        assert len(ids) == 100


class TestIsRequestId:
    """Test suite for is_request_id function."""

    def test_generated_id(self):
        """Test that generated IDs are recognised."""
        assert is_request_id(generate_request_id()) is True

    def test_other_uuid_version(self):
        """Test that non-v4 UUIDs are rejected."""
        assert is_request_id(str(uuid.uuid1())) is False

    def test_invalid_values(self):
        """Test that non-UUID values are rejected."""
        assert is_request_id("") is False
        assert is_request_id("not-a-uuid") is False
        assert is_request_id(None) is False
        assert is_request_id(42) is False
