"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def users_json():
    """Array of objects sharing the same keys."""
    return [
        {"firstName": "John", "lastName": "Doe"},
        {"firstName": "Jane", "lastName": "Smith"},
    ]


@pytest.fixture
def nested_json():
    """Objects nested inside an array."""
    return [
        {"address": {"streetAddress": "1 Main St", "city": "NY"}},
    ]


@pytest.fixture
def sample_list_json():
    """Typical API list response."""
    return [
        {"id": 1, "name": "Item 1", "value": 100, "tags": ["a", "b"]},
        {"id": 2, "name": "Item 2", "value": 200, "tags": []},
        {"id": 3, "name": "Item 3", "value": 300, "tags": ["c"]},
    ]


@pytest.fixture
def sample_mixed_json():
    """Object root with nested objects, arrays and scalars of every kind."""
    return {
        "metadata": {
            "version": "1.0",
            "created": "2024-01-01"
        },
        "data": [
            {"type": "A", "values": [1, 2, 3], "active": True},
            {"type": "B", "values": [4.5, None], "active": False},
        ],
        "config": {
            "enabled": True,
            "settings": {
                "timeout": 30,
                "retries": 3
            }
        },
        "x": "single character key",
    }


@pytest.fixture
def large_users_json():
    """Larger list response for size and batching tests."""
    return [
        {
            "userId": i,
            "userName": f"user{i}",
            "emailAddress": f"user{i}@example.com",
            "isActive": i % 2 == 0,
            "profileSettings": {"preferredTheme": "dark", "notificationsEnabled": True},
        }
        for i in range(250)
    ]


@pytest.fixture
def json_file(temp_dir):
    """Write a value to a JSON file and return its path."""
    def write(value, name="input.json"):
        path = temp_dir / name
        path.write_text(json.dumps(value), encoding="utf-8")
        return path
    return write
