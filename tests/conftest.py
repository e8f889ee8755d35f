"""Pytest configuration and fixtures for telemetry-privacy tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def sample_event():
    """Create a sample event carrying every kind of sensitive data."""

    def _create_event(
        message: str | None = "Error for user test@example.com",
        data: object = None,
        exception_value: str | None = 'Failed to save message: "Help me stay sober"',
        user: dict | None = None,
    ) -> dict:
        event: dict = {"event_id": "abc123", "level": "error"}
        if message is not None:
            event["message"] = message
        event["request"] = {
            "url": "https://app.example.com/api/messages",
            "method": "POST",
            "data": data
            if data is not None
            else {"message": "Sensitive recovery message", "content": "Task description", "user_id": "123"},
        }
        if exception_value is not None:
            event["exception"] = {"values": [{"type": "Error", "value": exception_value}]}
        event["user"] = (
            user
            if user is not None
            else {"id": "user-123", "email": "test@example.com", "username": "testuser", "ip_address": "192.168.1.1"}
        )
        return event

    return _create_event


@pytest.fixture
def sample_breadcrumb():
    """Create a sample breadcrumb."""

    def _create_crumb(category: str = "http", data: dict | None = None) -> dict:
        if data is None and category == "http":
            data = {
                "url": "https://project.supabase.co/rest/v1/messages?select=*",
                "method": "GET",
                "status_code": 200,
            }
        return {"type": category, "category": category, "level": "info", "data": data}

    return _create_crumb


@pytest.fixture
def dump_file(tmp_path: Path):
    """Write a dump to a temporary JSON file."""

    def _write(data: object, name: str = "events.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write
