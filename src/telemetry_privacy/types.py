"""Typed shapes of the telemetry payloads handled by the scrubbers.

All keys are optional (``total=False``): the capture layer may send any subset,
and scrubbers must treat a missing key as "nothing to do".
"""

from __future__ import annotations

from typing import Any, TypedDict, Union

# Tagged union walked by the recursive sanitizer: scalar | list | mapping
JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union[JSONScalar, list[Any], dict[str, Any]]


class Request(TypedDict, total=False):
    url: str
    method: str
    data: JSONValue
    headers: dict[str, str]
    query_string: str


class ExceptionValue(TypedDict, total=False):
    type: str
    value: str
    module: str
    stacktrace: dict[str, Any]


class ExceptionInfo(TypedDict, total=False):
    values: list[ExceptionValue]


class LogEntry(TypedDict, total=False):
    message: str
    formatted: str
    params: list[Any]


class User(TypedDict, total=False):
    id: str | int
    email: str
    username: str
    ip_address: str


class Event(TypedDict, total=False):
    event_id: str
    level: str
    message: str
    logentry: LogEntry
    request: Request
    exception: ExceptionInfo
    user: User
    breadcrumbs: dict[str, list[Breadcrumb]]


class Breadcrumb(TypedDict, total=False):
    type: str
    category: str
    message: str
    level: str
    timestamp: Any
    data: dict[str, Any]
