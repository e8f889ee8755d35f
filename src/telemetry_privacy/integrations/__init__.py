"""Integrations with telemetry SDKs.

Requires the 'sentry' optional dependency for init_sentry(): pip install telemetry-privacy[sentry]
"""

from __future__ import annotations
