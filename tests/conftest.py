"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from minipack import Array, Int, Map, Str


@pytest.fixture
def scenario_value() -> Map:
    """Small nested map used across the suite."""
    return Map({"a": Int(1), "b": Array([Int(-1), Str("x")])})


@pytest.fixture
def scenario_bytes() -> bytes:
    """Wire form of scenario_value."""
    return bytes.fromhex("82 a1 61 01 a1 62 92 ff a1 78")
