# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Tests for lazy import patterns in __init__.py modules.

These tests cover the __getattr__ lazy import of the Redis rate gate, which
needs the optional redis dependency.
"""

import pytest


class TestTopLevelLazyImports:
    """Test lazy imports from the top-level apiwrap module."""

    def test_lazy_redis_gate_import(self):
        """Cover __getattr__ lazy import of RedisRateGate from top-level module."""
        pytest.importorskip("redis")
        from apiwrap import RedisRateGate
        from apiwrap.throttle.redis import RedisRateGate as Direct

        assert RedisRateGate is Direct

    def test_unknown_attribute_error_message_format(self):
        """Verify the error message format for unknown attributes."""
        import apiwrap

        with pytest.raises(
            AttributeError,
            match=r"module 'apiwrap' has no attribute 'FakeClass'",
        ):
            _ = apiwrap.FakeClass


class TestThrottleLazyImports:
    """Test lazy imports from the throttle subpackage."""

    def test_lazy_redis_gate_import(self):
        pytest.importorskip("redis")
        from apiwrap.throttle import RedisRateGate

        assert hasattr(RedisRateGate, "acquire")

    def test_unknown_attribute_raises_attribute_error(self):
        import apiwrap.throttle

        with pytest.raises(AttributeError, match=r"has no attribute"):
            _ = apiwrap.throttle.NonExistentAttribute

    def test_all_exports_importable(self):
        """Every eagerly exported name resolves without the redis extra."""
        import apiwrap

        for name in apiwrap.__all__:
            if name != "RedisRateGate":
                assert getattr(apiwrap, name) is not None
