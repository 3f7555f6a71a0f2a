"""
Unit tests for BufferScope.
"""

import numpy as np
import pytest

from docrectify.detection.buffers import BufferScope


class TestBufferScope:
    """Test buffer ownership and release on every exit path."""

    def test_hold_returns_buffer(self):
        scope = BufferScope("test")
        buffer = np.zeros((4, 4), dtype=np.uint8)

        assert scope.hold("gray", buffer) is buffer
        assert "gray" in scope
        assert len(scope) == 1

    def test_hold_replaces_same_key(self):
        scope = BufferScope("test")
        scope.hold("edges", np.zeros(1))
        scope.hold("edges", np.ones(1))

        assert len(scope) == 1

    def test_released_on_normal_exit(self):
        with BufferScope("test") as scope:
            scope.hold("a", np.zeros(1))
            scope.hold("b", np.zeros(1))
            assert len(scope) == 2

        assert len(scope) == 0

    def test_released_on_exception(self):
        """Test that buffers are dropped and the exception propagates."""
        with pytest.raises(RuntimeError, match="boom"):
            with BufferScope("test") as scope:
                scope.hold("a", np.zeros(1))
                raise RuntimeError("boom")

        assert len(scope) == 0
        assert "a" not in scope

    def test_released_on_early_return(self):
        def run():
            with BufferScope("test") as scope:
                scope.hold("a", np.zeros(1))
                return scope

        assert len(run()) == 0
