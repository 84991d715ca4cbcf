"""Tests for CancellationToken."""

from unittest.mock import Mock

from wwsync.core.cancellation import CancellationToken


class TestCancellationToken:

    def test_initial_state(self):
        assert not CancellationToken().is_cancelled

    def test_callbacks_run_once(self):
        token = CancellationToken()
        callback = Mock()
        token.register(callback)

        token.cancel()
        token.cancel()

        assert token.is_cancelled
        callback.assert_called_once_with()

    def test_register_after_cancel_runs_immediately(self):
        token = CancellationToken()
        token.cancel()
        callback = Mock()
        token.register(callback)
        callback.assert_called_once_with()

    def test_detach(self):
        token = CancellationToken()
        callback = Mock()
        detach = token.register(callback)
        detach()
        token.cancel()
        callback.assert_not_called()

    def test_failing_callback_does_not_block_others(self):
        token = CancellationToken()
        second = Mock()
        token.register(Mock(side_effect=RuntimeError("boom")))
        token.register(second)
        token.cancel()
        second.assert_called_once_with()

    def test_wait(self):
        token = CancellationToken()
        assert token.wait(0.01) is False
        token.cancel()
        assert token.wait(0.01) is True
