"""
Tests pour ProgressChannel et CancellationToken.
"""

from shadowcrawler.services.progress import (
    CancellationToken,
    IndexingProgress,
    ProgressChannel,
    StorageProgress,
)


class TestProgressChannel:
    """Tests de la liste d'observateurs."""

    def test_all_subscribers_receive_events(self):
        channel = ProgressChannel()
        first, second = [], []
        channel.subscribe(first.append)
        channel.subscribe(second.append)

        event = IndexingProgress(indexed_count=1, current_file="/v/a.mp4")
        channel.emit(event)

        assert first == [event]
        assert second == [event]

    def test_unsubscribe_callable(self):
        channel = ProgressChannel()
        received = []
        unsubscribe = channel.subscribe(received.append)

        unsubscribe()
        channel.emit(StorageProgress(current_path="/v", files_processed=1, total_size=1))

        assert received == []
        assert channel.subscriber_count == 0

    def test_unsubscribe_unknown_is_noop(self):
        channel = ProgressChannel()
        channel.unsubscribe(print)

        assert channel.subscriber_count == 0

    def test_failing_subscriber_isolated(self):
        """Une exception d'un abonne n'empeche pas les suivants d'etre notifies."""
        channel = ProgressChannel()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        channel.subscribe(broken)
        channel.subscribe(received.append)
        channel.emit(IndexingProgress(indexed_count=3, is_complete=True))

        assert len(received) == 1

    def test_subscriber_may_unsubscribe_during_emit(self):
        channel = ProgressChannel()
        calls = []

        def once(event):
            calls.append(event)
            unsubscribe()

        unsubscribe = channel.subscribe(once)
        channel.emit(IndexingProgress(indexed_count=1))
        channel.emit(IndexingProgress(indexed_count=2))

        assert len(calls) == 1


class TestCancellationToken:
    def test_cancel(self):
        token = CancellationToken()
        assert token.is_cancelled is False

        token.cancel()

        assert token.is_cancelled is True
