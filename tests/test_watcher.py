"""Tests for the single-slot filesystem event channel"""

from gitten.services.watcher import WatchEvent, WorkspaceWatcher


class TestWatchEvent:
    """Test event batches."""

    def test_first_path(self):
        assert WatchEvent(("/ws/a", "/ws/b")).first_path == "/ws/a"

    def test_empty_batch(self):
        assert WatchEvent(()).first_path is None


class TestChannel:
    """Test publishing and polling without the background thread."""

    def test_poll_empty(self, temp_dir):
        assert WorkspaceWatcher(str(temp_dir)).poll() is None

    def test_publish_then_poll(self, temp_dir):
        watcher = WorkspaceWatcher(str(temp_dir))
        event = WatchEvent(("/ws/a",))

        assert watcher.publish(event) is True
        assert watcher.poll() == event
        assert watcher.poll() is None

    def test_channel_holds_one_event(self, temp_dir):
        watcher = WorkspaceWatcher(str(temp_dir))
        watcher.publish(WatchEvent(("/ws/a",)))

        assert watcher.events.full()

    def test_publish_gives_up_after_stop(self, temp_dir):
        watcher = WorkspaceWatcher(str(temp_dir))
        watcher.publish(WatchEvent(("/ws/a",)))
        watcher.stop()

        assert watcher.publish(WatchEvent(("/ws/b",))) is False
        assert watcher.poll() == WatchEvent(("/ws/a",))

    def test_start_and_stop(self, temp_dir):
        watcher = WorkspaceWatcher(str(temp_dir))
        watcher.start()
        assert watcher.running

        watcher.stop()
        assert not watcher.running
