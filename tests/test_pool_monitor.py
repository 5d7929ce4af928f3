from dlmm_terminal.errors import RemoteFetchError, NotificationError
from dlmm_terminal.models import PoolInfo
from dlmm_terminal.pool_monitor import PoolWatcher


class ScriptedDiscovery:
    """Returns one scripted snapshot per discover() call"""

    def __init__(self, *snapshots):
        self.snapshots = list(snapshots)
        self.calls = []

    def discover(self, limit=50, min_tvl=0, min_apr=0):
        self.calls.append((limit, min_tvl, min_apr))
        snapshot = self.snapshots.pop(0)
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot


class FakeNotifier:
    def __init__(self, error=None):
        self.messages = []
        self.error = error

    def send_markdown_alert(self, text):
        if self.error:
            raise self.error
        self.messages.append(text)
        return 1


A = PoolInfo(address="A", name="SOL-USDC", tvl_usd=10)
B = PoolInfo(address="B", name="JUP-USDC", tvl_usd=20)
C = PoolInfo(address="C", name="BONK-SOL", tvl_usd=30)


def test_first_cycle_only_seeds():
    watcher = PoolWatcher(ScriptedDiscovery([A, B]))
    pools, new_pools = watcher.check_once()
    assert pools == [A, B]
    assert new_pools == []
    assert watcher.known_addresses == {"A", "B"}


def test_new_pools_detected_and_notified():
    notifier = FakeNotifier()
    updates = []
    sleeps = []
    watcher = PoolWatcher(
        ScriptedDiscovery([A], [A, B], [B, C]),
        interval=7, limit=10, min_tvl=5,
        notifier=notifier,
        on_update=lambda pools, new, notified: updates.append(([p.address for p in new], notified)),
        sleep=sleeps.append,
    )
    watcher.run(max_cycles=3)

    assert updates == [([], False), (["B"], True), (["C"], True)]
    assert len(notifier.messages) == 2
    assert "JUP\\-USDC" in notifier.messages[0]
    assert sleeps == [7, 7]
    assert watcher.discovery.calls[0] == (10, 5, 0)


def test_failed_cycle_is_skipped():
    updates = []
    watcher = PoolWatcher(
        ScriptedDiscovery([A], RemoteFetchError(502, "https://dlmm.test/pair/all"), [A, C]),
        on_update=lambda pools, new, notified: updates.append([p.address for p in new]),
        sleep=lambda seconds: None,
    )
    watcher.run(max_cycles=3)
    assert watcher.cycles == 3
    assert updates == [[], ["C"]]


def test_notification_failure_does_not_stop_watch():
    notifier = FakeNotifier(error=NotificationError(400, {"ok": False}))
    watcher = PoolWatcher(ScriptedDiscovery([A], [A, B]), notifier=notifier, sleep=lambda seconds: None)
    watcher.run(max_cycles=2)
    assert watcher.cycles == 2
    assert watcher.known_addresses == {"A", "B"}


def test_pools_without_address_are_never_new():
    blank = PoolInfo()
    watcher = PoolWatcher(ScriptedDiscovery([A], [A, blank]))
    watcher.check_once()
    _, new_pools = watcher.check_once()
    assert new_pools == []
