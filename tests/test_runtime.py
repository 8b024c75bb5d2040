import re

import pytest

from sniffkit.notifications import (
    BytesNotification,
    BytesThresholdExceeded,
    FavoriteNotification,
    FavoriteTransmitted,
    Notifications,
    PacketsNotification,
    PacketsThresholdExceeded,
    Sound,
)
from sniffkit.runtime import RunTimeData, notify_and_log
from sniffkit.traffic import Asn, DataInfo, DataInfoHost, Host, InfoTraffic

_TIME = re.compile(r"\d\d:\d\d:\d\d")


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, sound, volume):
        self.calls.append((sound, volume))


def _busy_runtime():
    return RunTimeData(
        tot_sent_packets=7,
        tot_received_packets=5,
        tot_sent_packets_prev=2,
        tot_received_packets_prev=1,
        tot_sent_bytes=9000,
        tot_received_bytes=6000,
        tot_sent_bytes_prev=1000,
        tot_received_bytes_prev=500,
    )


def _traffic_with_favorite():
    host = Host(domain="example.com", asn=Asn(number=64500, name="EXAMPLE-AS"), country="IT")
    info = InfoTraffic()
    info.hosts[host] = DataInfoHost(
        data_info=DataInfo(incoming_packets=4, outgoing_packets=2), is_favorite=True
    )
    info.favorite_hosts.add(host)
    info.favorites_last_interval.add(host)
    return info, host


def test_nothing_enabled_emits_nothing():
    runtime = _busy_runtime()
    recorder = _Recorder()
    info, _ = _traffic_with_favorite()
    emitted = notify_and_log(runtime, Notifications(), info, recorder)
    assert emitted == 0
    assert list(runtime.logged_notifications) == []
    assert recorder.calls == []


def test_packets_threshold_exceeded_is_logged_with_sound():
    runtime = _busy_runtime()
    recorder = _Recorder()
    notifications = Notifications(packets_notification=PacketsNotification.from_str("3"))
    emitted = notify_and_log(runtime, notifications, InfoTraffic(), recorder)
    assert emitted == len(runtime.logged_notifications)
    entry = runtime.logged_notifications[0]
    assert isinstance(entry, PacketsThresholdExceeded)
    assert entry.incoming == 5 - 1
    assert entry.outgoing == 7 - 2
    assert entry.threshold == notifications.packets_notification.previous_threshold
    assert _TIME.fullmatch(entry.timestamp)
    assert recorder.calls == [(Sound.GULP, notifications.volume)]


def test_packets_equal_to_threshold_is_not_logged():
    runtime = _busy_runtime()
    total = (7 - 2) + (5 - 1)
    notifications = Notifications(
        packets_notification=PacketsNotification.from_str(str(total))
    )
    emitted = notify_and_log(runtime, notifications, InfoTraffic(), _Recorder())
    assert list(runtime.logged_notifications) == []
    assert emitted == len(runtime.logged_notifications)


def test_only_first_sound_is_played():
    runtime = _busy_runtime()
    recorder = _Recorder()
    notifications = Notifications(
        packets_notification=PacketsNotification.from_str("3"),
        bytes_notification=BytesNotification.from_str("1k"),
    )
    emitted = notify_and_log(runtime, notifications, InfoTraffic(), recorder)
    assert emitted == len(runtime.logged_notifications)
    assert isinstance(runtime.logged_notifications[0], BytesThresholdExceeded)
    assert isinstance(runtime.logged_notifications[1], PacketsThresholdExceeded)
    assert recorder.calls == [(Sound.GULP, notifications.volume)]


def test_bytes_entry_carries_multiple_and_amounts():
    runtime = _busy_runtime()
    recorder = _Recorder()
    notifications = Notifications(bytes_notification=BytesNotification.from_str("1k"))
    notify_and_log(runtime, notifications, InfoTraffic(), recorder)
    entry = runtime.logged_notifications[0]
    assert entry.byte_multiple == notifications.bytes_notification.byte_multiple
    assert entry.incoming == 6000 - 500
    assert entry.outgoing == 9000 - 1000
    assert entry.threshold == notifications.bytes_notification.previous_threshold
    assert recorder.calls == [(Sound.POP, notifications.volume)]


def test_silent_packets_notification_leaves_sound_to_bytes():
    runtime = _busy_runtime()
    recorder = _Recorder()
    notifications = Notifications(
        packets_notification=PacketsNotification(threshold=3, sound=Sound.NONE),
        bytes_notification=BytesNotification.from_str("1k"),
    )
    notify_and_log(runtime, notifications, InfoTraffic(), recorder)
    assert recorder.calls == [(Sound.POP, notifications.volume)]


def test_favorite_transmitted_is_logged_with_copy_of_host_data():
    info, host = _traffic_with_favorite()
    runtime = RunTimeData()
    recorder = _Recorder()
    notifications = Notifications(
        favorite_notification=FavoriteNotification.on(Sound.SWHOOSH)
    )
    emitted = notify_and_log(runtime, notifications, info, recorder)
    assert emitted == len(info.favorites_last_interval)
    entry = runtime.logged_notifications[0]
    assert isinstance(entry, FavoriteTransmitted)
    assert entry.host == host
    assert entry.data_info_host == info.hosts[host]
    assert entry.data_info_host is not info.hosts[host]
    assert _TIME.fullmatch(entry.timestamp)
    assert recorder.calls == [(Sound.SWHOOSH, notifications.volume)]


def test_favorite_disabled_logs_nothing():
    info, _ = _traffic_with_favorite()
    runtime = RunTimeData()
    notifications = Notifications(favorite_notification=FavoriteNotification.off(Sound.POP))
    emitted = notify_and_log(runtime, notifications, info, _Recorder())
    assert emitted == len(runtime.logged_notifications)
    assert list(runtime.logged_notifications) == []


def test_favorite_without_host_data_raises():
    info, host = _traffic_with_favorite()
    del info.hosts[host]
    notifications = Notifications(favorite_notification=FavoriteNotification.on(Sound.POP))
    with pytest.raises(KeyError):
        notify_and_log(RunTimeData(), notifications, info, _Recorder())


def test_log_is_capped_and_drops_oldest():
    runtime = _busy_runtime()
    originals = [
        PacketsThresholdExceeded(threshold=0, incoming=0, outgoing=0, timestamp=str(i))
        for i in range(30)
    ]
    runtime.logged_notifications.extend(originals)
    notifications = Notifications(packets_notification=PacketsNotification.from_str("3"))
    notify_and_log(runtime, notifications, InfoTraffic(), _Recorder())
    logged = list(runtime.logged_notifications)
    assert len(logged) == len(originals)
    assert logged[1:] == originals[:-1]
    assert logged[0] not in originals


def test_works_without_sound_player():
    runtime = _busy_runtime()
    notifications = Notifications(packets_notification=PacketsNotification.from_str("3"))
    emitted = notify_and_log(runtime, notifications, InfoTraffic())
    assert emitted == len(runtime.logged_notifications)
    assert isinstance(runtime.logged_notifications[0], PacketsThresholdExceeded)


def test_amount_beyond_32_bits_raises():
    runtime = RunTimeData(tot_received_packets=1 << 32)
    notifications = Notifications(packets_notification=PacketsNotification.from_str("3"))
    with pytest.raises(OverflowError):
        notify_and_log(runtime, notifications, InfoTraffic(), _Recorder())