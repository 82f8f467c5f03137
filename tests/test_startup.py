"""Tests for device auto-selection at startup."""

from unittest.mock import MagicMock

import pytest

from spotideck.domain.playback.launcher import LauncherError
from spotideck.domain.playback.models import Device
from spotideck.domain.spotify.exceptions import SpotifyAPIError
from spotideck.main import LAUNCH_WAIT_SECONDS, NO_DEVICES_STATUS, autoselect_device

COMPUTER = Device(id="c1", name="Laptop", type="Computer")
PHONE = Device(id="p1", name="Phone", type="Smartphone")
TV = Device(id="t1", name="Living Room", type="TV")


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def launcher() -> MagicMock:
    return MagicMock(return_value="flatpak")


@pytest.fixture
def sleep() -> MagicMock:
    return MagicMock()


class TestAutoselectDevice:
    def test_transfers_to_first_controllable(self, client, launcher, sleep):
        client.list_devices.return_value = [TV, PHONE, COMPUTER]

        status = autoselect_device(client, launcher, sleep)

        client.transfer_playback.assert_called_once_with("p1", play=False)
        assert status == "Using device: Phone"
        launcher.assert_not_called()

    def test_active_device_is_left_alone(self, client, launcher, sleep):
        client.list_devices.return_value = [COMPUTER, Device(id="p1", name="Phone", type="Smartphone", active=True)]

        assert autoselect_device(client, launcher, sleep) == ""
        client.transfer_playback.assert_not_called()

    def test_launches_once_when_no_devices(self, client, launcher, sleep):
        client.list_devices.side_effect = [[], [COMPUTER]]

        status = autoselect_device(client, launcher, sleep)

        launcher.assert_called_once()
        sleep.assert_called_once_with(LAUNCH_WAIT_SECONDS)
        assert status == "Using device: Laptop"

    def test_still_no_devices_after_launch(self, client, launcher, sleep):
        client.list_devices.side_effect = [[], []]

        assert autoselect_device(client, launcher, sleep) == NO_DEVICES_STATUS
        assert launcher.call_count == 1
        client.transfer_playback.assert_not_called()

    def test_launch_failure_skips_wait(self, client, launcher, sleep):
        client.list_devices.side_effect = [[], []]
        launcher.side_effect = LauncherError("Spotify is not installed")

        assert autoselect_device(client, launcher, sleep) == NO_DEVICES_STATUS
        sleep.assert_not_called()

    def test_only_uncontrollable_devices(self, client, launcher, sleep):
        client.list_devices.return_value = [TV]

        assert autoselect_device(client, launcher, sleep) == ""
        client.transfer_playback.assert_not_called()

    def test_api_error_becomes_status(self, client, launcher, sleep):
        client.list_devices.side_effect = SpotifyAPIError("Rate limited, retry after 3s", 429)

        assert autoselect_device(client, launcher, sleep) == "Error: Rate limited, retry after 3s"
