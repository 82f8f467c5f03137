"""Device selection policy for Spotify Connect."""

from typing import Optional, Protocol

from loguru import logger

from spotideck.domain.spotify.exceptions import NoDeviceError

from .models import Device


class DeviceClient(Protocol):
    def list_devices(self) -> list[Device]: ...

    def transfer_playback(self, device_id: str, play: bool = False) -> None: ...


def first_controllable(devices: list[Device]) -> Optional[Device]:
    """First non-restricted computer/smartphone/speaker in API order."""
    for device in devices:
        if device.controllable:
            return device
    return None


def choose_transfer_target(devices: list[Device]) -> Optional[Device]:
    """
    Pick the device playback should move to.

    Args:
        devices: Devices in API order

    Returns:
        The first controllable device, or None if a controllable device is
        already active or none is controllable
    """
    controllable = [d for d in devices if d.controllable]
    if any(d.active for d in controllable):
        return None
    return first_controllable(controllable)


def ensure_active_device(client: DeviceClient) -> Optional[Device]:
    """Make sure a controllable device is active before resuming.

    Runs on every resume so a playback target switched from another app is
    picked up. An already-active controllable device is left alone; otherwise
    playback is transferred to the first controllable one.

    Returns:
        The device playback was transferred to, or None if nothing changed

    Raises:
        NoDeviceError: If no device, or no controllable device, exists
        SpotifyAPIError: If listing or transferring fails
    """
    devices = client.list_devices()
    if not devices:
        raise NoDeviceError("no devices found; open Spotify on a device")

    if not any(d.controllable for d in devices):
        raise NoDeviceError("no controllable devices available")

    target = choose_transfer_target(devices)
    if target is None:
        return None

    logger.info(f"No active device, transferring playback to {target.name} ({target.type})")
    client.transfer_playback(target.id, play=False)
    return target
