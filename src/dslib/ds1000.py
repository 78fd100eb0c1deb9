"""Rigol DS1000Z series scope driver.

Wraps a :class:`Device` with typed methods for the commands in the
catalogue. Commands without a wrapper are reachable through
:attr:`Ds1000.device`.
"""

from __future__ import annotations

from pathlib import Path

from dslib.config import ScopeConfig, load_config
from dslib.device import Device
from dslib.lan import DEVICE_PORT, LanTransport
from dslib.model import ModelCapabilities, get_model_capabilities
from dslib.scpi.commands import common
from dslib.scpi.commands.ds1000 import control, display
from dslib.scpi.parsers import Identity
from dslib.transport import DEFAULT_TIMEOUT


class Ds1000:
    """High-level driver for DS1000Z series scopes.

    Args:
        device: A :class:`Device` over an open transport.
        timeout: Read timeout in seconds applied to every query.
    """

    def __init__(self, device: Device, *, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._device = device
        self._timeout = timeout

    @classmethod
    def open_lan(
        cls,
        host: str,
        port: int | str = DEVICE_PORT,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        connect_timeout: float | None = 5.0,
    ) -> Ds1000:
        """Connect to a scope over TCP.

        Raises:
            ResolutionError: If *host* cannot be resolved.
            DeviceConnectionError: If the connection cannot be established.
        """
        transport = LanTransport(host, port, connect_timeout=connect_timeout)
        return cls(Device(transport), timeout=timeout)

    @classmethod
    def from_config(cls, config: ScopeConfig | str | Path) -> Ds1000:
        """Connect using a :class:`ScopeConfig` or the path of a YAML file."""
        if not isinstance(config, ScopeConfig):
            config = load_config(config)
        return cls.open_lan(
            config.host,
            config.port,
            timeout=config.timeout,
            connect_timeout=config.connect_timeout,
        )

    @property
    def device(self) -> Device:
        return self._device

    # -- Identity / lifecycle -----------------------------------------------

    def identify(self) -> Identity:
        """Query and parse the instrument identification (``*IDN?``)."""
        return self._device.query(common.IDN, timeout=self._timeout)

    def identify_when_complete(self) -> Identity | None:
        """Query ``*IDN?`` once pending operations have finished.

        Returns:
            The identity, or None if the scope is still busy.
        """
        return self._device.query_when_complete(common.IDN, timeout=self._timeout)

    def capabilities(self) -> ModelCapabilities:
        """Identify the scope and look up its hardware capabilities."""
        return get_model_capabilities(self.identify().model)

    def reset(self) -> None:
        """Restore the default state (``*RST``)."""
        self._device.submit(common.RST)

    def clear_status(self) -> None:
        """Clear event registers and the error queue (``*CLS``)."""
        self._device.submit(common.CLS)

    def close(self) -> None:
        self._device.close()

    # -- Run control --------------------------------------------------------

    def run(self) -> None:
        self._device.submit(control.RUN)

    def stop(self) -> None:
        self._device.submit(control.STOP)

    def single(self) -> None:
        """Arm a single trigger."""
        self._device.submit(control.SINGLE)

    def force_trigger(self) -> None:
        self._device.submit(control.FORCE_TRIGGER)

    def autoscale(self) -> None:
        self._device.submit(control.AUTOSCALE)

    def clear(self) -> None:
        """Clear all waveforms on the screen (``:CLE``)."""
        self._device.submit(control.CLEAR)

    def clear_display(self) -> None:
        """Clear all waveforms on the screen (``:DISP:CLE``)."""
        self._device.submit(display.CLEAR)

    # -- Display ------------------------------------------------------------

    def screenshot(self, *, timeout: float | None = 10.0) -> bytes:
        """Read the current screen image (BMP24 by default).

        Args:
            timeout: Read timeout in seconds; the image is about 1 MB.
        """
        return self._device.query_block(display.DATA, timeout=timeout)
