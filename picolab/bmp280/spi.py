"""BMP280 driver over an asynchronous SPI bus with a chip-select line."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from picolab.bmp280.registers import (
    CALIBRATION_LENGTH,
    RESET_MAGIC,
    Calibration,
    Config,
    Control,
    Register,
    Status,
    raw_reading,
)


class SpiBus(Protocol):
    """A full-duplex SPI bus."""

    async def transfer(self, data: bytes) -> bytes:
        """Clock out ``data`` and return the bytes clocked in, same length."""
        ...

    async def write(self, data: bytes) -> None:
        """Clock out ``data``, discarding what comes back."""
        ...


class ChipSelect(Protocol):
    """The chip-select output line; the device is selected while it is low."""

    def set_low(self) -> None:
        ...

    def set_high(self) -> None:
        ...


class BMP280:
    """BMP280 pressure and temperature sensor on an SPI bus.

    Bus failures (OSError) are not reported: a failed transfer reads as zeros.
    """

    def __init__(self, bus: SpiBus, cs: ChipSelect) -> None:
        self.bus = bus
        self.cs = cs
        self.calibration = Calibration()
        self.t_fine = 0

    @classmethod
    async def create(cls, bus: SpiBus, cs: ChipSelect) -> BMP280:
        """Create a driver and load the factory calibration."""
        chip = cls(bus, cs)
        await chip._read_calibration()
        return chip

    @contextmanager
    def _selected(self) -> Iterator[None]:
        self.cs.set_low()
        try:
            yield
        finally:
            self.cs.set_high()

    async def _transfer(self, data: bytes) -> bytes:
        """Exchange ``data`` with the device; on failure the sent bytes come back."""
        with self._selected():
            try:
                received = await self.bus.transfer(bytes(data))
            except OSError:
                received = data
        return bytes(received[: len(data)]).ljust(len(data), b"\0")

    async def _read(self, register: Register, length: int) -> bytes:
        frame = bytes([register]) + bytes(length)
        return (await self._transfer(frame))[1:]

    async def _read_calibration(self) -> None:
        data = await self._read(Register.CALIB00, CALIBRATION_LENGTH)
        self.calibration = Calibration.from_bytes(data)

    async def _read_measurements(self) -> bytes:
        return await self._read(Register.PRESS, 6)

    async def pressure(self) -> float:
        """Read and return the pressure in pascals, using the last t_fine."""
        data = await self._read_measurements()
        raw = raw_reading(data[0], data[1], data[2])
        return self.calibration.pressure(raw, self.t_fine)

    async def temp(self) -> float:
        """Read and return the temperature in degrees Celsius."""
        data = await self._read_measurements()
        raw = raw_reading(data[3], data[4], data[5])
        celsius, self.t_fine = self.calibration.temperature(raw)
        return celsius

    async def config(self) -> Config:
        """Return the current config register."""
        return Config.decode(await self._read_byte(Register.CONFIG))

    async def set_config(self, new: Config) -> None:
        """Write the config register."""
        await self._write_byte(Register.CONFIG, new.encode())

    async def set_control(self, new: Control) -> None:
        """Write the ctrl_meas register."""
        await self._write_byte(Register.CTRL_MEAS, new.encode())

    async def control(self) -> Control:
        """Return the current ctrl_meas register."""
        return Control.decode(await self._read_byte(Register.CTRL_MEAS))

    async def status(self) -> Status:
        """Return the device status."""
        return Status.decode(await self._read_byte(Register.STATUS))

    async def id(self) -> int:
        """Return the chip id."""
        return await self._read_byte(Register.ID)

    async def reset(self) -> None:
        """Software reset, equivalent to power-on reset."""
        await self._write_byte(Register.RESET, RESET_MAGIC)

    async def _write_byte(self, register: Register, byte: int) -> None:
        with self._selected():
            try:
                await self.bus.write(bytes([register, byte & 0xFF]))
            except OSError:
                pass

    async def _read_byte(self, register: Register) -> int:
        return (await self._read(register, 1))[0]