"""BMP280 driver over an asynchronous I2C bus."""

from __future__ import annotations

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

DEFAULT_ADDRESS = 0x76


class I2cBus(Protocol):
    """An I2C bus that writes bytes to a device and then reads some back."""

    async def write_read(self, address: int, data: bytes, length: int) -> bytes:
        ...


class BMP280:
    """BMP280 pressure and temperature sensor on an I2C bus.

    Bus failures (OSError) are not reported: a failed transfer reads as zeros.
    """

    def __init__(self, bus: I2cBus, address: int = DEFAULT_ADDRESS) -> None:
        self.bus = bus
        self.address = address
        self.calibration = Calibration()
        self.t_fine = 0

    @classmethod
    async def create(cls, bus: I2cBus, address: int = DEFAULT_ADDRESS) -> BMP280:
        """Create a driver and load the factory calibration."""
        chip = cls(bus, address)
        await chip._read_calibration()
        return chip

    async def _write_read(self, data: bytes, length: int) -> bytes:
        try:
            received = await self.bus.write_read(self.address, bytes(data), length)
        except OSError:
            received = b""
        return bytes(received[:length]).ljust(length, b"\0")

    async def _read_calibration(self) -> None:
        data = await self._write_read(bytes([Register.CALIB00]), CALIBRATION_LENGTH)
        self.calibration = Calibration.from_bytes(data)

    async def _read_measurements(self) -> bytes:
        return await self._write_read(bytes([Register.PRESS]), 6)

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
        await self._write_read(bytes([register, byte]), 1)

    async def _read_byte(self, register: Register) -> int:
        return (await self._write_read(bytes([register]), 1))[0]