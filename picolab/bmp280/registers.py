"""BMP280 register map, register field encodings and compensation formulas."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

CALIBRATION_LENGTH = 24
RESET_MAGIC = 0xB6

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class Standby(IntEnum):
    """Inactive duration between measurements in normal mode."""

    MS0_5 = 0b000
    MS62_5 = 0b001
    MS125 = 0b010
    MS250 = 0b011
    MS500 = 0b100
    MS1000 = 0b101
    MS2000 = 0b110
    MS4000 = 0b111
    UNKNOWN = 8

    @classmethod
    def from_bits(cls, bits: int) -> Standby:
        """Return the standby time for a 3-bit field, or UNKNOWN."""
        try:
            return cls(bits)
        except ValueError:
            return cls.UNKNOWN


class Filter(IntEnum):
    """Time constant of the IIR filter."""

    OFF = 0x00
    C2 = 0x01
    C4 = 0x02
    C8 = 0x03
    C16 = 0x04
    UNKNOWN = 5

    @classmethod
    def from_bits(cls, bits: int) -> Filter:
        """Return the filter for a 3-bit field, or UNKNOWN."""
        try:
            return cls(bits)
        except ValueError:
            return cls.UNKNOWN


class Oversampling(IntEnum):
    """Oversampling of a temperature or pressure measurement."""

    SKIPPED = 0b000
    X1 = 0b001
    X2 = 0b010
    X4 = 0b011
    X8 = 0b100
    X16 = 0b101

    @classmethod
    def from_bits(cls, bits: int) -> Oversampling:
        """Return the oversampling for a 3-bit field; unlisted values mean X16."""
        try:
            return cls(bits)
        except ValueError:
            return cls.X16


class PowerMode(IntEnum):
    """Power mode of the device."""

    SLEEP = 0b00
    FORCED = 0b01
    NORMAL = 0b11

    @classmethod
    def from_bits(cls, bits: int) -> PowerMode:
        """Return the power mode for a 2-bit field; 0b10 also means FORCED."""
        try:
            return cls(bits)
        except ValueError:
            return cls.FORCED


class Register(IntEnum):
    """Register addresses."""

    ID = 0xD0
    RESET = 0xE0
    STATUS = 0xF3
    CTRL_MEAS = 0xF4
    CONFIG = 0xF5
    PRESS = 0xF7
    CALIB00 = 0x88


@dataclass(frozen=True)
class Control:
    """Contents of the ctrl_meas register."""

    osrs_t: Oversampling
    osrs_p: Oversampling
    mode: PowerMode

    def encode(self) -> int:
        """Return the register byte."""
        return ((int(self.osrs_t) << 5) | (int(self.osrs_p) << 2) | int(self.mode)) & 0xFF

    @classmethod
    def decode(cls, byte: int) -> Control:
        """Build from a register byte."""
        return cls(
            osrs_t=Oversampling.from_bits((byte >> 5) & 0b111),
            osrs_p=Oversampling.from_bits((byte >> 2) & 0b111),
            mode=PowerMode.from_bits(byte & 0b11),
        )


@dataclass(frozen=True)
class Config:
    """Contents of the config register; the 3-wire SPI bit is left clear."""

    t_sb: Standby
    filter: Filter

    def encode(self) -> int:
        """Return the register byte."""
        return ((int(self.t_sb) << 5) | (int(self.filter) << 2)) & 0xFF

    @classmethod
    def decode(cls, byte: int) -> Config:
        """Build from a register byte."""
        return cls(
            t_sb=Standby.from_bits((byte >> 5) & 0b111),
            filter=Filter.from_bits((byte >> 2) & 0b111),
        )


@dataclass(frozen=True)
class Status:
    """Contents of the status register."""

    measuring: bool
    im_update: bool

    @classmethod
    def decode(cls, byte: int) -> Status:
        """Build from a register byte."""
        return cls(measuring=bool(byte & 0b00001000), im_update=bool(byte & 0b00000001))

    def __str__(self) -> str:
        return (
            f"conversion is running: {str(self.measuring).lower()}, "
            f"NVM data being copied: {str(self.im_update).lower()}"
        )


def raw_reading(high: int, mid: int, low: int) -> int:
    """Assemble a 20-bit ADC reading from its msb, lsb and xlsb bytes."""
    return (high << 12) | (mid << 4) | (low >> 4)


@dataclass(frozen=True)
class Calibration:
    """Factory trimming parameters used to compensate raw readings."""

    dig_t1: int = 0
    dig_t2: int = 0
    dig_t3: int = 0
    dig_p1: int = 0
    dig_p2: int = 0
    dig_p3: int = 0
    dig_p4: int = 0
    dig_p5: int = 0
    dig_p6: int = 0
    dig_p7: int = 0
    dig_p8: int = 0
    dig_p9: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> Calibration:
        """Parse the 24 little-endian calibration bytes starting at calib00."""
        if len(data) < CALIBRATION_LENGTH:
            raise ValueError(
                f"calibration needs {CALIBRATION_LENGTH} bytes, got {len(data)}"
            )
        return cls(*struct.unpack("<HhhHhhhhhhhh", bytes(data[:CALIBRATION_LENGTH])))

    def temperature(self, raw: int) -> tuple[float, int]:
        """Return the temperature in degrees Celsius and the t_fine value."""
        v1 = (raw / 16384.0 - self.dig_t1 / 1024.0) * self.dig_t2
        delta = raw / 131072.0 - self.dig_t1 / 8192.0
        v2 = (delta * delta) * self.dig_t3
        total = v1 + v2
        if total != total:
            t_fine = 0
        else:
            t_fine = int(max(_I32_MIN, min(_I32_MAX, total)))
        return total / 5120.0, t_fine

    def pressure(self, raw: int, t_fine: int) -> float:
        """Return the pressure in pascals for a raw reading and a t_fine value."""
        var1 = t_fine / 2.0 - 64000.0
        var2 = var1 * var1 * self.dig_p6 / 32768.0
        var2 += var1 * self.dig_p5 * 2.0
        var2 = var2 / 4.0 + self.dig_p4 * 65536.0
        var1 = (self.dig_p3 * var1 * var1 / 524288.0 + self.dig_p2 * var1) / 524288.0
        var1 = (1.0 + var1 / 32768.0) * self.dig_p1
        pressure = 1048576.0 - raw
        if var1 != 0.0:
            pressure = (pressure - var2 / 4096.0) * 6250.0 / var1
            var1 = self.dig_p9 * pressure * pressure / 2147483648.0
            var2 = pressure * self.dig_p8 / 32768.0
            pressure += (var1 + var2 + self.dig_p7) / 16.0
        return pressure