import struct

import pytest

from picolab.bmp280.registers import (
    Calibration,
    Config,
    Control,
    Filter,
    Oversampling,
    PowerMode,
    Register,
    Standby,
    Status,
    raw_reading,
)


@pytest.mark.parametrize("member", [m for m in Standby if m is not Standby.UNKNOWN])
def test_standby_from_bits_roundtrip(member):
    assert Standby.from_bits(int(member)) is member


def test_standby_unknown_for_out_of_range():
    assert Standby.from_bits(9) is Standby.UNKNOWN


@pytest.mark.parametrize("bits", [5, 6, 7])
def test_filter_unknown_bits(bits):
    assert Filter.from_bits(bits) is Filter.UNKNOWN


@pytest.mark.parametrize("member", [m for m in Filter if m is not Filter.UNKNOWN])
def test_filter_from_bits_roundtrip(member):
    assert Filter.from_bits(int(member)) is member


@pytest.mark.parametrize("bits", [6, 7])
def test_oversampling_falls_back_to_x16(bits):
    assert Oversampling.from_bits(bits) is Oversampling.X16


def test_power_mode_reserved_bits_mean_forced():
    assert PowerMode.from_bits(0b10) is PowerMode.FORCED
    assert PowerMode.from_bits(0b11) is PowerMode.NORMAL
    assert PowerMode.from_bits(0b00) is PowerMode.SLEEP


def test_register_addresses():
    assert Register(0xD0) is Register.ID
    assert Register(0xE0) is Register.RESET
    assert Register(0x88) is Register.CALIB00
    assert Register(0xF7) is Register.PRESS
    with pytest.raises(ValueError):
        Register(0x00)


@pytest.mark.parametrize("osrs_t", list(Oversampling))
@pytest.mark.parametrize("osrs_p", list(Oversampling))
@pytest.mark.parametrize("mode", list(PowerMode))
def test_control_roundtrip(osrs_t, osrs_p, mode):
    control = Control(osrs_t, osrs_p, mode)
    encoded = control.encode()
    assert 0 <= encoded <= 0xFF
    assert Control.decode(encoded) == control


@pytest.mark.parametrize("t_sb", [m for m in Standby if m is not Standby.UNKNOWN])
@pytest.mark.parametrize("flt", [m for m in Filter if m is not Filter.UNKNOWN])
def test_config_roundtrip(t_sb, flt):
    config = Config(t_sb, flt)
    encoded = config.encode()
    assert encoded & 0b11 == 0
    assert Config.decode(encoded) == config


def test_config_encoding_pinned():
    assert Config(Standby.MS4000, Filter.C16).encode() == 0xF0


def test_config_decode_ignores_spi_bit():
    assert Config.decode(Config(Standby.MS125, Filter.C4).encode() | 1) == Config(
        Standby.MS125, Filter.C4
    )


def test_status_decode():
    assert Status.decode(0x08) == Status(measuring=True, im_update=False)
    assert Status.decode(0x01) == Status(measuring=False, im_update=True)
    assert Status.decode(0x09) == Status(measuring=True, im_update=True)
    assert Status.decode(0xF6) == Status(measuring=False, im_update=False)


def test_status_str():
    assert str(Status(True, False)) == (
        "conversion is running: true, NVM data being copied: false"
    )


def test_raw_reading_full_scale():
    assert raw_reading(0xFF, 0xFF, 0xFF) == 0xFFFFF
    assert raw_reading(0, 0, 0x0F) == 0


def test_calibration_from_bytes_roundtrip():
    values = (27504, 26435, -1000, 36477, -10685, 3024, 2855, 140, -7, 15500, -14600, 6000)
    cal = Calibration.from_bytes(struct.pack("<HhhHhhhhhhhh", *values))
    assert (
        cal.dig_t1,
        cal.dig_t2,
        cal.dig_t3,
        cal.dig_p1,
        cal.dig_p2,
        cal.dig_p3,
        cal.dig_p4,
        cal.dig_p5,
        cal.dig_p6,
        cal.dig_p7,
        cal.dig_p8,
        cal.dig_p9,
    ) == values


def test_calibration_too_short():
    with pytest.raises(ValueError):
        Calibration.from_bytes(bytes(23))


def test_pressure_without_calibration_is_offset_raw():
    assert Calibration().pressure(0, 0) == 1048576.0
    assert Calibration().pressure(1000, 0) == 1048576.0 - 1000


def test_temperature_without_calibration_is_zero():
    assert Calibration().temperature(500000) == (0.0, 0)


def test_temperature_t_fine_consistent():
    values = (27504, 26435, -1000, 36477, -10685, 3024, 2855, 140, -7, 15500, -14600, 6000)
    cal = Calibration.from_bytes(struct.pack("<HhhHhhhhhhhh", *values))
    celsius, t_fine = cal.temperature(519888)
    assert abs(t_fine / 5120.0 - celsius) < 1 / 5120.0