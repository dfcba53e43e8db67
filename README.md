# picolab

`picolab` bundles three things:

- a small HTTP server that reports system metrics (host, processes,
  memory, CPU and disks) as JSON;
- asynchronous drivers for the BMP280 temperature and pressure sensor,
  over an I2C or SPI bus object that you supply;
- a table of standard piano notes and their frequencies.

## Installing

```
pip install picolab
```

For running the test suite:

```
pip install "picolab[test]"
pytest
```

## The metrics server

Start it with:

```
picolab-server
```

By default it listens on `0.0.0.0:8080`; `--host` and `--port` change
that. It answers these `GET` routes:

| Route              | Response                                               |
|--------------------|--------------------------------------------------------|
| `/`                | a short plain-text greeting                            |
| `/healthcheck`     | `Server is running`                                    |
| `/metrics`         | a JSON summary of every metric kind                    |
| `/metrics/{kind}`  | one kind: `system`, `process`, `memory`, `cpu`, `disk` |
| `/realtime`        | a fresh JSON summary, taken at the time of the request |

Only the lower-case kind names are accepted in `/metrics/{kind}`; any
other name gets a plain-text `400` response listing the valid ones. Each
metrics request samples CPU usage over about 0.2 seconds before answering.

The Starlette application itself is returned by `picolab.server.app()`,
so it can be mounted or served by any ASGI server.

### Metrics from Python

`picolab.metrics` gives the same data without the server:

```python
import asyncio
from picolab.metrics import Summary, init

async def snapshot():
    host = await init()          # refresh and sample CPU usage
    return Summary.generate(host).to_dict()

print(asyncio.run(snapshot()))
```

`init()` returns a `Host`; from it, `Process.generate`, `Memory.generate`,
`Cpu.generate`, `Disk.generate` and `Summary.generate` build the
individual groups (`System.generate()` needs no host). Every group has a
`to_dict()` giving JSON-ready data. Memory and disk sizes are in bytes,
`System.uptime` and `Process.run_time` are in seconds, and the `Kind`
enum names the five groups. Values that cannot be found are reported as
`"Unknown"`.

## BMP280 drivers

`picolab.bmp280.i2c.BMP280` and `picolab.bmp280.spi.BMP280` talk to the
sensor through objects you provide:

- for I2C, a bus with `async write_read(address, data, length) -> bytes`
  (the default device address is `0x76`);
- for SPI, a bus with `async transfer(data) -> bytes` and
  `async write(data)`, plus a chip-select line with `set_low()` and
  `set_high()`.

```python
from picolab.bmp280.i2c import BMP280

sensor = await BMP280.create(bus)     # reads the calibration data
celsius = await sensor.temp()
pascals = await sensor.pressure()
```

Read `temp()` before `pressure()`: the pressure compensation uses the
value left by the last temperature reading. The drivers can also read and
write the `config()` and `control()` registers with `Config` and
`Control` values (`set_config`, `set_control`), read `status()` and
`id()`, and issue a software `reset()`. A bus call that raises `OSError`
is not reported; the transfer simply reads as zeros.

The register map, the field enums (`Standby`, `Filter`, `Oversampling`,
`PowerMode`), the `Config`, `Control` and `Status` encodings, the
compensation arithmetic (`Calibration`) and `raw_reading` live in
`picolab.bmp280.registers` and can be used on their own, for example to
decode bytes captured from a bus.

## Notes

`picolab.music.Note` lists the piano notes from `B0` to `DS8`, and
`OCTAVE` is a sample sequence of `(note, length)` pairs from C4 to C5:

```python
from picolab.music import Note

Note.A4.frequency()  # 440
```

## What it does not do

- There are no bus implementations: the BMP280 drivers only work with
  I2C/SPI objects you supply, and nothing here opens a hardware device.
- Nothing plays the notes; `picolab.music` is only a table.
- `/realtime` returns a single snapshot per request; it does not stream
  updates.