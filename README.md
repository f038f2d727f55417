# gbcore

Building blocks for a Game Boy and Game Boy Color emulator, written
against the standard library only.

## What is inside

- `gbcore.apu.units` – the small clocked parts of the sound hardware:
  `Timer`, `LengthCounter`, the noise `Lfsr`, the frequency `Sweep`,
  `VolumeEnvelope` (with `Direction`) and the `FrameSequencer` with its
  `TickResult` steps.
- `gbcore.apu.channels` – the `Square`, `Wave` and `Noise` channels, each
  addressed through its NRx0–NRx4 register methods. `Square.sweeper()`
  builds the channel with a sweep unit.
- `gbcore.apu.apu` – `Apu` mixes the four channels, applies a low-pass
  filter and the NR50 master volume, and serves reads and writes for
  `0xFF10`–`0xFF3F` (plus the PCM12/PCM34 registers at `0xFF76`/`0xFF77`).
  `register_name(addr)` gives a readable name such as `"nr52"`.
- `gbcore.audio` – `Audio` takes one stereo sample from the APU every four
  T-states, keeps at most 80 000 of them, and `pull_samples(n)` resamples
  the buffer to `n` samples and empties it.
- `gbcore.cartridge.header` – `RawCartridgeHeader.from_rom()` reads the
  header bytes, `parse()` turns them into a `CartridgeInfo` or raises
  `CartridgeParseError`. `CartridgeData` and `create_rom_banks()` hold the
  16 KiB ROM banks and 8 KiB RAM banks.
- `gbcore.cartridge.banking` – register state of the MBC1, MBC2, MBC3 and
  MBC5 controllers.
- `gbcore.cartridge.cartridge` – `Cartridge.from_bytes()` builds a
  cartridge from a ROM image; `read()` and `write()` serve the ROM area
  `0x0000`–`0x7FFF` and the external RAM area `0xA000`–`0xBFFF`.
- `gbcore.cgb` – `CGBState`: the `KEY1` speed switch (`Speed`) and the
  VRAM bank (`VRAMBank`).
- `gbcore.dma_controller` – `DMAController` for `HDMA1`–`HDMA5`. Writes to
  `HDMA5` and calls to `step()` return a `TransferRequest` that the caller
  carries out.
- `gbcore.lcd` – `GameboyLCD`, a 160×144 RGBA frame buffer, single or
  double buffered (`SyncMode`).
- `gbcore.joypad` – `JoypadState`, its active-low register byte via
  `as_byte()`, and `|=` to merge two states.
- `gbcore.timing` – `TStates`, conversions between T-states, M-states,
  seconds and frames.
- `gbcore.memory_map` – `map_addr_to_named_range()` and `get_addr_info()`
  name the region (`AddressRange`) or I/O register (`IORegister`) an
  address belongs to.
- `gbcore.romindex` – builds a JSON index of a directory tree of ROMs.

## Examples

Load a cartridge and read from it:

```python
from gbcore.cartridge.cartridge import Cartridge

with open("game.gb", "rb") as fh:
    cart = Cartridge.from_bytes(fh.read(), None)

print(cart.info.title, cart.info.rom_banks, cart.info.ram_banks)
first_byte = cart.read(0x0100)
cart.write(0x2000, 0x02)   # select ROM bank 2 on banked cartridges
```

Drive the audio unit and pull a frame of samples:

```python
from gbcore.apu.apu import Apu
from gbcore.audio import Audio
from gbcore.cgb import Speed

apu = Apu()
apu.write(0xFF26, 0x80)    # power on
audio = Audio()

for div in range(256):
    apu.step_t_state(div, Speed.NORMAL)
audio.step(apu, 1024)
samples = audio.pull_samples(735)
```

Convert between time units:

```python
from gbcore.timing import TStates

t = TStates.from_frames(60.0)
print(t.t_states, t.seconds)
```

## Command line

Write an index of a ROM directory as JSON:

```
gbcore-romindex
```

With no arguments it reads the directory `roms` and writes `roms.json`.
A different directory can be given as the first argument and a different
output file with `-o`/`--output`. Entries in each directory are sorted by
name, ignoring ASCII case; each is written as `{"file": {"path": ...}}` or
`{"dir": {"path": ..., "entries": [...]}}`. On a file system error the
command prints the error and exits with status 1.

## What it does not do

This package holds components, not a complete emulator. It has no CPU, no
picture processing unit, no system bus tying the parts together, no save
states and no screen or sound output. Cartridges using MMM01, MBC6, MBC7,
HuC1 or HuC3 controllers are recognised but raise `UnsupportedMapperError`
when read or written, and the MBC3 real-time clock registers read as zero.

## Tests

```
pip install -e ".[test]"
pytest
```