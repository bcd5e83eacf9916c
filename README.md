# goeskit

Tools for turning a GOES LRIT/HRIT downlink into packets, and for reading
the products carried in them.

goeskit takes the soft-symbol stream that a demodulator produces (one byte
per symbol; a symbol with its top bit set counts as a 1) and works through
the layers of the broadcast:

- **Frame sync**: `goeskit.correlator.correlate` finds the encoded sync word
  and returns a `Correlation` (position, score out of 64, and a
  `CorrelationType` telling LRIT from HRIT and 0° from 180° phase).
  `compute_sync_words()` derives the four encoded sync words and
  `nrzm_encode` performs NRZ-M coding.
- **Forward error correction**: `goeskit.viterbi.Viterbi` (rate 1/2,
  constraint length 7 convolutional code with a soft-decision decoder),
  `goeskit.derandomizer.Derandomizer` (CCSDS pseudo-random sequence) and
  `goeskit.reed_solomon.ReedSolomon` (RS(255,223), interleave depth 4,
  dual-basis symbols). `ReedSolomon.run` returns the 892 data bytes and the
  number of corrected bytes, or raises `UncorrectableError`.
- **Packetizing**: `goeskit.packetizer.Packetizer` ties these together and
  returns a `Details` record for every frame.
- **Transport layer**: `goeskit.vcdu.VCDU` and
  `goeskit.transport_pdu.TransportPDU`, with the CRC-16 in `goeskit.crc.crc`.
- **Products**: DCS file and payload headers (`goeskit.dcs`), EMWIN QBT
  packets (`goeskit.qbt`) and EMWIN files (`goeskit.emwin`).
- **Support**: `goeskit.buffer_pool.BufferPool`, a bounded pool of reusable
  buffers handed between a producer thread and a consumer thread, and
  `goeskit.fastmath` with float32 `sin_ps`, `cos_ps`, `sincos_ps`, `exp_ps`
  and `log_ps` over numpy arrays.

## Installing

```
pip install goeskit
```

numpy is the only runtime dependency. Python 3.10 or later is required.

## Commands

### goes-packetdump

Reads soft symbols from standard input, decodes them into VCDUs and appends
every good packet to a file in the current directory. A new file is started
for every five-minute window, named after the UTC time the window starts,
such as `packets-2024-01-01T12:05:00Z.raw`; each new file is announced on
standard output. Reed-Solomon corrections and uncorrectable frames are
reported on standard error.

```
goes-packetdump < symbols.bin
```

### goes-packetinfo

Lists the spacecraft ID, virtual channel ID and counter of every 892-byte
VCDU in a packet file, such as one written by `goes-packetdump`:

```
goes-packetinfo packets-2024-01-01T12:05:00Z.raw
```

## Using the library

Decode packets from any binary stream of soft symbols (anything with a
`read(size)` method returning bytes):

```python
from goeskit.packetizer import Packetizer

with open("symbols.bin", "rb") as symbols:
    for details in Packetizer(symbols).packets():
        if details.ok:
            vcdu_bytes = details.packet  # 892 bytes
```

`Details` also holds `symbol_pos`, `skipped_symbols`, `viterbi_bits`,
`reed_solomon_bytes` (-1 when the frame could not be corrected),
`relative_time` in seconds and `sync_type`.

Walk the VCDUs of a recorded packet file:

```python
from goeskit.vcdu import iter_vcdus

with open("packets.raw", "rb") as stream:
    for vcdu in iter_vcdus(stream):
        print(vcdu.scid, vcdu.vcid, vcdu.counter)
```

Collect a transport PDU from bytes and check it:

```python
from goeskit.transport_pdu import TransportPDU

tpdu = TransportPDU()
used = tpdu.read(chunk)
if tpdu.data_complete() and tpdu.verify_crc():
    print(tpdu.apid, tpdu.sequence_count)
```

Rebuild EMWIN files from the fragments carried on the LRIT stream:

```python
from goeskit import emwin, qbt

packets = qbt.Assembler()
files = emwin.Assembler()

packet = packets.process(qbt.Fragment(counter, fragment_bytes))
if packet is not None:
    product = files.process(packet)
    if product is not None:
        with open(product.filename, "wb") as out:
            out.write(product.data())
```

Parse DCS headers:

```python
from goeskit.dcs import FileHeader, Header

file_header = FileHeader.from_bytes(payload)
first = Header.from_bytes(payload[FileHeader.SIZE:])
```

Malformed or truncated headers raise `DCSError`.

`goeskit.options` parses the command-line option sets of an EMWIN
extractor, an LRIT file assembler and a packet relay:
`parse_emwin_options`, `parse_lrit_options` and `parse_packets_options`
return `EmwinOptions`, `LritOptions` and `PacketsOptions`.

## What goeskit does not do

- It has no demodulator: it starts from soft symbols, not from radio samples.
- It does not assemble LRIT files from VCDUs (no virtual-channel or session
  assembly), so there is no command that writes LRIT, DCS or EMWIN files
  from a packet stream. The option parsers in `goeskit.options` exist, but
  no command uses them.
- It has no network input or output: packets come from files or streams
  only, and are not published to or received from other processes.

## Tests

```
pip install goeskit[test]
pytest
```