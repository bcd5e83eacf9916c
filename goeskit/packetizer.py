"""Turn a stream of soft symbols into Reed-Solomon corrected VCDUs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol

import numpy as np

from .correlator import ENCODED_SYNC_WORD_BITS, CorrelationType, correlate
from .derandomizer import Derandomizer
from .reed_solomon import ReedSolomon, UncorrectableError
from .viterbi import Viterbi

logger = logging.getLogger(__name__)

FRAME_BITS = 8192
SYNC_WORD_BITS = 32
FRAME_PRELUDE_BITS = 32

# The convolutional code has rate 1/2.
ENCODED_FRAME_BITS = 2 * FRAME_BITS
ENCODED_SYNC_WORD_BITS_ = 2 * SYNC_WORD_BITS
ENCODED_FRAME_PRELUDE_BITS = 2 * FRAME_PRELUDE_BITS

FRAME_BYTES = FRAME_BITS // 8
SYNC_WORD_BYTES = SYNC_WORD_BITS // 8
FRAME_PRELUDE_BYTES = FRAME_PRELUDE_BITS // 8

LRIT_SYMBOL_RATE = 293883
HRIT_SYMBOL_RATE = 927000

assert ENCODED_SYNC_WORD_BITS_ == ENCODED_SYNC_WORD_BITS


class SymbolReader(Protocol):
    def read(self, size: int) -> bytes: ...


@dataclass
class Details:
    """Outcome of extracting one frame from the symbol stream."""

    symbol_pos: int = 0
    skipped_symbols: int = 0
    viterbi_bits: int = 0
    reed_solomon_bytes: int = 0
    ok: bool = False
    relative_time: float = 0.0
    sync_type: CorrelationType | None = None
    packet: bytes | None = None


class Packetizer:
    """Synchronises on frames, then decodes, derandomises and corrects them."""

    def __init__(self, reader: SymbolReader) -> None:
        self._reader = reader
        self._viterbi = Viterbi()
        self._derandomizer = Derandomizer()
        self._reed_solomon = ReedSolomon()
        # The buffer starts with a frame prelude so the Viterbi decoder
        # always has preceding symbols to warm up on.
        self._buf = bytearray(
            ENCODED_FRAME_PRELUDE_BITS + ENCODED_FRAME_BITS + ENCODED_SYNC_WORD_BITS
        )
        self._pos = 0
        self._lock = False
        self._sync_type = CorrelationType.LRIT_PHASE_000
        self._symbol_rate = LRIT_SYMBOL_RATE
        self._symbol_pos = 0

    def _fill(self) -> bool:
        need = len(self._buf) - self._pos
        chunk = bytearray()
        while len(chunk) < need:
            data = self._reader.read(need - len(chunk))
            if not data:
                break
            chunk += data
        if len(chunk) < need:
            return False
        self._buf[self._pos:] = chunk
        self._symbol_pos += need
        return True

    def _reacquire(self, details: Details) -> bool:
        skip = ENCODED_FRAME_PRELUDE_BITS
        while True:
            result = correlate(self._buf[skip:])
            self._sync_type = result.type
            if result.position in (0, ENCODED_FRAME_BITS):
                break
            details.skipped_symbols += result.position
            # Keep the prelude of the aspiring frame.
            pos = result.position
            self._buf[: len(self._buf) - pos] = self._buf[pos:]
            self._pos = len(self._buf) - pos
            if not self._fill():
                return False
        self._symbol_rate = HRIT_SYMBOL_RATE if self._sync_type.is_hrit else LRIT_SYMBOL_RATE
        return True

    def next_packet(self) -> Details | None:
        """Decode the next frame; return None when the stream ends."""
        details = Details()
        if not self._fill():
            return None

        # With a lock on LRIT, only check the sync word itself for phase flips.
        if self._lock and self._sync_type.is_lrit:
            skip = ENCODED_FRAME_PRELUDE_BITS
            previous = self._sync_type
            self._sync_type = correlate(self._buf[skip:skip + ENCODED_SYNC_WORD_BITS]).type
            if self._sync_type != previous:
                logger.warning(
                    "Phase flip detected from %s to %s",
                    previous.label(),
                    self._sync_type.label(),
                )

        if not self._lock and not self._reacquire(details):
            return None

        bits = ENCODED_FRAME_PRELUDE_BITS + ENCODED_FRAME_BITS
        packet = self._viterbi.decode_soft(bytes(self._buf[:bits]), bits)
        details.viterbi_bits = self._viterbi.compare_soft(bytes(self._buf), packet)

        # The tail becomes the next prelude plus the next sync word.
        tail = ENCODED_FRAME_PRELUDE_BITS + ENCODED_SYNC_WORD_BITS
        self._buf[:tail] = self._buf[-tail:]
        self._pos = tail

        decoded = np.frombuffer(packet, dtype=np.uint8)
        if self._sync_type is CorrelationType.LRIT_PHASE_180:
            decoded = decoded ^ 0xFF
        elif self._sync_type.is_hrit:
            # NRZ-M decoding: in[i] = o[i+1] ^ o[i].
            previous_lsb = np.concatenate(([0], decoded[:-1] & 1)).astype(np.uint8)
            decoded = decoded ^ ((previous_lsb << 7) | (decoded >> 1))

        skip = FRAME_PRELUDE_BYTES + SYNC_WORD_BYTES
        frame = self._derandomizer.run(decoded[skip:].tobytes())

        try:
            details.packet, details.reed_solomon_bytes = self._reed_solomon.run(frame)
        except UncorrectableError:
            details.packet, details.reed_solomon_bytes = None, -1

        self._lock = details.reed_solomon_bytes >= 0
        details.ok = self._lock
        details.sync_type = self._sync_type

        pos = self._symbol_pos - (ENCODED_FRAME_BITS + ENCODED_SYNC_WORD_BITS)
        details.symbol_pos = pos
        seconds = pos // self._symbol_rate
        nanoseconds = (1_000_000_000 * (pos % self._symbol_rate)) // self._symbol_rate
        details.relative_time = seconds + nanoseconds / 1e9
        return details

    def packets(self) -> Iterator[Details]:
        """Yield the details of every frame until the stream ends."""
        while (details := self.next_packet()) is not None:
            yield details