import io
import random
import types

import numpy as np

from goeskit.correlator import SYNC_WORD
from goeskit.derandomizer import Derandomizer
from goeskit.packetdump import PacketFileWriter, main
from goeskit.reed_solomon import ReedSolomon
from goeskit.viterbi import Viterbi


def _stream(count, seed):
    rng = random.Random(seed)
    rs = ReedSolomon()
    derandomizer = Derandomizer()
    datas = []
    raw = bytearray()
    for _ in range(count):
        data = bytes(rng.getrandbits(8) for _ in range(892))
        datas.append(data)
        raw += SYNC_WORD + derandomizer.run(rs.encode(data))
    encoded = Viterbi().encode(bytes(raw))
    bits = np.unpackbits(np.frombuffer(encoded, dtype=np.uint8))[: 16 * len(raw)]
    return datas, (bits.astype(np.uint8) * 255).tobytes()


def test_writer_file_name_for_epoch(tmp_path):
    with PacketFileWriter(tmp_path) as writer:
        writer.write(b"abc", 0)
    assert [p.name for p in tmp_path.iterdir()] == ["packets-1970-01-01T00:00:00Z.raw"]


def test_writer_groups_by_window(tmp_path):
    base = 300 * 5_000_000
    with PacketFileWriter(tmp_path) as writer:
        writer.write(b"a", base)
        writer.write(b"b", base + 299)
        first = writer.current_path
        writer.write(b"c", base + 300)
        second = writer.current_path
    assert first != second
    with open(first, "rb") as f:
        assert f.read() == b"ab"
    with open(second, "rb") as f:
        assert f.read() == b"c"


def test_writer_appends_to_existing_file(tmp_path):
    with PacketFileWriter(tmp_path) as writer:
        writer.write(b"one", 600)
    with PacketFileWriter(tmp_path) as writer:
        writer.write(b"two", 601)
        path = writer.current_path
    with open(path, "rb") as f:
        assert f.read() == b"onetwo"


def test_main_empty_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", types.SimpleNamespace(buffer=io.BytesIO(b"")))
    assert main([]) == 0
    assert list(tmp_path.iterdir()) == []


def test_main_writes_packets(tmp_path, monkeypatch, capsys):
    datas, stream = _stream(4, seed=3)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", types.SimpleNamespace(buffer=io.BytesIO(stream)))
    assert main([]) == 0
    files = sorted(tmp_path.iterdir())
    assert 1 <= len(files) <= 2
    content = b"".join(p.read_bytes() for p in files)
    assert content == datas[1] + datas[2]
    assert "Writing to file:" in capsys.readouterr().out