import threading
import time

import pytest

from goeskit.buffer_pool import BufferPool, PoolClosedError


def test_creates_up_to_capacity():
    pool = BufferPool(2)
    a = pool.pop_for_write()
    b = pool.pop_for_write()
    assert a is not b
    assert pool.size() == 2


def test_write_then_read_returns_same_item():
    pool = BufferPool(1)
    item = pool.pop_for_write()
    item.append(42)
    pool.push_write(item)
    got = pool.pop_for_read()
    assert got is item
    assert got == [42]


def test_custom_factory():
    pool = BufferPool(1, factory=lambda: bytearray(4))
    assert pool.pop_for_write() == bytearray(4)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        BufferPool(0)


def test_pop_for_write_waits_for_recycled_item():
    pool = BufferPool(1)
    item = pool.pop_for_write()
    result = []
    worker = threading.Thread(target=lambda: result.append(pool.pop_for_write()))
    worker.start()
    time.sleep(0.05)
    assert result == []
    pool.push_read(item)
    worker.join(timeout=5)
    assert result == [item]
    assert pool.size() == 1


def test_pop_for_read_waits_for_writer():
    pool = BufferPool(1)
    result = []
    worker = threading.Thread(target=lambda: result.append(pool.pop_for_read()))
    worker.start()
    item = pool.pop_for_write()
    pool.push_write(item)
    worker.join(timeout=5)
    assert result == [item]


def test_close_drains_then_returns_none():
    pool = BufferPool(2)
    item = pool.pop_for_write()
    pool.push_write(item)
    pool.close()
    assert pool.closed() is True
    assert pool.pop_for_read() is item
    assert pool.pop_for_read() is None


def test_close_wakes_waiting_reader():
    pool = BufferPool(1)
    result = []
    worker = threading.Thread(target=lambda: result.append(pool.pop_for_read()))
    worker.start()
    time.sleep(0.05)
    assert result == []
    assert pool.closed() is False
    pool.close()
    worker.join(timeout=5)
    assert worker.is_alive() is False
    assert len(result) == 1
    assert result[0] is None
    assert pool.closed() is True
    assert pool.size() == 0


def test_write_side_after_close_raises():
    pool = BufferPool(1)
    item = pool.pop_for_write()
    pool.close()
    with pytest.raises(PoolClosedError):
        pool.pop_for_write()
    with pytest.raises(PoolClosedError):
        pool.push_write(item)


def test_push_read_after_close_is_dropped():
    pool = BufferPool(1)
    item = pool.pop_for_write()
    pool.close()
    pool.push_read(item)
    assert pool.pop_for_read() is None
    assert pool.size() == 1