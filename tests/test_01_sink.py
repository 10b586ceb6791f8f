"""Test module tarhash.sink
"""

import base64
import hashlib
from io import BytesIO
import pytest
from tarhash.sink import HashWriter, TeeWriter


def test_hash_empty():
    """The digest of no data is the base64 encoded hash of nothing.
    """
    h = HashWriter()
    assert h.digest() == "2jmj7l5rSw0yVb/vlWAYkK/YBwk="
    assert h.hexdigest() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"

@pytest.mark.parametrize("hashalg", ["sha1", "sha256", "md5"])
def test_hash_chunks(hashalg):
    """Writing the data in chunks yields the same digest.
    """
    data = b"The quick brown fox jumps over the lazy dog\n" * 100
    h = HashWriter(hashalg)
    for i in range(0, len(data), 1000):
        assert h.write(data[i:i+1000]) == len(data[i:i+1000])
    m = hashlib.new(hashalg)
    m.update(data)
    assert h.digest() == base64.b64encode(m.digest()).decode('ascii')

def test_hash_invalid_alg():
    with pytest.raises(ValueError):
        HashWriter("bogus")

def test_tee():
    """TeeWriter forwards all data to each sink.
    """
    data = b"foo bar baz"
    f1 = BytesIO()
    f2 = BytesIO()
    h = HashWriter()
    w = TeeWriter(f1, h, f2)
    assert w.write(data[:4]) == 4
    assert w.write(data[4:]) == len(data) - 4
    w.flush()
    assert f1.getvalue() == data
    assert f2.getvalue() == data
    assert h.digest() == base64.b64encode(hashlib.sha1(data).digest()).decode()

def test_tee_flush():
    """flush is forwarded to the sinks that support it.
    """
    class Sink(BytesIO):
        flushed = 0
        def flush(self):
            self.flushed += 1
            super().flush()
    s = Sink()
    w = TeeWriter(s, HashWriter())
    w.write(b"x")
    w.flush()
    assert s.flushed == 1
