"""Test module tarhash.tools
"""

import base64
import hashlib
from io import BytesIO
import pytest
from tarhash.tools import *

@pytest.mark.parametrize("hashalg", ["sha1", "sha256"])
def test_checksum(hashalg):
    data = bytes(range(256)) * 100
    m = hashlib.new(hashalg)
    m.update(data)
    expected = base64.b64encode(m.digest()).decode('ascii')
    assert checksum(BytesIO(data), hashalg) == expected

def test_checksum_empty():
    assert checksum(BytesIO(b""), "sha1") == "2jmj7l5rSw0yVb/vlWAYkK/YBwk="
