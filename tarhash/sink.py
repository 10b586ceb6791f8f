"""Composable output sinks.

A sink is anything having a :meth:`write` method accepting bytes.  The
writers in this module may be stacked: the archiver writes the tar
stream, possibly through a gzip compressor, into a :class:`TeeWriter`
that forwards the bytes to the destination file and to a
:class:`HashWriter` at the same time.
"""

import base64
import hashlib


class HashWriter:
    """A sink that feeds all data written into a hash.
    """

    def __init__(self, hashalg="sha1"):
        self.hashalg = hashalg
        self._hash = hashlib.new(hashalg)

    def write(self, data):
        self._hash.update(data)
        return len(data)

    def digest(self):
        """Return the base64 encoded digest of the data written so far.
        """
        return base64.b64encode(self._hash.digest()).decode('ascii')

    def hexdigest(self):
        return self._hash.hexdigest()


class TeeWriter:
    """A sink that forwards all data written to several other sinks.
    """

    def __init__(self, *sinks):
        self.sinks = sinks

    def write(self, data):
        for s in self.sinks:
            s.write(data)
        return len(data)

    def flush(self):
        for s in self.sinks:
            flush = getattr(s, 'flush', None)
            if flush:
                flush()
