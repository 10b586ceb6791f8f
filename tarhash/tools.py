"""A collection of internal helper routines.

.. note::
   This module is intended for the internal use in tarhash and is not
   considered to be part of the API.  No effort will be made to keep
   anything in here compatible between different versions.
"""

from tarhash.sink import HashWriter


def checksum(fileobj, hashalg):
    """Calculate the base64 encoded digest of a file.
    """
    h = HashWriter(hashalg)
    chunksize = 8192
    while True:
        chunk = fileobj.read(chunksize)
        if not chunk:
            break
        h.write(chunk)
    return h.digest()
