"""Create and extract tar archives and calculate their digest

This package provides tools to serialize files and directories into a
(optionally gzip compressed) tar archive.  The digest of the archive
is calculated on the fly from the bytes written to the archive file,
so that the archive may later be verified against it.
"""

from ._meta import version as __version__
from .archiver import Archiver, tar_files
from .extractor import Extractor, untar_files
from .exception import *
