"""Provide the Extractor class.

The extractor reads a tar archive sequentially and recreates the
files and directories below an output folder.  Entries are processed
in the order they appear in the archive.  The parent directory of an
entry is assumed to have been extracted before, which is always the
case for archives created by :class:`tarhash.archiver.Archiver`.
"""

import gzip
import logging
import os
import stat
import tarfile
from tarhash.exception import *


log = logging.getLogger(__name__)

def member_path(name):
    """Return the relative path components of an archive entry name.

    Leading slashes are removed.  Raise :exc:`TarReadError` if the
    name would escape the output folder.
    """
    parts = [ p for p in name.lstrip("/").split("/") if p and p != "." ]
    if ".." in parts:
        raise TarReadError("invalid entry name '%s': must be normalized"
                           % name)
    return parts


class Extractor:
    """Extract tar archives.
    """

    def __init__(self, log=None):
        self.log = log or logging.getLogger(__name__)

    def extract(self, archive_path, output_folder, compressed=False):
        """Extract the archive at archive_path into output_folder.
        """
        self.log.debug("extracting %s to %s", archive_path, output_folder)
        try:
            f = open(archive_path, "rb")
        except OSError as e:
            raise TarReadError("cannot open backup file '%s': %s"
                               % (archive_path, e)) from e
        with f:
            if compressed:
                r = gzip.GzipFile(filename="", mode="rb", fileobj=f)
                try:
                    r.peek(1)
                except (OSError, EOFError) as e:
                    raise TarReadError("cannot uncompress tar file '%s': %s"
                                       % (archive_path, e)) from e
            else:
                r = f
            try:
                tarf = tarfile.open(fileobj=r, mode="r|")
            except (OSError, EOFError, tarfile.TarError) as e:
                raise TarReadError("failed while reading tar header: %s"
                                   % e) from e
            with tarf:
                self._extract_members(tarf, str(output_folder))

    def _extract_members(self, tarf, output_folder):
        # We set the mode of the directories last in reverse order.
        # This way, a directory that is not writable may still receive
        # its content.
        dirstack = []
        while True:
            try:
                ti = tarf.next()
            except (OSError, EOFError, tarfile.TarError) as e:
                raise TarReadError("failed while reading tar header: %s"
                                   % e) from e
            if ti is None:
                break
            parts = member_path(ti.name)
            if ti.isdir() and not parts:
                self.log.debug("skipping %s: output folder itself", ti.name)
                continue
            path = os.path.join(output_folder, *parts)
            if ti.isdir():
                if self._extract_dir(ti, path):
                    dirstack.append((ti, path))
            elif ti.isreg():
                self._extract_file(tarf, ti, path)
            else:
                self.log.warning("skipping %s: unsupported type", ti.name)
        while dirstack:
            ti, path = dirstack.pop()
            try:
                os.chmod(path, stat.S_IMODE(ti.mode))
            except OSError as e:
                raise TarExtractError("cannot set proper mode on "
                                      "directory '%s': %s" % (path, e)) from e

    def _extract_dir(self, ti, path):
        """Create the directory path.  Return True if it has been
        created, an existing directory is left unchanged.
        """
        if os.path.isdir(path):
            self.log.debug("directory %s exists", path)
            return False
        self.log.debug("creating directory %s", path)
        try:
            mode = stat.S_IMODE(ti.mode) | stat.S_IRWXU
            os.makedirs(path, mode=mode)
        except OSError as e:
            raise TarExtractError("cannot extract directory '%s': %s"
                                  % (path, e)) from e
        return True

    def _extract_file(self, tarf, ti, path):
        self.log.debug("extracting file %s", path)
        try:
            with tarf.extractfile(ti) as fileobj:
                buf = fileobj.read()
        except (OSError, EOFError, tarfile.TarError) as e:
            raise TarReadError("failed while reading tar contents: %s"
                               % e) from e
        try:
            with open(path, "wb") as f:
                f.write(buf)
        except OSError as e:
            raise TarExtractError("some of the tar contents cannot be "
                                  "written to disk: '%s': %s"
                                  % (path, e)) from e
        try:
            os.chmod(path, stat.S_IMODE(ti.mode))
        except OSError as e:
            raise TarExtractError("cannot set proper mode on file '%s': %s"
                                  % (path, e)) from e


def untar_files(tar_file, output_folder, compressed, log=None):
    """Extract the tar archive tar_file into output_folder.  If
    compressed is True, the archive is assumed to be gzip compressed.
    """
    Extractor(log=log).extract(tar_file, output_folder, compressed)
