"""Provide the Archiver class.

The archiver serializes a list of files and directories into a tar
archive, optionally gzip compressed.  The digest of the archive is
calculated on the fly from the very bytes written to the archive
file, e.g. after compression if compression is enabled.
"""

import gzip
import logging
import os
import stat
import tarfile
from tarhash.exception import *
from tarhash.sink import HashWriter, TeeWriter


log = logging.getLogger(__name__)

def arcname(path, strip, sep=os.sep, altsep=os.altsep):
    """Return the name of the archive entry for path.

    Remove the prefix strip from path and use forward slashes as
    separator, regardless of the host's conventions.
    """
    name = str(path)
    if strip and name.startswith(strip):
        name = name[len(strip):]
    name = name.replace(sep, "/")
    if altsep:
        name = name.replace(altsep, "/")
    return name


class Archiver:
    """Create tar archives and calculate their digest.
    """

    def __init__(self, log=None, hashalg="sha1"):
        self.log = log or logging.getLogger(__name__)
        self.hashalg = hashalg

    def create(self, file_list, target_path, strip="", compress=False):
        """Create a tar archive at target_path holding the items in
        file_list.  Return the base64 encoded digest of the archive.
        """
        hashw = HashWriter(self.hashalg)
        self.log.debug("creating archive %s", target_path)
        try:
            f = open(target_path, "wb")
        except OSError as e:
            raise TarCreateError("cannot create backup file '%s': %s"
                                 % (target_path, e)) from e
        # Writers to close, in the order they have been opened.
        writers = [f]
        try:
            w = TeeWriter(f, hashw)
            if compress:
                w = gzip.GzipFile(filename="", mode="wb", fileobj=w, mtime=0)
                writers.append(w)
            tarf = tarfile.open(fileobj=w, mode="w|",
                                format=tarfile.PAX_FORMAT, dereference=True)
            writers.append(tarf)
            for p in file_list:
                self._write_contents(tarf, str(p), strip)
        except BaseException:
            self._close(writers, target_path, quiet=True)
            raise
        self._close(writers, target_path)
        digest = hashw.digest()
        self.log.debug("archive %s: %s digest %s",
                       target_path, self.hashalg, digest)
        return digest

    def _close(self, writers, target_path, quiet=False):
        """Close the writers in reverse order of opening.

        All writers get closed, the first error is raised unless quiet
        is set.  In the latter case, an error is pending already and
        close errors only get logged.
        """
        error = None
        for w in reversed(writers):
            try:
                w.close()
            except (OSError, tarfile.TarError) as e:
                if quiet:
                    self.log.warning("error closing backup file %s: %s",
                                     target_path, e)
                elif error is None:
                    error = e
        if error is not None:
            raise TarCreateError("error closing backup file '%s': %s"
                                 % (target_path, error)) from error

    def _add_item(self, tarf, path, strip):
        """Add an entry for path to the archive.  Return True if path
        is a directory.
        """
        try:
            st = os.stat(path)
        except OSError as e:
            raise TarCreateError("cannot stat '%s': %s" % (path, e)) from e
        if not (stat.S_ISREG(st.st_mode) or stat.S_ISDIR(st.st_mode)):
            raise TarInvalidTypeError(path, stat.S_IFMT(st.st_mode))
        name = arcname(path, strip)
        try:
            ti = tarf.gettarinfo(path, arcname=name)
        except OSError as e:
            raise TarCreateError("cannot create tar header for '%s': %s"
                                 % (path, e)) from e
        # tarfile strips leading slashes, use our name verbatim.
        ti.name = name
        ti.mtime = int(ti.mtime)
        if ti.isreg():
            self.log.debug("adding file %s as %s", path, name)
            try:
                with open(path, "rb") as f:
                    tarf.addfile(ti, fileobj=f)
            except (OSError, tarfile.TarError) as e:
                raise TarCreateError("failed to write '%s': %s"
                                     % (path, e)) from e
            return False
        self.log.debug("adding directory %s as %s", path, name)
        try:
            tarf.addfile(ti)
        except (OSError, tarfile.TarError) as e:
            raise TarCreateError("cannot write header for '%s': %s"
                                 % (path, e)) from e
        return True

    def _list_dir(self, path):
        try:
            with os.scandir(path) as it:
                return [ entry.name for entry in it ]
        except OSError as e:
            raise TarCreateError("error reading directory '%s': %s"
                                 % (path, e)) from e

    def _write_contents(self, tarf, path, strip):
        """Add an entry for path to the archive.  If path is a
        directory, add its content depth first.
        """
        if not self._add_item(tarf, path, strip):
            return
        # Each level holds a directory and its names not yet added.
        stack = [ (path, iter(self._list_dir(path))) ]
        while stack:
            dirpath, names = stack[-1]
            name = next(names, None)
            if name is None:
                stack.pop()
                continue
            p = os.path.join(dirpath, name)
            if self._add_item(tarf, p, strip):
                stack.append((p, iter(self._list_dir(p))))


def tar_files(file_list, target_path, strip, compress,
              hashalg="sha1", log=None):
    """Create a tar archive at target_path holding the files listed in
    file_list.  If compress is True, the archive will also be gzip
    compressed.  Return the base64 encoded digest of the archive file.
    """
    return Archiver(log=log, hashalg=hashalg).create(file_list, target_path,
                                                     strip, compress)
