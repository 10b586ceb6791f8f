"""Provide the DigestIndex class that records the digests of archives.
"""

from collections.abc import Sequence
import datetime
from pathlib import Path
from packaging.version import InvalidVersion, Version
import yaml
from tarhash.exception import TarIntegrityError, TarReadError
from tarhash.tools import checksum


def verify_digest(path, digest, hashalg="sha1"):
    """Check the digest of the archive file at path.

    Raise :exc:`TarIntegrityError` if it does not match.
    """
    try:
        with open(path, "rb") as f:
            cs = checksum(f, hashalg)
    except OSError as e:
        raise TarReadError("cannot open backup file '%s': %s"
                           % (path, e)) from e
    if cs != digest:
        raise TarIntegrityError("%s: %s digest does not match"
                                % (path, hashalg))


def _parse_date(value):
    # YAML may already have resolved an unquoted timestamp.
    if isinstance(value, datetime.datetime):
        return value
    return datetime.datetime.fromisoformat(value)


class IndexItem:

    def __init__(self, data=None, path=None, checksum=None,
                 hashalg="sha1", compressed=False):
        if data is not None:
            self.date = _parse_date(data['date'])
            self.path = Path(data['path'])
            self.checksum = data['checksum']
            self.hashalg = data.get('hashalg', "sha1")
            self.compressed = bool(data.get('compressed', False))
        elif path is not None:
            self.date = datetime.datetime.now()
            self.path = Path(path).resolve()
            self.checksum = checksum
            self.hashalg = hashalg
            self.compressed = compressed
        else:
            raise TypeError("Either data or path must be provided")

    def as_dict(self):
        """Return a dictionary representation of this objects.
        """
        return {
            'date': self.date.isoformat(sep=' '),
            'path': str(self.path),
            'checksum': self.checksum,
            'hashalg': self.hashalg,
            'compressed': self.compressed,
        }

    def verify(self):
        verify_digest(self.path, self.checksum, self.hashalg)

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, self.as_dict())


class DigestIndex(Sequence):

    Version = "1.0"

    def __init__(self, fileobj=None):
        if fileobj is not None:
            docs = yaml.safe_load_all(fileobj)
            try:
                self.head = next(docs)
                items = next(docs) or []
            except (StopIteration, yaml.YAMLError) as e:
                raise TarReadError("invalid digest index: %s" % e) from e
            if not isinstance(self.head, dict) or "Version" not in self.head:
                raise TarReadError("invalid digest index: missing version")
            try:
                version = self.version
            except InvalidVersion as e:
                raise TarReadError("invalid digest index: %s" % e) from e
            if version.major > Version(self.Version).major:
                raise TarReadError("unsupported digest index version %s"
                                   % version)
            self.items = [ IndexItem(data=d) for d in items ]
        else:
            self.head = {
                "Version": self.Version,
            }
            self.items = []

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items.__getitem__(index)

    @property
    def version(self):
        return Version(str(self.head["Version"]))

    def add(self, item):
        """Add an item, replacing any previous item having the same path.
        """
        self.items = [ i for i in self.items if i.path != item.path ]
        self.items.append(item)

    def find(self, path):
        path = Path(path).resolve()
        for i in self:
            if i.path == path:
                return i
        else:
            return None

    def verify(self, path):
        item = self.find(path)
        if item is None:
            raise TarIntegrityError("%s: not found in the digest index" % path)
        item.verify()

    def write(self, fileobj):
        fileobj.write("%YAML 1.1\n".encode("ascii"))
        yaml.dump(self.head, stream=fileobj, encoding="ascii",
                  default_flow_style=False, explicit_start=True)
        yaml.dump([ i.as_dict() for i in self ],
                  stream=fileobj, encoding="ascii",
                  default_flow_style=False, explicit_start=True)

    def sort(self, *, key=None, reverse=False):
        if key is None:
            key = lambda i: i.date
        self.items.sort(key=key, reverse=reverse)
