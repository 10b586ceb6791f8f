"""pytest configuration.
"""

import os
from pathlib import Path
from random import getrandbits
import shutil
import stat
import sys
import tempfile
import pytest
import tarhash
import tarhash.cli


__all__ = [
    'DataDir', 'DataContentFile', 'DataRandomFile',
    'archive_name', 'check_tree', 'get_tree', 'run_tool', 'setup_testdata',
]

_cleanup = True
testdir = Path(__file__).parent

def pytest_addoption(parser):
    parser.addoption("--no-cleanup", action="store_true", default=False,
                     help="do not clean up temporary data after the test.")

def pytest_configure(config):
    global _cleanup
    _cleanup = not config.getoption("--no-cleanup")

class TmpDir(object):
    """Provide a temporary directory.
    """
    def __init__(self):
        self.dir = Path(tempfile.mkdtemp(prefix="tarhash-test-"))
    def cleanup(self):
        if self.dir and _cleanup:
            shutil.rmtree(self.dir)
        self.dir = None
    def __enter__(self):
        return self.dir
    def __exit__(self, type, value, tb):
        self.cleanup()
    def __del__(self):
        self.cleanup()

@pytest.fixture(scope="module")
def tmpdir(request):
    with TmpDir() as td:
        yield td

@pytest.fixture(scope="function")
def testname(request):
    return request.function.__name__

_counter = {}
def archive_name(compress=False, tags=(), counter=None):
    l = ["archive"]
    l.extend(tags)
    if counter:
        _counter.setdefault(counter, 0)
        _counter[counter] += 1
        l.append(str(_counter[counter]))
    name = "-".join(l)
    ext = "tar.gz" if compress else "tar"
    return ".".join((name, ext))

class DataItem:

    def __init__(self, path, mode):
        self.path = path
        self.mode = mode

    @property
    def type(self):
        raise NotImplementedError

    def create(self, main_dir):
        raise NotImplementedError

class DataDir(DataItem):

    @property
    def type(self):
        return 'd'

    def create(self, main_dir):
        path = main_dir / self.path
        path.mkdir(parents=True, exist_ok=True)
        path.chmod(self.mode)

class DataContentFile(DataItem):

    def __init__(self, path, data, mode):
        super().__init__(path, mode)
        self.data = data

    @property
    def type(self):
        return 'f'

    def create(self, main_dir):
        path = main_dir / self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            f.write(self.data)
        path.chmod(self.mode)

class DataRandomFile(DataContentFile):

    def __init__(self, path, mode, *, size=1024):
        data = bytes(getrandbits(8) for _ in range(size))
        super().__init__(path, data, mode)

def setup_testdata(main_dir, items):
    for item in sorted(items, key=lambda i: i.path, reverse=True):
        item.create(main_dir)

def get_tree(main_dir):
    """Return a dict describing the content of main_dir.

    Map the relative path of each item found in main_dir to a tuple
    of type, mode, and content.
    """
    tree = {}
    for dirpath, dirnames, filenames in os.walk(str(main_dir)):
        dirpath = Path(dirpath)
        for n in dirnames:
            p = dirpath / n
            mode = stat.S_IMODE(p.stat().st_mode)
            tree[p.relative_to(main_dir).as_posix()] = ('d', mode, None)
        for n in filenames:
            p = dirpath / n
            mode = stat.S_IMODE(p.stat().st_mode)
            with p.open("rb") as f:
                data = f.read()
            tree[p.relative_to(main_dir).as_posix()] = ('f', mode, data)
    return tree

def check_tree(main_dir, items, prefix_dir=None):
    """Check that main_dir holds exactly the items.

    The path of the items is taken relative to prefix_dir, if given.
    """
    tree = get_tree(main_dir)
    expected = {}
    for i in items:
        path = i.path.relative_to(prefix_dir) if prefix_dir else i.path
        name = path.as_posix()
        data = i.data if i.type == 'f' else None
        expected[name] = (i.type, i.mode, data)
    assert tree == expected

def run_tool(monkeypatch, argv):
    """Run tarhash-tool with the command line argv, return the exit status.
    """
    monkeypatch.setattr(sys, "argv", argv.split())
    with pytest.raises(SystemExit) as excinfo:
        tarhash.cli.tarhash_tool()
    return excinfo.value.code

def pytest_report_header(config):
    """Add information on the package version used in the tests.
    """
    modpath = Path(tarhash.__file__).resolve().parent
    return [ "tarhash: %s" % (tarhash.__version__),
             "         %s" % (modpath)]
