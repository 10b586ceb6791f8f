#! /usr/bin/python
"""Create and extract tar archives and calculate their digest

This package provides tools to serialize files and directories into a
(optionally gzip compressed) tar archive.  The digest of the archive
is calculated on the fly from the bytes written to the archive file,
so that the archive may later be verified against it.

The package provides a command line tool to enable the following
tasks:

+ Create an archive, takes a list of files to include in the archive
  as input, and print its digest.

+ Extract an archive into a directory.

+ Verify an archive against a given digest or against the digest
  recorded in an index file.

+ List the digests recorded in an index file.
"""

import logging
from pathlib import Path
import setuptools
from setuptools import setup
import setuptools.command.build_py
import setuptools.command.sdist
try:
    import setuptools_scm
    version = setuptools_scm.get_version()
except (ImportError, LookupError):
    try:
        import _meta
        version = _meta.version
    except ImportError:
        logging.warning("warning: cannot determine version number")
        version = "UNKNOWN"

log = logging.getLogger("setup")
docstring = __doc__


class meta(setuptools.Command):

    description = "generate meta files"
    user_options = []
    meta_template = '''
version = "%(version)s"
'''

    def initialize_options(self):
        self.package_dir = None

    def finalize_options(self):
        self.package_dir = {}
        if self.distribution.package_dir:
            for name, path in self.distribution.package_dir.items():
                self.package_dir[name] = Path(path)

    def run(self):
        version = self.distribution.get_version()
        log.info("version: %s", version)
        values = {
            'version': version,
        }
        try:
            pkgname = self.distribution.packages[0]
        except IndexError:
            log.warning("warning: no package defined")
        else:
            pkgdir = Path(self.package_dir.get(pkgname, pkgname))
            if not pkgdir.is_dir():
                pkgdir.mkdir()
            with (pkgdir / "_meta.py").open("wt") as f:
                print(self.meta_template % values, file=f)
        with Path("_meta.py").open("wt") as f:
            print(self.meta_template % values, file=f)


class sdist(setuptools.command.sdist.sdist):
    def run(self):
        self.run_command('meta')
        super().run()


class build_py(setuptools.command.build_py.build_py):
    def run(self):
        self.run_command('meta')
        super().run()


with Path("README.rst").open("rt", encoding="utf8") as f:
    readme = f.read()

setup(
    name = "tarhash",
    version = version,
    description = docstring.split("\n")[0],
    long_description = readme,
    long_description_content_type = "text/x-rst",
    license = "Apache-2.0",
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Archiving",
        "Topic :: System :: Archiving :: Backup",
    ],
    packages = ["tarhash", "tarhash.cli"],
    python_requires = ">=3.8",
    install_requires = ["PyYAML", "packaging"],
    extras_require = {
        "test": ["pytest", "pytest-dependency"],
    },
    scripts = ["scripts/tarhash-tool.py"],
    cmdclass = dict(build_py=build_py, sdist=sdist, meta=meta),
)
