"""Implement the index subcommand and helpers to manage the index file.
"""

import logging
from pathlib import Path
from tarhash.index import DigestIndex


log = logging.getLogger(__name__)

def read_index(idx_file):
    if idx_file.is_file():
        log.debug("reading index file %s", str(idx_file))
        with idx_file.open("rb") as f:
            return DigestIndex(f)
    else:
        log.debug("index file not found")
        return DigestIndex()

def write_index(idx_file, idx):
    log.debug("writing index file %s", str(idx_file))
    idx.sort()
    with idx_file.open("wb") as f:
        idx.write(f)

def list_index(args, config):
    idx = read_index(config.get('index', required=True, type=Path))
    for i in idx:
        print("%s  %s  %s" % (i.checksum, i.hashalg, i.path))
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('index', help="list the digest index")
    parser.add_argument('--index',
                        help=("path to the digest index file"))
    parser.set_defaults(func=list_index)
