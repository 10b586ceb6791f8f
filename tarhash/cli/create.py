"""Implement the create subcommand.
"""

import logging
from tarhash.archiver import tar_files
from tarhash.index import IndexItem
from tarhash.cli.index import read_index, write_index


log = logging.getLogger(__name__)

def create(args, config):
    compress = config.compress(args.archive)
    hashalg = config.hashalg
    digest = tar_files(args.files, args.archive, config.strip, compress,
                       hashalg=hashalg)
    print(digest)
    idx_file = config.index
    if idx_file:
        idx = read_index(idx_file)
        idx.add(IndexItem(path=args.archive, checksum=digest,
                          hashalg=hashalg, compressed=compress))
        write_index(idx_file, idx)
    return 0

def add_compress_options(parser):
    clsgrp = parser.add_mutually_exclusive_group()
    clsgrp.add_argument('--compress', dest='compress',
                        action='store_const', const=True,
                        help=("use gzip compression"))
    clsgrp.add_argument('--no-compress', dest='compress',
                        action='store_const', const=False,
                        help=("do not use compression"))

def add_parser(subparsers):
    parser = subparsers.add_parser('create', help="create the archive")
    parser.add_argument('--strip',
                        help=("prefix to remove from the file names"))
    add_compress_options(parser)
    parser.add_argument('--hashalg',
                        help=("hash algorithm for the archive digest"))
    parser.add_argument('--index',
                        help=("record the digest in this index file"))
    parser.add_argument('archive',
                        help=("path to the archive file"))
    parser.add_argument('files', nargs='+',
                        help="files to add to the archive")
    parser.set_defaults(func=create)
