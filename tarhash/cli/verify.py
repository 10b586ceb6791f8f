"""Implement the verify subcommand.
"""

import logging
from tarhash.exception import ArgError
from tarhash.index import verify_digest
from tarhash.cli.index import read_index


log = logging.getLogger(__name__)

def verify(args, config):
    if args.digest:
        verify_digest(args.archive, args.digest, config.hashalg)
    elif config.index:
        read_index(config.index).verify(args.archive)
    else:
        raise ArgError("either --digest or an index file is required")
    log.info("%s: digest OK", args.archive)
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('verify',
                                   help="verify the digest of the archive")
    parser.add_argument('--digest',
                        help=("expected base64 encoded digest"))
    parser.add_argument('--hashalg',
                        help=("hash algorithm of the digest"))
    parser.add_argument('--index',
                        help=("look up the digest in this index file"))
    parser.add_argument('archive',
                        help=("path to the archive file"))
    parser.set_defaults(func=verify)
