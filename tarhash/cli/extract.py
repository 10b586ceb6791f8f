"""Implement the extract subcommand.
"""

from tarhash.extractor import untar_files
from tarhash.cli.create import add_compress_options


def extract(args, config):
    untar_files(args.archive, args.outdir, config.compress(args.archive))
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('extract', help="extract the archive")
    add_compress_options(parser)
    parser.add_argument('archive',
                        help=("path to the archive file"))
    parser.add_argument('outdir',
                        help=("directory to extract the archive into"))
    parser.set_defaults(func=extract)
