"""Provide the subcommands of the tarhash-tool command line tool.
"""

import argparse
import importlib
import logging
import sys
from tarhash.config import Config
from tarhash.exception import *

log = logging.getLogger(__name__)
subcmds = ( "create", "extract", "verify", "index", )

def tarhash_tool():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    argparser = argparse.ArgumentParser()
    argparser.add_argument('-v', '--verbose', action='store_true',
                           help=("verbose diagnostic output"))
    subparsers = argparser.add_subparsers(title='subcommands', dest='subcmd')
    for sc in subcmds:
        m = importlib.import_module('tarhash.cli.%s' % sc)
        m.add_parser(subparsers)
    args = argparser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if not hasattr(args, "func"):
        argparser.error("subcommand is required")

    try:
        config = Config(args)
        log.debug("%s %s: config files: %s", argparser.prog, args.subcmd,
                  ", ".join(config.config_file) or "none")
        status = args.func(args, config)
    except ArgError as e:
        argparser.error(str(e))
    except ConfigError as e:
        print("%s: configuration error: %s" % (argparser.prog, e),
              file=sys.stderr)
        sys.exit(2)
    except TarError as e:
        if isinstance(e, TarIntegrityError):
            status = 3
        else:
            status = 1
        print("%s %s: error: %s" % (argparser.prog, args.subcmd, e),
              file=sys.stderr)
        sys.exit(status)
    sys.exit(status)
