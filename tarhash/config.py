"""Manage configuration.

.. note::
   This module is intended as a helper for the internal use in the
   command line tool.  It is not considered to be part of the API of
   tarhash.  Most users will not need to use it directly or even care
   about it.
"""

from collections import ChainMap
import configparser
import hashlib
import os
from pathlib import Path
from tarhash.exception import ConfigError


def get_config_file():
    try:
        return os.environ['TARHASH_CFG']
    except KeyError:
        return "/etc/tarhash.cfg"

def boolean(value):
    """Convert a configuration value to bool.
    """
    if isinstance(value, bool):
        return value
    try:
        return configparser.ConfigParser.BOOLEAN_STATES[value.lower()]
    except KeyError:
        raise ConfigError("invalid boolean value '%s'" % value) from None

suffix_map = {
    '.tar': False,
    '.tar.gz': True,
    '.tgz': True,
}
"""Map path suffix to compression."""

class Config(ChainMap):

    defaults = {
        'hashalg': "sha1",
        'strip': "",
        'index': None,
        'compress': None,
    }
    config_section = "tarhash"
    args_options = ('hashalg', 'strip', 'index', 'compress')

    def __init__(self, args):
        for o in self.args_options:
            if not hasattr(args, o):
                setattr(args, o, None)
        args_cfg = { k:vars(args)[k]
                     for k in self.args_options
                     if vars(args)[k] is not None }
        super().__init__({}, args_cfg)
        cp = configparser.ConfigParser(comment_prefixes=('#', '!'),
                                       interpolation=None)
        try:
            self.config_file = cp.read(get_config_file())
        except configparser.Error as e:
            raise ConfigError(str(e)) from e
        try:
            self.maps.append(cp[self.config_section])
        except KeyError:
            pass
        self.maps.append(self.defaults)

    def get(self, key, required=False, type=None):
        value = super().get(key)
        if value is None:
            if required:
                raise ConfigError("%s not specified" % key)
        elif type:
            value = type(value)
        return value

    @property
    def hashalg(self):
        hashalg = self.get('hashalg', required=True)
        if hashalg not in hashlib.algorithms_available:
            raise ConfigError("unsupported hash algorithm '%s'" % hashalg)
        return hashalg

    @property
    def strip(self):
        return self.get('strip')

    @property
    def index(self):
        return self.get('index', type=Path)

    def compress(self, path):
        """Whether to use gzip compression for the archive at path.

        Fall back to guess from the suffix if not configured.
        """
        compress = self.get('compress', type=boolean)
        if compress is None:
            path = Path(path)
            suffix = "".join(path.suffixes[-2:])
            compress = suffix_map.get(suffix, suffix_map.get(path.suffix, True))
        return compress
