# Copyright (C) 2026 zfsra developers
# See COPYING for license information.
'''
Holds host-wide agent options.

Pool parameters come from the cluster manager (see resource.py); the options
here describe the host: where the ZFS tools live, where debug logs go and
whether debug logging is on at all.
'''

import os
import configparser

from . import constants
from .sh import is_program


_SYSTEMWIDE = '/etc/zfsra/zfsra.conf'


def _local_config():
    return os.getenv(constants.CONFIG_FILE_ENV)


# opt_ classes
# members: default, validate(), get()

class opt_program(object):
    def __init__(self, prog):
        self.default = prog

    def validate(self, prog):
        if is_program(prog) is None:
            raise ValueError("%s does not exist or is not a program" % prog)

    def get(self, value):
        # resolve against PATH and the sbin dirs; an unresolvable name is
        # returned as is so that callers see the tool as missing
        return is_program(value) or value


class opt_boolean(object):
    def __init__(self, dflt):
        self.default = dflt
        self.completions = ('yes', 'true', 'on', '1', 'no', 'false', 'off', '0')

    def validate(self, val):
        if val is True:
            val = 'true'
        elif val is False:
            val = 'false'
        val = val.lower()
        if val not in self.completions:
            raise ValueError("Not a boolean: %s (try one of: %s)" % (
                val, ', '.join(self.completions)))

    def get(self, value):
        return value.lower() in ('yes', 'true', 'on', '1')


class opt_dir(object):
    def __init__(self, path):
        self.default = path

    def validate(self, val):
        if not os.path.isdir(val):
            raise ValueError("Directory not found: %s" % (val))

    def get(self, value):
        return value


DEFAULTS = {
    'core': {
        'debug': opt_boolean('no'),
        'zpool': opt_program(constants.ZPOOL),
        'zfs': opt_program(constants.ZFS),
        'fuser': opt_program(constants.FUSER),
    },
    'path': {
        'log_dir': opt_dir('/var/log/zfsra'),
    },
}


def _stringify(val):
    if val is True:
        return 'true'
    elif val is False:
        return 'false'
    elif isinstance(val, str):
        return val
    else:
        return str(val)


class _Configuration(object):
    def __init__(self):
        self._defaults = None
        self._systemwide = None
        self._local = None
        self._session = None

    def load(self):
        self._defaults = configparser.ConfigParser()
        for section, keys in DEFAULTS.items():
            self._defaults.add_section(section)
            for key, opt in keys.items():
                self._defaults.set(section, key, opt.default)

        self._systemwide = None
        if os.path.isfile(_SYSTEMWIDE):
            self._systemwide = configparser.ConfigParser()
            self._systemwide.read([_SYSTEMWIDE])
        self._local = None
        local = _local_config()
        if local and os.path.isfile(local):
            self._local = configparser.ConfigParser()
            self._local.read([local])
        self._session = configparser.ConfigParser()

    def get_impl(self, section, name):
        try:
            for layer in (self._session, self._local, self._systemwide):
                if layer and layer.has_option(section, name):
                    return layer.get(section, name) or ''
            return self._defaults.get(section, name) or ''
        except (configparser.NoOptionError, configparser.NoSectionError) as e:
            raise ValueError(e)

    def get(self, section, name):
        return DEFAULTS[section][name].get(self.get_impl(section, name))

    def set(self, section, name, value):
        '''Override an option for the rest of this invocation, nothing is saved'''
        if section not in DEFAULTS:
            raise ValueError("Setting invalid section " + str(section))
        if not self._defaults.has_option(section, name):
            raise ValueError("Setting invalid option %s.%s" % (section, name))
        DEFAULTS[section][name].validate(value)
        if not self._session.has_section(section):
            self._session.add_section(section)
        self._session.set(section, name, _stringify(value))


_configuration = _Configuration()


class _Section(object):
    def __init__(self, section):
        object.__setattr__(self, 'section', section)

    def __getattr__(self, name):
        return _configuration.get(self.section, name)

    def __setattr__(self, name, value):
        _configuration.set(self.section, name, value)


def load():
    _configuration.load()


def reset():
    '''re-read configuration files and drop session overrides'''
    _configuration.load()


load()
core = _Section('core')
path = _Section('path')
