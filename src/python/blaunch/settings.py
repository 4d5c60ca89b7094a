#-*-coding:utf-8-*-
"""
@package blaunch.settings
@brief Reading options and logging configuration from yaml settings files

A settings file may look like this

@code
profiles:
    commercial-features: auto      # or enabled, disabled
system-properties:
    tangosol.coherence.cluster: test
environment:
    LANG: C
freeform:
    - -Xmx512m
arguments: [--verbose]
remote-debugging:
    enabled: false
    port: 0
logging:
    verbosity: INFO
@endcode

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['load_settings', 'options_from_settings', 'load_options', 'settings_path', 'LogConfigurator']

import os
import logging
import logging.config
import warnings

import yaml

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader
# end get fastest loader

from .base import set_log_level
from .options import (OptionsByType,
                      Freeform,
                      Arguments,
                      SystemProperty,
                      EnvironmentVariable,
                      DisplayName,
                      WorkingDirectory,
                      RemoteDebugging)
from .profiles import profile_type

log = logging.getLogger('blaunch.settings')


# ==============================================================================
## @name Constants
# ------------------------------------------------------------------------------
## @{

## Environment variable pointing to the settings file to use by default
settings_env_var = 'BLAUNCH_SETTINGS'

## If set, the logging system will not be configured from settings
logging_disable_env_var = 'BLAUNCH_LOGGING_INITIALIZATION_DISABLE'

## Maps variant names as used in settings files to the factory methods of profiles
profile_variants = {
    'enabled': 'enabled',
    'disabled': 'disabled',
    'auto': 'auto_detect',
    True: 'enabled',
    False: 'disabled',
}

## -- End Constants -- @}


# ==============================================================================
## @name Utilities
# ------------------------------------------------------------------------------
## @{

def _mapping(data, key):
    """@return the mapping at key, or an empty dict
    @throws ValueError if the value is no mapping"""
    value = data.get(key) or dict()
    if not isinstance(value, dict):
        raise ValueError("'%s' must be a mapping, got %r" % (key, value))
    return value


def _sequence(data, key):
    value = data.get(key) or list()
    if not isinstance(value, (list, tuple)):
        raise ValueError("'%s' must be a list, got %r" % (key, value))
    return value


def _profile(name, variant):
    """@return a profile instance of the type registered under name, using the given variant"""
    try:
        profile_cls = profile_type(name)
    except KeyError as err:
        raise ValueError(str(err))
    # end convert exception

    try:
        factory_name = profile_variants.get(variant)
    except TypeError:
        factory_name = None
    # end handle unhashable variants
    factory = factory_name and getattr(profile_cls, factory_name, None)
    if factory is None:
        raise ValueError("Profile '%s' doesn't support variant %r" % (name, variant))
    # end check factory
    return factory()


def _remote_debugging(value):
    if isinstance(value, dict):
        return RemoteDebugging(value.get('enabled', False), value.get('port', 0))
    return RemoteDebugging(bool(value))

## -- End Utilities -- @}


# ==============================================================================
## @name Interface
# ------------------------------------------------------------------------------
## @{

def settings_path(environ=None):
    """@return path to the settings file as configured in the environment, or None
    @param environ dict with environment variables, defaults to os.environ"""
    if environ is None:
        environ = os.environ
    # end default environment
    return environ.get(settings_env_var) or None


def load_settings(path_or_stream):
    """@return dict with the settings read from the given yaml file
    @param path_or_stream path to a yaml file, or an object providing the read() method
    @throws ValueError if the document doesn't contain a mapping"""
    if hasattr(path_or_stream, 'read'):
        data = yaml.load(path_or_stream, Loader=Loader)
    else:
        with open(path_or_stream) as stream:
            data = yaml.load(stream, Loader=Loader)
        # end with stream
    # end handle input type
    data = data or dict()
    if not isinstance(data, dict):
        raise ValueError("Settings must be a mapping, got %r" % (data,))
    # end check type
    return data


def options_from_settings(data):
    """@return a new OptionsByType instance with all options defined in the given settings
    @param data a dict as returned by load_settings()
    @throws ValueError if the settings are invalid"""
    options = OptionsByType()
    for name, variant in _mapping(data, 'profiles').items():
        options.add(_profile(name, variant))
    # end for each profile
    for name, value in _mapping(data, 'system-properties').items():
        options.add(SystemProperty(name, value))
    # end for each property
    for name, value in _mapping(data, 'environment').items():
        options.add(EnvironmentVariable(name, value))
    # end for each variable
    for argument in _sequence(data, 'freeform'):
        options.add(Freeform(argument))
    # end for each freeform argument
    if 'arguments' in data:
        options.add(Arguments(*_sequence(data, 'arguments')))
    # end handle arguments
    if 'remote-debugging' in data:
        options.add(_remote_debugging(data['remote-debugging']))
    # end handle remote debugging
    if data.get('display-name'):
        options.add(DisplayName(data['display-name']))
    # end handle name
    if data.get('working-directory'):
        options.add(WorkingDirectory(data['working-directory']))
    # end handle directory

    known_keys = ('profiles', 'system-properties', 'environment', 'freeform', 'arguments',
                  'remote-debugging', 'display-name', 'working-directory', 'logging')
    for key in data:
        if key not in known_keys:
            log.warning("Ignoring unknown settings key '%s'", key)
        # end warn about unknown keys
    # end for each key
    return options


def load_options(path=None):
    """@return OptionsByType as read from the given settings file, or from the one configured in the
    environment. If there is no such file, the result is empty"""
    if path is None:
        path = settings_path()
    # end default path
    if path is None:
        return OptionsByType()
    # end handle no settings
    return options_from_settings(load_settings(path))

## -- End Interface -- @}


# ==============================================================================
## @name Classes
# ------------------------------------------------------------------------------
## @{

class LogConfigurator(object):
    """Initializes the logging system from the 'logging' section of the settings, which supports

    - verbosity: name of the level of the 'blaunch' logger, like INFO
    - inifile: file to configure logging with, using logging.config.fileConfig()
    - disable: if True, logging is not configured at all
    """
    __slots__ = ()

    ## Name of the logger whose verbosity is controlled
    logger_name = 'blaunch'

    @classmethod
    def initialize(cls, data):
        """Initialize the logging system using the given settings
        @param data a dict as returned by load_settings()
        @return True if logging was configured"""
        value = _mapping(data, 'logging')
        if value.get('disable') or logging_disable_env_var in os.environ:
            return False
        # end no init if disabled

        log_config_file = value.get('inifile')
        if not log_config_file or not os.path.isfile(log_config_file):
            if log_config_file:
                warnings.warn("logging system using basic configuration, log config file '%s' wasn't accessible"
                              % log_config_file)
            # end warn about missing file
            logging.basicConfig()
        else:
            try:
                logging.config.fileConfig(log_config_file, disable_existing_loggers=False)
            except (IOError, OSError, KeyError, ValueError) as err:
                warnings.warn("logging configuration from ini file failed with error: %s" % str(err))
                logging.basicConfig()
            # end handle invalid configuration
        # end handle configuration file

        verbosity = value.get('verbosity')
        if verbosity is not None:
            level = logging.getLevelName(str(verbosity).upper())
            if not isinstance(level, int):
                raise ValueError("Invalid logging verbosity: %s" % verbosity)
            # end check level
            set_log_level(logging.getLogger(cls.logger_name), level)
        # end handle verbosity
        return True

# end class LogConfigurator

## -- End Classes -- @}
