#-*-coding:utf-8-*-
"""
@package blaunch.options
@brief A type-indexed registry of options, resolving absent kinds through per-kind default providers

Options are immutable facts about how an application should be launched. They are stored by their kind,
which is a type, not a string key. Each kind stores at most one value, unless it declares itself
to be `multiple`, in which case all values are kept in insertion order.

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Option', 'OptionsByType', 'register_default', 'default_provider', 'Freeform',
           'Arguments', 'SystemProperty', 'EnvironmentVariable', 'DisplayName', 'WorkingDirectory',
           'Executable', 'Console', 'RemoteDebugging']

import logging
import itertools
import subprocess
import sys

from collections import OrderedDict

from .base import (NotConfigured,
                   TRACE)
from .interfaces import IPlatformAware
from .detect import detector

log = logging.getLogger('blaunch.options')


# ==============================================================================
## @name Default Providers
# ------------------------------------------------------------------------------
## @{

## kind -> callable returning the value to use if the kind isn't stored
_default_providers = dict()

## Produces storage keys for values of multiple kinds which don't discriminate themselves
_append_keys = itertools.count()


def _kind_of(kind_or_value):
    """@return the kind under which the given Option type or instance is stored. Types which are not options,
    like interfaces, are returned unchanged"""
    if not isinstance(kind_or_value, type):
        return type(kind_or_value).kind()
    if issubclass(kind_or_value, Option):
        return kind_or_value.kind()
    return kind_or_value


def register_default(kind, provider):
    """Register the given provider to produce the default value for the given kind of option.
    It is called whenever a registry is asked for the kind without holding a value for it.
    @param kind an Option subtype
    @param provider a callable taking no argument, returning an instance of kind
    @return provider"""
    _default_providers[_kind_of(kind)] = provider
    return provider


def default_provider(kind):
    """@return the default provider registered for the given kind, or None if there is none"""
    return _default_providers.get(_kind_of(kind))

## -- End Default Providers -- @}


# ==============================================================================
## @name Base Types
# ------------------------------------------------------------------------------
## @{

class Option(object):
    """Base for all options, which are immutable and compared by value.

    Subtypes store their state in slots and return it from _state(), which is used for equality,
    hashing and representation.
    """
    __slots__ = ()

    # -------------------------
    ## @name Configuration
    # @{

    ## If True, all values of our kind are kept, otherwise the latest added value replaces the previous one
    multiple = False

    ## -- End Configuration -- @}

    @classmethod
    def kind(cls):
        """@return the type under which instances of this type are stored in a registry"""
        return cls

    # -------------------------
    ## @name Subclass Interface
    # @{

    def _state(self):
        """@return tuple of values which define our identity"""
        return tuple()

    ## -- End Subclass Interface -- @}

    def discriminator(self):
        """@return a hashable value distinguishing values of multiple kinds. Values with equal discriminators
        replace each other. None makes every added value append"""
        return self._state()

    # -------------------------
    ## @name Protocols
    # @{

    def __eq__(self, rhs):
        if not isinstance(rhs, Option):
            return NotImplemented
        return type(self) is type(rhs) and self._state() == rhs._state()

    def __ne__(self, rhs):
        res = self.__eq__(rhs)
        if res is NotImplemented:
            return res
        return not res

    def __hash__(self):
        return hash((type(self), self._state()))

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, ', '.join(repr(value) for value in self._state()))

    ## -- End Protocols -- @}

# end class Option


class OptionsByType(object):
    """A collection of Option instances, indexed by their kind.

    * adding a value of a single-valued kind replaces the previous one, keeping its position
    * adding a value of a multiple kind appends it, unless a value with the same discriminator exists,
      which is replaced in place
    * asking for a kind which isn't stored yields the result of the kind's default provider, or
      an absent value

    Instances are owned by a single launch and don't do any locking.
    """
    __slots__ = ('_kinds')  # kind -> value, or kind -> OrderedDict(discriminator -> value)

    ## Marks an unset default value
    _unset = object()

    def __init__(self, *options):
        self._kinds = OrderedDict()
        self.add_all(options)

    @classmethod
    def of(cls, *items):
        """@return a new instance containing all given items in order
        @param items Option instances or OptionsByType instances, whose values will be added.
        None is ignored"""
        res = cls()
        for item in items:
            if item is None:
                continue
            if isinstance(item, OptionsByType):
                res.merge(item)
            else:
                res.add(item)
            # end handle item type
        # end for each item
        return res

    # -------------------------
    ## @name Utilities
    # @{

    def _resolve(self, kind):
        """@return the value stored for the given kind, or the default provider's value
        @throws NotConfigured if there is neither"""
        stored = self._kinds.get(kind)
        if isinstance(stored, OrderedDict):
            return next(reversed(stored.values()))
        if stored is not None:
            return stored
        provider = default_provider(kind)
        if provider is None:
            raise NotConfigured("Option '%s' was not configured and has no default provider" % kind.__name__)
        # end handle missing provider
        return provider()

    def _resolved_values(self, kind):
        """@return comparable representation of what the given kind resolves to"""
        stored = self._kinds.get(kind)
        if isinstance(stored, OrderedDict):
            return tuple(stored.values())
        try:
            return self._resolve(kind)
        except NotConfigured:
            return None
        # end handle unconfigured kinds

    ## -- End Utilities -- @}

    # -------------------------
    ## @name Edit Interface
    # @{

    def add(self, option):
        """Add the given option under its kind
        @param option an Option instance. None is ignored
        @return self"""
        if option is None:
            return self
        if not isinstance(option, Option):
            raise TypeError("Can only add Option instances, got %r" % (option,))
        # end check type

        kind = option.kind()
        if option.multiple:
            values = self._kinds.get(kind)
            if values is None:
                values = self._kinds[kind] = OrderedDict()
            # end create storage
            key = option.discriminator()
            if key is None:
                key = next(_append_keys)
            # end always append undiscriminated values
            values[key] = option
        else:
            self._kinds[kind] = option
        # end handle multiple values
        log.log(TRACE, "added option %r", option)
        return self

    def add_all(self, options):
        """Add all options in the given iterable, in order
        @return self"""
        for option in options:
            self.add(option)
        # end for each option
        return self

    def add_if_absent(self, option):
        """Add the given option only if its kind isn't stored yet
        @return the option which is stored for its kind afterwards"""
        kind = option.kind()
        if kind not in self._kinds:
            self.add(option)
            return option
        # end handle absent kind
        return self._resolve(kind)

    def remove(self, kind_or_option):
        """Remove all values of the given kind, or the given option if it is a value of a multiple kind.
        Options of multiple kinds without discriminator remove all values equal to them
        @return True if something was removed"""
        kind = _kind_of(kind_or_option)
        stored = self._kinds.get(kind)
        if stored is None:
            return False
        # end handle nothing to remove

        if isinstance(stored, OrderedDict) and not isinstance(kind_or_option, type):
            key = kind_or_option.discriminator()
            if key is None:
                keys = [key for key, value in stored.items() if value == kind_or_option]
            else:
                keys = key in stored and [key] or []
            # end find keys to remove
            if not keys:
                return False
            for key in keys:
                del stored[key]
            # end for each key
            if stored:
                return True
            # end keep remaining values
        # end handle single value of multiple kind
        del self._kinds[kind]
        return True

    def merge(self, other):
        """Add all values of the other registry in its order
        @return self"""
        return self.add_all(other.as_list())

    def get_or_set_default(self, kind):
        """@return the value stored for kind, storing the default provider's result if it wasn't stored yet,
        or None if the kind isn't configured"""
        kind = _kind_of(kind)
        try:
            value = self._resolve(kind)
        except NotConfigured:
            return None
        # end handle unconfigured kind
        if kind not in self._kinds:
            self.add(value)
        # end store default
        return value

    ## -- End Edit Interface -- @}

    # -------------------------
    ## @name Query Interface
    # @{

    def get(self, kind, default=_unset):
        """@return the value for the given kind of option. For multiple kinds, the last one is returned.
        If the kind isn't stored, the result of its default provider is returned.
        @param kind an Option type
        @param default value to return if the kind is neither stored nor has a default provider.
        If unset, None is returned in that case"""
        kind = _kind_of(kind)
        try:
            return self._resolve(kind)
        except NotConfigured as err:
            log.log(TRACE, str(err))
            if default is self._unset:
                return None
            return default
        # end handle unconfigured kinds

    def get_all(self, kind):
        """@return tuple of all stored values which are instances of the given kind, in the order they
        were added. Kind may be any type, for instance an interface like IProfile.
        Default providers are not consulted"""
        kind = _kind_of(kind)
        res = list()
        for stored_kind, stored in self._kinds.items():
            if not issubclass(stored_kind, kind):
                continue
            if isinstance(stored, OrderedDict):
                res.extend(stored.values())
            else:
                res.append(stored)
            # end handle multiple values
        # end for each stored kind
        return tuple(res)

    def contains(self, kind):
        """@return True if at least one value of the given kind is stored"""
        return bool(self.get_all(kind))

    def as_list(self):
        """@return a list of all stored values, ordered by the time their kind was first added, and by
        insertion order within multiple kinds"""
        res = list()
        for stored in self._kinds.values():
            if isinstance(stored, OrderedDict):
                res.extend(stored.values())
            else:
                res.append(stored)
            # end handle multiple values
        # end for each kind
        return res

    export = as_list

    def copy(self):
        """@return a new instance with the same values in the same order"""
        return type(self)(*self.as_list())

    ## -- End Query Interface -- @}

    # -------------------------
    ## @name Protocols
    # @{

    def __contains__(self, kind):
        return self.contains(kind)

    def __iter__(self):
        return iter(self.as_list())

    def __len__(self):
        return sum(isinstance(stored, OrderedDict) and len(stored) or 1 for stored in self._kinds.values())

    def __eq__(self, rhs):
        """Registries are equal if every kind held by either of them resolves to the same value"""
        if not isinstance(rhs, OptionsByType):
            return NotImplemented
        for kind in set(self._kinds) | set(rhs._kinds):
            if self._resolved_values(kind) != rhs._resolved_values(kind):
                return False
        # end for each kind
        return True

    def __ne__(self, rhs):
        res = self.__eq__(rhs)
        if res is NotImplemented:
            return res
        return not res

    __hash__ = None

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, ', '.join(repr(option) for option in self.as_list()))

    ## -- End Protocols -- @}

# end class OptionsByType

## -- End Base Types -- @}


# ==============================================================================
## @name Options
# ------------------------------------------------------------------------------
## @{

class Freeform(Option):
    """A raw argument for the launched program, used verbatim.
    All added arguments are kept in order, including repeated ones"""
    __slots__ = ('_argument')

    multiple = True

    def __init__(self, argument):
        self._argument = str(argument)

    def _state(self):
        return (self._argument, )

    def discriminator(self):
        return None

    def argument(self):
        return self._argument

    def __str__(self):
        return self._argument

# end class Freeform


class Arguments(Option):
    """Ordered arguments handed to the application itself"""
    __slots__ = ('_values')

    def __init__(self, *values):
        self._values = tuple(str(value) for value in values)

    def _state(self):
        return self._values

    def values(self):
        return list(self._values)

# end class Arguments

register_default(Arguments, Arguments)


class _NamedValue(Option):
    """A name-value pair, whose value may be platform aware.
    Values with the same name replace each other"""
    __slots__ = ('_name', '_value')

    multiple = True

    def __init__(self, name, value=''):
        self._name = name
        self._value = value

    def _state(self):
        return (self._name, self._value)

    def discriminator(self):
        return self._name

    def name(self):
        return self._name

    def value(self):
        """@return our unresolved value"""
        return self._value

    def resolve(self, platform):
        """@return our value as string, after binding it to the given platform if it is platform aware
        @note platform aware values are bound on each call"""
        if isinstance(self._value, IPlatformAware):
            self._value.set_platform(platform)
        # end bind platform
        return str(self._value)

# end class _NamedValue


class SystemProperty(_NamedValue):
    """A system property handed to the launched virtual machine"""
    __slots__ = ()

# end class SystemProperty


class EnvironmentVariable(_NamedValue):
    """A variable set in the launched process's environment"""
    __slots__ = ()

# end class EnvironmentVariable


class _SingleValue(Option):
    """Stores one value"""
    __slots__ = ('_value')

    def __init__(self, value):
        self._value = value

    def _state(self):
        return (self._value, )

    def value(self):
        return self._value

    def __str__(self):
        return str(self._value)

# end class _SingleValue


class DisplayName(_SingleValue):
    """The name by which to identify a launched application"""
    __slots__ = ()

# end class DisplayName


class WorkingDirectory(_SingleValue):
    """The directory the application is launched in"""
    __slots__ = ()

# end class WorkingDirectory


class Executable(_SingleValue):
    """The program to execute"""
    __slots__ = ()

# end class Executable


class RemoteDebugging(Option):
    """Defines whether the launched application should accept a remote debugger, and on which port.
    A port of 0 lets the platform decide"""
    __slots__ = ('_enabled', '_port')

    def __init__(self, enabled, port=0):
        self._enabled = bool(enabled)
        self._port = int(port)

    def _state(self):
        return (self._enabled, self._port)

    def is_enabled(self):
        return self._enabled

    def port(self):
        return self._port

    @classmethod
    def enabled(cls, port=0):
        return cls(True, port)

    @classmethod
    def disabled(cls):
        return cls(False)

    @classmethod
    def auto_detect(cls):
        """@return an enabled instance if the current process accepts a remote debugger itself"""
        return cls(detector().should_enable_remote_debug())

# end class RemoteDebugging

register_default(RemoteDebugging, RemoteDebugging.auto_detect)


class Console(Option):
    """Defines the standard channels of a launched process, using values suitable for
    subprocess.Popen, like None, a file object, subprocess.PIPE or subprocess.DEVNULL"""
    __slots__ = ('_stdin', '_stdout', '_stderr')

    def __init__(self, stdin=None, stdout=None, stderr=None):
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    def _state(self):
        return (self._stdin, self._stdout, self._stderr)

    def channels(self):
        """@return (stdin, stdout, stderr) tuple"""
        return self._state()

    @classmethod
    def system(cls):
        """@return a console connecting the process to our own stdout and stderr, without input"""
        return cls(None, sys.__stdout__, sys.__stderr__)

    @classmethod
    def null(cls):
        """@return a console discarding all output"""
        return cls(subprocess.DEVNULL, subprocess.DEVNULL, subprocess.DEVNULL)

    @classmethod
    def piped(cls):
        """@return a console making all channels available to the parent process"""
        return cls(subprocess.PIPE, subprocess.PIPE, subprocess.PIPE)

# end class Console

register_default(Console, Console.system)

## -- End Options -- @}
