#-*-coding:utf-8-*-
"""
@package blaunch.base
@brief Most fundamental types, used by all other modules of the blaunch package

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Error', 'DetectionFailure', 'NotConfigured', 'LaunchConfigurationFailure',
           'PostLaunchObservationFailure', 'InvalidTransition', 'Interface', 'Meta',
           'abstractmethod', 'LazyMixin', 'TRACE', 'set_log_level']

import logging

from abc import (abstractmethod,
                 ABCMeta)


# ==============================================================================
## @name Logging
# ------------------------------------------------------------------------------
## @{

## The TRACE log level, between DEBUG and INFO
TRACE = int((logging.INFO + logging.DEBUG) / 2)

setattr(logging, 'TRACE', TRACE)
logging.addLevelName(TRACE, 'TRACE')


def set_log_level(logger, level):
    """Set the loggers and its handlers log level to the given one"""
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.setLevel(level)

## -- End Logging -- @}


# ==============================================================================
## @name Exceptions
# ------------------------------------------------------------------------------
## @{

class Error(Exception):
    """Most foundational exception of the launch framework"""
    __slots__ = ()

# end class Error


class DetectionFailure(Error):
    """Thrown if the current execution environment could not be inspected.
    It never leaves the detector, which will degrade to its conservative answer instead"""
    __slots__ = ()

# end class DetectionFailure


class NotConfigured(Error):
    """Indicates an option kind has neither a stored value nor a default provider.
    OptionsByType converts it into an absent value"""
    __slots__ = ()

# end class NotConfigured


class LaunchConfigurationFailure(Error):
    """Thrown if a profile failed to configure the application prior to its launch.
    The launch is aborted, and no application is produced"""

    def __init__(self, profile, cause):
        super(LaunchConfigurationFailure, self).__init__("Profile %r failed while launching: %s" % (profile, cause))
        self.profile = profile
        self.cause = cause

# end class LaunchConfigurationFailure


class PostLaunchObservationFailure(Error):
    """Keeps information about a profile which failed while observing a launched or closing application.
    Instances are collected and logged, but not raised"""

    def __init__(self, profile, phase, cause):
        super(PostLaunchObservationFailure, self).__init__("Profile %r failed in %s: %s" % (profile, phase, cause))
        self.profile = profile
        self.phase = phase
        self.cause = cause

# end class PostLaunchObservationFailure


class InvalidTransition(Error):
    """Thrown if a lifecycle transition is attempted from a state which doesn't allow it"""
    __slots__ = ()

# end class InvalidTransition

## -- End Exceptions -- @}


# ==============================================================================
## @name Basic Types
# ------------------------------------------------------------------------------
## @{

class Meta(ABCMeta):
    """Base for all meta-classes used in the blaunch package"""

# end class Meta


class Interface(object, metaclass=Meta):
    """base class for all interfaces"""
    __slots__ = ()

    def supports(self, interface_type):
        """@return True if this instance supports the interface of the given type
        @param interface_type type of the interface/class you require this instance to be derived from, or a
        tuple of interfaces or classes"""
        return isinstance(self, interface_type)

# end class Interface

## -- End Basic Types -- @}


# ==============================================================================
## @name Mixins
# ------------------------------------------------------------------------------
## @{

class LazyMixin(object):
    """Base class providing an interface to lazily retrieve attribute values upon first access.

    Subtypes implement _set_cache_() to create the requested attribute, which is then stored in the
    instance's slot or dict. Future accesses return the cached value directly.
    """
    __slots__ = ()

    def __getattr__(self, attr):
        """Called only for attributes we don't have yet, allowing them to be created"""
        self._set_cache_(attr)
        # will raise in case the cache was not created
        return object.__getattribute__(self, attr)

    def _set_cache_(self, attr):
        """Create and set the attribute named `attr`, or do nothing if it is unknown"""
        pass

    def _clear_cache_(self, lazy_attributes):
        """Delete all of the given lazy_attributes from this instance, forcing them to be recreated
        on next access"""
        for attr in lazy_attributes:
            try:
                delattr(self, attr)
            except AttributeError:
                pass
            # end ignore non-existing attributes
        # end for each attribute

## -- End Mixins -- @}
