#-*-coding:utf-8-*-
"""
@package blaunch.detect
@brief Inference of configuration defaults from the environment of the current process

The detector is shared by the whole process. It is created on first use, and tests may substitute
it using substituted_detector().

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['EnvironmentDetector', 'detector', 'set_detector', 'reset_detector', 'substituted_detector']

import sys
import logging
import threading

from contextlib import contextmanager

from .base import (LazyMixin,
                   DetectionFailure,
                   TRACE)

log = logging.getLogger('blaunch.detect')


class EnvironmentDetector(LazyMixin):
    """Inspects the arguments the current process was launched with to figure out sensible defaults for
    the applications it launches.

    The argument list is read once, on first access. All queries are best-effort and answer negatively
    if the arguments can't be read.
    """
    __slots__ = ('_arguments',  # list of launch arguments, lazily read
                 '_lock')       # guards the initialization of _arguments

    # -------------------------
    ## @name Configuration
    # @{

    ## Argument which unlocks commercial features of a virtual machine
    commercial_features_marker = '-XX:+UnlockCommercialFeatures'

    ## Arguments indicating that a remote debugger may attach
    remote_debug_markers = ('-agentlib:jdwp', '-Xrunjdwp')

    ## -- End Configuration -- @}

    def __init__(self, arguments=None):
        """Initialize this instance
        @param arguments if not None, an iterable of arguments to use instead of the ones of the
        current process"""
        self._lock = threading.Lock()
        if arguments is not None:
            self._arguments = list(arguments)
        # end handle preset arguments

    def _set_cache_(self, attr):
        if attr == '_arguments':
            with self._lock:
                try:
                    object.__getattribute__(self, '_arguments')
                except AttributeError:
                    self._arguments = self._read_launch_arguments()
                    log.log(TRACE, "read %i launch arguments", len(self._arguments))
                # end initialize once
            # end with lock
        else:
            return super(EnvironmentDetector, self)._set_cache_(attr)
        # end handle attribute

    # -------------------------
    ## @name Subclass Interface
    # @{

    def _read_launch_arguments(self):
        """@return list of arguments the current process was started with, including interpreter options
        if they are known"""
        return list(getattr(sys, 'orig_argv', sys.argv))

    ## -- End Subclass Interface -- @}

    # -------------------------
    ## @name Interface
    # @{

    def launch_arguments(self):
        """@return a copy of the list of arguments the current process was launched with
        @throws DetectionFailure if they could not be obtained"""
        try:
            return list(self._arguments)
        except Exception as err:
            raise DetectionFailure("Could not obtain launch arguments: %s" % err)
        # end convert exceptions

    def has_argument(self, marker):
        """@return True if any launch argument contains the given marker string, False otherwise or if the
        arguments could not be inspected"""
        try:
            return any(marker in arg for arg in self.launch_arguments())
        except Exception as err:
            log.error("Error trying to determine if '%s' was passed to this process - %s", marker, err)
            return False
        # end handle detection failures

    def should_enable_commercial_features(self):
        """@return True if the current process unlocked commercial features"""
        return self.has_argument(self.commercial_features_marker)

    def should_enable_remote_debug(self):
        """@return True if the current process accepts a remote debugger"""
        return any(self.has_argument(marker) for marker in self.remote_debug_markers)

    ## -- End Interface -- @}

# end class EnvironmentDetector


# ==============================================================================
## @name Process-wide Instance
# ------------------------------------------------------------------------------
## @{

## The type to instantiate when the detector is first requested
EnvironmentDetectorType = EnvironmentDetector

_instance = None
_instance_lock = threading.Lock()


def detector():
    """@return the process-wide detector, creating it on first call.
    Creation happens only once, even if called concurrently"""
    global _instance
    instance = _instance
    if instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = EnvironmentDetectorType()
            # end create instance
            instance = _instance
        # end with lock
    # end handle uninitialized instance
    return instance


def set_detector(instance):
    """Set the process-wide detector to the given instance
    @param instance an EnvironmentDetector, or None to have a new one created on next access
    @return the previous instance, which may be None"""
    global _instance
    with _instance_lock:
        previous = _instance
        _instance = instance
    # end with lock
    return previous


def reset_detector():
    """Drop the process-wide detector, causing a new one to be created on next access
    @return the previous instance"""
    return set_detector(None)


@contextmanager
def substituted_detector(instance):
    """A context manager which makes the given detector the process-wide one, and restores the previous one
    when the context is left"""
    previous = set_detector(instance)
    try:
        yield instance
    finally:
        set_detector(previous)
    # end restore previous instance

## -- End Process-wide Instance -- @}
