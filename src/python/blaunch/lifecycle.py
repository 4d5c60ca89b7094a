#-*-coding:utf-8-*-
"""
@package blaunch.lifecycle
@brief Drives the profiles of an application through its lifecycle

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['ProfileLifecycle']

import logging

from .base import (LaunchConfigurationFailure,
                   PostLaunchObservationFailure,
                   InvalidTransition,
                   TRACE)
from .interfaces import IProfile

log = logging.getLogger('blaunch.lifecycle')


class ProfileLifecycle(object):
    """Keeps the lifecycle state of a single application, and consults its profiles at each transition.

    The states are traversed strictly in order:
    unattached -> launching -> launched -> closing -> closed

    The profiles are the ones found in the options when launching begins, in the order they were added.
    Each of them is consulted exactly once per transition.

    * A profile failing in on_launching() aborts the launch, the state returns to unattached and a
      LaunchConfigurationFailure is raised
    * A profile failing in on_launched() or on_closing() is logged and recorded in failures(), the
      transition completes nonetheless
    """
    __slots__ = ('_platform',   # platform launching the application
                 '_options',    # OptionsByType used for the launch
                 '_state',      # current state
                 '_profiles',   # profiles consulted at each transition
                 '_failures')   # list of PostLaunchObservationFailure instances

    # -------------------------
    ## @name Constants
    # @{

    UNATTACHED = 'unattached'
    LAUNCHING = 'launching'
    LAUNCHED = 'launched'
    CLOSING = 'closing'
    CLOSED = 'closed'

    states = (UNATTACHED, LAUNCHING, LAUNCHED, CLOSING, CLOSED)

    ## -- End Constants -- @}

    def __init__(self, platform, options):
        """Initialize this instance
        @param platform the IPlatform launching the application
        @param options the OptionsByType instance owned by the launch. Profiles may alter it while launching"""
        self._platform = platform
        self._options = options
        self._state = self.UNATTACHED
        self._profiles = tuple()
        self._failures = list()

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self._state)

    # -------------------------
    ## @name Utilities
    # @{

    def _transition(self, expected, new_state):
        """Change into the new state if we are in the expected one
        @throws InvalidTransition otherwise"""
        if self._state != expected:
            raise InvalidTransition("Cannot change into state '%s' from '%s', need to be in '%s'"
                                    % (new_state, self._state, expected))
        # end check state
        log.log(TRACE, "lifecycle %s -> %s", self._state, new_state)
        self._state = new_state

    def _observe(self, phase, application):
        """Call the method named `phase` on all profiles, recording their failures"""
        for profile in self._profiles:
            try:
                getattr(profile, phase)(self._platform, application, self._options)
            except Exception as err:
                failure = PostLaunchObservationFailure(profile, phase, err)
                log.error(str(failure), exc_info=True)
                self._failures.append(failure)
            # end handle failures
        # end for each profile

    ## -- End Utilities -- @}

    # -------------------------
    ## @name Transitions
    # @{

    def launching(self, meta_class):
        """Enter the launching state and let all profiles configure the launch
        @param meta_class the schema of the application about to be launched
        @return the options, as altered by the profiles
        @throws LaunchConfigurationFailure if a profile failed"""
        self._transition(self.UNATTACHED, self.LAUNCHING)
        self._profiles = self._options.get_all(IProfile)
        for profile in self._profiles:
            try:
                profile.on_launching(self._platform, meta_class, self._options)
            except Exception as err:
                self._state = self.UNATTACHED
                self._profiles = tuple()
                log.error("Aborting launch as profile %r failed to configure it: %s", profile, err)
                raise LaunchConfigurationFailure(profile, err) from err
            # end handle failure
        # end for each profile
        return self._options

    def abort(self):
        """Return to the unattached state after a launch could not be completed for reasons other than
        a profile. Profiles are not consulted"""
        self._transition(self.LAUNCHING, self.UNATTACHED)
        self._profiles = tuple()

    def launched(self, application):
        """Enter the launched state and let all profiles observe the application
        @param application the freshly launched IApplication"""
        self._transition(self.LAUNCHING, self.LAUNCHED)
        self._observe('on_launched', application)

    def closing(self, application):
        """Enter the closing state and let all profiles observe the application before it goes down"""
        self._transition(self.LAUNCHED, self.CLOSING)
        self._observe('on_closing', application)

    def closed(self):
        """Enter the final state"""
        self._transition(self.CLOSING, self.CLOSED)

    ## -- End Transitions -- @}

    # -------------------------
    ## @name Query Interface
    # @{

    def state(self):
        """@return our current state, one of our state constants"""
        return self._state

    def profiles(self):
        """@return tuple of profiles taking part in the lifecycle, empty until launching"""
        return self._profiles

    def options(self):
        """@return the OptionsByType instance of the launch"""
        return self._options

    def platform(self):
        return self._platform

    def failures(self):
        """@return list of PostLaunchObservationFailure instances collected so far"""
        return list(self._failures)

    ## -- End Query Interface -- @}

# end class ProfileLifecycle
