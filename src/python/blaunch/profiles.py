#-*-coding:utf-8-*-
"""
@package blaunch.profiles
@brief Profiles are options which take part in the lifecycle of the application they configure

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Profile', 'ProfileMeta', 'CommercialFeatures', 'profile_type', 'profile_names']

import logging

from .base import Meta
from .interfaces import IProfile
from .options import (Option,
                      Freeform,
                      register_default)
from .detect import detector

log = logging.getLogger('blaunch.profiles')


# ==============================================================================
## @name Registry
# ------------------------------------------------------------------------------
## @{

## name -> Profile type
_profiles_by_name = dict()


class ProfileMeta(Meta):
    """Registers each Profile type which sets a name, to allow it to be found by that name"""

    def __new__(metacls, name, bases, clsdict):
        new_type = super(ProfileMeta, metacls).__new__(metacls, name, bases, clsdict)
        profile_name = clsdict.get('name')
        if profile_name:
            previous = _profiles_by_name.get(profile_name)
            if previous is not None and previous is not new_type:
                log.warning("Profile '%s' of type %s is overridden by %s", profile_name, previous.__name__,
                                                                                  new_type.__name__)
            # end warn about overrides
            _profiles_by_name[profile_name] = new_type
        # end register named types
        return new_type

# end class ProfileMeta


def profile_type(name):
    """@return the Profile type registered under the given name
    @throws KeyError if there is no such type"""
    try:
        return _profiles_by_name[name]
    except KeyError:
        raise KeyError("No profile named '%s', available are %s" % (name, ', '.join(profile_names())))
    # end improve error message


def profile_names():
    """@return sorted list of names of all registered profiles"""
    return sorted(_profiles_by_name)

## -- End Registry -- @}


# ==============================================================================
## @name Profiles
# ------------------------------------------------------------------------------
## @{

class Profile(Option, IProfile, metaclass=ProfileMeta):
    """Base for all profiles, implementing all lifecycle methods to do nothing.

    Each profile type is its own kind of option, so a registry holds at most one profile of each type.
    Subtypes which set a `name` can be selected by it in settings files.
    """
    __slots__ = ()

    # -------------------------
    ## @name Configuration
    # @{

    ## Name under which the type is registered, or None
    name = None

    ## -- End Configuration -- @}

    def on_launching(self, platform, meta_class, options):
        pass

    def on_launched(self, platform, application, options):
        pass

    def on_closing(self, platform, application, options):
        pass

# end class Profile


class CommercialFeatures(Profile):
    """A profile to enable or disable the commercial features of a java virtual machine"""
    __slots__ = ('_enabled')

    name = 'commercial-features'

    ## The argument which unlocks the features
    argument = '-XX:+UnlockCommercialFeatures'

    def __init__(self, enabled):
        """Use enabled(), disabled() or auto_detect() instead"""
        self._enabled = bool(enabled)

    def _state(self):
        return (self._enabled, )

    def is_enabled(self):
        """@return True if commercial features are unlocked"""
        return self._enabled

    def on_launching(self, platform, meta_class, options):
        if self._enabled:
            options.add(Freeform(self.argument))
        # end add argument

    # -------------------------
    ## @name Factories
    # @{

    @classmethod
    def enabled(cls):
        """@return an enabled instance"""
        return cls(True)

    @classmethod
    def disabled(cls):
        """@return a disabled instance"""
        return cls(False)

    @classmethod
    def auto_detect(cls):
        """@return an instance which is enabled if the current process unlocked commercial features itself.
        If that can't be determined, a disabled instance is returned"""
        try:
            return detector().should_enable_commercial_features() and cls.enabled() or cls.disabled()
        except Exception as err:
            log.error("Error trying to determine commercial features status - %s", err)
            return cls.disabled()
        # end handle detection failures

    ## -- End Factories -- @}

# end class CommercialFeatures

register_default(CommercialFeatures, CommercialFeatures.auto_detect)

## -- End Profiles -- @}
