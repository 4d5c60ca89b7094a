#-*-coding:utf-8-*-
"""
@package blaunch.interfaces
@brief Interfaces at the boundary between the launch machinery and its extensions

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['IProfile', 'IPlatform', 'IApplication', 'IPlatformAware']

from .base import (Interface,
                   abstractmethod)


class IProfile(Interface):
    """A profile is an extension which is consulted at well-defined points in the life of an application.

    It may alter the options of an application before it is launched, and observe the application once
    it runs and right before it is closed.
    Profiles don't know about each other, and must not have side-effects outside of the objects they
    are handed.
    """
    __slots__ = ()

    # -------------------------
    ## @name Lifecycle Interface
    # @{

    @abstractmethod
    def on_launching(self, platform, meta_class, options):
        """Called before the application is launched.
        @param platform the IPlatform instance that is about to launch the application
        @param meta_class the schema describing the application to be launched
        @param options the OptionsByType instance used for the launch. It may be altered, and changes
        will affect the launch
        @note raising aborts the launch"""

    @abstractmethod
    def on_launched(self, platform, application, options):
        """Called right after the application was launched successfully
        @param platform the IPlatform which launched the application
        @param application the IApplication handle of the running application
        @param options the options the application was launched with. Must be considered read-only
        as the launch already happened"""

    @abstractmethod
    def on_closing(self, platform, application, options):
        """Called before the application is terminated, last chance to observe its state
        @param platform the IPlatform which launched the application
        @param application the IApplication about to be closed
        @param options the options the application was launched with"""

    ## -- End Lifecycle Interface -- @}

# end class IProfile


class IPlatform(Interface):
    """An abstraction over the location a process is launched at, like the local machine or a remote host"""
    __slots__ = ()

    @abstractmethod
    def name(self):
        """@return the name of this platform"""

    @abstractmethod
    def launch(self, schema, *options):
        """Launch the application described by the given schema
        @param schema an ApplicationSchema instance
        @param options additional Option instances overriding the schema's options
        @return an IApplication instance
        @throws LaunchConfigurationFailure if a profile failed to prepare the launch"""

# end class IPlatform


class IApplication(Interface):
    """A handle to a launched application, as produced by an IPlatform"""
    __slots__ = ()

    @abstractmethod
    def name(self):
        """@return the name of the application"""

    @abstractmethod
    def platform(self):
        """@return the IPlatform which launched us"""

    @abstractmethod
    def attach(self, lifecycle):
        """Take ownership of the given ProfileLifecycle, which must be advanced when we are closed"""

    @abstractmethod
    def close(self):
        """Terminate the application, if it is still running, and wait for it to finish
        @return exit code of the application, or None if it is unknown"""

# end class IApplication


class IPlatformAware(Interface):
    """A value which needs to know the platform it is used on before it can be converted into a string"""
    __slots__ = ()

    @abstractmethod
    def set_platform(self, platform):
        """Bind this value to the given platform. Subsequent string conversions may depend on it
        @param platform IPlatform instance performing the resolution"""

# end class IPlatformAware
