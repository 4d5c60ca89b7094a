#-*-coding:utf-8-*-
"""
@package blaunch.schema
@brief Schemas describe applications to launch, and produce the handles of launched applications

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['ApplicationSchema', 'JavaApplicationSchema']

import os
import logging

from collections import OrderedDict

from .base import TRACE
from .options import (OptionsByType,
                      Executable,
                      Arguments,
                      Freeform,
                      SystemProperty,
                      EnvironmentVariable,
                      DisplayName,
                      WorkingDirectory,
                      RemoteDebugging)
from .profiles import CommercialFeatures

log = logging.getLogger('blaunch.schema')


class ApplicationSchema(object):
    """Describes an application to launch by means of options, and acts as a factory for the handle
    of the launched application.

    Subtypes configure the type they produce using ApplicationType, and seed their defaults in
    configure_defaults(), which is called once when the instance is created.
    All edit methods return self to allow chaining them.
    """
    __slots__ = ('_options')

    # -------------------------
    ## @name Subclass Configuration
    # @{

    ## The type of application produced by create_application(). If None, no application is produced
    ApplicationType = None

    ## -- End Subclass Configuration -- @}

    def __init__(self, executable, *options):
        """Initialize this instance
        @param executable path to or name of the program to launch
        @param options Option instances to start with"""
        self._options = OptionsByType(Executable(executable))
        self._options.add_all(options)
        self.configure_defaults()

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self.name())

    # -------------------------
    ## @name Subclass Interface
    # @{

    def configure_defaults(self):
        """Called once during initialization to seed default options, before any profile sees them.
        Subtypes should not override options which were set explicitly"""

    ## -- End Subclass Interface -- @}

    # -------------------------
    ## @name Edit Interface
    # @{

    def add_option(self, option):
        """Add the given option, replacing options of the same kind
        @return self"""
        self._options.add(option)
        return self

    def add_options(self, *options):
        """Add all given options in order
        @return self"""
        self._options.add_all(options)
        return self

    def set_system_property(self, name, value):
        """Set a system property. Its value may be IPlatformAware, and is resolved per platform
        @return self"""
        return self.add_option(SystemProperty(name, value))

    def set_environment_variable(self, name, value):
        """Set an environment variable of the process to launch. Its value may be IPlatformAware
        @return self"""
        return self.add_option(EnvironmentVariable(name, value))

    def set_arguments(self, *arguments):
        """Set the arguments passed to the application
        @return self"""
        return self.add_option(Arguments(*arguments))

    def set_working_directory(self, directory):
        """@return self"""
        return self.add_option(WorkingDirectory(directory))

    ## -- End Edit Interface -- @}

    # -------------------------
    ## @name Query Interface
    # @{

    def options(self):
        """@return a copy of our options, suitable to be used in a launch"""
        return self._options.copy()

    def name(self):
        """@return our display name, or the basename of our executable if it is unset"""
        display_name = self._options.get(DisplayName)
        if display_name is not None:
            return display_name.value()
        return os.path.basename(str(self._options.get(Executable)))

    def executable(self):
        return self._options.get(Executable).value()

    def system_properties(self, platform, options=None):
        """@return an OrderedDict of resolved system property values, keyed by name, in the order
        the properties were set.
        Platform aware values are bound to the given platform once before they are converted to string.
        @param platform the IPlatform performing the resolution
        @param options the OptionsByType to take the properties from. Defaults to our own"""
        return self._resolve_values(SystemProperty, platform, options)

    def environment_variables(self, platform, options=None):
        """@return an OrderedDict of resolved environment variables, see system_properties()"""
        return self._resolve_values(EnvironmentVariable, platform, options)

    def _resolve_values(self, kind, platform, options):
        if options is None:
            options = self._options
        # end default options
        res = OrderedDict()
        for named_value in options.get_all(kind):
            res[named_value.name()] = named_value.resolve(platform)
            log.log(TRACE, "resolved %s %s=%s on %s", kind.__name__, named_value.name(),
                                                      res[named_value.name()], platform)
        # end for each value
        return res

    def command_line(self, platform, options=None, system_properties=None):
        """@return list of strings to execute the application, starting with the executable
        @param platform the IPlatform to launch on
        @param options OptionsByType to build the command-line from. Defaults to our own
        @param system_properties already resolved system properties, or None to resolve them"""
        if options is None:
            options = self._options
        # end default options
        args = [str(options.get(Executable))]
        args.extend(freeform.argument() for freeform in options.get_all(Freeform))
        args.extend(options.get(Arguments).values())
        return args

    ## -- End Query Interface -- @}

    # -------------------------
    ## @name Factory Interface
    # @{

    def create_application(self, process, name, platform, console, environment, system_properties,
                           remote_debug_port):
        """@return a new instance of our ApplicationType, or None if we don't have one
        @param process the launched process, or None if it wasn't actually spawned
        @param name name of the application
        @param platform the IPlatform which launched the process
        @param console the Console option used for the process
        @param environment dict of environment variables the process was launched with
        @param system_properties OrderedDict of resolved system properties
        @param remote_debug_port port a debugger may attach to, or 0"""
        if self.ApplicationType is None:
            return None
        # end handle no type
        return self.ApplicationType(process, name, platform, console, environment, system_properties,
                                    remote_debug_port)

    ## -- End Factory Interface -- @}

# end class ApplicationSchema


class JavaApplicationSchema(ApplicationSchema):
    """A schema to launch a class with a main method in a java virtual machine"""
    __slots__ = ('_class_name', '_class_path')

    def __init__(self, class_name, *options, class_path=None, executable='java'):
        """Initialize this instance
        @param class_name fully qualified name of the class to launch
        @param options Option instances to start with
        @param class_path path list to find the classes at, or None
        @param executable the java program to run"""
        self._class_name = class_name
        self._class_path = class_path
        super(JavaApplicationSchema, self).__init__(executable, *options)

    def configure_defaults(self):
        """Seeds remote debugging and commercial features based on how the current process was launched"""
        super(JavaApplicationSchema, self).configure_defaults()
        self._options.get_or_set_default(RemoteDebugging)
        self._options.get_or_set_default(CommercialFeatures)

    def class_name(self):
        return self._class_name

    def class_path(self):
        return self._class_path

    def is_remote_debugging_enabled(self):
        """@return True if the launched virtual machine should accept a remote debugger"""
        return self._options.get(RemoteDebugging).is_enabled()

    def command_line(self, platform, options=None, system_properties=None):
        """@return executable, virtual machine arguments, class path, system properties, class name and
        application arguments, in that order"""
        if options is None:
            options = self._options
        # end default options
        args = [str(options.get(Executable))]
        args.extend(freeform.argument() for freeform in options.get_all(Freeform))
        if self._class_path:
            args.extend(('-cp', str(self._class_path)))
        # end handle class path
        if system_properties is None:
            system_properties = self.system_properties(platform, options)
        # end resolve properties
        for name, value in system_properties.items():
            args.append('-D%s=%s' % (name, value))
        # end for each property
        args.append(self._class_name)
        args.extend(options.get(Arguments).values())
        return args

# end class JavaApplicationSchema
