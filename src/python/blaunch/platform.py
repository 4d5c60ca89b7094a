#-*-coding:utf-8-*-
"""
@package blaunch.platform
@brief A platform launching applications as child processes of the current one

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Application', 'LocalPlatform']

import os
import logging
import subprocess

from .base import TRACE
from .interfaces import (IApplication,
                         IPlatform)
from .options import (OptionsByType,
                      Console,
                      DisplayName,
                      WorkingDirectory,
                      RemoteDebugging)
from .lifecycle import ProfileLifecycle

log = logging.getLogger('blaunch.platform')


class Application(IApplication):
    """A handle to a launched process.

    Closing it lets the profiles observe it one last time before the process is terminated.
    Instances can be used as context managers, closing the application when the context is left.
    """
    __slots__ = ('_process',            # a subprocess.Popen instance, or None if nothing was spawned
                 '_name',
                 '_platform',
                 '_console',
                 '_environment',
                 '_system_properties',
                 '_remote_debug_port',
                 '_lifecycle',          # the ProfileLifecycle we take part in, or None
                 '_exit_code')

    def __init__(self, process, name, platform, console, environment, system_properties, remote_debug_port):
        self._process = process
        self._name = name
        self._platform = platform
        self._console = console
        self._environment = environment
        self._system_properties = system_properties
        self._remote_debug_port = remote_debug_port
        self._lifecycle = None
        self._exit_code = None
        if process is None:
            self._exit_code = 0
        # end nothing to wait for

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self._name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    # -------------------------
    ## @name Interface
    # @{

    def attach(self, lifecycle):
        """Make the given ProfileLifecycle ours, allowing profiles to observe us when we are closed"""
        self._lifecycle = lifecycle

    def lifecycle(self):
        return self._lifecycle

    def name(self):
        return self._name

    def platform(self):
        return self._platform

    def process(self):
        """@return the subprocess.Popen instance, or None if no process was spawned"""
        return self._process

    def console(self):
        return self._console

    def environment(self):
        """@return a copy of the environment the process was launched with"""
        return dict(self._environment)

    def system_properties(self):
        return self._system_properties

    def remote_debug_port(self):
        return self._remote_debug_port

    def options(self):
        """@return the OptionsByType the application was launched with, or None if it is unknown"""
        if self._lifecycle is None:
            return None
        return self._lifecycle.options()

    def exit_code(self):
        """@return the exit code of the process, or None if it is still running"""
        if self._exit_code is None:
            self._exit_code = self._process.poll()
        # end query process
        return self._exit_code

    def wait(self, timeout=None):
        """Wait for the process to finish
        @return its exit code"""
        if self._exit_code is None:
            self._exit_code = self._process.wait(timeout)
        # end wait for process
        return self._exit_code

    def close(self):
        """Let profiles observe us, and terminate the process if it is still running
        @return the exit code of the process"""
        lifecycle = self._lifecycle
        if lifecycle is not None:
            if lifecycle.state() != lifecycle.LAUNCHED:
                return self._exit_code
            # end ignore repeated closes
            lifecycle.closing(self)
        # end let profiles observe

        try:
            if self._process is not None:
                if self._process.poll() is None:
                    log.log(TRACE, "terminating %s", self)
                    self._process.terminate()
                # end terminate running process
                # closes pipes as well
                self._process.communicate()
                self._exit_code = self._process.returncode
            # end handle process
        finally:
            if lifecycle is not None:
                lifecycle.closed()
            # end finish lifecycle
        # end assure we are closed
        return self._exit_code

    ## -- End Interface -- @}

# end class Application


class LocalPlatform(IPlatform):
    """Launches applications as child processes on the local machine.

    In dry-run mode, all profiles and resolutions are performed, but no process is spawned.
    """
    __slots__ = ('_name', '_dry_run', '_inherit_environment')

    # -------------------------
    ## @name Configuration
    # @{

    ## Type used if the schema doesn't produce an application
    ApplicationType = Application

    ## -- End Configuration -- @}

    def __init__(self, name='local', dry_run=False, inherit_environment=True):
        """Initialize this instance
        @param name of the platform
        @param dry_run if True, processes will not actually be spawned
        @param inherit_environment if True, launched processes see our environment, with their own variables
        applied on top"""
        self._name = name
        self._dry_run = dry_run
        self._inherit_environment = inherit_environment

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self._name)

    def name(self):
        return self._name

    def is_dry_run(self):
        return self._dry_run

    def _environment(self, schema, options):
        """@return dict with the environment for the process to launch"""
        env = self._inherit_environment and dict(os.environ) or dict()
        env.update(schema.environment_variables(self, options))
        return env

    def launch(self, schema, *options):
        """Launch the application described by the given schema.
        The schema's options are copied, and the given options are applied on top of them. The profiles found
        in the result are consulted during the launch.
        @return an Application instance
        @throws LaunchConfigurationFailure if a profile failed to configure the launch. No process is spawned
        in that case"""
        launch_options = OptionsByType.of(schema.options(), *options)
        lifecycle = ProfileLifecycle(self, launch_options)
        lifecycle.launching(schema)

        process = None
        try:
            system_properties = schema.system_properties(self, launch_options)
            environment = self._environment(schema, launch_options)
            args = schema.command_line(self, launch_options, system_properties)
            console = launch_options.get(Console)

            directory = launch_options.get(WorkingDirectory)
            cwd = directory is not None and str(directory) or None

            display_name = launch_options.get(DisplayName)
            name = display_name is not None and display_name.value() or schema.name()

            debugging = launch_options.get(RemoteDebugging)
            remote_debug_port = debugging.is_enabled() and debugging.port() or 0

            log.log(TRACE, "%s%s", self._dry_run and "WOULD RUN " or "", ' '.join(args))
            if not self._dry_run:
                stdin, stdout, stderr = console.channels()
                process = subprocess.Popen(args, shell=False,
                                           stdin=stdin, stdout=stdout, stderr=stderr,
                                           cwd=cwd, env=environment)
            # end spawn process

            application = schema.create_application(process, name, self, console, environment,
                                                    system_properties, remote_debug_port)
            if application is None:
                application = self.ApplicationType(process, name, self, console, environment,
                                                   system_properties, remote_debug_port)
            # end use default type
            application.attach(lifecycle)
        except Exception:
            if process is not None:
                process.kill()
                process.communicate()
            # end don't leave a process behind
            lifecycle.abort()
            raise
        # end handle launch failures

        lifecycle.launched(application)
        log.info("launched %s on %s", application, self)
        return application

# end class LocalPlatform
