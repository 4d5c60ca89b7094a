#-*-coding:utf-8-*-
"""
@package blaunch.tests.test_platform
@brief tests for blaunch.platform

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []

import os
import sys

from .base import (TestCase,
                   with_launch_arguments,
                   with_rw_directory,
                   FirstRecordingProfile,
                   SecondRecordingProfile,
                   PlatformNameValue)

# test from * import
from blaunch.platform import *
from blaunch import (ApplicationSchema,
                     IApplication,
                     JavaApplicationSchema,
                     CommercialFeatures,
                     ProfileLifecycle,
                     Console,
                     DisplayName,
                     WorkingDirectory,
                     RemoteDebugging,
                     Freeform,
                     LaunchConfigurationFailure)


class IncompleteApplication(IApplication):
    """An application type lacking the attach() method, which can't be instantiated"""
    __slots__ = ()

    def __init__(self, *args):
        pass

    def name(self):
        return 'incomplete'

    def platform(self):
        return None

    def close(self):
        return 0

# end class IncompleteApplication


class ProcessRecordingSchema(ApplicationSchema):
    """Keeps all processes it was asked to create an application for"""
    __slots__ = ('processes')

    ApplicationType = IncompleteApplication

    def configure_defaults(self):
        self.processes = list()

    def create_application(self, process, *args):
        self.processes.append(process)
        return super(ProcessRecordingSchema, self).create_application(process, *args)

# end class ProcessRecordingSchema


class TestLocalPlatform(TestCase):
    __slots__ = ()

    @with_launch_arguments('java')
    def test_commercial_features_launch(self):
        platform = LocalPlatform(dry_run=True)
        schema = JavaApplicationSchema('com.example.Main')
        flag = Freeform(CommercialFeatures.argument)

        application = platform.launch(schema, CommercialFeatures.disabled())
        assert flag not in application.options().export()
        assert application.close() == 0

        application = platform.launch(schema, CommercialFeatures.enabled())
        assert application.options().export().count(flag) == 1
        application.close()

        assert flag not in schema.options().export(), "launches don't alter the schema"

    @with_launch_arguments('java')
    def test_java_properties_resolved_once(self):
        platform = LocalPlatform('cluster', dry_run=True)
        value = PlatformNameValue()
        schema = JavaApplicationSchema('com.example.Main', class_path='lib').set_system_property('where', value)

        application = platform.launch(schema, Freeform('-ea'))
        assert value.bound_platforms == [platform], "the command-line reuses the resolved properties"
        assert application.system_properties() == {'where': 'value-on-cluster'}
        assert application.options().get_all(Freeform) == (Freeform('-ea'), )
        application.close()

        platform.launch(schema).close()
        assert value.bound_platforms == [platform, platform], "each launch resolves once"

    def test_dry_run_lifecycle(self):
        calls = list()
        platform = LocalPlatform('dry', dry_run=True)
        assert platform.is_dry_run()
        schema = ApplicationSchema('does-not-exist').set_system_property('where', PlatformNameValue())

        with platform.launch(schema, FirstRecordingProfile(calls), DisplayName('dry-app'),
                             RemoteDebugging.enabled(5005)) as application:
            assert application.process() is None
            assert application.name() == 'dry-app'
            assert application.platform() is platform
            assert application.remote_debug_port() == 5005
            assert application.system_properties() == {'where': 'value-on-dry'}
            assert application.lifecycle().state() == ProfileLifecycle.LAUNCHED
            assert application.wait() == 0
        # end with application
        assert application.lifecycle().state() == ProfileLifecycle.CLOSED
        assert [phase for _, phase in calls] == ['on_launching', 'on_launched', 'on_closing']

        assert application.close() == 0
        assert len(calls) == 3, "closing twice doesn't consult profiles again"

    def test_launch_failure(self):
        calls = list()
        schema = ApplicationSchema(sys.executable).set_arguments('-c', 'raise SystemExit(0)')
        platform = LocalPlatform()
        self.assertRaises(LaunchConfigurationFailure, platform.launch, schema,
                          FirstRecordingProfile(calls, fail_in='on_launching'), SecondRecordingProfile(calls))
        assert calls == [('FirstRecordingProfile', 'on_launching')]

        # failures after the profiles ran leave no process behind either
        self.assertRaises(OSError, platform.launch, ApplicationSchema(os.path.join(os.sep, 'does', 'not', 'exist')))

    def test_application_creation_failure(self):
        schema = ProcessRecordingSchema(sys.executable).set_arguments('-c', 'import time; time.sleep(60)')
        self.assertRaises(TypeError, LocalPlatform().launch, schema, Console.null())
        assert len(schema.processes) == 1
        assert schema.processes[0].poll() is not None, "the spawned process was killed"

    @with_rw_directory
    def test_process(self, rw_dir):
        marker = os.path.join(rw_dir, 'marker')
        script = "import os, sys; open(%r, 'w').write(os.environ['BLAUNCH_TEST'] + ' ' + os.getcwd()); sys.exit(3)" % marker
        schema = ApplicationSchema(sys.executable).set_arguments('-c', script)
        schema.set_environment_variable('BLAUNCH_TEST', PlatformNameValue())

        calls = list()
        application = LocalPlatform('here').launch(schema, Console.null(), WorkingDirectory(rw_dir),
                                                   FirstRecordingProfile(calls))
        assert isinstance(application, Application)
        assert application.wait(timeout=60) == 3
        assert application.exit_code() == 3
        assert application.environment()['BLAUNCH_TEST'] == 'value-on-here'
        assert application.close() == 3
        assert [phase for _, phase in calls] == ['on_launching', 'on_launched', 'on_closing']

        with open(marker) as fp:
            value, cwd = fp.read().split(' ', 1)
        # end with file
        assert value == 'value-on-here'
        assert os.path.realpath(cwd) == os.path.realpath(rw_dir)

    def test_close_terminates(self):
        schema = ApplicationSchema(sys.executable).set_arguments('-c', 'import time; time.sleep(60)')
        application = LocalPlatform(inherit_environment=False).launch(schema, Console.piped())
        assert application.exit_code() is None
        assert application.close() != 0
        assert application.process().poll() is not None

# end class TestLocalPlatform
