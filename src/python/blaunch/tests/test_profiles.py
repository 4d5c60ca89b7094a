#-*-coding:utf-8-*-
"""
@package blaunch.tests.test_profiles
@brief tests for blaunch.profiles

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []

from .base import (TestCase,
                   with_launch_arguments,
                   FailingEnvironmentDetector)

# test from * import
from blaunch.profiles import *
from blaunch import (OptionsByType,
                     Freeform,
                     LocalPlatform,
                     JavaApplicationSchema,
                     IProfile,
                     substituted_detector)


class TestProfiles(TestCase):
    __slots__ = ()

    def test_equality(self):
        assert CommercialFeatures.enabled() == CommercialFeatures.enabled()
        assert hash(CommercialFeatures.enabled()) == hash(CommercialFeatures.enabled())
        assert CommercialFeatures.disabled() == CommercialFeatures.disabled()
        assert hash(CommercialFeatures.disabled()) == hash(CommercialFeatures.disabled())
        assert CommercialFeatures.enabled() != CommercialFeatures.disabled()
        assert CommercialFeatures.enabled().is_enabled()
        assert not CommercialFeatures.disabled().is_enabled()
        assert isinstance(CommercialFeatures.disabled(), IProfile)

    def test_registry(self):
        assert profile_type('commercial-features') is CommercialFeatures
        assert 'commercial-features' in profile_names()
        self.assertRaises(KeyError, profile_type, 'doesnt-exist')

    @with_launch_arguments('java', '-server', '-XX:+UnlockCommercialFeatures', 'Main')
    def test_auto_detect_enabled(self):
        assert CommercialFeatures.auto_detect() == CommercialFeatures.enabled()

    @with_launch_arguments('java', '-server', 'Main')
    def test_auto_detect_disabled(self):
        assert CommercialFeatures.auto_detect() == CommercialFeatures.disabled()

    def test_auto_detect_failure(self):
        with substituted_detector(FailingEnvironmentDetector()):
            with self.assertLogs('blaunch.detect', level='ERROR'):
                assert CommercialFeatures.auto_detect() == CommercialFeatures.disabled()
            # end with logs
        # end with failing detector

    def test_auto_detect_unexpected_failure(self):
        class BrokenDetector(object):
            def should_enable_commercial_features(self):
                raise RuntimeError("broken")
        # end class BrokenDetector

        with substituted_detector(BrokenDetector()):
            with self.assertLogs('blaunch.profiles', level='ERROR'):
                assert CommercialFeatures.auto_detect() == CommercialFeatures.disabled()
            # end with logs
        # end with broken detector

    def test_on_launching(self):
        platform = LocalPlatform(dry_run=True)
        schema = JavaApplicationSchema('com.example.Main')
        flag = Freeform(CommercialFeatures.argument)

        options = OptionsByType(CommercialFeatures.disabled())
        options.get(CommercialFeatures).on_launching(platform, schema, options)
        assert flag not in options.export()

        options = OptionsByType(CommercialFeatures.enabled())
        profile = options.get(CommercialFeatures)
        profile.on_launching(platform, schema, options)
        assert options.export().count(flag) == 1

        profile.on_launched(platform, None, options)
        profile.on_closing(platform, None, options)
        assert options.export().count(flag) == 1, "only launching changes options"

# end class TestProfiles
