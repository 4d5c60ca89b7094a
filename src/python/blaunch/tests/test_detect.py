#-*-coding:utf-8-*-
"""
@package blaunch.tests.test_detect
@brief tests for blaunch.detect

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []

import sys
import threading

from .base import (TestCase,
                   FailingEnvironmentDetector)

# test from * import
from blaunch.detect import *
from blaunch import DetectionFailure

import blaunch.detect


class CountingEnvironmentDetector(EnvironmentDetector):
    """Counts how often arguments are read"""
    __slots__ = ()

    reads = list()

    def _read_launch_arguments(self):
        self.reads.append(1)
        return ['python', '-Xrunjdwp:transport=dt_socket']

# end class CountingEnvironmentDetector


class TestDetector(TestCase):
    __slots__ = ()

    def test_queries(self):
        detector = EnvironmentDetector(['java', '-agentlib:jdwp=transport=dt_socket', '-XX:+UnlockCommercialFeatures'])
        assert detector.should_enable_remote_debug()
        assert detector.should_enable_commercial_features()
        assert detector.has_argument('jdwp')
        assert not detector.has_argument('-Xmx')

        detector = EnvironmentDetector(['java', 'Main'])
        assert not detector.should_enable_remote_debug()
        assert not detector.should_enable_commercial_features()

        arguments = detector.launch_arguments()
        arguments.append('-XX:+UnlockCommercialFeatures')
        assert not detector.should_enable_commercial_features(), "a copy of the arguments is returned"

    def test_current_process(self):
        detector = EnvironmentDetector()
        assert detector.launch_arguments() == list(getattr(sys, 'orig_argv', sys.argv))

    def test_failure(self):
        detector = FailingEnvironmentDetector()
        self.assertRaises(DetectionFailure, detector.launch_arguments)
        with self.assertLogs('blaunch.detect', level='ERROR'):
            assert not detector.should_enable_commercial_features()
            assert not detector.should_enable_remote_debug()
        # end with logs

        detector = EnvironmentDetector([None])
        with self.assertLogs('blaunch.detect', level='ERROR'):
            assert not detector.has_argument('-ea'), "scanning errors are handled as well"
        # end with logs

    def test_lazy_initialization(self):
        del CountingEnvironmentDetector.reads[:]
        detector = CountingEnvironmentDetector()
        assert not CountingEnvironmentDetector.reads, "nothing is read on construction"

        threads = [threading.Thread(target=detector.should_enable_remote_debug) for _ in range(8)]
        for thread in threads:
            thread.start()
        # end for each thread
        for thread in threads:
            thread.join()
        # end for each thread
        assert detector.should_enable_remote_debug()
        assert len(CountingEnvironmentDetector.reads) == 1, "arguments are read exactly once"

    def test_process_wide_instance(self):
        previous = reset_detector()
        try:
            first = detector()
            assert first is detector(), "the instance is cached"
            assert isinstance(first, EnvironmentDetector)

            substitute = EnvironmentDetector(['java'])
            with substituted_detector(substitute) as instance:
                assert instance is substitute
                assert detector() is substitute
            # end with substitute
            assert detector() is first, "previous instance is restored"

            assert set_detector(substitute) is first
            assert detector() is substitute
        finally:
            set_detector(previous)
        # end restore detector

    def test_concurrent_creation(self):
        previous = reset_detector()
        try:
            results = list()
            threads = [threading.Thread(target=lambda: results.append(detector())) for _ in range(8)]
            for thread in threads:
                thread.start()
            # end for each thread
            for thread in threads:
                thread.join()
            # end for each thread
            assert len(set(id(instance) for instance in results)) == 1
            assert blaunch.detect._instance is results[0]
        finally:
            set_detector(previous)
        # end restore detector

# end class TestDetector
