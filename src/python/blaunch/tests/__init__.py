#-*-coding:utf-8-*-
"""
@package blaunch.tests
@brief Test package for all blaunch code, providing the utilities all test cases use

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
from .base import *
