#-*-coding:utf-8-*-
"""
@package blaunch
@brief A framework to configure, launch and observe applications, extensible by profiles

@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
import os
import logging

__version__ = '0.1.0'


# ==============================================================================
## @name Constants
# ------------------------------------------------------------------------------
## @{

## Used to set the logging up very early to see everything. Useful for debugging usually, log-levels will
## be set at later points as well
log_env_var = 'BLAUNCH_STARTUP_LOG_LEVEL'

## -- End Constants -- @}


# ==============================================================================
## @name Initialization Handlers
# ------------------------------------------------------------------------------
## @{

def _init_pre_launch_logging():
    """Allow early logging, prior to reading any settings"""
    log_level = os.environ.get(log_env_var)
    if log_level is not None:
        logging.basicConfig()
        level = logging.getLevelName(log_level)
        if not isinstance(level, int):
            msg = "%s needs to be set to a valid log level, like DEBUG, INFO, WARNING, got '%s'" % (log_env_var, log_level)
            raise AssertionError(msg)
        # end handle invalid level
        logging.root.setLevel(level)
    # end have env var

## -- End Initialization Handlers -- @}


from .base import *
from .interfaces import *
from .detect import *
from .options import *
from .profiles import *
from .lifecycle import *
from .schema import *
from .platform import *
from .settings import *

_init_pre_launch_logging()
