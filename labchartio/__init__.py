'''
labchartio is a package for restructuring LabChart recordings exported to
MATLAB format into one record per channel and block, each holding its time
series, units, sampling metadata and comments
'''
# this need to be at the begining because some sub module will need the version
from labchartio.version import version as __version__

import logging

logging_handler = logging.StreamHandler()

from labchartio.core import *
from labchartio.restructure import restructure
from labchartio.io import *
