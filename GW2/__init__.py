''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
'''

from importlib.metadata import version

from GW2.main import main
from GW2.utilities import versions

__version__ = version('gw2')
