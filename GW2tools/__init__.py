from importlib.metadata import version

from GW2tools.readINP import readINP
from GW2tools.restart import save_hotstart, load_hotstart, restart
from GW2tools.waterbalance import gwater_balance


__version__ = version('gw2')
