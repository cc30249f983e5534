''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Groundwater continuity totals for a run.  Volumes are kept in ft3.
'''

from threading import Lock

from pandas import DataFrame

from GW2.groundwater import get_volume
from GW2.units import ucf, Quantity, FlowUnits


class GwaterTotals:
    ''' process wide groundwater mass balance sink '''

    def __init__(self):
        self._lock = Lock()
        self.reset()

    def reset(self):
        self.infil = 0.0          # infiltration into upper zone
        self.upper_evap = 0.0     # evaporation from upper zone
        self.lower_evap = 0.0     # evaporation from lower zone
        self.lower_perc = 0.0     # deep loss from lower zone
        self.gwater = 0.0         # lateral flow to drainage nodes
        self.init_storage = 0.0
        self.final_storage = 0.0
        self.pct_error = 0.0

    def update(self, infil, upper_evap, lower_evap, lower_perc, gwater):
        ''' adds one step's volumes (ft3) for one subcatchment '''
        with self._lock:
            self.infil += infil
            self.upper_evap += upper_evap
            self.lower_evap += lower_evap
            self.lower_perc += lower_perc
            self.gwater += gwater

    def open(self, subcatchments):
        ''' records the groundwater stored at the start of the run '''
        self.reset()
        self.init_storage = _storage(subcatchments)

    def get_error(self, subcatchments):
        ''' records final storage and returns the percent continuity error '''
        self.final_storage = _storage(subcatchments)
        total_inflow = self.infil + self.init_storage
        total_outflow = (self.upper_evap + self.lower_evap + self.lower_perc
                         + self.gwater + self.final_storage)
        self.pct_error = 0.0
        if total_inflow > 0.0:
            self.pct_error = 100.0 * (1.0 - total_outflow / total_inflow)
        return self.pct_error

    def to_frame(self, flow_units=FlowUnits.CFS):
        ''' continuity table in user volume units '''
        f = ucf(Quantity.VOLUME, flow_units)
        rows = {
          'INITIAL_STORAGE': self.init_storage * f,
          'INFILTRATION'   : self.infil * f,
          'UPPER_ZONE_ET'  : self.upper_evap * f,
          'LOWER_ZONE_ET'  : self.lower_evap * f,
          'DEEP_PERCOLATION': self.lower_perc * f,
          'GROUNDWATER_FLOW': self.gwater * f,
          'FINAL_STORAGE'  : self.final_storage * f,
          'CONTINUITY_ERROR_PCT': self.pct_error,
          }
        return DataFrame.from_dict(rows, orient='index', columns=['Value'])


def _storage(subcatchments):
    return sum(get_volume(s.groundwater) * s.area for s in subcatchments)
