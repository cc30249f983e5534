''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Container for everything a groundwater run needs: options, time patterns,
aquifers, drainage nodes and subcatchments.
'''

from typing import Dict

from pandas import DataFrame, Timestamp, date_range
from pandas.tseries.offsets import Second

from GW2.aquifer import validate_aquifer
from GW2.configuration import HOTSTART
from GW2.groundwater import validate_groundwater, init_state, get_state, set_state
from GW2.units import FlowUnits


class Project:
    def __init__(self):
        self.options = {
          'flow_units': FlowUnits.CFS,
          'start': Timestamp('2000-01-01'),
          'stop':  Timestamp('2000-01-02'),
          'delt':  5.0,                       # runoff step (minutes)
          }
        self.patterns: Dict = {}
        self.aquifers: Dict = {}
        self.nodes: Dict = {}
        self.subcatchments: Dict = {}

    @property
    def flow_units(self):
        return FlowUnits(self.options['flow_units'])

    def groundwater_subcatchments(self):
        return [s for s in self.subcatchments.values() if s.groundwater is not None]

    def validate(self):
        ''' returns list of all aquifer and groundwater error messages '''
        errors = []
        for aquifer in self.aquifers.values():
            errors.extend(validate_aquifer(aquifer))
        for subcatch in self.subcatchments.values():
            errors.extend(validate_groundwater(subcatch.groundwater, subcatch.name))
        return errors

    def init_state(self):
        for subcatch in self.groundwater_subcatchments():
            init_state(subcatch.groundwater, subcatch.frac_perv)

    def siminfo(self):
        ''' simulation level info used by GWATER.simulate() '''
        start, stop, delt = self.options['start'], self.options['stop'], self.options['delt']
        tindex = date_range(start, stop, freq=Second(round(delt * 60)))[1:]
        return {'start': start, 'stop': stop, 'delt': delt, 'tindex': tindex,
                'steps': len(tindex), 'flow_units': self.flow_units}

    def get_states(self):
        ''' groundwater snapshot of every subcatchment, in internal units '''
        rows = {s.name: get_state(s.groundwater) for s in self.groundwater_subcatchments()}
        return DataFrame.from_dict(rows, orient='index', columns=list(HOTSTART))

    def set_states(self, states):
        ''' restores a snapshot made by get_states(); rows for unknown
        subcatchments are an error, NaN max. infiltration is left unchanged '''
        for name, row in states.iterrows():
            if name not in self.subcatchments:
                raise ValueError(f'hotstart names unknown Subcatchment {name}')
            set_state(self.subcatchments[name].groundwater, tuple(row[list(HOTSTART)]))
