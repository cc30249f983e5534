''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Per subcatchment groundwater summary statistics.
'''

from threading import Lock

from pandas import DataFrame

from GW2.units import ucf, Quantity, FlowUnits

columns = ['INFIL', 'EVAP', 'LATFLOW', 'DEEPFLOW', 'AVGTHETA', 'AVGWATERTABLE',
           'FINALTHETA', 'FINALWATERTABLE', 'MAXFLOW']


class GwaterStats:
    ''' process wide groundwater statistics sink; rates in ft/sec, depths in ft '''

    def __init__(self):
        self._lock = Lock()
        self._stats = {}

    def update(self, name, infil, evap, lat_flow, deep_flow, theta, water_table, tstep):
        with self._lock:
            s = self._stats.setdefault(name, dict.fromkeys(columns + ['TIME'], 0.0))
            s['INFIL']    += infil * tstep
            s['EVAP']     += evap * tstep
            s['LATFLOW']  += lat_flow * tstep
            s['DEEPFLOW'] += deep_flow * tstep
            s['AVGTHETA'] += theta * tstep
            s['AVGWATERTABLE'] += water_table * tstep
            s['FINALTHETA'] = theta
            s['FINALWATERTABLE'] = water_table
            s['TIME'] += tstep
            if abs(lat_flow) > abs(s['MAXFLOW']):
                s['MAXFLOW'] = lat_flow

    def __getitem__(self, name):
        return self._stats[name]

    def __contains__(self, name):
        return name in self._stats

    def to_frame(self, flow_units=FlowUnits.CFS):
        ''' summary table: totals as depths, averages over time, max flow
        as a unit area rate '''
        depth  = ucf(Quantity.RAINDEPTH, flow_units)
        length = ucf(Quantity.LENGTH, flow_units)
        gwflow = ucf(Quantity.GWFLOW, flow_units)

        rows = {}
        for name, s in self._stats.items():
            time = s['TIME'] if s['TIME'] > 0.0 else 1.0
            rows[name] = {
              'INFIL'   : s['INFIL'] * depth,
              'EVAP'    : s['EVAP'] * depth,
              'LATFLOW' : s['LATFLOW'] * depth,
              'DEEPFLOW': s['DEEPFLOW'] * depth,
              'AVGTHETA': s['AVGTHETA'] / time,
              'AVGWATERTABLE'  : s['AVGWATERTABLE'] / time * length,
              'FINALTHETA'     : s['FINALTHETA'],
              'FINALWATERTABLE': s['FINALWATERTABLE'] * length,
              'MAXFLOW' : s['MAXFLOW'] * gwflow,
              }
        return DataFrame.from_dict(rows, orient='index', columns=columns)
