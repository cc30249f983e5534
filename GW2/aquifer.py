''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Aquifer parameter sets, shared by every subcatchment that uses them.
All lengths are in ft and all rates in ft/sec.
'''

from dataclasses import dataclass
from typing import Optional

from GW2.objects import Pattern, PatternType

ERRMSGS = ('ERROR 173: invalid parameter values for Aquifer {}',)


@dataclass(frozen=True)
class Aquifer:
    name: str
    porosity: float              # volumetric fraction
    wilting_point: float         # residual moisture content
    field_capacity: float        # field capacity
    conductivity: float          # saturated hydraulic conductivity (ft/sec)
    conduct_slope: float         # slope of log(K) v. moisture content curve
    tension_slope: float         # slope of soil tension v. moisture content curve (ft)
    upper_evap_frac: float       # fraction of total evap available to upper zone
    lower_evap_depth: float      # depth below surface where lower zone evap stops (ft)
    lower_loss_coeff: float      # coeff. for deep GW loss (ft/sec)
    bottom_elev: float           # elevation of bottom of aquifer (ft)
    water_table_elev: float      # initial water table elevation (ft)
    upper_moisture: float        # initial moisture content of unsaturated zone
    pattern: Optional[Pattern] = None   # monthly adjustment of upper_evap_frac

    def upper_frac(self, month):
        ''' upper zone share of evaporation adjusted for month 1..12 '''
        if self.pattern is None:
            return self.upper_evap_frac
        return self.upper_evap_frac * self.pattern.monthly_factor(month)


def validate_aquifer(aquifer):
    ''' returns list of error messages, empty when the aquifer is usable.
    Invalid parameters are reported, never corrected. '''
    a = aquifer
    errors = []
    if (a.porosity <= 0.0
     or a.field_capacity >= a.porosity
     or a.wilting_point >= a.field_capacity
     or a.conductivity <= 0.0
     or a.conduct_slope < 0.0
     or a.tension_slope < 0.0
     or a.upper_evap_frac < 0.0
     or a.lower_evap_depth < 0.0
     or a.water_table_elev < a.bottom_elev
     or a.upper_moisture > a.porosity
     or a.upper_moisture < a.wilting_point):
        errors.append(ERRMSGS[0].format(a.name))

    if a.pattern is not None and a.pattern.kind != PatternType.MONTHLY:
        errors.append(ERRMSGS[0].format(a.name))
    return errors
