''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Boundary objects the groundwater engine reads but does not own:
time patterns, drainage nodes and subcatchments
'''

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PatternType(Enum):
    MONTHLY = 'MONTHLY'
    DAILY   = 'DAILY'
    HOURLY  = 'HOURLY'
    WEEKEND = 'WEEKEND'


@dataclass
class Pattern:
    name: str
    kind: PatternType = PatternType.MONTHLY
    factors: List[float] = field(default_factory=list)

    def monthly_factor(self, month):
        ''' adjustment factor for month 1..12 '''
        if self.kind != PatternType.MONTHLY or month > len(self.factors):
            return 1.0
        return self.factors[month - 1]


@dataclass
class Node:
    ''' drainage node; elevations and depths in ft, inflow in cfs, volume in ft3 '''
    name: str
    invert_elev: float = 0.0
    new_depth: float = 0.0
    inflow: float = 0.0
    new_volume: float = 0.0


@dataclass
class Subcatch:
    ''' area in ft2; groundwater is a groundwater.Groundwater or None '''
    name: str
    area: float = 0.0
    frac_perv: float = 1.0
    groundwater: object = None
