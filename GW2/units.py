''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Unit conversion factors.  The engine computes in feet and seconds; every
value crossing a user-facing boundary is multiplied (internal to user) or
divided (user to internal) by ucf(quantity, ...)
'''

from enum import Enum, IntEnum


class UnitSystem(IntEnum):
    US = 0
    SI = 1


class FlowUnits(IntEnum):
    CFS = 0
    GPM = 1
    MGD = 2
    CMS = 3
    LPS = 4
    MLD = 5

    @property
    def unit_system(self):
        return UnitSystem.US if self <= FlowUnits.MGD else UnitSystem.SI


class Quantity(Enum):
    RAINFALL  = 'RAINFALL'     # in/hr,  mm/hr   ---> ft/sec
    RAINDEPTH = 'RAINDEPTH'    # in,     mm      ---> ft
    EVAPRATE  = 'EVAPRATE'     # in/day, mm/day  ---> ft/sec
    LENGTH    = 'LENGTH'       # ft,     m       ---> ft
    LANDAREA  = 'LANDAREA'     # ac,     ha      ---> ft2
    VOLUME    = 'VOLUME'       # ft3,    m3      ---> ft3
    GWFLOW    = 'GWFLOW'       # cfs/ac, cms/ha  ---> ft/sec
    FLOW      = 'FLOW'         # user flow units ---> cfs


Ucf = {
  Quantity.RAINFALL : (43200.0,   1097280.0),
  Quantity.RAINDEPTH: (12.0,      304.8),
  Quantity.EVAPRATE : (1036800.0, 26334720.0),
  Quantity.LENGTH   : (1.0,       0.3048),
  Quantity.LANDAREA : (2.2956e-5, 0.92903e-5),
  Quantity.VOLUME   : (1.0,       0.02832),
  Quantity.GWFLOW   : (43560.0,   3048.0),
  }

Qcf = (1.0, 448.831, 0.64632, 0.02832, 28.317, 2.4466)


def ucf(quantity, flow_units=FlowUnits.CFS):
    ''' factor converting internal ft/sec based values of quantity into
    the user's units implied by flow_units '''
    flow_units = FlowUnits(flow_units)
    if quantity == Quantity.FLOW:
        return Qcf[flow_units]
    return Ucf[Quantity(quantity)][flow_units.unit_system]
