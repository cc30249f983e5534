''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Per subcatchment groundwater state: parameters linking a subcatchment to an
aquifer and a drainage node, plus the dynamic state of the upper
(unsaturated) and lower (saturated) zones.
'''

import logging
from dataclasses import dataclass
from typing import Optional

from GW2.configuration import XTOL, MISSING
from GW2.gwvars import get_variable_index
from GW2 import mathexpr

logger = logging.getLogger(__name__)

ERRMSGS = ('ERROR 203: ground elevation is below water table for Subcatchment {}',)


@dataclass
class Groundwater:
    aquifer: object                 # aquifer.Aquifer
    node: object                    # objects.Node receiving lateral flow
    surf_elev: float                # elevation of ground surface (ft)
    a1: float = 0.0                 # groundwater outflow coeff.
    b1: float = 0.0                 # groundwater outflow exponent
    a2: float = 0.0                 # surface water outflow coeff.
    b2: float = 0.0                 # surface water outflow exponent
    a3: float = 0.0                 # surf./ground water interaction coeff.
    fixed_depth: float = 0.0        # fixed surface water water depth (ft)
    node_elev: Optional[float] = None         # elevation of receiving node invert (ft)
    bottom_elev: Optional[float] = None       # bottom elevation of lower GW zone (ft)
    water_table_elev: Optional[float] = None  # initial water table elevation (ft)
    upper_moisture: Optional[float] = None    # initial upper moisture content
    theta: float = 0.0              # upper zone moisture content
    lower_depth: float = 0.0        # depth of saturated zone (ft)
    old_flow: float = 0.0           # previous groundwater flow rate (ft/sec)
    new_flow: float = 0.0           # current groundwater flow rate (ft/sec)
    evap_loss: float = 0.0          # current evaporation loss rate (ft/sec)
    max_infil_vol: float = 0.0      # max. infil. upper zone can accept (ft)
    lat_expr: object = None         # user lateral flow expression
    deep_expr: object = None        # user deep flow expression

    @property
    def total_depth(self):
        return self.surf_elev - self.bottom_elev

    @property
    def upper_depth(self):
        return self.total_depth - self.lower_depth


def resolve_defaults(gw):
    ''' fills unspecified optional elevations and moisture from the aquifer '''
    a = gw.aquifer
    if gw.bottom_elev is None:
        gw.bottom_elev = a.bottom_elev
    if gw.water_table_elev is None:
        gw.water_table_elev = a.water_table_elev
    if gw.upper_moisture is None:
        gw.upper_moisture = a.upper_moisture


def validate_groundwater(gw, name):
    ''' returns list of error messages for subcatchment name's groundwater '''
    if gw is None:
        return []
    resolve_defaults(gw)
    if gw.surf_elev < gw.water_table_elev:
        return [ERRMSGS[0].format(name)]
    return []


def init_state(gw, frac_perv):
    ''' sets the starting moisture, water table and infiltration capacity '''
    if gw is None:
        return
    resolve_defaults(gw)
    a = gw.aquifer

    gw.theta = gw.upper_moisture
    if gw.theta >= a.porosity:
        gw.theta = a.porosity - XTOL

    gw.lower_depth = gw.water_table_elev - gw.bottom_elev
    if gw.lower_depth >= gw.surf_elev - gw.bottom_elev:
        gw.lower_depth = gw.surf_elev - gw.bottom_elev - XTOL

    gw.old_flow = 0.0
    gw.new_flow = 0.0
    gw.evap_loss = 0.0

    gw.max_infil_vol = 0.0
    if frac_perv > 0.0:
        gw.max_infil_vol = ((gw.surf_elev - gw.water_table_elev)
                            * (a.porosity - gw.theta) / frac_perv)


def get_state(gw):
    ''' snapshot (theta, water table elevation, lateral flow, max infiltration) '''
    return (gw.theta, gw.bottom_elev + gw.lower_depth, gw.new_flow,
            gw.max_infil_vol)


def set_state(gw, x):
    ''' restores a snapshot made by get_state(); a missing (None, NaN or
    MISSING) max infiltration volume leaves the current value in place '''
    if gw is None:
        return
    theta, water_table, flow, max_infil = x
    gw.theta = theta
    gw.lower_depth = water_table - gw.bottom_elev
    gw.old_flow = flow
    gw.new_flow = flow
    if max_infil is not None and max_infil == max_infil and max_infil != MISSING:
        gw.max_infil_vol = max_infil


def get_volume(gw):
    ''' stored water per unit area (ft) '''
    if gw is None:
        return 0.0
    return gw.upper_depth * gw.theta + gw.lower_depth * gw.aquifer.porosity


def set_flow_expression(gw, kind, formula):
    ''' compiles formula as the LATERAL or DEEP flow expression of gw,
    replacing any previous one.  Raises MathExprError for a bad formula
    and ValueError for an unknown kind. '''
    key = kind.upper()
    if key.startswith('LAT'):
        attr = 'lat_expr'
    elif key.startswith('DEEP'):
        attr = 'deep_expr'
    else:
        raise ValueError(f'unknown groundwater flow expression type {kind}')

    tree = mathexpr.create(formula, get_variable_index)
    if getattr(gw, attr) is not None:
        logger.info('replacing %s groundwater flow expression with %s', attr[:-5], formula)
    setattr(gw, attr, tree)
    return tree
