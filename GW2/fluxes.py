''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Water fluxes into and out of the upper (unsaturated) and lower (saturated)
groundwater zones, and the time derivatives of the two state variables.

All work happens against a GWContext built fresh for each step of each
subcatchment; nothing here keeps state between calls.
'''

from dataclasses import dataclass
from math import exp

from numba import njit

from GW2.gwvars import get_variable_value
from GW2.mathexpr import evaluate
from GW2.units import FlowUnits

THETA      = 0    # index of upper zone moisture in the state vector
LOWERDEPTH = 1    # index of lower zone depth in the state vector


@dataclass
class GWContext:
    ''' step inputs and limits (ft, sec) plus the latest computed fluxes '''
    gw: object                  # groundwater.Groundwater
    aquifer: object             # aquifer.Aquifer
    flow_units: FlowUnits
    area: float                 # subcatchment area (ft2)
    frac_perv: float            # fraction of area that is pervious
    tstep: float                # step duration (sec)
    infil: float                # infiltration rate from surface (ft/sec)
    max_evap: float             # max. evaporation rate (ft/sec)
    avail_evap: float           # available evaporation rate (ft/sec)
    upper_frac: float           # monthly adjusted upper zone evap fraction
    total_depth: float          # total depth of both zones (ft)
    hstar: float                # min. lower zone height for lateral flow (ft)
    hsw: float                  # surface water height above aquifer bottom (ft)
    max_upper_perc: float       # upper limit on upper zone percolation (ft/sec)
    max_gw_flow_pos: float      # upper limit on lateral flow out of aquifer
    max_gw_flow_neg: float      # lower limit on lateral flow into aquifer
    ucf_length: float = 1.0
    ucf_rainfall: float = 43200.0
    ucf_gwflow: float = 43560.0
    lat_expr: object = None
    deep_expr: object = None
    hgw: float = 0.0            # lower zone depth at last flux evaluation
    theta: float = 0.0          # upper moisture at last flux evaluation
    hyd_con: float = 0.0        # unsaturated hydraulic conductivity (ft/sec)
    upper_evap: float = 0.0     # evaporation rate from upper zone (ft/sec)
    lower_evap: float = 0.0     # evaporation rate from lower zone (ft/sec)
    upper_perc: float = 0.0     # percolation rate from upper to lower zone
    lower_loss: float = 0.0     # loss rate from lower zone to deep GW
    gw_flow: float = 0.0        # lateral flow rate to drainage node (ft/sec)

    def get_variable(self, index):
        return get_variable_value(self, index)


@njit(cache=True)
def evap_rates(theta, upper_depth, infil, upper_frac, max_evap, avail_evap,
               wilting_point, lower_evap_depth):
    ''' returns (upper zone, lower zone) evaporation rates '''
    upper_evap = 0.0
    lower_evap = 0.0

    # no GW evaporation while infiltration is occurring
    if infil > 0.0:
        return upper_evap, lower_evap

    if theta > wilting_point:
        upper_evap = min(upper_frac * max_evap, avail_evap)

    # fraction of the lower evaporation depth reaching the saturated zone
    if lower_evap_depth > 0.0:
        lower_frac = (lower_evap_depth - upper_depth) / lower_evap_depth
        lower_frac = min(max(0.0, lower_frac), 1.0)
        lower_evap = lower_frac * (1.0 - upper_frac) * max_evap
        lower_evap = min(lower_evap, avail_evap - upper_evap)
    return upper_evap, lower_evap


@njit(cache=True)
def upper_perc(theta, upper_depth, porosity, field_capacity, conductivity,
               conduct_slope, tension_slope):
    ''' returns (percolation rate, unsaturated conductivity) '''
    hydcon = conductivity * exp((theta - porosity) * conduct_slope)
    if upper_depth <= 0.0 or theta <= field_capacity:
        return 0.0, hydcon

    dhdz = 1.0 + tension_slope * 2.0 * (theta - field_capacity) / upper_depth
    return hydcon * dhdz, hydcon


@njit(cache=True)
def gw_flow(lower_depth, hstar, hsw, a1, b1, a2, b2, a3, ucf_length, ucf_gwflow):
    ''' built-in lateral flow from the lower zone to the drainage node (ft/sec);
    coefficients apply to depths and flows in user units '''
    if lower_depth <= hstar:
        return 0.0

    if b1 == 0.0:
        t1 = a1
    else:
        t1 = a1 * ((lower_depth - hstar) * ucf_length) ** b1

    if b2 == 0.0:
        t2 = a2
    elif hsw > hstar:
        t2 = a2 * ((hsw - hstar) * ucf_length) ** b2
    else:
        t2 = 0.0

    t3 = a3 * lower_depth * hsw * ucf_length * ucf_length

    q = (t1 - t2 + t3) / ucf_gwflow
    if q < 0.0 and a3 != 0.0:
        q = 0.0
    return q


def get_fluxes(ctx, theta, lower_depth):
    ''' computes all zone fluxes for the given state and stores them on ctx '''
    a = ctx.aquifer
    gw = ctx.gw

    lower_depth = min(max(lower_depth, 0.0), ctx.total_depth)
    upper_depth = ctx.total_depth - lower_depth

    ctx.hgw = lower_depth
    ctx.theta = theta

    ctx.upper_evap, ctx.lower_evap = evap_rates(theta, upper_depth, ctx.infil,
        ctx.upper_frac, ctx.max_evap, ctx.avail_evap, a.wilting_point,
        a.lower_evap_depth)

    perc, ctx.hyd_con = upper_perc(theta, upper_depth, a.porosity,
        a.field_capacity, a.conductivity, a.conduct_slope, a.tension_slope)
    ctx.upper_perc = min(perc, ctx.max_upper_perc)

    if ctx.deep_expr is not None:
        ctx.lower_loss = evaluate(ctx.deep_expr, ctx.get_variable) / ctx.ucf_rainfall
    else:
        ctx.lower_loss = a.lower_loss_coeff * lower_depth / ctx.total_depth
    ctx.lower_loss = min(ctx.lower_loss, lower_depth / ctx.tstep)

    flow = gw_flow(lower_depth, ctx.hstar, ctx.hsw, gw.a1, gw.b1, gw.a2, gw.b2,
        gw.a3, ctx.ucf_length, ctx.ucf_gwflow)
    if ctx.lat_expr is not None:
        flow += evaluate(ctx.lat_expr, ctx.get_variable) / ctx.ucf_gwflow
    if flow >= 0.0:
        flow = min(flow, ctx.max_gw_flow_pos)
    else:
        flow = max(flow, ctx.max_gw_flow_neg)
    ctx.gw_flow = flow


def get_dxdt(t, x, ctx):
    ''' [d(theta)/dt, d(lower depth)/dt]; t is unused '''
    get_fluxes(ctx, x[THETA], x[LOWERDEPTH])
    q_upper = ctx.infil - ctx.upper_evap - ctx.upper_perc
    q_lower = ctx.upper_perc - ctx.lower_loss - ctx.lower_evap - ctx.gw_flow

    # upper moisture changes with net flow over upper zone depth
    denom = ctx.total_depth - x[LOWERDEPTH]
    dtheta = q_upper / denom if denom > 0.0 else 0.0

    # lower depth changes with net flow over upper zone moisture deficit
    denom = ctx.aquifer.porosity - x[THETA]
    dlower = q_lower / denom if denom > 0.0 else 0.0
    return [dtheta, dlower]
