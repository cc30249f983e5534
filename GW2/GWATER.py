''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Groundwater step driver: integrates the two zone moisture balance of a
subcatchment over one time step, and runs whole forcing time series.
'''

import logging

from numpy import zeros
from pandas import DataFrame

from GW2.configuration import GWTOL, XTOL, FORCING, RESULTS
from GW2.fluxes import GWContext, get_fluxes, get_dxdt, THETA, LOWERDEPTH
from GW2.groundwater import get_volume
from GW2.odesolve import integrate
from GW2.units import ucf, Quantity, FlowUnits

logger = logging.getLogger(__name__)


def make_context(subcatch, evap, infil, tstep, evap_rate, month, flow_units=FlowUnits.CFS):
    ''' builds the step's GWContext, or returns None when there is nothing to
    compute (no groundwater, no pervious area, no zone depth) '''
    gw = subcatch.groundwater
    if gw is None:
        return None
    frac_perv = subcatch.frac_perv
    area = subcatch.area
    if frac_perv <= 0.0 or area <= 0.0:
        return None
    total_depth = gw.surf_elev - gw.bottom_elev
    if total_depth <= 0.0:
        return None

    a = gw.aquifer
    node = gw.node

    # infiltration and pervious surface evap volumes (ft3) to rates over
    # the entire subcatchment area
    infil = infil / area / tstep
    evap = evap / area / tstep

    # GW evap can only occur through the pervious surface
    max_evap = evap_rate * frac_perv
    avail_evap = max(max_evap - evap, 0.0)

    # min. water table height for lateral flow, surface water height
    if gw.node_elev is not None:
        hstar = gw.node_elev - gw.bottom_elev
    else:
        hstar = node.invert_elev - gw.bottom_elev
    if gw.fixed_depth > 0.0:
        hsw = gw.fixed_depth + node.invert_elev - gw.bottom_elev
    else:
        hsw = node.new_depth + node.invert_elev - gw.bottom_elev

    theta = gw.theta
    lower_depth = gw.lower_depth

    # rate limits from the state at the start of the step
    max_upper_perc = max(0.0, (total_depth - lower_depth) * (theta - a.field_capacity)) / tstep
    max_gw_flow_pos = lower_depth * a.porosity / tstep
    node_flow = (node.inflow + node.new_volume / tstep) / area
    max_gw_flow_neg = -min((total_depth - lower_depth) * (a.porosity - theta) / tstep, node_flow)

    return GWContext(
        gw=gw, aquifer=a, flow_units=FlowUnits(flow_units), area=area,
        frac_perv=frac_perv, tstep=tstep, infil=infil, max_evap=max_evap,
        avail_evap=avail_evap, upper_frac=a.upper_frac(month),
        total_depth=total_depth, hstar=hstar, hsw=hsw,
        max_upper_perc=max_upper_perc, max_gw_flow_pos=max_gw_flow_pos,
        max_gw_flow_neg=max_gw_flow_neg,
        ucf_length=ucf(Quantity.LENGTH, flow_units),
        ucf_rainfall=ucf(Quantity.RAINFALL, flow_units),
        ucf_gwflow=ucf(Quantity.GWFLOW, flow_units),
        lat_expr=gw.lat_expr, deep_expr=gw.deep_expr)


def clamp_state(theta, lower_depth, wilting_point, porosity, total_depth):
    ''' keeps wilting_point <= theta < porosity and 0 <= lower_depth < total_depth '''
    theta = max(theta, wilting_point)
    if theta >= porosity:
        theta = porosity - XTOL
        lower_depth = total_depth - XTOL
    lower_depth = max(lower_depth, 0.0)
    if lower_depth >= total_depth:
        lower_depth = total_depth - XTOL
    return theta, lower_depth


def get_groundwater(subcatch, evap, infil, tstep, evap_rate, month,
                    flow_units=FlowUnits.CFS, massbal=None, stats=None):
    ''' updates a subcatchment's groundwater over one time step
    CALL: get_groundwater(subcatch, evap, infil, tstep, evap_rate, month)
       evap is pervious surface evaporation already used this step (ft3)
       infil is the infiltration volume entering the upper zone (ft3)
       tstep is the step duration (sec)
       evap_rate is the climate potential evaporation rate (ft/sec)
       month is 1..12, used with the aquifer's evaporation pattern
       massbal, stats are optional GwaterTotals and GwaterStats sinks
    returns the GWContext holding the end of step fluxes, or None when the
    step was skipped '''
    ctx = make_context(subcatch, evap, infil, tstep, evap_rate, month, flow_units)
    if ctx is None:
        logger.debug('no groundwater computed for subcatchment %s', subcatch.name)
        return None

    gw = ctx.gw
    a = ctx.aquifer

    x = integrate([gw.theta, gw.lower_depth], 0.0, tstep, GWTOL, tstep, get_dxdt, (ctx,))
    theta, lower_depth = clamp_state(x[THETA], x[LOWERDEPTH], a.wilting_point,
                                     a.porosity, ctx.total_depth)
    gw.theta = float(theta)
    gw.lower_depth = float(lower_depth)

    # fluxes at the end of the step are the ones reported
    get_fluxes(ctx, gw.theta, gw.lower_depth)
    gw.old_flow = gw.new_flow
    gw.new_flow = ctx.gw_flow
    gw.evap_loss = ctx.upper_evap + ctx.lower_evap

    # upper zone capacity for the next step's infiltration
    gw.max_infil_vol = (ctx.total_depth - gw.lower_depth) * (a.porosity - gw.theta) / ctx.frac_perv

    if massbal is not None:
        update_mass_bal(ctx, massbal)
    if stats is not None:
        stats.update(subcatch.name, ctx.infil, gw.evap_loss, ctx.gw_flow,
                     ctx.lower_loss, gw.theta, gw.lower_depth + gw.bottom_elev, tstep)
    return ctx


def update_mass_bal(ctx, massbal):
    ''' reports the step's volumes (ft3); lateral flow uses the average of
    the previous and current rates '''
    gw = ctx.gw
    ft2sec = ctx.area * ctx.tstep
    massbal.update(ctx.infil * ft2sec,
                   ctx.upper_evap * ft2sec,
                   ctx.lower_evap * ft2sec,
                   ctx.lower_loss * ft2sec,
                   0.5 * (gw.old_flow + gw.new_flow) * ft2sec)


def simulate(subcatch, siminfo, ts, massbal=None, stats=None):
    ''' Groundwater for one subcatchment over a whole simulation
    CALL: simulate(subcatch, siminfo, ts)
       siminfo is a dictionary with simulation level info: 'tindex' (the end
         time of every step), 'steps', 'delt' (minutes), 'flow_units'
       ts is a dictionary of forcing arrays in user units:
         INFIL      infiltration rate over the pervious area (in/hr, mm/hr)
         SURFEVAP   pervious surface evaporation (in/hr, mm/hr)
         EVAP       potential evaporation rate (in/day, mm/day)
         NODEDEPTH  receiving node depth (ft, m)
         NODEINFLOW receiving node inflow (flow units)
         NODEVOLUME receiving node stored volume (ft3, m3)
    returns a DataFrame of results in user units '''
    gw = subcatch.groundwater
    if gw is None:
        raise ValueError(f'Subcatchment {subcatch.name} has no groundwater')

    steps = siminfo['steps']
    tindex = siminfo['tindex']
    tstep = siminfo['delt'] * 60.0
    flow_units = FlowUnits(siminfo.get('flow_units', FlowUnits.CFS))

    # missing flows are treated as zeros
    ts = dict(ts)
    for name in FORCING:
        if name not in ts:
            ts[name] = zeros(steps)

    u_rain  = ucf(Quantity.RAINFALL, flow_units)
    u_depth = ucf(Quantity.RAINDEPTH, flow_units)
    u_evap  = ucf(Quantity.EVAPRATE, flow_units)
    u_len   = ucf(Quantity.LENGTH, flow_units)
    u_flow  = ucf(Quantity.FLOW, flow_units)
    u_vol   = ucf(Quantity.VOLUME, flow_units)

    node = gw.node
    perv_area = subcatch.area * subcatch.frac_perv
    months = tindex.month

    results = {name: zeros(steps) for name in RESULTS}
    for step in range(steps):
        node.new_depth  = ts['NODEDEPTH'][step] / u_len
        node.inflow     = ts['NODEINFLOW'][step] / u_flow
        node.new_volume = ts['NODEVOLUME'][step] / u_vol

        # infiltration cannot exceed what the upper zone can accept
        infil = max(min(ts['INFIL'][step] / u_rain * tstep, gw.max_infil_vol), 0.0)
        surf_evap = ts['SURFEVAP'][step] / u_rain * tstep

        ctx = get_groundwater(subcatch, surf_evap * perv_area, infil * perv_area,
            tstep, ts['EVAP'][step] / u_evap, months[step], flow_units, massbal, stats)

        if ctx is not None:
            results['INFIL'][step]    = ctx.infil * u_rain
            results['EVAP'][step]     = gw.evap_loss * u_rain
            results['LATFLOW'][step]  = ctx.gw_flow * u_rain
            results['DEEPFLOW'][step] = ctx.lower_loss * u_rain
            results['GWFLOW'][step]   = ctx.gw_flow * subcatch.area * u_flow
        results['THETA'][step]      = gw.theta
        results['WATERTABLE'][step] = (gw.bottom_elev + gw.lower_depth) * u_len
        results['STORAGE'][step]    = get_volume(gw) * u_depth
        results['MAXINFIL'][step]   = gw.max_infil_vol * u_depth

    return DataFrame(results, index=tindex)
