''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Named groundwater variables that user flow expressions may reference.
Each variable reads the step's GWContext and reports the value in user units.
'''

from enum import IntEnum

from GW2.units import ucf, Quantity


class GWVariable(IntEnum):
    HGW   = 0    # water table height above aquifer bottom
    HSW   = 1    # surface water height above aquifer bottom
    HCB   = 2    # node invert (channel bottom) height above aquifer bottom
    HGS   = 3    # ground surface height above aquifer bottom
    KS    = 4    # saturated hydraulic conductivity
    K     = 5    # unsaturated hydraulic conductivity at current moisture
    THETA = 6    # upper zone moisture content
    PHI   = 7    # porosity
    FI    = 8    # infiltration rate from the surface
    FU    = 9    # percolation rate from upper to lower zone
    A     = 10   # subcatchment area


def _length(value, ctx):
    return value * ucf(Quantity.LENGTH, ctx.flow_units)

def _rate(value, ctx):
    return value * ucf(Quantity.RAINFALL, ctx.flow_units)


accessors = {
  GWVariable.HGW  : lambda ctx: _length(ctx.hgw, ctx),
  GWVariable.HSW  : lambda ctx: _length(ctx.hsw, ctx),
  GWVariable.HCB  : lambda ctx: _length(ctx.hstar, ctx),
  GWVariable.HGS  : lambda ctx: _length(ctx.total_depth, ctx),
  GWVariable.KS   : lambda ctx: _rate(ctx.aquifer.conductivity, ctx),
  GWVariable.K    : lambda ctx: _rate(ctx.hyd_con, ctx),
  GWVariable.THETA: lambda ctx: ctx.theta,
  GWVariable.PHI  : lambda ctx: ctx.aquifer.porosity,
  GWVariable.FI   : lambda ctx: _rate(ctx.infil, ctx),
  GWVariable.FU   : lambda ctx: _rate(ctx.upper_perc, ctx),
  GWVariable.A    : lambda ctx: ctx.area * ucf(Quantity.LANDAREA, ctx.flow_units),
  }


def get_variable_index(name):
    ''' index of GW variable name (any case), or -1 if not a GW variable '''
    try:
        return int(GWVariable[name.strip().upper()])
    except KeyError:
        return -1


def get_variable_value(ctx, index):
    return accessors[GWVariable(index)](ctx)
