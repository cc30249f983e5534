import math

import pytest

from GW2.configuration import MISSING, XTOL
from GW2.groundwater import (Groundwater, get_state, get_volume, init_state,
                             set_flow_expression, set_state, validate_groundwater)
from GW2.mathexpr import MathExprError
from GW2.objects import Node


def test_missing_values_come_from_aquifer(make_aquifer):
    gw = Groundwater(aquifer=make_aquifer(), node=Node("J1"), surf_elev=6.0)
    assert validate_groundwater(gw, "S1") == []
    assert gw.bottom_elev == 0.0
    assert gw.water_table_elev == 2.0
    assert gw.upper_moisture == 0.25
    assert gw.node_elev is None


def test_given_values_override_aquifer(make_aquifer):
    gw = Groundwater(aquifer=make_aquifer(), node=Node("J1"), surf_elev=6.0,
                     bottom_elev=-1.0, water_table_elev=3.0, upper_moisture=0.3)
    validate_groundwater(gw, "S1")
    init_state(gw, 1.0)
    assert gw.lower_depth == pytest.approx(4.0)
    assert gw.theta == 0.3


def test_surface_below_water_table(make_aquifer):
    gw = Groundwater(aquifer=make_aquifer(), node=Node("J1"), surf_elev=1.0)
    errors = validate_groundwater(gw, "S1")
    assert len(errors) == 1
    assert "Subcatchment S1" in errors[0]


def test_init_state(make_subcatch):
    gw = make_subcatch(frac_perv=0.5).groundwater
    assert gw.theta == 0.25
    assert gw.lower_depth == 2.0
    assert gw.old_flow == gw.new_flow == gw.evap_loss == 0.0
    assert gw.max_infil_vol == pytest.approx((6.0 - 2.0) * (0.43 - 0.25) / 0.5)


def test_init_state_nudges_below_bounds(make_aquifer, make_subcatch):
    aquifer = make_aquifer(upper_moisture=0.43, water_table_elev=6.0)
    gw = make_subcatch(aquifer=aquifer).groundwater
    assert gw.theta == pytest.approx(0.43 - XTOL)
    assert gw.lower_depth == pytest.approx(6.0 - XTOL)
    assert gw.theta < aquifer.porosity
    assert gw.lower_depth < gw.total_depth


def test_state_round_trip(make_subcatch):
    gw = make_subcatch().groundwater
    gw.theta, gw.lower_depth, gw.new_flow, gw.max_infil_vol = 0.3, 2.5, 1.0e-6, 0.4
    snapshot = get_state(gw)
    assert snapshot == (0.3, 2.5, 1.0e-6, 0.4)

    set_state(gw, snapshot)
    assert get_state(gw) == snapshot

    other = make_subcatch().groundwater
    set_state(other, snapshot)
    assert get_state(other) == snapshot
    assert other.old_flow == 1.0e-6


@pytest.mark.parametrize("missing", [MISSING, None, math.nan])
def test_restore_keeps_max_infil_when_missing(make_subcatch, missing):
    gw = make_subcatch().groundwater
    before = gw.max_infil_vol
    set_state(gw, (0.3, 2.5, 0.0, missing))
    assert gw.max_infil_vol == before
    assert gw.theta == 0.3
    assert gw.lower_depth == 2.5


def test_no_groundwater():
    assert get_volume(None) == 0.0
    set_state(None, (0.3, 2.5, 0.0, 0.0))
    init_state(None, 1.0)


def test_volume(make_subcatch):
    gw = make_subcatch().groundwater
    assert get_volume(gw) == pytest.approx(4.0 * 0.25 + 2.0 * 0.43)


def test_volume_is_monotonic(make_subcatch):
    gw = make_subcatch().groundwater
    last = -1.0
    for theta in (0.09, 0.15, 0.2, 0.3, 0.42):
        gw.theta = theta
        volume = get_volume(gw)
        assert volume >= last
        last = volume

    gw.theta = 0.3
    last = -1.0
    for lower in (0.0, 0.5, 1.0, 3.0, 5.99):
        gw.lower_depth = lower
        volume = get_volume(gw)
        assert volume >= last
        last = volume


def test_flow_expressions(make_subcatch):
    gw = make_subcatch().groundwater
    deep = set_flow_expression(gw, "DEEP", "2 * THETA")
    assert gw.deep_expr is deep
    assert gw.lat_expr is None

    set_flow_expression(gw, "lateral", "0.1 * (HGW - HCB)")
    assert gw.lat_expr is not None

    replacement = set_flow_expression(gw, "deep", "THETA")
    assert gw.deep_expr is replacement


def test_flow_expression_errors(make_subcatch):
    gw = make_subcatch().groundwater
    with pytest.raises(ValueError):
        set_flow_expression(gw, "SIDEWAYS", "THETA")
    with pytest.raises(MathExprError) as err:
        set_flow_expression(gw, "DEEP", "2 * DEPTH")
    assert err.value.token == "DEPTH"
    assert gw.deep_expr is None
