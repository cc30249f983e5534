import pytest

from GW2.configuration import XTOL
from GW2.GWATER import clamp_state, get_groundwater
from GW2.groundwater import get_volume
from GW2.massbal import GwaterTotals
from GW2.objects import Node
from GW2.stats import GwaterStats
from GW2.units import Quantity, ucf

RAIN = ucf(Quantity.RAINFALL)
EVAP = ucf(Quantity.EVAPRATE)
TSTEP = 3600.0


def step(subcatch, infil=0.0, evap_rate=0.0, month=1, **kwargs):
    ''' infil in in/hr over the subcatchment, evap_rate in in/day '''
    volume = infil / RAIN * TSTEP * subcatch.area
    return get_groundwater(subcatch, 0.0, volume, TSTEP, evap_rate / EVAP, month, **kwargs)


def test_drainage_conserves_volume(make_subcatch):
    subcatch = make_subcatch()
    gw = subcatch.groundwater
    before = get_volume(gw)

    ctx = step(subcatch)
    assert ctx is not None
    assert gw.theta < 0.25
    assert gw.lower_depth > 2.0
    assert ctx.gw_flow == 0.0
    assert gw.new_flow == 0.0
    assert get_volume(gw) == pytest.approx(before, rel=1.0e-3)
    assert gw.max_infil_vol == pytest.approx((6.0 - gw.lower_depth) * (0.43 - gw.theta))


def test_lateral_flow_step(make_subcatch):
    subcatch = make_subcatch(a1=0.1, b1=1.0, node=Node("J1", invert_elev=1.0))
    gw = subcatch.groundwater
    ctx = step(subcatch)
    assert gw.old_flow == 0.0
    assert gw.new_flow == ctx.gw_flow
    assert ctx.gw_flow == pytest.approx(0.1 * (gw.lower_depth - 1.0) / ucf(Quantity.GWFLOW))
    assert 0.0 < ctx.gw_flow <= ctx.max_gw_flow_pos


def test_no_groundwater_evaporation_while_infiltrating(make_subcatch):
    subcatch = make_subcatch()
    ctx = step(subcatch, infil=0.5, evap_rate=0.3)
    assert ctx.upper_evap == 0.0
    assert ctx.lower_evap == 0.0
    assert subcatch.groundwater.evap_loss == 0.0

    ctx = step(subcatch, evap_rate=0.3)
    assert ctx.upper_evap > 0.0
    assert subcatch.groundwater.evap_loss == ctx.upper_evap + ctx.lower_evap


def test_skipped_step_leaves_state(make_subcatch):
    subcatch = make_subcatch(frac_perv=0.0)
    gw = subcatch.groundwater
    assert step(subcatch) is None
    assert gw.theta == 0.25
    assert gw.lower_depth == 2.0


def test_mass_balance_uses_average_lateral_flow(make_subcatch):
    subcatch = make_subcatch(a1=0.1, b1=1.0, node=Node("J1", invert_elev=1.0))
    totals = GwaterTotals()
    totals.open([subcatch])

    first = step(subcatch, infil=0.2, massbal=totals).gw_flow
    second = step(subcatch, massbal=totals).gw_flow
    ft2sec = subcatch.area * TSTEP
    assert totals.gwater == pytest.approx((0.5 * first + 0.5 * (first + second)) * ft2sec)
    assert totals.infil == pytest.approx(0.2 / RAIN * ft2sec)
    assert abs(totals.get_error([subcatch])) < 1.0


def test_statistics_are_reported(make_subcatch):
    subcatch = make_subcatch()
    stats = GwaterStats()
    step(subcatch, infil=0.1, stats=stats)
    step(subcatch, evap_rate=0.2, stats=stats)
    s = stats["S1"]
    assert s['TIME'] == 2 * TSTEP
    assert s['INFIL'] == pytest.approx(0.1 / RAIN * TSTEP)
    assert s['FINALTHETA'] == subcatch.groundwater.theta
    assert s['FINALWATERTABLE'] == pytest.approx(subcatch.groundwater.lower_depth)


@pytest.mark.parametrize("theta, water_table, infil, evap_rate, a1", [
    (0.25, 2.0, 0.0, 0.0, 0.0),
    (0.15, 1.0, 0.5, 0.0, 0.0),
    (0.30, 4.0, 0.0, 0.2, 0.1),
    (0.35, 3.0, 1.0, 0.0, 0.5),
    (0.10, 0.05, 0.0, 0.3, 10.0),
])
def test_state_stays_in_bounds(make_aquifer, make_subcatch, theta, water_table,
                               infil, evap_rate, a1):
    aquifer = make_aquifer(upper_moisture=theta, water_table_elev=water_table,
                           lower_loss_coeff=0.01 / RAIN)
    subcatch = make_subcatch(aquifer=aquifer, a1=a1, b1=1.0)
    gw = subcatch.groundwater
    for _ in range(3):
        step(subcatch, infil=infil, evap_rate=evap_rate)
        assert 0.09 <= gw.theta < 0.43
        assert 0.0 <= gw.lower_depth < 6.0
        assert gw.max_infil_vol >= 0.0


def test_clamp_state():
    assert clamp_state(0.05, 2.0, 0.09, 0.43, 6.0) == (0.09, 2.0)
    assert clamp_state(0.25, -0.5, 0.09, 0.43, 6.0) == (0.25, 0.0)
    assert clamp_state(0.25, 6.0, 0.09, 0.43, 6.0) == (0.25, 6.0 - XTOL)
    assert clamp_state(0.43, 2.0, 0.09, 0.43, 6.0) == (0.43 - XTOL, 6.0 - XTOL)
    assert clamp_state(0.25, 2.0, 0.09, 0.43, 6.0) == (0.25, 2.0)
