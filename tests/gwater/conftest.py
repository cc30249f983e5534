import pytest

from GW2.aquifer import Aquifer
from GW2.groundwater import Groundwater, init_state
from GW2.objects import Node, Subcatch
from GW2.units import ucf, Quantity

RAIN = ucf(Quantity.RAINFALL)       # in/hr per ft/sec
ACRE = 1.0 / ucf(Quantity.LANDAREA)  # ft2 per acre


@pytest.fixture
def make_aquifer():
    def _make(**kwargs):
        params = dict(
            name="A1",
            porosity=0.43,
            wilting_point=0.09,
            field_capacity=0.20,
            conductivity=0.5 / RAIN,
            conduct_slope=10.0,
            tension_slope=15.0,
            upper_evap_frac=0.35,
            lower_evap_depth=14.0,
            lower_loss_coeff=0.0,
            bottom_elev=0.0,
            water_table_elev=2.0,
            upper_moisture=0.25,
        )
        params.update(kwargs)
        return Aquifer(**params)

    return _make


@pytest.fixture
def make_subcatch(make_aquifer):
    ''' 10 acre subcatchment over a 6 ft deep aquifer with theta = 0.25
    and a 2 ft deep saturated zone '''
    def _make(aquifer=None, node=None, area=10.0 * ACRE, frac_perv=1.0, **kwargs):
        aquifer = aquifer if aquifer is not None else make_aquifer()
        node = node if node is not None else Node("J1", invert_elev=0.0)
        kwargs.setdefault("surf_elev", 6.0)
        gw = Groundwater(aquifer=aquifer, node=node, **kwargs)
        subcatch = Subcatch("S1", area=area, frac_perv=frac_perv, groundwater=gw)
        init_state(gw, frac_perv)
        return subcatch

    return _make
