from pathlib import Path

import pytest

from GW2.objects import PatternType
from GW2.units import FlowUnits, Quantity, ucf
from GW2tools.readINP import InputError, readINP

MODEL = Path(__file__).parent / "data" / "model.inp"
RAIN = ucf(Quantity.RAINFALL)
ACRE = 1.0 / ucf(Quantity.LANDAREA)


@pytest.fixture(scope="module")
def project():
    return readINP(MODEL)


def test_options(project):
    assert project.flow_units == FlowUnits.CFS
    assert str(project.options['start']) == '2020-01-01 00:00:00'
    assert str(project.options['stop']) == '2020-01-02 00:00:00'
    assert project.options['delt'] == 60.0

    siminfo = project.siminfo()
    assert siminfo['steps'] == 24
    assert str(siminfo['tindex'][0]) == '2020-01-01 01:00:00'


def test_patterns_continue_over_lines(project):
    pattern = project.patterns['ETPAT']
    assert pattern.kind == PatternType.MONTHLY
    assert len(pattern.factors) == 12
    assert pattern.monthly_factor(3) == 0.6
    assert pattern.monthly_factor(12) == 0.5


def test_nodes_and_subcatchments(project):
    assert project.nodes['J1'].invert_elev == 1.0
    assert project.nodes['O1'].invert_elev == 0.0
    s1 = project.subcatchments['S1']
    assert s1.area == pytest.approx(10.0 * ACRE)
    assert s1.frac_perv == pytest.approx(0.75)
    assert project.subcatchments['S2'].frac_perv == 1.0


def test_aquifers(project):
    a1 = project.aquifers['A1']
    assert a1.porosity == 0.43
    assert a1.conductivity == pytest.approx(0.5 / RAIN)
    assert a1.lower_loss_coeff == pytest.approx(0.002 / RAIN)
    assert a1.pattern is project.patterns['ETPAT']
    assert a1.upper_frac(1) == pytest.approx(0.175)

    a2 = project.aquifers['A2']
    assert a2.bottom_elev == -2.0
    assert a2.pattern is None


def test_groundwater(project):
    gw = project.subcatchments['S1'].groundwater
    assert gw.aquifer is project.aquifers['A1']
    assert gw.node is project.nodes['J1']
    assert gw.surf_elev == 6.0
    assert (gw.a1, gw.b1) == (0.1, 1.0)
    assert gw.node_elev is None
    assert gw.water_table_elev == 3.0
    assert gw.deep_expr is not None
    assert gw.lat_expr is None

    gw = project.subcatchments['S2'].groundwater
    assert gw.bottom_elev is None
    assert gw.lat_expr is not None


def test_project_is_valid(project):
    assert project.validate() == []
    project.init_state()
    gw = project.subcatchments['S2'].groundwater
    assert gw.bottom_elev == -2.0
    assert gw.lower_depth == pytest.approx(3.0)
    assert gw.theta == 0.30


def test_metric_units(tmp_path):
    text = MODEL.read_text().replace("FLOW_UNITS           CFS", "FLOW_UNITS           CMS")
    inp = tmp_path / "metric.inp"
    inp.write_text(text)
    project = readINP(inp)
    assert project.flow_units == FlowUnits.CMS
    assert project.nodes['J1'].invert_elev == pytest.approx(1.0 / 0.3048)
    assert project.subcatchments['S1'].groundwater.surf_elev == pytest.approx(6.0 / 0.3048)
    assert project.aquifers['A1'].conductivity == pytest.approx(
        0.5 / ucf(Quantity.RAINFALL, FlowUnits.CMS))


@pytest.mark.parametrize("old, new, section, code", [
    ("FLOW_UNITS           CFS", "FLOW_UNITS           XYZ", 'OPTIONS', 'ERR_KEYWORD'),
    ("A2      0.40  0.10", "A2      0.40  abc", 'AQUIFERS', 'ERR_NUMBER'),
    ("A2      0.40  0.10  0.25  1.0   8      10     0.30  10    0      -2     1     0.30",
     "A2      0.40  0.10  0.25", 'AQUIFERS', 'ERR_ITEMS'),
    ("S2              A2       O1", "S2              A3       O1", 'GROUNDWATER', 'ERR_NAME'),
    ("S2              A2       O1    5      0.05  1.5  0    0    0    0",
     "S2              A2       O1    5      0.05  1.5  0    0    0", 'GROUNDWATER', 'ERR_ITEMS'),
    ("S2               RG1              O1", "S1               RG1              O1",
     'SUBCATCHMENTS', 'ERR_DUP'),
    ("S2              LATERAL 0.01", "S2              SIDEWAYS 0.01", 'GWF', 'ERR_KEYWORD'),
    ("0.01 * (HGW - HCB) ^ 1.5", "0.01 * (HGW - HXB) ^ 1.5", 'GWF', 'ERR_EXPR'),
    ("ETPAT            MONTHLY", "ETPAT            YEARLY", 'PATTERNS', 'ERR_KEYWORD'),
])
def test_input_errors(tmp_path, old, new, section, code):
    text = MODEL.read_text()
    assert old in text
    inp = tmp_path / "bad.inp"
    inp.write_text(text.replace(old, new))
    with pytest.raises(InputError) as err:
        readINP(inp)
    assert err.value.section == section
    assert err.value.code == code
    assert f'[{section}] line' in str(err.value)


def test_bad_expression_names_the_token(tmp_path):
    text = MODEL.read_text().replace("0.01 * (HGW - HCB) ^ 1.5", "0.01 * (HGW - HXB) ^ 1.5")
    inp = tmp_path / "bad.inp"
    inp.write_text(text)
    with pytest.raises(InputError, match="HXB"):
        readINP(inp)


def test_surface_below_water_table(tmp_path):
    text = MODEL.read_text().replace("*     *     3", "*     *     8")
    inp = tmp_path / "high.inp"
    inp.write_text(text)
    errors = readINP(inp).validate()
    assert errors == ['ERROR 203: ground elevation is below water table for Subcatchment S1']


def with_ungrouped_subcatchment(tmp_path, formula):
    text = MODEL.read_text().replace(
        "[AQUIFERS]", "S3               RG1              O1               2        0        100      0.5      0\n\n[AQUIFERS]")
    inp = tmp_path / "extra.inp"
    inp.write_text(text + f"S3              DEEP    {formula}\n")
    return inp


def test_flow_expression_without_groundwater_is_ignored(tmp_path, caplog):
    project = readINP(with_ungrouped_subcatchment(tmp_path, "0.002 * THETA"))
    assert project.subcatchments['S3'].groundwater is None
    assert [s.name for s in project.groundwater_subcatchments()] == ['S1', 'S2']
    assert 'S3 has no groundwater' in caplog.text


def test_ignored_flow_expression_is_still_checked(tmp_path):
    with pytest.raises(InputError) as err:
        readINP(with_ungrouped_subcatchment(tmp_path, "0.002 * DEPTH"))
    assert err.value.code == 'ERR_EXPR'
