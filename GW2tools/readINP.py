'''
Copyright 2020 by RESPEC, INC. - see License.txt with this GW2 distribution
Reads the groundwater related sections of a SWMM 5 style input file into a
GW2 Project.  Values are converted to internal units (ft, sec) as read.
'''

import logging
from collections import defaultdict

from pandas import Timestamp, to_timedelta

from GW2.aquifer import Aquifer
from GW2.groundwater import Groundwater, set_flow_expression
from GW2.gwvars import get_variable_index
from GW2.mathexpr import MathExprError, create
from GW2.objects import Node, Pattern, PatternType, Subcatch
from GW2.project import Project
from GW2.units import ucf, Quantity, FlowUnits

ERRMSGS = {
  'ERR_ITEMS'  : 'too few items',
  'ERR_NAME'   : 'undefined object {}',
  'ERR_DUP'    : 'duplicate object name {}',
  'ERR_NUMBER' : 'invalid number {}',
  'ERR_KEYWORD': 'invalid keyword {}',
  'ERR_EXPR'   : 'invalid math expression: {}',
  }

NODE_SECTIONS = ('JUNCTIONS', 'OUTFALLS', 'STORAGE', 'DIVIDERS')

logger = logging.getLogger(__name__)


def reader(filename):
    # simple reader to return (line number, tokens) of non blank lines with
    # ';' comments removed
    with open(filename, 'r') as file:
        for lineno, line in enumerate(file, start=1):
            line = line.split(';', 1)[0].strip()
            if line:
                yield lineno, line.split()


def getsections(filename):
    sections = defaultdict(list)
    section = None
    for lineno, tokens in reader(filename):
        if tokens[0].startswith('['):
            section = tokens[0].strip('[]').upper()
            continue
        if section is not None:
            sections[section].append((lineno, tokens))
    return sections


class InputError(ValueError):
    ''' error in the input file, names the section and line number '''
    def __init__(self, section, lineno, code, item=''):
        super().__init__(f'[{section}] line {lineno}: ' + ERRMSGS[code].format(item))
        self.section = section
        self.lineno = lineno
        self.code = code


def readINP(inpfile):
    ''' reads inpfile and returns a Project '''
    sections = getsections(inpfile)
    project = Project()

    _options(project, sections['OPTIONS'])
    fu = project.flow_units

    _patterns(project, sections['PATTERNS'])
    for name in NODE_SECTIONS:
        _nodes(project, name, sections[name], fu)
    _subcatchments(project, sections['SUBCATCHMENTS'], fu)
    _aquifers(project, sections['AQUIFERS'], fu)
    _groundwater(project, sections['GROUNDWATER'], fu)
    _flow_expressions(project, sections['GWF'])
    return project


def _number(section, lineno, token):
    try:
        return float(token)
    except ValueError:
        raise InputError(section, lineno, 'ERR_NUMBER', token) from None


def _find(section, lineno, objects, name):
    if name not in objects:
        raise InputError(section, lineno, 'ERR_NAME', name)
    return objects[name]


def _options(project, lines):
    opts = {}
    for lineno, tokens in lines:
        if len(tokens) < 2:
            raise InputError('OPTIONS', lineno, 'ERR_ITEMS')
        key = tokens[0].upper()
        opts[key] = tokens[1]
        if key == 'FLOW_UNITS' and tokens[1].upper() not in FlowUnits.__members__:
            raise InputError('OPTIONS', lineno, 'ERR_KEYWORD', tokens[1])

    if 'FLOW_UNITS' in opts:
        project.options['flow_units'] = FlowUnits[opts['FLOW_UNITS'].upper()]
    if 'START_DATE' in opts:
        project.options['start'] = Timestamp(f"{opts['START_DATE']} {opts.get('START_TIME', '00:00:00')}")
    if 'END_DATE' in opts:
        project.options['stop'] = Timestamp(f"{opts['END_DATE']} {opts.get('END_TIME', '00:00:00')}")
    if 'RUNOFF_STEP' in opts:
        project.options['delt'] = to_timedelta(opts['RUNOFF_STEP']).total_seconds() / 60.0


def _patterns(project, lines):
    # first line of a pattern names its type, continuation lines add factors
    for lineno, tokens in lines:
        name = tokens[0]
        factors = tokens[1:]
        if name not in project.patterns:
            if len(tokens) < 2:
                raise InputError('PATTERNS', lineno, 'ERR_ITEMS')
            try:
                kind = PatternType[tokens[1].upper()]
            except KeyError:
                raise InputError('PATTERNS', lineno, 'ERR_KEYWORD', tokens[1]) from None
            project.patterns[name] = Pattern(name, kind)
            factors = tokens[2:]
        project.patterns[name].factors.extend(
            _number('PATTERNS', lineno, x) for x in factors)


def _nodes(project, section, lines, fu):
    for lineno, tokens in lines:
        if len(tokens) < 2:
            raise InputError(section, lineno, 'ERR_ITEMS')
        name = tokens[0]
        if name in project.nodes:
            raise InputError(section, lineno, 'ERR_DUP', name)
        invert = _number(section, lineno, tokens[1]) / ucf(Quantity.LENGTH, fu)
        project.nodes[name] = Node(name, invert_elev=invert)


def _subcatchments(project, lines, fu):
    # Name  RainGage  Outlet  Area  %Imperv ...
    for lineno, tokens in lines:
        if len(tokens) < 5:
            raise InputError('SUBCATCHMENTS', lineno, 'ERR_ITEMS')
        name = tokens[0]
        if name in project.subcatchments:
            raise InputError('SUBCATCHMENTS', lineno, 'ERR_DUP', name)
        area = _number('SUBCATCHMENTS', lineno, tokens[3]) / ucf(Quantity.LANDAREA, fu)
        imperv = _number('SUBCATCHMENTS', lineno, tokens[4]) / 100.0
        project.subcatchments[name] = Subcatch(name, area=area, frac_perv=1.0 - imperv)


def _aquifers(project, lines, fu):
    # ID porosity wiltingPoint fieldCapacity conductivity conductSlope
    #    tensionSlope upperEvapFrac lowerEvapDepth lowerLossCoeff
    #    bottomElev waterTableElev upperMoisture (evapPattern)
    rain = ucf(Quantity.RAINFALL, fu)
    length = ucf(Quantity.LENGTH, fu)
    for lineno, tokens in lines:
        if len(tokens) < 13:
            raise InputError('AQUIFERS', lineno, 'ERR_ITEMS')
        name = tokens[0]
        if name in project.aquifers:
            raise InputError('AQUIFERS', lineno, 'ERR_DUP', name)
        x = [_number('AQUIFERS', lineno, t) for t in tokens[1:13]]

        pattern = None
        if len(tokens) > 13:
            pattern = _find('AQUIFERS', lineno, project.patterns, tokens[13])

        project.aquifers[name] = Aquifer(
            name=name,
            porosity=x[0],
            wilting_point=x[1],
            field_capacity=x[2],
            conductivity=x[3] / rain,
            conduct_slope=x[4],
            tension_slope=x[5] / length,
            upper_evap_frac=x[6],
            lower_evap_depth=x[7] / length,
            lower_loss_coeff=x[8] / rain,
            bottom_elev=x[9] / length,
            water_table_elev=x[10] / length,
            upper_moisture=x[11],
            pattern=pattern)


def _groundwater(project, lines, fu):
    # subcatch aquifer node surfElev a1 b1 a2 b2 a3 fixedDepth
    #    (nodeElev bottomElev waterTableElev upperMoisture), '*' = not given
    length = ucf(Quantity.LENGTH, fu)
    for lineno, tokens in lines:
        if len(tokens) < 3:
            raise InputError('GROUNDWATER', lineno, 'ERR_ITEMS')
        subcatch = _find('GROUNDWATER', lineno, project.subcatchments, tokens[0])
        if len(tokens) < 10:
            raise InputError('GROUNDWATER', lineno, 'ERR_ITEMS')
        aquifer = _find('GROUNDWATER', lineno, project.aquifers, tokens[1])
        node = _find('GROUNDWATER', lineno, project.nodes, tokens[2])

        x = [_number('GROUNDWATER', lineno, t) for t in tokens[3:10]]

        optional = []
        for i, token in enumerate(tokens[10:14]):
            if token.startswith('*'):
                optional.append(None)
                continue
            value = _number('GROUNDWATER', lineno, token)
            optional.append(value / length if i < 3 else value)
        optional.extend([None] * (4 - len(optional)))

        gw = Groundwater(aquifer=aquifer, node=node,
            surf_elev=x[0] / length, a1=x[1], b1=x[2], a2=x[3], b2=x[4],
            a3=x[5], fixed_depth=x[6] / length,
            node_elev=optional[0], bottom_elev=optional[1],
            water_table_elev=optional[2], upper_moisture=optional[3])

        subcatch.groundwater = gw


def _flow_expressions(project, lines):
    # subcatch LATERAL|DEEP expression
    for lineno, tokens in lines:
        if len(tokens) < 3:
            raise InputError('GWF', lineno, 'ERR_ITEMS')
        subcatch = _find('GWF', lineno, project.subcatchments, tokens[0])
        kind = tokens[1].upper()
        if not (kind.startswith('LAT') or kind.startswith('DEEP')):
            raise InputError('GWF', lineno, 'ERR_KEYWORD', tokens[1])
        formula = ' '.join(tokens[2:])
        try:
            if subcatch.groundwater is None:
                # checked, but unused without a [GROUNDWATER] entry
                create(formula, get_variable_index)
                logger.warning('[GWF] line %d: Subcatchment %s has no groundwater, '
                               'flow expression ignored', lineno, tokens[0])
                continue
            set_flow_expression(subcatch.groundwater, kind, formula)
        except MathExprError as err:
            raise InputError('GWF', lineno, 'ERR_EXPR', err.token) from err
