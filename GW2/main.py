''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
'''

from pandas import DataFrame

from GW2.configuration import PATHS
from GW2.GWATER import simulate
from GW2.massbal import GwaterTotals
from GW2.stats import GwaterStats
from GW2.utilities import messages, versions, get_timeseries
from GW2IO.io import IOManager, Category


def main(io_manager:IOManager, project, hotstart:DataFrame=None, compress:bool=True):
    """Runs the groundwater simulation of every subcatchment in project.

    Parameters
    ----------
    io_manager: IOManager
        Source of forcing timeseries and destination of results and logs.
    project: GW2.project.Project
        Options and objects, usually from GW2tools.readINP.
    hotstart: DataFrame - [optional] Default is None.
        Snapshot from Project.get_states() applied after initialization.
    compress: Boolean - [optional] Default is True.
        Use compression for saved results.
    Return
    ------------
    float
        Groundwater continuity error (percent).
    """

    msg = messages()
    msg(1, 'Processing started for groundwater project')

    errors = project.validate()
    if errors:
        for error in errors:
            msg(2, error)
        raise ValueError(f'{len(errors)} groundwater input error(s): ' + '; '.join(errors))

    project.init_state()
    if hotstart is not None:
        msg(2, f'Hotstart states applied for {len(hotstart)} subcatchment(s)')
        project.set_states(hotstart)

    siminfo = project.siminfo()
    flow_units = siminfo['flow_units']
    subcatchments = project.groundwater_subcatchments()

    massbal = GwaterTotals()
    stats = GwaterStats()
    massbal.open(subcatchments)

    # main processing loop
    msg(1, f'Simulation Start: {siminfo["start"]}, Stop: {siminfo["stop"]}')
    for subcatch in subcatchments:
        msg(2, f'SUBCATCH {subcatch.name} DELT(minutes): {siminfo["delt"]}')
        ts = get_timeseries(io_manager, subcatch.name, siminfo)
        if not ts:
            msg(3, f'No forcing timeseries found for {subcatch.name}, using zeros')
        df = simulate(subcatch, siminfo, ts, massbal, stats)
        io_manager.write_ts(df, Category.RESULTS, subcatch.name, compress=compress)

    pct_error = massbal.get_error(subcatchments)
    msg(1, f'Groundwater continuity error: {pct_error:.3f} %')

    io_manager.write_table(massbal.to_frame(flow_units), PATHS['MASSBAL'])
    io_manager.write_table(stats.to_frame(flow_units), PATHS['STATS'])

    msglist = msg(1, 'Done', final=True)

    df = DataFrame(msglist, columns=['logfile'])
    io_manager.write_log(df)
    io_manager.write_versioning(versions())
    return pct_error
