''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Hotstart (checkpoint/restart) support for groundwater states
'''

from pandas import DataFrame, HDFStore, Timestamp

from GW2.configuration import HOTSTART, PATHS
from GW2.units import ucf, Quantity


def save_hotstart(h5file, project):
    ''' stores Project.get_states() in h5file under HOTSTART/GWATER '''
    df = project.get_states()
    with HDFStore(h5file) as store:
        df.to_hdf(store, key=PATHS['HOTSTART'], format='table', data_columns=True)
    return df


def read_hotstart(h5file):
    ''' returns the saved snapshot, or None if h5file has none '''
    with HDFStore(h5file) as store:
        if '/' + PATHS['HOTSTART'] not in store.keys():
            return None
        return store[PATHS['HOTSTART']]


def load_hotstart(h5file, project):
    ''' restores states saved by save_hotstart() into project; returns the
    snapshot or None when there was nothing to restore '''
    df = read_hotstart(h5file)
    if df is not None:
        project.set_states(df)
    return df


def restart(h5file, project, newstart):
    '''
    Builds a hotstart snapshot from saved GWATER results so a run can be
    continued from newstart.  The last step ending at or before newstart is
    used; maximum infiltration is taken from the results as well.

    Parameters
    ----------
    h5file : str
        GW2 HDF5 file holding RESULTS.
    project : GW2.project.Project
        The project the results were computed for.
    newstart : str (in Datatime format for Timestamp)
        DateTime for restarting the simulation.

    Returns
    -------
    DataFrame snapshot, also saved as the file's hotstart.
    '''

    fu = project.flow_units
    length = ucf(Quantity.LENGTH, fu)
    rain = ucf(Quantity.RAINFALL, fu)
    depth = ucf(Quantity.RAINDEPTH, fu)

    rows = {}
    with HDFStore(h5file) as store:
        for subcatch in project.groundwater_subcatchments():
            path = PATHS['RESULTS'].format(subcatch.name)
            if '/' + path not in store.keys():
                continue
            df = store[path]
            indx = df.index.get_indexer([Timestamp(newstart)], method='pad')[0]
            if indx < 0:
                raise ValueError(f'{newstart} is before the first saved result for {subcatch.name}')
            row = df.iloc[indx]
            rows[subcatch.name] = (row['THETA'], row['WATERTABLE'] / length,
                                   row['LATFLOW'] / rain, row['MAXINFIL'] / depth)

        snapshot = DataFrame.from_dict(rows, orient='index', columns=list(HOTSTART))
        snapshot.to_hdf(store, key=PATHS['HOTSTART'], format='table', data_columns=True)
    return snapshot
