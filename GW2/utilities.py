''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
General routines for GW2 '''

from datetime import datetime as dt

from numpy import float64
from pandas import Timedelta

from GW2.configuration import FORCING
from GW2IO.protocols import Category, SupportsReadTS


def messages():
    '''Closure routine; msg() prints messages to screen and run log'''
    start = dt.now()
    mlist = []
    def msg(indent, message, final=False):
        now = dt.now()
        m = str(now)[:22] + '   ' * indent + message
        if final:
            mn,sc = divmod((now-start).seconds, 60)
            ms = (now-start).microseconds // 100_000
            m = '; '.join((m, f'Run time is about {mn:02}:{sc:02}.{ms} (mm:ss)'))
        print(m)
        mlist.append(m)
        return mlist
    return msg


def transform(series, siminfo):
    ''' value of series in effect at the start of every simulation step;
    gaps before the first value are zero '''
    starts = siminfo['tindex'] - Timedelta(minutes=siminfo['delt'])
    series = series.sort_index()
    return series.reindex(starts, method='ffill').fillna(0.0).to_numpy(dtype=float64)


def get_timeseries(timeseries_inputs:SupportsReadTS, segment, siminfo):
    ''' forcing arrays for segment aligned to the simulation steps '''
    ts = {}
    data_frame = timeseries_inputs.read_ts(category=Category.INPUTS, segment=segment)
    for name in FORCING:
        if name in data_frame.columns:
            ts[name] = transform(data_frame[name], siminfo)
    return ts


def versions(import_list=[]):
    '''
    Versions of libraries required by GW2

    Parameters
    ----------
    import_list : list of strings, optional
        DESCRIPTION. The default is [].

    Returns
    -------
    Pandas DataFrame
        Libary verson strings.
    '''

    import sys
    import platform
    import pandas
    import importlib
    import datetime

    names = ['Python']
    data  = [sys.version]
    import_list = ['GW2', 'numpy', 'numba', 'pandas', 'scipy', 'pyparsing'] + list(import_list)
    for import_ in import_list:
        imodule = importlib.import_module(import_)
        names.append(import_)
        data.append(imodule.__version__)
    names.extend(['os', 'processor', 'Date/Time'])
    data.extend([platform.platform(), platform.processor(),
      str(datetime.datetime.now())[0:19]])
    return pandas.DataFrame(data, index=names, columns=['version'])
