''' Copyright 2017 by RESPEC, INC. - see License.txt with this GW2 distribution
'''


import pandas as pd

from GW2.configuration import PATHS


def gwater_balance(hdfname, subcatch, delt):
    ''' Computes the monthly groundwater balance of one subcatchment
        gwater_balance(hdfname, subcatch, delt)
            hdfname is name (with path as necessary)
            subcatch is the name of the subcatchment
            delt is the simulation step in minutes
        Storage (in or mm) is compared with the fluxes (in/hr or mm/hr)
        integrated over each month.'''

    data = pd.read_hdf(hdfname, key=PATHS['RESULTS'].format(subcatch))
    hours = delt / 60.0

    sv = data[['STORAGE']].copy()
    initial = sv['STORAGE'].iloc[0]
    sv = sv.resample('MS').last().copy()

    sv['ShiftedSTORAGE'] = sv['STORAGE'].shift()
    sv.loc[sv.index[0], 'ShiftedSTORAGE'] = initial

    fluxes = ['INFIL', 'EVAP', 'LATFLOW', 'DEEPFLOW']
    flx = (data[fluxes] * hours).resample('MS').sum().copy()

    cat = pd.concat([sv, flx], axis=1)

    numerator = (cat['STORAGE'] - cat['ShiftedSTORAGE']) - (cat['INFIL'] - cat['EVAP'] - cat['LATFLOW'] - cat['DEEPFLOW'])
    denominator = cat['ShiftedSTORAGE'] + cat['INFIL']
    cat['BALANCE_PCT'] = 100.0 * numerator / denominator
    cat['REFVAL'] = cat['ShiftedSTORAGE'] + cat['INFIL']

    cat.fillna(0.0, inplace=True)
    return cat[['BALANCE_PCT', 'REFVAL']]
