''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Run constants and table layouts shared by the GW2 engine and tools
'''

GWTOL   = 0.0001     # ODE solver tolerance
XTOL    = 0.001      # tolerance for moisture & depth
MISSING = -1.0e10    # "missing" marker for hotstart and table files

# results written by GWATER.simulate(), in user units
RESULTS = ('INFIL', 'EVAP', 'LATFLOW', 'DEEPFLOW', 'GWFLOW', 'THETA', 'WATERTABLE',
           'STORAGE', 'MAXINFIL')

# forcing series read by GWATER.simulate(); missing flows are treated as zeros
FORCING = ('INFIL', 'SURFEVAP', 'EVAP', 'NODEDEPTH', 'NODEINFLOW', 'NODEVOLUME')

# hotstart snapshot columns, in get_state() order
HOTSTART = ('THETA', 'WATERTABLE', 'LATFLOW', 'MAXINFIL')

# HDF5 store layout
PATHS = {
  'TIMESERIES' : 'TIMESERIES/{}',
  'RESULTS'    : 'RESULTS/SUBCATCH_{}/GWATER',
  'MASSBAL'    : 'RESULTS/SUMMARY/MASSBAL',
  'STATS'      : 'RESULTS/SUMMARY/STATS',
  'HOTSTART'   : 'HOTSTART/GWATER',
  'LOGFILE'    : 'RUN_INFO/LOGFILE',
  'VERSIONS'   : 'RUN_INFO/VERSIONS',
  }
