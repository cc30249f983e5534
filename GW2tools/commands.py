from GW2.main import main
from GW2tools.readINP import readINP
from GW2tools.restart import load_hotstart, read_hotstart, save_hotstart
from GW2tools.waterbalance import gwater_balance
from GW2IO.hdf import HDF5
from GW2IO.io import IOManager


def run(inpfile, h5file, hotstart=False, save_states=False, compress=True):
    """Run the groundwater simulation of a SWMM style input file.

    Parameters
    ----------
    inpfile: str
        Input file with [AQUIFERS], [GROUNDWATER] and related sections.
    h5file: str
        HDF5 (path) filename holding TIMESERIES/<subcatchment> forcing and
        receiving the results.
    hotstart: bool
        [optional] Default is False.
        Start from the states saved in h5file by a previous run.
    save_states: bool
        [optional] Default is False.
        Save the final states in h5file for a later hotstart.
    compress: bool
        [optional] Default is True.
        use compression on the save h5 file.
    """
    project = readINP(inpfile)
    states = read_hotstart(h5file) if hotstart else None

    with HDF5(h5file) as hdf5_instance:
        io_manager = IOManager(hdf5_instance)
        main(io_manager, project, hotstart=states, compress=compress)

    if save_states:
        save_hotstart(h5file, project)


def check(inpfile):
    """Read and validate a SWMM style input file, printing any errors.

    Parameters
    ----------
    inpfile: str
        Input file with [AQUIFERS], [GROUNDWATER] and related sections.
    """
    project = readINP(inpfile)
    errors = project.validate()
    for error in errors:
        print(error)
    if not errors:
        print(f'{inpfile}: {len(project.aquifers)} aquifer(s), '
              f'{len(project.groundwater_subcatchments())} subcatchment(s) with groundwater, no errors')
    return errors


def balance(h5file, subcatch, delt=5.0):
    """Print the monthly groundwater balance of one subcatchment.

    Parameters
    ----------
    h5file: str
        HDF5 file with GWATER results.
    subcatch: str
        Subcatchment name.
    delt: float
        [optional] Default is 5.
        Simulation step in minutes.
    """
    df = gwater_balance(h5file, subcatch, delt)
    print(df)
    return df


def restore(inpfile, h5file):
    """Check that the hotstart states saved in h5file fit inpfile.

    Parameters
    ----------
    inpfile: str
        Input file the states were saved for.
    h5file: str
        HDF5 file holding HOTSTART/GWATER.
    """
    project = readINP(inpfile)
    project.init_state()
    df = load_hotstart(h5file, project)
    print('no hotstart states found' if df is None else df)
    return df
