import pandas as pd
from pandas.io.pytables import read_hdf
from GW2IO.protocols import Category
from typing import Union, Any

from GW2.configuration import PATHS


class HDF5():

	def __init__(self, file_path:str) -> None:
		self.file_path = file_path
		self._store = pd.HDFStore(file_path)

	def __del__(self):
		self._store.close()

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, trace):
		self.__del__()

	def read_ts(self,
			category:Category,
			segment:Union[str,None]=None) -> pd.DataFrame:
		try:
			path = ''
			if category == Category.INPUTS:
				path = PATHS['TIMESERIES'].format(segment)
			elif category == Category.RESULTS:
				path = PATHS['RESULTS'].format(segment)
			return read_hdf(self._store, key=path)
		except KeyError:
			return pd.DataFrame()

	def write_ts(self,
			data_frame:pd.DataFrame,
			category:Category,
			segment:Union[str,None]=None,
			*args:Any,
			**kwargs:Any) -> None:
		"""Saves timeseries to HDF5"""
		if category == Category.INPUTS:
			path = PATHS['TIMESERIES'].format(segment)
		else:
			path = PATHS['RESULTS'].format(segment)
		complevel = None
		if 'compress' in kwargs:
			if kwargs['compress']:
				complevel = 9
		data_frame.to_hdf(self._store, key=path, format='t', data_columns=True, complevel=complevel)

	def write_table(self, data_frame:pd.DataFrame, path:str) -> None:
		data_frame.to_hdf(self._store, key=path, format='t', data_columns=True)

	def write_log(self, gw2_log:pd.DataFrame) -> None:
		gw2_log.to_hdf(self._store, key=PATHS['LOGFILE'], data_columns=True, format='t')

	def write_versioning(self, versioning:pd.DataFrame) -> None:
		versioning.to_hdf(self._store, key=PATHS['VERSIONS'], data_columns=True, format='t')
