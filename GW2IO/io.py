import pandas as pd
from GW2IO.protocols import (Category, SupportsReadTS, SupportsWriteTS,
	SupportsWriteLogging, SupportsWriteTable)
from typing import Union


class IOManager:
	"""Management class for IO operations needed to execute a GW2 run"""

	def __init__(self,
			io_combined: Union[SupportsReadTS, SupportsWriteTS, None] = None,
			input: Union[SupportsReadTS,None]=None,
			output: Union[SupportsReadTS,SupportsWriteTS,SupportsWriteTable,None]=None,
			log: Union[SupportsWriteLogging,None]=None,) -> None:
		""" io_combined: SupportsReadTS & SupportsWriteTS & SupportsWriteLogging / None
			Shortcut for an object that combines the protocols for Input, Output
			and Log. Used as the default for any of them not specified.
		input: SupportsReadTS/None (Default None)
			The data source for forcing timeseries.
		output: SupportsWriteTS & SupportsReadTS & SupportsWriteTable / None (Default None)
			The location for result timeseries and summary tables.
		log: SupportsWriteLogging/None (Default None)
			The location to output logging information.
		"""

		self._input = io_combined if input is None else input
		self._output = io_combined if output is None else output
		self._log = io_combined if log is None else log

		self._in_memory = {}

	def read_ts(self,
			category:Category,
			segment:Union[str,None]=None,
			*args, **kwargs) -> pd.DataFrame:
		key = (category, segment)
		if key in self._in_memory:
			return self._in_memory[key].copy(deep=True)
		if category == Category.INPUTS:
			data_frame = self._input.read_ts(category, segment)
			self._in_memory[key] = data_frame.copy(deep=True)
			return data_frame
		return self._output.read_ts(category, segment)

	def write_ts(self,
			data_frame:pd.DataFrame,
			category:Category,
			segment:Union[str,None]=None,
			*args, **kwargs) -> None:
		self._in_memory[(category, segment)] = data_frame.copy(deep=True)
		self._output.write_ts(data_frame, category, segment, *args, **kwargs)

	def write_table(self, data_frame:pd.DataFrame, path:str) -> None:
		self._output.write_table(data_frame, path)

	def write_log(self, data_frame)-> None:
		if self._log: self._log.write_log(data_frame)

	def write_versioning(self, data_frame)-> None:
		if self._log: self._log.write_versioning(data_frame)
