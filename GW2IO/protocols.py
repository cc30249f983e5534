from typing import Protocol, Union, runtime_checkable
import pandas as pd
from enum import Enum


class Category(Enum):
	RESULTS = 'RESULT'
	INPUTS = 'INPUT'

@runtime_checkable
class SupportsReadTS(Protocol):
	def read_ts(self,
		category:Category,
		segment:Union[str,None]=None) -> pd.DataFrame:
		...

@runtime_checkable
class SupportsWriteTS(Protocol):

	def write_ts(self,
		data_frame:pd.DataFrame,
		category:Category,
		segment:Union[str,None]=None) -> None:
		...

@runtime_checkable
class SupportsWriteTable(Protocol):

	def write_table(self, data_frame:pd.DataFrame, path:str) -> None:
		...

@runtime_checkable
class SupportsWriteLogging(Protocol):

	def write_log(self, gw2_log:pd.DataFrame) -> None:
		...

	def write_versioning(self, versions:pd.DataFrame) -> None:
		...
