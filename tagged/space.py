"""
Name-spaces that refuse duplicate definitions.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar('T')

class AlreadyExists(KeyError): pass

class Layer(Generic[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_symbol: dict[str, T]
	
	def __init__(self):
		self._symbol = {}
	
	def symbol(self, key: str) -> Optional[T]:
		return self._symbol.get(key)
	
	def define(self, key: str, symbol: T) -> T:
		if key in self._symbol:
			raise AlreadyExists(key)
		self._symbol[key] = symbol
		return symbol
