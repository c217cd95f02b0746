"""
These most-fundamental classes are separate from the rest to avoid
various circular-import scenarios. Field types know how to judge a value;
symbols know their own name. Everything else builds on these two ideas.
"""
from typing import Any

class FieldType:
	"""
	The semantic type of one field in a variant's payload.
	Concrete field types live in calculus.py; VariantSet also qualifies.
	"""
	def accepts(self, value: Any) -> bool:
		""" Does this value conform, exactly, to this type? """
		raise NotImplementedError(type(self))
	def freeze(self, value: Any) -> Any:
		""" Return the immutable form in which a conforming value gets stored. """
		return value

class Symbol:
	"""
	Any named-and-defined thing: variant sets, their cases, records, atoms.
	"""
	name: str
	def __init__(self, name: str):
		assert isinstance(name, str), type(name)
		self.name = name
	def __repr__(self): return "{%s:%s}" % (self.name, type(self).__name__)
