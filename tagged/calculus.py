"""
The field types that can appear in a payload schema.

1. Atoms, such as "string" and "flag". These are the leaves.
2. Constructors: sequence-of and optional. These are structural.
3. Records and variant sets have identity; they live in definition.py.

Every type answers one question -- does a value conform? -- and knows
how to freeze a conforming value so that instances stay immutable.
"""
import datetime
from collections.abc import Callable
from typing import Any
from boozetools.support.foundation import Visitor
from .ontology import FieldType, Symbol

class Atom(Symbol, FieldType):
	""" A primitive field type, judged by a simple predicate on the value. """
	def __init__(self, name: str, predicate: Callable[[Any], bool]):
		super().__init__(name)
		self._predicate = predicate
	def accepts(self, value): return self._predicate(value)

def _is_string(value): return isinstance(value, str)
def _is_flag(value): return isinstance(value, bool)
def _is_number(value): return isinstance(value, (int, float)) and not isinstance(value, bool)
def _is_date(value): return isinstance(value, datetime.date) and not isinstance(value, datetime.datetime)
def _is_timestamp(value): return isinstance(value, datetime.datetime)

class SequenceType(FieldType):
	"""
	Homogeneous sequence. Lists and tuples both conform, but strings do not,
	because a string is a sequence of strings and that way lies confusion.
	"""
	def __init__(self, element: FieldType):
		assert isinstance(element, FieldType), element
		self.element = element
	def __repr__(self): return "[%r]" % self.element
	def __eq__(self, other): return isinstance(other, SequenceType) and self.element == other.element
	def __hash__(self): return hash((SequenceType, self.element))
	def accepts(self, value):
		# Exactly list or tuple: named tuples are records and payloads, not sequences.
		return type(value) in (list, tuple) and all(self.element.accepts(v) for v in value)
	def freeze(self, value):
		return tuple(self.element.freeze(v) for v in value)

class OptionalType(FieldType):
	""" Either a value of the inner type, or None. """
	def __init__(self, inner: FieldType):
		assert isinstance(inner, FieldType), inner
		assert not isinstance(inner, OptionalType), "optional-of-optional means nothing"
		self.inner = inner
	def __repr__(self): return "%r?" % self.inner
	def __eq__(self, other): return isinstance(other, OptionalType) and self.inner == other.inner
	def __hash__(self): return hash((OptionalType, self.inner))
	def accepts(self, value):
		return value is None or self.inner.accepts(value)
	def freeze(self, value):
		return None if value is None else self.inner.freeze(value)

#########################

class Render(Visitor):
	""" Return a string representation of a field type, in the notation primitive.parse_notation reads. """
	def visit_Atom(self, a: Atom): return a.name
	def visit_SequenceType(self, s: SequenceType): return "[%s]" % self.visit(s.element)
	def visit_OptionalType(self, o: OptionalType): return "%s?" % self.visit(o.inner)
	def visit_RecordType(self, r): return r.name
	def visit_VariantSet(self, v): return v.name

def render(field_type: FieldType) -> str:
	return Render().visit(field_type)
