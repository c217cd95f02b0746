"""
Build the primitive namespace.
Also, the little notation for spelling field types as text:

	string         an atom, looked up by name
	[string]       a sequence of strings
	timestamp?     a timestamp, or None
	[string]?      and so forth
"""
from typing import Optional
from .ontology import FieldType
from .space import Layer
from . import calculus

root_namespace: Layer[FieldType] = Layer()
built_in_type_names = []

def _built_in_type(name: str, predicate) -> calculus.Atom:
	built_in_type_names.append(name)
	return root_namespace.define(name, calculus.Atom(name, predicate))

literal_string = _built_in_type("string", calculus._is_string)
literal_flag = _built_in_type("flag", calculus._is_flag)
literal_number = _built_in_type("number", calculus._is_number)
literal_date = _built_in_type("date", calculus._is_date)
literal_timestamp = _built_in_type("timestamp", calculus._is_timestamp)

def sequence_of(element: FieldType) -> calculus.SequenceType:
	return calculus.SequenceType(element)

def optional(inner: FieldType) -> calculus.OptionalType:
	return calculus.OptionalType(inner)

def parse_notation(text: str, scope: Layer[FieldType] = root_namespace) -> Optional[FieldType]:
	""" Returns None if the text does not spell a known type. """
	text = text.strip()
	if text.endswith("?"):
		inner = parse_notation(text[:-1], scope)
		if inner is None or isinstance(inner, calculus.OptionalType): return None
		return optional(inner)
	if text.startswith("[") and text.endswith("]"):
		element = parse_notation(text[1:-1], scope)
		return None if element is None else sequence_of(element)
	return scope.symbol(text)
