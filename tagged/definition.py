"""
Defining closed variant sets, and the nested records their cases may carry.

A variant set is closed the moment `define` returns: there is no way to add
a case afterward. Each case (a TypeCase) has its own complete schema. No case
inherits fields from another, even where two cases happen to agree on a few.
Payloads are instances of a named-tuple class made specially for each case,
so a payload's shape is fully determined by its tag.

Problems with a definition get collected in a Report and then raised all
together as BadDefinition, before any half-built set can escape.
"""
from collections import namedtuple
from collections.abc import Mapping
from keyword import iskeyword
from typing import Any, Iterable, NamedTuple, Optional

from .ontology import FieldType, Symbol
from .space import Layer, AlreadyExists
from .diagnostics import Report
from .errors import BadDefinition, SchemaMismatch, UnknownVariant
from . import calculus, primitive

class FieldSpec(NamedTuple):
	name: str
	field_type: FieldType
	def __str__(self): return "%s:%s" % (self.name, calculus.render(self.field_type))

class Shape(Symbol):
	"""
	What variant cases and records have in common: a name,
	an ordered schema, and a named-tuple class to carry conforming data.
	"""
	fields: tuple[FieldSpec, ...]
	payload_class: type

	def __init__(self, name: str, fields: Iterable[FieldSpec]):
		super().__init__(name)
		self.fields = tuple(fields)
		self._field_space = {f.name: f for f in self.fields}
		self.payload_class = namedtuple(name, [f.name for f in self.fields])

	def field_names(self) -> list[str]:
		return [f.name for f in self.fields]

	def signature(self) -> str:
		if not self.fields: return self.name
		return "%s(%s)" % (self.name, ", ".join(map(str, self.fields)))

	def check(self, payload: Mapping[str, Any]):
		""" Validate a payload against this schema and return it frozen into the payload class. """
		if not isinstance(payload, Mapping):
			raise SchemaMismatch(self.name, mistyped=[("payload", "mapping from field name to value")])
		missing = [f.name for f in self.fields if f.name not in payload]
		extra = [k for k in payload if k not in self._field_space]
		mistyped = [
			(f.name, calculus.render(f.field_type))
			for f in self.fields
			if f.name in payload and not f.field_type.accepts(payload[f.name])
		]
		if missing or extra or mistyped:
			raise SchemaMismatch(self.name, missing, extra, mistyped)
		return self.payload_class(**{f.name: f.field_type.freeze(payload[f.name]) for f in self.fields})

class TypeCase(Shape):
	""" One case of a variant set. Calling it constructs an instance. """
	variant_set: "VariantSet"  # Inherited attribute: VariantSet constructor fills this in.
	def __repr__(self): return "<%s.%s>" % (self.variant_set.name, self.name)
	def __call__(self, /, **payload):
		from .values import construct
		return construct(self.variant_set, self, payload)

class RecordType(Shape, FieldType):
	"""
	A nested record: an independently specified shape that can be the type of a field.
	Calling it builds a (checked, immutable) record value.
	"""
	def __repr__(self): return "<record %s>" % self.name
	def __call__(self, /, **fields): return self.check(fields)
	def accepts(self, value): return isinstance(value, self.payload_class)

class VariantSet(Symbol, FieldType):
	"""
	The complete, closed enumeration of cases for one modeling problem.
	Iterating yields the cases in declaration order. A variant set can also
	be the type of a field, in which case values are its instances.
	"""
	cases: tuple[TypeCase, ...]

	def __init__(self, name: str, cases: Iterable[TypeCase]):
		super().__init__(name)
		self.cases = tuple(cases)
		self._case_space = Layer()
		for case in self.cases:
			case.variant_set = self
			self._case_space.define(case.name, case)
		self._closed = True

	def __setattr__(self, key, value):
		if self.__dict__.get("_closed"):
			raise AttributeError("Variant set %s is closed; it cannot be altered." % self.name)
		super().__setattr__(key, value)

	def __repr__(self): return "<variant %s>" % self.name
	def __iter__(self): return iter(self.cases)
	def __len__(self): return len(self.cases)
	def __contains__(self, tag): return self.lookup(tag) is not None

	def __getitem__(self, tag) -> TypeCase:
		case = self.lookup(tag)
		if case is None: raise UnknownVariant(self.name, [_tag_text(tag)])
		return case

	def __getattr__(self, name):
		# Only reached when ordinary attribute lookup fails.
		space = self.__dict__.get("_case_space")
		case = space.symbol(name) if space is not None else None
		if case is None: raise AttributeError(name)
		return case

	def lookup(self, tag) -> Optional[TypeCase]:
		""" Find the case for a tag given by name or as a TypeCase. None if it is not one of ours. """
		if isinstance(tag, TypeCase):
			return tag if tag.variant_set is self else None
		if isinstance(tag, str):
			return self._case_space.symbol(tag)
		return None

	def tags(self) -> list[str]:
		return [c.name for c in self.cases]

	def accepts(self, value):
		from .values import Instance
		return isinstance(value, Instance) and value.variant_set is self

def _tag_text(tag) -> str:
	return tag.name if isinstance(tag, Symbol) else str(tag)

#########################

def _good_name(text) -> bool:
	return isinstance(text, str) and text.isidentifier() and not iskeyword(text) and not text.startswith("_")

def _pairs(owner: str, things, report: Report) -> list[tuple]:
	""" A mapping, or a sequence of pairs. Anything else goes on the report. """
	if isinstance(things, Mapping): return list(things.items())
	if not isinstance(things, (list, tuple)):
		report.not_a_schema(owner, things)
		return []
	pairs = []
	for pair in things:
		if isinstance(pair, (list, tuple)) and len(pair) == 2: pairs.append(tuple(pair))
		else: report.not_a_schema(owner, pair)
	return pairs

# Attributes of a variant set itself. A case by one of these names could not be reached as an attribute.
_RESERVED_CASE_NAMES = frozenset(n for n in dir(VariantSet) if not n.startswith("_")) | {"name", "cases"}

def _resolve_field_type(owner: str, field: str, spelled, report: Report) -> Optional[FieldType]:
	if isinstance(spelled, FieldType):
		return spelled
	if isinstance(spelled, str):
		field_type = primitive.parse_notation(spelled)
		if field_type is not None: return field_type
	report.unknown_field_type(owner, field, spelled)

def _build_fields(owner: str, schema, report: Report) -> list[FieldSpec]:
	seen = Layer()
	fields = []
	for field, spelled in _pairs(owner, schema, report):
		if not _good_name(field):
			report.bad_name("field", field)
			continue
		try: seen.define(field, spelled)
		except AlreadyExists:
			report.redefined("field", owner, field)
			continue
		field_type = _resolve_field_type(owner, field, spelled, report)
		if field_type is not None:
			fields.append(FieldSpec(field, field_type))
	return fields

def define(name: str, cases, *, report: Optional[Report] = None) -> VariantSet:
	"""
	Define a closed variant set.

	`cases` maps each case name to its schema; a schema maps each field name to
	a field type. Field types may be FieldType objects (including records and
	other variant sets) or notation strings such as "string", "[string]" or
	"timestamp?". A sequence of (name, schema) pairs works anywhere a mapping does.
	"""
	report = report or Report()
	before = len(report.issues)
	if not _good_name(name): report.bad_name("variant set", name)
	if isinstance(cases, (Mapping, list, tuple)) and not cases: report.empty_variant_set(name)
	pairs = _pairs(str(name), cases, report)
	seen = Layer()
	built = []
	for case_name, schema in pairs:
		if not _good_name(case_name):
			report.bad_name("case", case_name)
			continue
		if case_name in _RESERVED_CASE_NAMES:
			report.reserved_case_name(name, case_name)
			continue
		try: seen.define(case_name, schema)
		except AlreadyExists:
			report.redefined("case", name, case_name)
			continue
		built.append(TypeCase(case_name, _build_fields(case_name, schema, report)))
	if len(report.issues) > before:
		raise BadDefinition(name, report.issues[before:])
	report.info("Defined variant set %s with cases %s" % (name, ", ".join(c.name for c in built)))
	return VariantSet(name, built)

def record(name: str, fields, *, report: Optional[Report] = None) -> RecordType:
	""" Define a record shape, for use as the type of a field. """
	report = report or Report()
	before = len(report.issues)
	if not _good_name(name): report.bad_name("record", name)
	built = _build_fields(str(name), fields, report)
	if len(report.issues) > before:
		raise BadDefinition(name, report.issues[before:])
	report.info("Defined record %s" % name)
	return RecordType(name, built)

def describe(shape) -> str:
	""" Render a variant set or record definition as text. """
	if isinstance(shape, VariantSet):
		lines = ["%s is case:" % shape.name]
		lines.extend("\t%s;" % case.signature() for case in shape)
		lines.append("esac.")
		return "\n".join(lines)
	if isinstance(shape, RecordType):
		return "%s is (%s)." % (shape.name, ", ".join(map(str, shape.fields)))
	raise TypeError(shape)
