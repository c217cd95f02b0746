"""
Instances: one tag, plus that case's payload. Immutable value data.

An instance checks its payload against its own case when it is made, however
it is made. So a payload can never travel under some other case's tag.
"""
from typing import Any, Mapping
from .definition import TypeCase, VariantSet, _tag_text
from .errors import SchemaMismatch, UnknownVariant

class Instance:
	__slots__ = ("case", "payload")
	case: TypeCase
	payload: tuple  # Always an instance of case.payload_class

	def __init__(self, case: TypeCase, payload):
		"""
		`payload` is a mapping of field values, or a payload made for this very case.
		Either way, it is checked against the case's schema.
		"""
		if not isinstance(case, TypeCase):
			raise TypeError("An instance needs a case of some variant set; got %r" % (case,))
		if isinstance(payload, tuple):
			if type(payload) is not case.payload_class:
				raise SchemaMismatch(case.name, mistyped=[("payload", "payload of " + case.name)])
			payload = payload._asdict()
		object.__setattr__(self, "case", case)
		object.__setattr__(self, "payload", case.check(payload))

	def __setattr__(self, key, value):
		raise AttributeError("Instances are immutable.")

	def __delattr__(self, key):
		raise AttributeError("Instances are immutable.")

	def __eq__(self, other):
		if not isinstance(other, Instance): return NotImplemented
		return self.case is other.case and self.payload == other.payload

	def __hash__(self): return hash((self.case, self.payload))

	def __repr__(self):
		return "%s.%r" % (self.case.variant_set.name, self.payload)

	@property
	def tag(self) -> str: return self.case.name

	@property
	def variant_set(self) -> VariantSet: return self.case.variant_set

	def is_a(self, tag) -> bool:
		""" Does this instance carry the given tag? Unknown tags are an error, not a "no". """
		return self.variant_set[tag] is self.case

	def as_dict(self) -> dict[str, Any]:
		return self.payload._asdict()

	def replace(self, **changes) -> "Instance":
		""" A new instance of the same case, with some fields changed and checked again. """
		fields = self.as_dict()
		fields.update(changes)
		return Instance(self.case, fields)

def construct(variant_set: VariantSet, tag, payload: Mapping[str, Any]) -> Instance:
	"""
	Build an instance of the case of `variant_set` named by `tag`.
	The payload must supply exactly the declared fields, each of the declared type.
	"""
	case = variant_set.lookup(tag)
	if case is None:
		raise UnknownVariant(variant_set.name, [_tag_text(tag)])
	if not isinstance(payload, Mapping):
		raise SchemaMismatch(case.name, mistyped=[("payload", "mapping from field name to value")])
	return Instance(case, payload)
