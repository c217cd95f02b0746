"""
Everything that can go wrong is a programmer-visible contract violation.
Nothing here is transient, so nothing here is worth retrying.
"""
from typing import Sequence

class VariantError(Exception):
	""" Base class for all the ways to misuse a variant set. """

class BadDefinition(VariantError):
	"""
	A variant set or record could not be defined. The first argument is the
	name of the would-be definition; `issues` holds what the Report collected.
	"""
	def __init__(self, name: str, issues: Sequence):
		self.name = name
		self.issues = list(issues)
		super().__init__(name, self.issues)
	def __str__(self):
		return "Cannot define %s:\n%s" % (self.name, "\n".join(i.as_text() for i in self.issues))

class UnknownVariant(VariantError, LookupError):
	""" One or more tags are not cases of the variant set at hand. """
	def __init__(self, variant_set_name: str, tags: Sequence[str]):
		self.variant_set_name = variant_set_name
		self.tags = tuple(tags)
		super().__init__(variant_set_name, self.tags)
	def __str__(self):
		return "Not a case of %s: %s" % (self.variant_set_name, ", ".join(map(str, self.tags)))

class SchemaMismatch(VariantError, TypeError):
	""" A payload disagrees with the declared schema of its variant. """
	def __init__(self, shape_name: str, missing=(), extra=(), mistyped=()):
		self.shape_name = shape_name
		self.missing = tuple(missing)
		self.extra = tuple(extra)
		self.mistyped = tuple(mistyped)  # Pairs of (field name, expected type as text)
		super().__init__(shape_name, self.missing, self.extra, self.mistyped)
	def __str__(self):
		parts = []
		if self.missing: parts.append("missing " + ", ".join(map(str, self.missing)))
		if self.extra: parts.append("unexpected " + ", ".join(map(repr, self.extra)))
		for field, expected in self.mistyped:
			parts.append("%s needs to be a(n) %s" % (field, expected))
		return "Payload does not fit %s: %s" % (self.shape_name, "; ".join(parts))

class NonExhaustiveMatch(VariantError):
	""" A set of handlers leaves out some cases and did not opt into partial matching. """
	def __init__(self, variant_set_name: str, missing: Sequence[str]):
		self.variant_set_name = variant_set_name
		self.missing = tuple(missing)
		super().__init__(variant_set_name, self.missing)
	def __str__(self):
		return "These handlers do not cover all the cases of %s. Missing: %s" % (
			self.variant_set_name, ", ".join(self.missing)
		)

class BadHandlers(VariantError, TypeError):
	""" The same case handled twice, or a handler that cannot be called. """

class RedundantOtherwise(VariantError):
	""" A partial match covers every case, so its fallback cannot happen. """
	def __init__(self, variant_set_name: str):
		self.variant_set_name = variant_set_name
		super().__init__(variant_set_name)
	def __str__(self):
		return "These handlers cover every case of %s; the otherwise-clause cannot run." % self.variant_set_name
