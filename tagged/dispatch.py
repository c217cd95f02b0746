"""
Exhaustive dispatch over the cases of a variant set.

The whole point is that a missing case is an error when the handlers are
assembled, not some day later when an unlucky instance turns up. So:

	Matcher            checks a mapping of handlers as soon as it is built.
	CaseAnalysis       checks its visit_<Case> methods when the class statement runs.

Partial matching, with an otherwise-clause, is available but separately named
(PartialMatcher, PartialCaseAnalysis, match_partial) so that ordinary exhaustive
matching is never silently weakened. A partial match that turns out to cover
every case is also an error, because its otherwise-clause could never run.
"""
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional
from boozetools.support.foundation import Visitor
from .definition import TypeCase, VariantSet, _tag_text
from .values import Instance
from .errors import UnknownVariant, NonExhaustiveMatch, BadHandlers, RedundantOtherwise

HANDLER = Callable[[tuple], Any]

def _check_instance(variant_set: VariantSet, instance):
	if not isinstance(instance, Instance):
		raise TypeError("Expected an instance of %s; got %r" % (variant_set.name, instance))
	if instance.variant_set is not variant_set:
		raise UnknownVariant(variant_set.name, [repr(instance.case)])

def _build_dispatch(variant_set: VariantSet, handlers: Mapping) -> dict[TypeCase, HANDLER]:
	if not isinstance(handlers, Mapping):
		raise BadHandlers("Handlers for %s need to be a mapping from tag to callable." % variant_set.name)
	unknown = [_tag_text(tag) for tag in handlers if variant_set.lookup(tag) is None]
	if unknown:
		raise UnknownVariant(variant_set.name, unknown)
	dispatch = {}
	for tag, handler in handlers.items():
		case = variant_set.lookup(tag)
		if case in dispatch:
			raise BadHandlers("Case %s of %s is handled more than once." % (case.name, variant_set.name))
		if not callable(handler):
			raise BadHandlers("The handler for %s of %s is not callable: %r" % (case.name, variant_set.name, handler))
		dispatch[case] = handler
	return dispatch

def _missing(variant_set: VariantSet, handled) -> list[str]:
	return [case.name for case in variant_set if case not in handled]

class Matcher:
	"""
	One handler for every case of a variant set. Each handler takes the payload
	of its case. Calling the matcher on an instance calls exactly one handler.
	"""
	variant_set: VariantSet
	dispatch: dict[TypeCase, HANDLER]

	def __init__(self, variant_set: VariantSet, handlers: Mapping):
		assert isinstance(variant_set, VariantSet), variant_set
		self.variant_set = variant_set
		self.dispatch = _build_dispatch(variant_set, handlers)
		missing = _missing(variant_set, self.dispatch)
		if missing:
			raise NonExhaustiveMatch(variant_set.name, missing)

	def __repr__(self): return "<Matcher over %s>" % self.variant_set.name

	def __call__(self, instance: Instance):
		_check_instance(self.variant_set, instance)
		return self.dispatch[instance.case](instance.payload)

	def map(self, instances: Iterable[Instance]) -> list:
		return [self(i) for i in instances]

class PartialMatcher:
	"""
	Handlers for some of the cases, and an otherwise-clause for the rest.
	The otherwise-clause receives the whole instance, since its shape is unknown.
	"""
	variant_set: VariantSet
	dispatch: dict[TypeCase, HANDLER]
	otherwise: Callable[[Instance], Any]

	def __init__(self, variant_set: VariantSet, handlers: Mapping, otherwise: Callable[[Instance], Any]):
		assert isinstance(variant_set, VariantSet), variant_set
		self.variant_set = variant_set
		self.dispatch = _build_dispatch(variant_set, handlers)
		if not callable(otherwise):
			raise BadHandlers("The otherwise-clause for %s is not callable: %r" % (variant_set.name, otherwise))
		if not _missing(variant_set, self.dispatch):
			raise RedundantOtherwise(variant_set.name)
		self.otherwise = otherwise

	def __repr__(self): return "<PartialMatcher over %s>" % self.variant_set.name

	def __call__(self, instance: Instance):
		_check_instance(self.variant_set, instance)
		try: handler = self.dispatch[instance.case]
		except KeyError: return self.otherwise(instance)
		else: return handler(instance.payload)

	def map(self, instances: Iterable[Instance]) -> list:
		return [self(i) for i in instances]

def match(instance: Instance, handlers):
	"""
	Exhaustive match. `handlers` is a Matcher, or a mapping from tag to handler,
	which is checked for exhaustiveness before anything gets dispatched.
	"""
	if isinstance(handlers, PartialMatcher):
		raise BadHandlers("A partial matcher goes with match_partial, not match.")
	if not isinstance(handlers, Matcher):
		if not isinstance(instance, Instance):
			raise TypeError("Expected an instance of a variant set; got %r" % (instance,))
		handlers = Matcher(instance.variant_set, handlers)
	return handlers(instance)

def match_partial(instance: Instance, handlers, otherwise: Optional[Callable[[Instance], Any]] = None):
	""" Explicitly partial match: cases without a handler go to `otherwise`. """
	if isinstance(handlers, PartialMatcher):
		if otherwise is not None:
			raise BadHandlers("This partial matcher already has an otherwise-clause.")
	else:
		if not isinstance(instance, Instance):
			raise TypeError("Expected an instance of a variant set; got %r" % (instance,))
		if isinstance(handlers, Matcher):
			handlers = handlers.dispatch
		handlers = PartialMatcher(instance.variant_set, handlers, otherwise)
	return handlers(instance)

#########################

class CaseAnalysis(Visitor):
	"""
	Dispatch by method: subclass with `variants=SomeSet` and write one
	`visit_<Case>(self, payload, ...)` method per case. Leaving one out
	fails right there at the class statement. Call an analysis object on
	an instance, with any extra arguments you like passed along.
	"""
	variant_set: Optional[VariantSet] = None
	_handled: frozenset = frozenset()

	def __init_subclass__(cls, variants: Optional[VariantSet] = None, **kwargs):
		super().__init_subclass__(**kwargs)
		if variants is None:
			return
		if not isinstance(variants, VariantSet):
			raise TypeError("variants= needs a variant set; got %r" % (variants,))
		names = [name[len("visit_"):] for name in dir(cls) if name.startswith("visit_")]
		unknown = [n for n in names if n not in variants]
		if unknown:
			raise UnknownVariant(variants.name, unknown)
		not_callable = [n for n in names if not callable(getattr(cls, "visit_"+n))]
		if not_callable:
			raise BadHandlers("These visit-methods of %s are not callable: %s" % (cls.__name__, ", ".join(not_callable)))
		cls.variant_set = variants
		cls._handled = frozenset(variants[n] for n in names)
		cls._check_coverage(_missing(variants, cls._handled))

	@classmethod
	def _check_coverage(cls, missing: list[str]):
		if missing:
			raise NonExhaustiveMatch(cls.variant_set.name, missing)
		if callable(getattr(cls, "otherwise", None)):
			raise RedundantOtherwise(cls.variant_set.name)

	def __call__(self, instance: Instance, *args, **kwargs):
		if self.variant_set is None:
			raise TypeError("%s was not given variants= so it cannot analyze anything." % type(self).__name__)
		_check_instance(self.variant_set, instance)
		return self.visit(instance.payload, *args, **kwargs)

	def map(self, instances: Iterable[Instance], *args, **kwargs) -> list:
		return [self(i, *args, **kwargs) for i in instances]

class PartialCaseAnalysis(CaseAnalysis):
	"""
	Opt-in partial analysis. Cases without a visit-method go to
	`otherwise(self, instance, ...)`, which subclasses must define.
	"""
	@classmethod
	def _check_coverage(cls, missing: list[str]):
		if not missing:
			raise RedundantOtherwise(cls.variant_set.name)
		if cls.otherwise is PartialCaseAnalysis.otherwise:
			raise BadHandlers("%s is partial, so it needs an otherwise method." % cls.__name__)

	def otherwise(self, instance: Instance, *args, **kwargs):
		raise NotImplementedError(type(self))

	def __call__(self, instance: Instance, *args, **kwargs):
		if self.variant_set is None:
			raise TypeError("%s was not given variants= so it cannot analyze anything." % type(self).__name__)
		_check_instance(self.variant_set, instance)
		if instance.case in self._handled:
			return self.visit(instance.payload, *args, **kwargs)
		return self.otherwise(instance, *args, **kwargs)
