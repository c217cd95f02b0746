import sys, random
from pathlib import Path
from traceback import TracebackException
from typing import Any

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crikey', 'Curses',
		'Drat', 'Fiddlesticks', 'Good Grief', 'Great Scott',
		'Heavens', 'Jeepers', 'Nuts', 'Rats', 'Snap',
	]

	resignations = [
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'Somebody should look at this.',
		'This will not do.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects the problems with a definition so they can be told all at once,
	rather than one per attempt. Also the place where verbose chatter goes.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=30):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return list(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the definition checks call:

	def empty_variant_set(self, name:str):
		intro = "The variant set <%s> has no cases at all, so nothing could ever be one." % name
		self.issue(Pic(intro))

	def bad_name(self, kind:str, text:Any):
		intro = "This %s name needs to be an identifier that does not start with an underscore:" % kind
		self.issue(Pic(intro, [repr(text)]))

	def redefined(self, kind:str, owner:str, text:str):
		intro = "This %s is defined more than once in <%s>." % (kind, owner)
		self.issue(Pic(intro, [text]))

	def reserved_case_name(self, owner:str, text:str):
		intro = "<%s> cannot have a case called '%s'; the variant set itself has an attribute by that name." % (owner, text)
		self.issue(Pic(intro))

	def unknown_field_type(self, owner:str, field:str, spelled:Any):
		intro = "I don't see what type field '%s' of <%s> refers to." % (field, owner)
		footer = ["Built-in types are: " + ", ".join(_known_atoms())]
		self.issue(Pic(intro, [repr(spelled)], footer))

	def not_a_schema(self, owner:str, what:Any):
		intro = "<%s> needs a mapping from name to definition, or a sequence of (name, definition) pairs." % owner
		self.issue(Pic(intro, [repr(what)]))

	# Methods the command line calls:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path)))

	def broken_module(self, path:Path, tbx:TracebackException):
		intro = "Loading %s threw an exception." % path
		self.issue(Pic(intro, [], [''.join(tbx.format()).rstrip()]))

def _known_atoms():
	from .primitive import built_in_type_names
	return built_in_type_names

class Pic:
	def __init__(self, intro:str, details=(), footer=()):
		self._intro, self._details, self._footer = intro, list(details), list(footer)
	def __repr__(self): return "<Pic %r>" % self._intro
	def as_text(self):
		lines = [self._intro]
		lines.extend("    "+d for d in self._details)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
