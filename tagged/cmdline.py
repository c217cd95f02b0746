"""
This inspects the closed variant sets defined in a Python file.

{0}

For example:

    tagged models.py

will load models.py, then describe every variant set and case analysis
it defines at module level, or else try to explain why not.

    tagged -c models.py

just checks: Defining a variant set badly, or leaving a case out of a
case analysis, is an error at the moment the file is loaded.

    tagged -h

will explain all the arguments.
"""
import sys, argparse
from importlib.util import spec_from_file_location, module_from_spec
from pathlib import Path
from traceback import TracebackException

parser = argparse.ArgumentParser(
	prog="tagged",
	description="Describe and check the variant sets in a Python file.",
)
parser.add_argument("program", help="a Python file that defines some variant sets.")
parser.add_argument('-c', "--check", action="store_true", help="Check the file but do not print the descriptions.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on.")
parser.add_argument("--max-issues", type=int, default=3, help="Give up after this many issues.")

def load_module(path:Path, report):
	""" Run the file as a module. Returns None if that goes wrong, having told the report why. """
	if not path.is_file():
		report.no_such_file(path)
		return
	spec = spec_from_file_location(path.stem, path)
	module = module_from_spec(spec)
	report.info("Loading", path)
	try: spec.loader.exec_module(module)
	except Exception as ex:
		report.broken_module(path, TracebackException.from_exception(ex))
		return
	return module

def survey(module):
	""" Find the module-level variant sets and case analyses, in definition order. """
	from .definition import VariantSet
	from .dispatch import CaseAnalysis, PartialCaseAnalysis
	variant_sets, analyses = [], []
	for value in vars(module).values():
		if isinstance(value, VariantSet) and value not in variant_sets:
			variant_sets.append(value)
		elif (
			isinstance(value, type) and issubclass(value, CaseAnalysis)
			and value.variant_set is not None and value.__module__ == module.__name__
		):
			kind = "a partial" if issubclass(value, PartialCaseAnalysis) else "an exhaustive"
			analyses.append((value, kind))
	return variant_sets, analyses

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .definition import describe
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	try:
		module = load_module(Path.cwd() / args.program, report)
	except TooManyIssues:
		module = None
	if module is None:
		report.complain_to_console()
		return 1
	variant_sets, analyses = survey(module)
	report.info("Found %d variant set(s) and %d case analysis class(es)." % (len(variant_sets), len(analyses)))
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	for vs in variant_sets:
		print(describe(vs))
		print()
	for cls, kind in analyses:
		print("%s is %s analysis of %s." % (cls.__name__, kind, cls.variant_set.name))
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
