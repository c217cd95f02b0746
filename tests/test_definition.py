import unittest
from unittest import mock

from tagged.definition import define, record, describe, VariantSet, TypeCase, RecordType
from tagged.diagnostics import Report, TooManyIssues
from tagged.errors import BadDefinition, UnknownVariant
from tagged import calculus, primitive

SESSION_CASES = {
	"KeyNote": {"title": "string", "speaker": "string", "date": "timestamp", "recorded": "flag"},
	"Workshop": {"title": "string", "speaker": "string", "date": "timestamp", "recorded": "flag"},
	"JointSession": {
		"title": "string", "speaker": "string", "date": "timestamp", "recorded": "flag",
		"co_speakers": "[string]",
	},
}

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()

class DefineTests(unittest.TestCase):

	def test_cases_keep_declaration_order(self):
		session = define("Session", SESSION_CASES)
		self.assertIsInstance(session, VariantSet)
		self.assertEqual(["KeyNote", "Workshop", "JointSession"], session.tags())
		self.assertEqual(3, len(session))
		for case in session:
			self.assertIsInstance(case, TypeCase)
			self.assertIs(session, case.variant_set)

	def test_schemas_are_independent(self):
		session = define("Session", SESSION_CASES)
		self.assertEqual(["title", "speaker", "date", "recorded"], session["KeyNote"].field_names())
		self.assertEqual(
			["title", "speaker", "date", "recorded", "co_speakers"],
			session["JointSession"].field_names(),
		)
		self.assertIsNot(session["KeyNote"].payload_class, session["Workshop"].payload_class)

	def test_notation_resolves(self):
		it = define("It", {"Thing": {"a": "string", "b": "[number]", "c": "date?", "d": "[string]?"}})
		a, b, c, d = (f.field_type for f in it["Thing"].fields)
		self.assertIs(primitive.literal_string, a)
		self.assertEqual(calculus.SequenceType(primitive.literal_number), b)
		self.assertEqual(calculus.OptionalType(primitive.literal_date), c)
		self.assertEqual("[string]?", calculus.render(d))

	def test_lookup_by_name_attribute_and_case(self):
		session = define("Session", SESSION_CASES)
		key_note = session["KeyNote"]
		self.assertIs(key_note, session.KeyNote)
		self.assertIs(key_note, session.lookup(key_note))
		self.assertIn("Workshop", session)
		self.assertNotIn("Lunch", session)
		self.assertIsNone(session.lookup(42))
		with self.assertRaises(UnknownVariant):
			session["Lunch"]
		with self.assertRaises(AttributeError):
			session.Lunch

	def test_case_from_another_set_is_not_ours(self):
		one = define("One", {"A": {}})
		two = define("Two", {"A": {}})
		self.assertNotIn(one.A, two)
		self.assertIsNone(two.lookup(one.A))

	def test_variant_set_is_closed(self):
		session = define("Session", SESSION_CASES)
		with self.assertRaises(AttributeError):
			session.Lunch = session.KeyNote
		with self.assertRaises(AttributeError):
			session.cases = ()

	def test_pairs_work_like_mappings(self):
		ticket = define("Ticket", [
			("Economy", [("departure", "string"), ("arrival", "string")]),
		])
		self.assertEqual(["departure", "arrival"], ticket.Economy.field_names())

	def test_records_and_variant_sets_as_field_types(self):
		teacher = record("Teacher", {"name": "string", "courses": "[string]"})
		self.assertIsInstance(teacher, RecordType)
		session = define("Session", SESSION_CASES)
		it = define("Schedule", {"Slot": {"who": teacher, "what": session}})
		self.assertEqual("Slot(who:Teacher, what:Session)", it.Slot.signature())

	def test_verbose_report_says_so(self):
		report = Report(verbose=1)
		with mock.patch("sys.stderr") as stderr:
			define("Session", SESSION_CASES, report=report)
		self.assertTrue(stderr.write.called)
		self.assertTrue(report.ok())

class BadDefinitionTests(unittest.TestCase):
	""" Everything wrong with a definition gets reported at once. """

	def expect_issues(self, count, name, cases):
		report = Silence()
		with self.assertRaises(BadDefinition) as cm:
			define(name, cases, report=report)
		self.assertEqual(count, len(cm.exception.issues))
		self.assertEqual(count, len(report.issues))
		return cm.exception

	def test_each_kind_of_problem(self):
		for label, count, name, cases in [
			("empty", 1, "Nothing", {}),
			("duplicate case", 1, "Twice", [("A", {}), ("A", {})]),
			("duplicate field", 1, "Field", [("A", [("x", "string"), ("x", "flag")])]),
			("bad set name", 1, "not a name", {"A": {}}),
			("bad case name", 1, "Bad", {"_A": {}}),
			("keyword field", 1, "Bad", {"A": {"class": "string"}}),
			("unknown type", 1, "Bad", {"A": {"x": "strang"}}),
			("not a type at all", 1, "Bad", {"A": {"x": 17}}),
			("optional of optional", 1, "Bad", {"A": {"x": "string??"}}),
			("schema not a mapping", 1, "Bad", {"A": "string"}),
			("cases not a collection", 1, "Bad", 5),
			("case entry not a pair", 1, "Bad", [("A", {}), "B"]),
			("field entry not a pair", 1, "Bad", {"A": [("x", "string", "extra")]}),
			("case named like a method", 1, "Bad", {"lookup": {}, "A": {}}),
			("case called name", 1, "Bad", {"name": {}}),
			("several at once", 3, "Bad", {"A": {"x": "strang"}, "_B": {}, "C": {"y": "nope"}}),
		]:
			with self.subTest(label):
				self.expect_issues(count, name, cases)

	def test_reserved_names_leave_attribute_access_honest(self):
		for case_name in ["name", "cases", "tags", "lookup", "accepts"]:
			with self.subTest(case_name):
				ex = self.expect_issues(1, "Bad", {case_name: {}})
				self.assertIn(case_name, str(ex))

	def test_message_names_the_problem(self):
		ex = self.expect_issues(1, "Bad", {"A": {"x": "strang"}})
		self.assertIn("Bad", str(ex))
		self.assertIn("strang", str(ex))

	def test_record_problems(self):
		with self.assertRaises(BadDefinition):
			record("Teacher", {"name": "sting"})
		with self.assertRaises(BadDefinition):
			record("_Teacher", {"name": "string"})

	def test_too_many_issues(self):
		report = Report(max_issues=2)
		with self.assertRaises(TooManyIssues):
			define("Bad", {"A": {"x": "nope", "y": "nope", "z": "nope"}}, report=report)

	def test_prior_issues_are_not_blamed(self):
		report = Silence()
		with self.assertRaises(BadDefinition):
			define("Bad", {}, report=report)
		session = define("Session", SESSION_CASES, report=report)
		self.assertEqual(3, len(session))

class DescribeTests(unittest.TestCase):
	def test_describe_variant_set(self):
		ticket = define("Ticket", {
			"Business": {"departure": "string", "arrival": "string", "meal": "string", "drinks": "string"},
			"Economy": {"departure": "string", "arrival": "string"},
			"Standby": {},
		})
		self.assertEqual(
			"Ticket is case:\n"
			"\tBusiness(departure:string, arrival:string, meal:string, drinks:string);\n"
			"\tEconomy(departure:string, arrival:string);\n"
			"\tStandby;\n"
			"esac.",
			describe(ticket),
		)

	def test_describe_record(self):
		student = record("Student", {"name": "string", "courses": "[string]", "grade": "string?"})
		self.assertEqual("Student is (name:string, courses:[string], grade:string?).", describe(student))

	def test_describe_nonsense(self):
		with self.assertRaises(TypeError):
			describe("Ticket")

if __name__ == '__main__':
	unittest.main()
