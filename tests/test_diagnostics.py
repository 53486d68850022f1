import contextlib
import io
import unittest

from treelox.diagnostics import Report, Annotation, Pic, TooManyIssues
from treelox.tree_walker.types import LoxRuntimeError
from trees import Silence, nom, run, var, call, fun, expr_stmt

class AnnotationTests(unittest.TestCase):

	def test_plain_line_reference(self):
		self.assertEqual("[line 3] at 'x'", Annotation(nom("x", 3)).illustrate(None))
		self.assertEqual("[line 3] at 'x': look here", Annotation(nom("x", 3), "look here").illustrate(None))

	def test_with_source_text(self):
		text = "var a = 1;\nprint oops;\n"
		report = Report()
		report.set_source(text, "demo.lox")
		oops = nom("oops", 2, text.index("oops"))
		out = Annotation(oops, "right here").illustrate(report._source)
		self.assertIn("print oops;", out)
		self.assertIn("right here", out)

	def test_a_token_without_a_spot_falls_back(self):
		report = Report()
		report.set_source("print oops;")
		self.assertEqual("[line 1] at 'oops'", Annotation(nom("oops")).illustrate(report._source))

	def test_pic(self):
		pic = Pic("Something broke.", [Annotation(nom("a", 1))], ["Try harder."])
		pic.also(nom("b", 2), "and here")
		self.assertEqual(
			"Something broke.\n\n[line 1] at 'a'\n[line 2] at 'b': and here\nTry harder.",
			pic.as_text(),
		)

class ReportTests(unittest.TestCase):

	def test_issues_and_mishaps_are_kept_apart(self):
		report = Report()
		report.return_from_top_level(nom("return"))
		report.runtime_error(LoxRuntimeError(nom("x"), "Undefined variable 'x'."))
		assert report.sick()
		assert report.had_runtime_error()
		self.assertEqual(1, len(report.issues))
		self.assertEqual(1, len(report.mishaps))
		report.reset()
		assert report.ok()
		assert not report.had_runtime_error()

	def test_max_issues(self):
		report = Report(max_issues=1)
		with self.assertRaises(TooManyIssues):
			report.this_outside_class(nom("this"))

	def test_redefinition_points_at_both(self):
		report = Report()
		first, second = nom("a", 1), nom("a", 2)
		report.redefined(first, second)
		anns = report.issues[0].annotations
		self.assertEqual([second, first], [a.nom for a in anns])

	def test_runtime_trace(self):
		status, lines, report = run(
			fun("f", [], expr_stmt(var("nope", line=2))),
			expr_stmt(call("f", line=5)),
		)
		text = report.mishaps[0].as_text()
		self.assertIn("[line 2] at 'nope'", text)
		self.assertIn("[line 5] at ')': called from here", text)

	def test_complaining(self):
		report = Report()
		report.return_from_top_level(nom("return", 4))
		stderr = io.StringIO()
		with contextlib.redirect_stderr(stderr):
			report.complain_to_console()
		text = stderr.getvalue()
		self.assertIn("Can't return from top-level code.", text)
		self.assertIn("[line 4] at 'return'", text)

	def test_verbosity(self):
		stderr = io.StringIO()
		with contextlib.redirect_stderr(stderr):
			Report().info("hush")
			Report(verbose=1).info("chatty")
		self.assertEqual("chatty\n", stderr.getvalue())

	def test_assert_no_issues(self):
		report = Silence()
		report.assert_no_issues("fine")
		report.this_outside_class(nom("this"))
		with self.assertRaises(AssertionError):
			report.assert_no_issues("not fine")
		self.assertEqual(1, report.complain_to_console.call_count)


if __name__ == '__main__':
	unittest.main()
