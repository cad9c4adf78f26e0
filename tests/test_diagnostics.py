import io
import unittest
from unittest import mock
from ppaaee import errors
from ppaaee.diagnostics import Report, TooManyIssues, describe
from ppaaee.executive import evaluate, execute
from ppaaee.space import SymbolTable

def _failure(fn, text):
	try: fn(text, SymbolTable())
	except errors.InterpreterError as ex: return ex
	raise AssertionError("%r did not fail" % text)

class DescribeTests(unittest.TestCase):

	def test_tags(self):
		cases = {
			"1 +": "SyntaxError: ",
			"1 / 0": "RuntimeError: Division by zero error.",
			"nope": "RuntimeError: Variable 'nope' not found.",
		}
		for text, prefix in cases.items():
			with self.subTest(text):
				self.assertTrue(describe(_failure(evaluate, text)).startswith(prefix))
		self.assertEqual("ExecutionError: Maximum iterations exceeded (limit 3)", describe(errors.MaxIterationsExceeded(3)))

	def test_messages_name_the_culprit(self):
		cases = {
			"x = 1": "Undeclared variable: 'x'",
			"PI = 1": "Cannot modify constant: 'PI'",
			"fn f(a) { a }; f()": "Callable 'f' called with wrong number of arguments. Expected 1, got 0.",
			"0x": "Invalid number format: 0x",
			"let 5": "Expected an identifier, but found number '5'.",
			"(1": "Unmatched parenthesis.",
			"": "Empty input.",
		}
		for text, fragment in cases.items():
			with self.subTest(text):
				self.assertIn(fragment, str(_failure(execute, text)))

	def test_families(self):
		self.assertIsInstance(_failure(execute, "1 % 0"), errors.MathError)
		self.assertIsInstance(_failure(execute, "zz"), errors.SymbolError)
		self.assertIsInstance(_failure(execute, "break"), errors.ControlFlowError)
		self.assertIsInstance(_failure(execute, "break"), errors.EvalError)


class ReportTests(unittest.TestCase):

	def test_info_only_when_verbose(self):
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			Report(verbose=0).info("quiet")
			Report(verbose=1).info("loud")
		self.assertEqual("loud\n", err.getvalue())

	def test_issue_cap(self):
		report = Report(verbose=0, max_issues=2)
		report.failed(errors.DivisionByZero())
		with self.assertRaises(TooManyIssues):
			report.failed(errors.ModuloByZero())

	def test_no_cap_by_default(self):
		report = Report(verbose=0)
		for _ in range(10): report.failed(errors.DivisionByZero())
		self.assertTrue(report.sick())
		report.reset()
		self.assertTrue(report.ok())

	def test_syntax_errors_get_a_picture(self):
		text = "let a = 1\nlet b = a + * 2"
		report = Report(verbose=0)
		report.failed(_failure(execute, text), text)
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			report.complain_to_console()
		output = err.getvalue()
		self.assertTrue(output.startswith("SyntaxError: Unexpected token: operator '*'"))
		self.assertIn("let b = a + * 2", output)
		self.assertIn("^", output)

	def test_runtime_errors_are_one_line(self):
		report = Report(verbose=0)
		report.failed(_failure(execute, "1 / 0"), "1 / 0")
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			report.complain_to_console()
		self.assertEqual(1, len(err.getvalue().splitlines()))

	def test_recursion_limit(self):
		report = Report(verbose=0)
		report.recursion_limit()
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			report.complain_to_console()
		self.assertIn("ExecutionError: Stack overflow", err.getvalue())

if __name__ == '__main__':
	unittest.main()
