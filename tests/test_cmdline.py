import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock
from ppaaee import cmdline

def _run(*argv, stdin=""):
	""" Run the command line; return (exit status, stdout, stderr). """
	args = cmdline.parser.parse_args(argv)
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out, \
			mock.patch("sys.stderr", new_callable=io.StringIO) as err, \
			mock.patch("sys.stdin", io.StringIO(stdin)):
		status = cmdline.run(args)
	return status, out.getvalue().replace(">>> ", ""), err.getvalue()

class ExpressionModeTests(unittest.TestCase):

	def test_prints_the_value(self):
		for text, expect in [("2 + 3 * 4", "14"), ("7 / 2", "3.5"), ("2 √ 9", "3"), ("INFINITY", "inf"), ("1 / 3", "0.33333334"), ("0.1", "0.1"), ("10 ^ 39", "inf")]:
			with self.subTest(text):
				self.assertEqual((None, expect+"\n", ""), _run(text))

	def test_failure_sets_status(self):
		status, out, err = _run("1 / 0")
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("RuntimeError: Division by zero error.", err)

	def test_statements_are_not_expressions(self):
		status, out, err = _run("let x = 1")
		self.assertEqual(1, status)
		self.assertIn("SyntaxError", err)

	def test_no_arguments_prints_the_docstring(self):
		with mock.patch("sys.argv", ["ppaaee"]), mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			cmdline.main()
		self.assertIn("usage: ppaaee", out.getvalue())
		self.assertIn("interactive session", out.getvalue())

	def test_main_exits_with_status(self):
		with mock.patch("sys.argv", ["ppaaee", "1 / 0"]), \
				mock.patch("sys.stdout", new_callable=io.StringIO), \
				mock.patch("sys.stderr", new_callable=io.StringIO):
			with self.assertRaises(SystemExit) as cm:
				cmdline.main()
		self.assertEqual(1, cm.exception.code)


class InteractiveModeTests(unittest.TestCase):

	def test_session_keeps_its_variables(self):
		status, out, err = _run("-i", stdin="let x = 4\nx ^= 2\n\nvars()\nquit()\nx\n")
		self.assertIsNone(status)
		self.assertIn("4\n16\nx = 16\n", out)
		self.assertEqual("", err)

	def test_errors_do_not_end_the_session(self):
		status, out, err = _run("-i", stdin="y\nlet y = 2\ny + 1\n")
		self.assertIn("Variable 'y' not found", err)
		self.assertEqual(1, err.count("RuntimeError"))
		self.assertIn("2\n3\n", out)

	def test_vars_marks_constants(self):
		status, out, err = _run("-i", stdin="const big = 100\nlet a = 1\nvars()\nexit()\n")
		self.assertIn("a   = 1\nbig = 100 (constant)\n", out)

	def test_vars_when_empty(self):
		status, out, err = _run("-i", stdin="vars()\n")
		self.assertIn("No variables defined.", out)


class FileModeTests(unittest.TestCase):

	def setUp(self):
		self._tmp = tempfile.TemporaryDirectory()
		self.folder = Path(self._tmp.name)

	def tearDown(self):
		self._tmp.cleanup()

	def write(self, name, text):
		path = self.folder / name
		path.write_text(text, encoding="utf-8")
		return str(path)

	def test_line_by_line(self):
		path = self.write("lines.pc", "// comment\n# also a comment\nlet a = 3\n\na / 0\na * 2\n")
		status, out, err = _run("-f", path)
		self.assertEqual(1, status)
		self.assertEqual("3\n6\n", out)
		self.assertIn("RuntimeError: Division by zero error.", err)

	def test_whole_script(self):
		path = self.write("script.pc", "fn fact(n) {\n  if n <= 1 { return 1 }\n  n * fact(n - 1)\n}\nfact(6)\n")
		self.assertEqual((None, "720\n", ""), _run("-s", path))

	def test_script_syntax_error_points_at_the_line(self):
		path = self.write("broken.pc", "let a = 1\nlet b = (a + 2\n")
		status, out, err = _run("-s", path)
		self.assertEqual(1, status)
		self.assertIn("SyntaxError: Unmatched parenthesis.", err)

	def test_script_with_end(self):
		path = self.write("early.pc", "let i = 0\nwhile 1 { i += 1; if i == 5 { end i } }\ni = 100\n")
		self.assertEqual((None, "5\n", ""), _run("-s", path))

	def test_iteration_cap(self):
		path = self.write("forever.pc", "let i = 0; while 1 { i += 1 }")
		status, out, err = _run("--max-iterations", "50", "-s", path)
		self.assertEqual(1, status)
		self.assertIn("ExecutionError: Maximum iterations exceeded (limit 50)", err)

	def test_runaway_recursion(self):
		path = self.write("deep.pc", "fn down(n) { down(n + 1) }\ndown(0)\n")
		status, out, err = _run("-s", path)
		self.assertEqual(1, status)
		self.assertIn("ExecutionError: Stack overflow", err)

	def test_wrong_extension(self):
		path = self.write("program.txt", "1")
		status, out, err = _run("-s", path)
		self.assertEqual(1, status)
		self.assertIn("must have .pc extension", err)

	def test_missing_file(self):
		status, out, err = _run("-f", str(self.folder / "absent.pc"))
		self.assertEqual(1, status)
		self.assertIn("Cannot read", err)

	def test_verbose_narrates(self):
		path = self.write("tiny.pc", "1 + 1\n")
		status, out, err = _run("-v", "-f", path)
		self.assertEqual("2\n", out)
		self.assertIn("Executing file:", err)

if __name__ == '__main__':
	unittest.main()
