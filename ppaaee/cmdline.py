"""
This is a calculator and small scripting language.

{0}

For example:

    ppaaee "2 + 3 * 4"

will print 14, while

    ppaaee -i

starts an interactive session, and

    ppaaee -s program.pc

runs a whole program file.

    ppaaee -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

EXTENSION = ".pc"

parser = argparse.ArgumentParser(
	prog="ppaaee",
	description="Calculator and scripting language interpreter.",
)
parser.add_argument("expression", nargs="?", help="evaluate one expression and print the result.")
parser.add_argument('-i', "--interactive", action="store_true", help="Start an interactive session.")
parser.add_argument('-f', "--file", metavar="PATH", help="Run a %s file one line at a time, carrying on past errors."%EXTENSION)
parser.add_argument('-s', "--script", metavar="PATH", help="Run a %s file as a single program."%EXTENSION)
parser.add_argument('-v', "--verbose", action="count", help="Narrate progress on stderr.")
parser.add_argument("--max-iterations", type=int, metavar="N", help="Give up on any run that performs more than N loop iterations.")

def format_number(value:float) -> str:
	""" The shortest text that reads back as the same single-precision value. """
	from .primitive import f32
	if value.is_integer() and abs(value) < 1e16: return str(int(value))
	for digits in range(1, 10):
		text = "%.*g" % (digits, value)
		if f32(float(text)) == value: return text
	return repr(value)

def list_variables(table):
	names = table.items()
	if not names:
		print("No variables defined.")
		return
	width = max(len(name) for name, _ in names)
	for name, value in names:
		marker = " (constant)" if table.is_constant(name) else ""
		print("%-*s = %s%s" % (width, name, format_number(value), marker))

class Session:
	""" One symbol table, fed one chunk of text at a time. """
	def __init__(self, report, max_iterations=None):
		from .space import SymbolTable
		self.report = report
		self.table = SymbolTable()
		self.max_iterations = max_iterations

	def run(self, text:str, path=None, whole_program=True) -> bool:
		""" Print the result, or else complain. Says whether all went well. """
		from .errors import InterpreterError
		from .executive import evaluate, execute
		try:
			if whole_program: result = execute(text, self.table, self.max_iterations)
			else: result = evaluate(text, self.table, self.max_iterations)
		except InterpreterError as ex:
			self.report.failed(ex, text, path)
		except RecursionError:
			self.report.recursion_limit()
		else:
			if result is not None: print(format_number(result))
			return True
		self.report.complain_to_console()
		self.report.reset()
		return False

def read_program(path:str, report):
	if not path.endswith(EXTENSION):
		print("File must have %s extension: %s" % (EXTENSION, path), file=sys.stderr)
		return None
	report.info("Executing file:", path)
	try:
		with open(Path.cwd() / path, "r", encoding="utf-8") as fh:
			return fh.read()
	except OSError as ex:
		print("Cannot read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return None

def interact(session:"Session"):
	print("Interactive calculator mode")
	print('Type "exit()" or "quit()" to exit')
	print('Type "vars()" to list all defined variables')
	while True:
		try: line = input(">>> ").strip()
		except EOFError: break
		if line in ("exit()", "quit()"): break
		if line == "vars()": list_variables(session.table)
		elif line: session.run(line)

def run(args):
	from .diagnostics import Report
	report = Report(verbose=args.verbose)
	sick = False
	session = Session(report, args.max_iterations)
	if args.interactive:
		interact(session)
		return
	if args.script:
		text = read_program(args.script, report)
		if text is None: return 1
		sick = not session.run(text, args.script)
	elif args.file:
		text = read_program(args.file, report)
		if text is None: return 1
		for line in text.splitlines():
			line = line.strip()
			if not line or line.startswith("//") or line.startswith("#"): continue
			report.info("-", line)
			if not session.run(line): sick = True
	elif args.expression is not None:
		sick = not session.run(args.expression, whole_program=False)
	else:
		parser.print_usage()
	if sick: return 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
