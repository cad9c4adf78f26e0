import sys
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration
from .errors import InterpreterError, ParseError, StackOverflow

class TooManyIssues(Exception):
	pass

def describe(error:InterpreterError) -> str:
	""" The one-line form front-ends show: tag, colon, message. """
	return "%s: %s" % (error.tag, error.message())

class Annotation:
	""" Points at a stretch of some source text, with an optional caption. """
	def __init__(self, source:SourceText, start:int, stop:int, caption:str=""):
		self.source = source
		self.slice = slice(start, max(stop, start+1))
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self._intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" Collects whatever went wrong, for later complaint. """
	_issues : list[Pic]

	def __init__(self, *, verbose:int, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def failed(self, error:InterpreterError, text:str="", path=None):
		"""
		Record an interpreter error. A syntax error that knows its token
		also gets a picture of where in the text things went wrong.
		"""
		problem = []
		if isinstance(error, ParseError) and error.token is not None and text.strip():
			source = SourceText(text, filename=None if path is None else str(path))
			problem.append(Annotation(source, error.token.start, error.token.stop, "here"))
		self.issue(Pic(describe(error), problem))

	def recursion_limit(self):
		self.issue(Pic(describe(StackOverflow()), []))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self._issues:
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()
