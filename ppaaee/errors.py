"""
The whole family of things that can go wrong.

Every error a front-end can see derives from InterpreterError,
which splits three ways: ParseError, EvalError, ExecutionError.
The `tag` on each family is what front-ends print in front of the message.

Evaluation errors further split into math, symbol, and control-flow kinds.
"""
from boozetools.parsing import interface

class InterpreterError(Exception):
	tag = "Error"
	def message(self) -> str:
		return str(self.args[0]) if self.args else type(self).__name__
	def __str__(self): return self.message()

###############################################################################
#  Parse errors: raised while tokenizing or parsing. No partial tree survives.

class ParseError(InterpreterError, interface.ParseError):
	tag = "SyntaxError"
	token = None  # The offending token, when there is one to point at.

class EmptyInput(ParseError):
	def __init__(self, token=None):
		super().__init__("Empty input. Please enter an expression.")
		self.token = token

class UnexpectedToken(ParseError):
	def __init__(self, token, found:str=None):
		super().__init__("Unexpected token: %s" % (found or _describe_token(token)))
		self.token = token

class UnmatchedParenthesis(ParseError):
	def __init__(self, token=None):
		super().__init__("Unmatched parenthesis.")
		self.token = token

class ExpectedToken(ParseError):
	def __init__(self, expected:str, token):
		super().__init__("Expected %s, but found %s instead." % (expected, _describe_token(token)))
		self.expected = expected
		self.token = token

class ExpectedIdentifier(ParseError):
	def __init__(self, token):
		super().__init__("Expected an identifier, but found %s." % _describe_token(token))
		self.token = token

class ExpectedBlock(ParseError):
	def __init__(self, token):
		super().__init__("Expected a code block enclosed in curly braces {}.")
		self.token = token

class InvalidNumber(ParseError):
	def __init__(self, token):
		super().__init__("Invalid number format: %s" % token.text)
		self.token = token

class MalformedSyntax(ParseError):
	def __init__(self, detail:str, token=None):
		super().__init__("Syntax error: " + detail)
		self.token = token

def _describe_token(token) -> str:
	if token is None: return "nothing"
	if token.kind == "end": return "end of input"
	return "%s '%s'" % (token.kind, token.text)

###############################################################################
#  Evaluation errors: raised while reducing expressions or running statements.

class EvalError(InterpreterError):
	tag = "RuntimeError"

class MathError(EvalError): pass

class DivisionByZero(MathError):
	def message(self): return "Division by zero error. Cannot divide by zero."

class ModuloByZero(MathError):
	def message(self): return "Modulo by zero error. Cannot compute modulo with zero divisor."

class InvalidExponentiation(MathError):
	def message(self): return "Invalid exponentiation. Cannot raise a negative number to a fractional power."

class NegativeRoot(MathError):
	def message(self): return "Cannot compute roots of negative numbers with non-integer degree."

class ZerothRoot(MathError):
	def message(self): return "Cannot compute the zeroth root of a number (mathematically undefined)."

class UnsupportedOperator(MathError):
	def message(self): return "Unsupported operator: %s" % self.args[0]

class UnsupportedFunction(MathError):
	def message(self): return "Unsupported function: %s" % self.args[0]

class DomainError(MathError):
	def message(self): return "Math domain error: %s" % self.args[0]

class Overflow(MathError):
	def message(self): return "Numerical overflow or underflow occurred."

class NotANumber(MathError):
	def message(self): return "Operation resulted in not-a-number (NaN)."


class SymbolError(EvalError):
	@property
	def name(self) -> str: return self.args[0]

class VariableNotFound(SymbolError):
	def message(self): return "Variable '%s' not found. Make sure it is defined before use." % self.name

class UndeclaredVariable(SymbolError):
	def message(self):
		return "Undeclared variable: '%s'. Variables must be declared with 'let' before assignment." % self.name

class ImmutableConstant(SymbolError):
	def message(self): return "Cannot modify constant: '%s'. Constants are immutable." % self.name

class Redefinition(SymbolError):
	def message(self): return "Redefinition of '%s' in the same scope." % self.name

class InvalidIdentifier(SymbolError):
	def message(self): return "Invalid identifier name: '%s'." % self.name


class ControlFlowError(EvalError): pass

class BreakOutsideLoop(ControlFlowError):
	def message(self):
		return "Break statement used outside a loop. 'break' can only be used within a 'while' loop."

class ContinueOutsideLoop(ControlFlowError):
	def message(self):
		return "Continue statement used outside a loop. 'continue' can only be used within a 'while' loop."

class InvalidReturnStatement(ControlFlowError):
	def message(self): return "Invalid return statement usage: %s" % self.args[0]

class UnimplementedFeature(ControlFlowError):
	def message(self): return "Unimplemented feature: %s" % self.args[0]

class FunctionOrProcedureAlreadyDefined(ControlFlowError):
	def __init__(self, name:str, kind:str):
		super().__init__(name, kind)
		self.name, self.kind = name, kind
	def message(self): return "%s '%s' already defined in the same scope." % (self.kind, self.name)

class FunctionOrProcedureNotFound(ControlFlowError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def message(self):
		return "No callable item named '%s' was found. Make sure it is defined before calling it." % self.name

class WrongArgumentCount(ControlFlowError):
	def __init__(self, name:str, expected:int, got:int):
		super().__init__(name, expected, got)
		self.name, self.expected, self.got = name, expected, got
	def message(self):
		pattern = "Callable '%s' called with wrong number of arguments. Expected %d, got %d."
		return pattern % (self.name, self.expected, self.got)

###############################################################################
#  Execution errors: conditions of the run as a whole, reserved for host policy.

class ExecutionError(InterpreterError):
	tag = "ExecutionError"

class StackOverflow(ExecutionError):
	def message(self): return "Stack overflow: execution too deeply nested"

class TimeoutExceeded(ExecutionError):
	def message(self): return "Execution timeout exceeded"

class MaxIterationsExceeded(ExecutionError):
	def message(self): return "Maximum iterations exceeded (limit %d)" % self.args[0]
