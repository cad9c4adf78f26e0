"""
The set of parse-nodes.
The parser calls these constructors top-down as it recognizes each phrase.
Nodes own their children and are not modified after construction.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .primitive import Operator

class Expression:
	def __str__(self): return PrefixNotation().visit(self)
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class Statement:
	pass

###############################################################################

class Number(Expression):
	value: float
	text: str   # As written, for rendering.
	def __init__(self, value:float, text:str):
		self.value, self.text = value, text

class Name(Expression):
	def __init__(self, text:str): self.text = text

class Operation(Expression):
	""" One operand means prefix; two means infix. """
	operator: Operator
	operands: tuple[Expression, ...]
	def __init__(self, operator:Operator, *operands:Expression):
		assert 1 <= len(operands) <= 2, operands
		self.operator, self.operands = operator, operands

class FunctionCall(Expression):
	def __init__(self, name:str, args:Sequence[Expression]):
		self.name, self.args = name, tuple(args)

###############################################################################

class ExpressionStatement(Statement):
	def __init__(self, expr:Expression): self.expr = expr

class Block(Statement):
	def __init__(self, statements:Sequence[Statement]): self.statements = tuple(statements)

class If(Statement):
	""" An "else if" chain shows up as another If in the else_branch. """
	def __init__(self, condition:Expression, then_branch:Statement, else_branch:Optional[Statement]):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch

class While(Statement):
	def __init__(self, condition:Expression, body:Statement):
		self.condition, self.body = condition, body

class Break(Statement): pass
class Continue(Statement): pass

class Return(Statement):
	def __init__(self, expr:Optional[Expression]): self.expr = expr

class End(Statement):
	def __init__(self, expr:Optional[Expression]): self.expr = expr

class Let(Statement):
	def __init__(self, name:str, init:Optional[Expression]):
		self.name, self.init = name, init

class Const(Statement):
	def __init__(self, name:str, init:Expression):
		self.name, self.init = name, init

class Subroutine(Statement):
	""" Common shape of function and procedure declarations. """
	kind = "Subroutine"
	def __init__(self, name:str, params:Sequence[str], body:Block):
		self.name, self.params, self.body = name, tuple(params), body
	def __repr__(self): return "<%s %s(%s)>" % (self.kind, self.name, ", ".join(self.params))

class FunctionDeclaration(Subroutine):
	kind = "Function"

class ProcedureDeclaration(Subroutine):
	kind = "Procedure"

class ProcedureCall(Statement):
	def __init__(self, name:str, args:Sequence[Expression]):
		self.name, self.args = name, tuple(args)

###############################################################################

class PrefixNotation(Visitor):
	""" Renders an expression as fully-parenthesized prefix notation, e.g. "(+ 1 (* 2 3))". """
	@staticmethod
	def visit_Number(it:Number): return it.text
	@staticmethod
	def visit_Name(it:Name): return it.text
	def visit_Operation(self, it:Operation):
		return "(%s %s)" % (it.operator, " ".join(self.visit(x) for x in it.operands))
	def visit_FunctionCall(self, it:FunctionCall):
		return "%s(%s)" % (it.name, ", ".join(self.visit(x) for x in it.args))
