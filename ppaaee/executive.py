"""
Run statements: the part of the interpreter that has side-effects on a symbol table.

Every statement produces a value (or None) and a ControlFlow signal.
Bodies of blocks, branches, and loop iterations run in child scopes,
and changes to pre-existing outer variables get copied back afterward.

All state belonging to one run lives in an Executive instance, so that
separate runs (even against separate tables at the same time) never
interfere with one another.
"""
from enum import Enum
from typing import Optional
from boozetools.support.foundation import Visitor
from . import syntax, errors
from .evaluator import evaluate as evaluate_expression, assignment_value, truth
from .front_end import parse_expression_text, parse_program_text
from .primitive import Operator, global_constants
from .space import SymbolTable

class ControlFlow(Enum):
	NORMAL = "normal"
	BREAK = "break"
	CONTINUE = "continue"
	RETURN = "return"

NORMAL, BREAK, CONTINUE, RETURN = ControlFlow

OUTCOME = tuple[Optional[float], ControlFlow]

class ExitState:
	""" Set by an "end" statement, anywhere in the run. """
	def __init__(self):
		self.occurred = False
		self.value = None

class ShadowSet(Visitor):
	"""
	Which names does a body declare for itself?
	Those stay behind when the body's scope gets copied back.
	The walk enters if/while bodies but never crosses into a nested block,
	which would have kept its own declarations anyway.
	"""
	@staticmethod
	def visit_Let(it:syntax.Let): return frozenset([it.name])
	@staticmethod
	def visit_Const(it:syntax.Const): return frozenset([it.name])
	def visit_If(self, it:syntax.If):
		found = self.visit(it.then_branch)
		if it.else_branch is not None: found = found | self.visit(it.else_branch)
		return found
	def visit_While(self, it:syntax.While): return self.visit(it.body)

	def visit_Block(self, it): return frozenset()
	def visit_ExpressionStatement(self, it): return frozenset()
	def visit_Break(self, it): return frozenset()
	def visit_Continue(self, it): return frozenset()
	def visit_Return(self, it): return frozenset()
	def visit_End(self, it): return frozenset()
	def visit_FunctionDeclaration(self, it): return frozenset()
	def visit_ProcedureDeclaration(self, it): return frozenset()
	def visit_ProcedureCall(self, it): return frozenset()

	def of_body(self, body:syntax.Statement) -> frozenset[str]:
		if isinstance(body, syntax.Block):
			return frozenset().union(*(self.visit(s) for s in body.statements))
		return self.visit(body)

shadow_set = ShadowSet().of_body

class Executive(Visitor):
	"""
	One run of a program. The optional step_limit caps the total number
	of loop iterations the run may perform.
	"""
	exit: ExitState

	def __init__(self, step_limit:Optional[int]=None):
		self.exit = ExitState()
		self.step_limit = step_limit
		self.steps = 0

	@property
	def halted(self) -> bool: return self.exit.occurred

	def tick(self):
		self.steps += 1
		if self.step_limit is not None and self.steps > self.step_limit:
			raise errors.MaxIterationsExceeded(self.step_limit)

	def execute(self, statements, table:SymbolTable) -> Optional[float]:
		value = None
		for statement in statements:
			value, flow = self.visit(statement, table)
			if self.halted: return self.exit.value
			if flow is BREAK: raise errors.BreakOutsideLoop()
			if flow is CONTINUE: raise errors.ContinueOutsideLoop()
		return value

	def in_child_scope(self, body:syntax.Statement, table:SymbolTable) -> OUTCOME:
		child = table.new_scope()
		outcome = self.visit(body, child)
		table.merge_from(child, shadow_set(body))
		return outcome

	###########################################################################

	def visit_ExpressionStatement(self, it:syntax.ExpressionStatement, table:SymbolTable) -> OUTCOME:
		expr = it.expr
		if isinstance(expr, syntax.Operation) and expr.operator is Operator.ASSIGN:
			target = expr.operands[0]
			if isinstance(target, syntax.Name):
				if target.text in global_constants(): raise errors.ImmutableConstant(target.text)
				if not table.contains(target.text): raise errors.UndeclaredVariable(target.text)
			value = assignment_value(expr, table, self)
			table.set_variable(target.text, value)
			return value, NORMAL
		return evaluate_expression(expr, table, self), NORMAL

	def visit_Block(self, it:syntax.Block, table:SymbolTable) -> OUTCOME:
		child = table.new_scope()
		value, flow = None, NORMAL
		for statement in it.statements:
			result, flow = self.visit(statement, child)
			if result is not None or flow is RETURN: value = result
			if flow is not NORMAL or self.halted: break
		table.merge_from(child, shadow_set(it))
		return value, flow

	def visit_If(self, it:syntax.If, table:SymbolTable) -> OUTCOME:
		if truth(evaluate_expression(it.condition, table, self)):
			return self.in_child_scope(it.then_branch, table)
		if it.else_branch is not None:
			return self.in_child_scope(it.else_branch, table)
		return 0.0, NORMAL

	def visit_While(self, it:syntax.While, table:SymbolTable) -> OUTCOME:
		value = None
		while not self.halted and truth(evaluate_expression(it.condition, table, self)):
			self.tick()
			result, flow = self.in_child_scope(it.body, table)
			if result is not None: value = result
			if flow is BREAK: break
			if flow is RETURN: return result, RETURN
		return value, NORMAL

	@staticmethod
	def visit_Break(it:syntax.Break, table:SymbolTable) -> OUTCOME: return None, BREAK

	@staticmethod
	def visit_Continue(it:syntax.Continue, table:SymbolTable) -> OUTCOME: return None, CONTINUE

	def visit_Return(self, it:syntax.Return, table:SymbolTable) -> OUTCOME:
		if table.call_depth == 0:
			raise errors.InvalidReturnStatement("'return' may only appear within a function or procedure")
		value = None if it.expr is None else evaluate_expression(it.expr, table, self)
		return value, RETURN

	def visit_End(self, it:syntax.End, table:SymbolTable) -> OUTCOME:
		value = None if it.expr is None else evaluate_expression(it.expr, table, self)
		self.exit.occurred = True
		self.exit.value = value
		return value, RETURN

	def visit_Let(self, it:syntax.Let, table:SymbolTable) -> OUTCOME:
		value = 0.0 if it.init is None else evaluate_expression(it.init, table, self)
		table.set_variable(it.name, value)
		return value, NORMAL

	def visit_Const(self, it:syntax.Const, table:SymbolTable) -> OUTCOME:
		value = evaluate_expression(it.init, table, self)
		table.declare_constant(it.name, value)
		return value, NORMAL

	@staticmethod
	def visit_FunctionDeclaration(it:syntax.FunctionDeclaration, table:SymbolTable) -> OUTCOME:
		table.declare_function(it)
		return None, NORMAL

	@staticmethod
	def visit_ProcedureDeclaration(it:syntax.ProcedureDeclaration, table:SymbolTable) -> OUTCOME:
		table.declare_procedure(it)
		return None, NORMAL

	def visit_ProcedureCall(self, it:syntax.ProcedureCall, table:SymbolTable) -> OUTCOME:
		proc = table.get_procedure(it.name)
		if proc is None:
			# Functions and built-ins may also stand as statements.
			return evaluate_expression(syntax.FunctionCall(it.name, it.args), table, self), NORMAL
		args = [evaluate_expression(a, table, self) for a in it.args]
		scope, _ = self.activate(proc, args, table)
		table.merge_from(scope, frozenset(proc.params) | shadow_set(proc.body))
		return None, NORMAL

	###########################################################################

	def activate(self, dfn:syntax.Subroutine, args:list[float], table:SymbolTable) -> tuple[SymbolTable, Optional[float]]:
		""" Run a subroutine body in a fresh activation scope. """
		if len(args) != len(dfn.params):
			raise errors.WrongArgumentCount(dfn.name, len(dfn.params), len(args))
		scope = table.new_scope(call=True)
		for param, arg in zip(dfn.params, args):
			scope.set_variable(param, arg)
		result, flow = self.visit(dfn.body, scope)
		if flow is BREAK: raise errors.BreakOutsideLoop()
		if flow is CONTINUE: raise errors.ContinueOutsideLoop()
		return scope, result

	def call_function(self, dfn:syntax.FunctionDeclaration, args:list[float], table:SymbolTable) -> float:
		_, result = self.activate(dfn, args, table)
		return 0.0 if result is None else result


def evaluate(source:str, table:SymbolTable, step_limit:Optional[int]=None) -> float:
	""" Evaluate a single expression. The table is only read, never written. """
	return evaluate_expression(parse_expression_text(source), table, Executive(step_limit))

def execute(source:str, table:SymbolTable, step_limit:Optional[int]=None) -> Optional[float]:
	"""
	Run a program against a table, which accumulates the effects.
	Returns the value of the last statement run, or the value given to
	an "end" statement if one was reached.
	"""
	return Executive(step_limit).execute(parse_program_text(source), table)
