"""
Reduce an expression to a number.

Each kind of expression has an "_eval_" function here, registered into
EVALUATE by the annotation on its "expr" parameter.
Every operation yields a single-precision result.
The evaluator never writes to the symbol table. Assignment is checked here
but stored by the statement executor, which also supplies the `run` object
through which user-defined functions get called.
"""
import math
from . import syntax, errors
from .primitive import Operator, BUILT_INS, FLOAT32_EPSILON, global_constants, f32
from .space import SymbolTable

def evaluate(expr:syntax.Expression, table:SymbolTable, run) -> float:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, table, run)

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

def truth(x:float) -> bool: return x != 0.0

def flag(b:bool) -> float: return 1.0 if b else 0.0

def nearly_equal(a:float, b:float) -> bool:
	return a == b or abs(a - b) < FLOAT32_EPSILON

###############################################################################

def _divide(a, b):
	if b == 0.0: raise errors.DivisionByZero()
	return a / b

def _modulo(a, b):
	if b == 0.0: raise errors.ModuloByZero()
	return math.fmod(a, b)

def _power(base, exponent):
	if base < 0.0 and not float(exponent).is_integer(): raise errors.InvalidExponentiation()
	try: return base ** exponent
	except ZeroDivisionError: return math.inf
	except OverflowError: return -math.inf if base < 0.0 and exponent % 2.0 == 1.0 else math.inf

def _root(degree, radicand):
	if degree == 0.0: raise errors.ZerothRoot()
	exponent = 1.0 / degree
	if radicand < 0.0 and not exponent.is_integer(): raise errors.NegativeRoot()
	return _power(radicand, exponent)

INFIX_MATH = {
	Operator.ADD: lambda a, b: a + b,
	Operator.SUB: lambda a, b: a - b,
	Operator.MUL: lambda a, b: a * b,
	Operator.DIV: _divide,
	Operator.MOD: _modulo,
	Operator.POW: _power,
	Operator.ROOT: _root,
	Operator.AND: lambda a, b: flag(truth(a) and truth(b)),
	Operator.OR: lambda a, b: flag(truth(a) or truth(b)),
	Operator.XOR: lambda a, b: flag(truth(a) != truth(b)),
	Operator.XNOR: lambda a, b: flag(truth(a) == truth(b)),
	Operator.NAND: lambda a, b: flag(not (truth(a) and truth(b))),
	Operator.NOR: lambda a, b: flag(not (truth(a) or truth(b))),
	Operator.LT: lambda a, b: flag(a < b),
	Operator.GT: lambda a, b: flag(a > b),
	Operator.LE: lambda a, b: flag(a <= b),
	Operator.GE: lambda a, b: flag(a >= b),
	Operator.EQ: lambda a, b: flag(nearly_equal(a, b)),
	Operator.NE: lambda a, b: flag(not nearly_equal(a, b)),
	Operator.DOT: lambda a, b: b,
}

PREFIX_MATH = {
	Operator.SUB: lambda a: -a,
	Operator.ADD: lambda a: a,
	Operator.NOT: lambda a: flag(not truth(a)),
	Operator.ROOT: lambda a: _root(2.0, a),
}

###############################################################################

def _eval_Number(expr:syntax.Number, table:SymbolTable, run):
	return expr.value

def _eval_Name(expr:syntax.Name, table:SymbolTable, run):
	value = table.get(expr.text)
	if value is None: value = global_constants().get(expr.text)
	if value is None: raise errors.VariableNotFound(expr.text)
	return value

def _eval_Operation(expr:syntax.Operation, table:SymbolTable, run):
	op = expr.operator
	if op is Operator.ASSIGN: return assignment_value(expr, table, run)
	args = [evaluate(x, table, run) for x in expr.operands]
	table_of = PREFIX_MATH if len(args) == 1 else INFIX_MATH
	try: fn = table_of[op]
	except KeyError: raise errors.UnsupportedOperator(op) from None
	result = f32(fn(*args))
	if math.isnan(result): raise errors.NotANumber()
	return result

def assignment_value(expr:syntax.Operation, table:SymbolTable, run) -> float:
	""" Vet the target of an "=", then produce the value it would receive. """
	target, rhs = expr.operands
	if not isinstance(target, syntax.Name): raise errors.InvalidIdentifier(str(target))
	if target.text in global_constants(): raise errors.ImmutableConstant(target.text)
	if not table.contains(target.text): raise errors.VariableNotFound(target.text)
	return evaluate(rhs, table, run)

def _eval_FunctionCall(expr:syntax.FunctionCall, table:SymbolTable, run):
	name = expr.name
	if name in BUILT_INS:
		return BUILT_INS[name]([evaluate(a, table, run) for a in expr.args])
	dfn = table.get_function(name)
	if dfn is None:
		if table.get_procedure(name) is not None:
			raise errors.UnimplementedFeature("Procedure '%s' cannot be called as a function expression" % name)
		raise errors.FunctionOrProcedureNotFound(name)
	args = [evaluate(a, table, run) for a in expr.args]
	return run.call_function(dfn, args, table)

attach_evaluation_methods(globals())
