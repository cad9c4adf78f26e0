"""
The primitive namespace: operators and their binding powers,
the built-in math functions, and the global constants.
"""
import math, random, struct
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from . import errors

class Operator(Enum):
	ASSIGN = "="
	AND = "&&"
	OR = "||"
	XOR = "^^"
	XNOR = "!^"
	NAND = "!&"
	NOR = "!|"
	LT = "<"
	GT = ">"
	GE = ">="
	LE = "<="
	EQ = "=="
	NE = "!="
	ADD = "+"
	SUB = "-"
	MUL = "*"
	DIV = "/"
	MOD = "%"
	POW = "^"
	ROOT = "√"
	DOT = "."
	NOT = "!"

	def __str__(self): return self.value

# Operator token text, as the lexer spells it, to the operator it means.
GLYPHS = {op.value: op for op in Operator}
GLYPHS["&"] = Operator.AND
GLYPHS["|"] = Operator.OR

# Augmented-assignment token text to the arithmetic it implies.
AUGMENTED = {
	"+=": Operator.ADD, "-=": Operator.SUB,
	"*=": Operator.MUL, "/=": Operator.DIV,
	"%=": Operator.MOD, "^=": Operator.POW,
}

LOGICAL = frozenset([Operator.AND, Operator.OR, Operator.XOR, Operator.XNOR, Operator.NAND, Operator.NOR])
COMPARISON = frozenset([Operator.LT, Operator.GT, Operator.GE, Operator.LE, Operator.EQ, Operator.NE])

# (left binding power, right binding power, left-associative)
INFIX = {Operator.ASSIGN: (0.2, 0.1, False)}
INFIX.update((op, (0.3, 0.4, True)) for op in LOGICAL)
INFIX.update((op, (0.5, 0.6, True)) for op in COMPARISON)
INFIX.update({
	Operator.ADD: (1.0, 1.1, True),
	Operator.SUB: (1.0, 1.1, True),
	Operator.MUL: (2.0, 2.1, True),
	Operator.DIV: (2.0, 2.1, True),
	Operator.MOD: (2.0, 2.1, True),
	Operator.POW: (4.0, 3.9, False),
	Operator.ROOT: (4.0, 3.9, False),
	Operator.DOT: (5.0, 5.1, True),
})

PREFIX = {Operator.SUB: 20.0, Operator.ADD: 20.0, Operator.NOT: 20.0, Operator.ROOT: 20.0}

# Machine epsilon of a single-precision float; equality tolerates this much.
FLOAT32_EPSILON = 2.0 ** -23

_SINGLE = struct.Struct("f")

def f32(x:float) -> float:
	""" Round to the nearest single-precision value. Too large becomes infinite. """
	try: return _SINGLE.unpack(_SINGLE.pack(x))[0]
	except OverflowError: return math.copysign(math.inf, x)

###############################################################################

@lru_cache(None)
def global_constants() -> MappingProxyType:
	""" Built once on first use, read-only thereafter. """
	return MappingProxyType({name: f32(value) for name, value in {
		"PI": math.pi,
		"TAU": math.tau,
		"E": math.e,
		"PHI": 1.618033988749895,
		"SQRT2": math.sqrt(2.0),
		"INFINITY": math.inf,
	}.items()})

###############################################################################

def _reciprocal(name, fn):
	def reciprocal(x):
		denominator = fn(x)
		if denominator == 0.0: raise errors.DomainError("%s(%s) is undefined" % (name, x))
		return 1.0 / denominator
	return reciprocal

def _atan2(*args):
	if len(args) != 2: raise errors.UnsupportedFunction("atan2 requires exactly 2 arguments")
	return math.atan2(*args)

def _rand(*args):
	if not args: return random.random()
	if len(args) == 1: return random.random() * args[0]
	low, high = args
	if low >= high: raise errors.UnsupportedFunction("rand(min, max) requires min < max")
	return random.uniform(low, high)

def _log(x):
	if x <= 0.0: raise errors.DomainError("log(%s) is undefined" % x)
	return math.log(x)

def _sqrt(x):
	if x < 0.0: raise errors.DomainError("sqrt(%s) is undefined" % x)
	return math.sqrt(x)

class BuiltIn:
	""" A math function with an acceptable range of argument counts. """
	def __init__(self, name:str, fn, low:int, high:int):
		self.name, self.fn, self.low, self.high = name, fn, low, high

	def accepts(self, count:int) -> bool:
		return self.low <= count <= self.high

	def __call__(self, args:list[float]) -> float:
		if not self.accepts(len(args)):
			raise errors.WrongArgumentCount(self.name, self.low if len(args) < self.low else self.high, len(args))
		try: return f32(self.fn(*args))
		except ValueError: raise errors.DomainError("%s(%s) is undefined" % (self.name, ", ".join(map(str, args))))
		except OverflowError: raise errors.Overflow()

BUILT_INS = {b.name: b for b in [
	BuiltIn("sin", math.sin, 1, 1),
	BuiltIn("cos", math.cos, 1, 1),
	BuiltIn("tan", math.tan, 1, 1),
	BuiltIn("cot", _reciprocal("cot", math.tan), 1, 1),
	BuiltIn("sec", _reciprocal("sec", math.cos), 1, 1),
	BuiltIn("csc", _reciprocal("csc", math.sin), 1, 1),
	BuiltIn("asin", math.asin, 1, 1),
	BuiltIn("acos", math.acos, 1, 1),
	BuiltIn("atan", math.atan, 1, 1),
	BuiltIn("atan2", _atan2, 0, 255),
	BuiltIn("log", _log, 1, 1),
	BuiltIn("sqrt", _sqrt, 1, 1),
	BuiltIn("abs", abs, 1, 1),
	BuiltIn("min", min, 2, 255),
	BuiltIn("max", max, 2, 255),
	BuiltIn("rand", _rand, 0, 2),
]}
