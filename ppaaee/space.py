"""
Scoped name-spaces for variables, constants, functions, and procedures.

A child scope is a complete copy of its parent, not a view onto it.
Nothing the child does reaches the parent except through merge_from.
Global constants live apart from every table (see primitive.global_constants)
and are consulted by the evaluator, not stored here.
"""
from typing import Iterator, Optional, Iterable
from . import errors
from .primitive import global_constants, f32
from .syntax import FunctionDeclaration, ProcedureDeclaration

class SymbolTable:
	values: dict[str, float]
	constants: set[str]
	functions: dict[str, FunctionDeclaration]
	procedures: dict[str, ProcedureDeclaration]
	call_depth: int   # How many subroutine activations enclose this scope.

	def __init__(self):
		self.values, self.constants = {}, set()
		self.functions, self.procedures = {}, {}
		self.call_depth = 0

	def get(self, name:str) -> Optional[float]:
		return self.values.get(name)

	def contains(self, name:str) -> bool:
		return name in self.values

	def is_constant(self, name:str) -> bool:
		return name in self.constants

	def set_variable(self, name:str, value:float):
		value = f32(value)
		if name in global_constants(): raise errors.ImmutableConstant(name)
		if name in self.constants and self.values[name] != value: raise errors.ImmutableConstant(name)
		self.values[name] = value

	def declare_constant(self, name:str, value:float):
		value = f32(value)
		if name in global_constants(): raise errors.ImmutableConstant(name)
		if name in self.values: raise errors.Redefinition(name)
		self.values[name] = value
		self.constants.add(name)

	def declare_function(self, dfn:FunctionDeclaration):
		if dfn.name in self.functions: raise errors.FunctionOrProcedureAlreadyDefined(dfn.name, "Function")
		self.functions[dfn.name] = dfn

	def declare_procedure(self, dfn:ProcedureDeclaration):
		if dfn.name in self.procedures: raise errors.FunctionOrProcedureAlreadyDefined(dfn.name, "Procedure")
		self.procedures[dfn.name] = dfn

	def get_function(self, name:str) -> Optional[FunctionDeclaration]:
		return self.functions.get(name)

	def get_procedure(self, name:str) -> Optional[ProcedureDeclaration]:
		return self.procedures.get(name)

	def new_scope(self, call=False) -> "SymbolTable":
		""" A snapshot. With call=True, the child counts as one activation deeper. """
		child = SymbolTable()
		child.values = dict(self.values)
		child.constants = set(self.constants)
		child.functions = dict(self.functions)
		child.procedures = dict(self.procedures)
		child.call_depth = self.call_depth + 1 if call else self.call_depth
		return child

	def merge_from(self, child:"SymbolTable", shadowed:Iterable[str]=()):
		"""
		Copy-back: the channel through which a child scope updates its parent.
		Names declared within the child's body (the shadow-set) stay behind,
		as do unchanged values, the parent's constants, and anything the
		parent never had in the first place.
		"""
		shadowed = frozenset(shadowed)
		for name, value in child.values.items():
			if name in shadowed: continue
			if name not in self.values: continue
			if self.values[name] == value: continue
			if name in self.constants: continue
			self.set_variable(name, value)

	def clear(self):
		self.values.clear()
		self.constants.clear()
		self.functions.clear()
		self.procedures.clear()

	def __iter__(self) -> Iterator[tuple[str, float]]:
		return iter(list(self.values.items()))

	def items(self) -> list[tuple[str, float]]:
		return sorted(self.values.items())

	def __len__(self): return len(self.values)

	def __repr__(self): return "<SymbolTable %d values, depth %d>" % (len(self.values), self.call_depth)
