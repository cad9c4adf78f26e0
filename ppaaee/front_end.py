"""
Recursive-descent statements around a Pratt-style expression core.

Expressions are parsed by binding power (see primitive.INFIX and primitive.PREFIX).
Statements dispatch on their leading keyword.
Semicolons are optional separators and get swallowed wherever they may appear.
"""
from typing import Optional
from . import syntax, errors
from .lexer import Token, tokenize
from .primitive import Operator, GLYPHS, AUGMENTED, INFIX, PREFIX, f32

MAX_LITERAL = 0xFFFFFFFF

def resolve_number(token:Token) -> syntax.Number:
	""" Numeric literals get their value once, here, rather than at every evaluation. """
	text = token.text
	radix = {"0x": 16, "0X": 16, "0b": 2, "0B": 2}.get(text[:2])
	try:
		if radix is None: value = float(text)
		else:
			value = int(text[2:], radix)
			if value > MAX_LITERAL: raise errors.InvalidNumber(token)
	except ValueError:
		raise errors.InvalidNumber(token) from None
	return syntax.Number(f32(value), text)

class Parser:
	def __init__(self, tokens:list[Token]):
		assert tokens and tokens[-1].kind == "end"
		self.tokens = tokens
		self.pos = 0

	def peek(self, ahead=0) -> Token:
		return self.tokens[min(self.pos + ahead, len(self.tokens) - 1)]

	def pop(self) -> Token:
		token = self.peek()
		if token.kind != "end": self.pos += 1
		return token

	def at_end(self) -> bool:
		return self.peek().kind == "end"

	def expect_op(self, text:str) -> Token:
		token = self.peek()
		if not token.is_op(text): raise errors.ExpectedToken("'%s'"%text, token)
		return self.pop()

	def expect_name(self) -> str:
		token = self.peek()
		if token.kind != "name": raise errors.ExpectedIdentifier(token)
		return self.pop().text

	def skip_semicolons(self):
		while self.peek().is_op(";"): self.pop()

	###########################################################################
	# Expressions

	def parse_expression(self, min_bp:float=0.0) -> syntax.Expression:
		lhs = self.parse_primary()
		while True:
			token = self.peek()
			if token.kind == "augmented":
				left_bp, _, _ = INFIX[Operator.ASSIGN]
				if left_bp <= min_bp: break
				self.pop()
				rhs = self.parse_expression(0.0)
				lhs = syntax.Operation(Operator.ASSIGN, lhs, syntax.Operation(AUGMENTED[token.text], lhs, rhs))
				continue
			if token.kind != "operator": break
			op = GLYPHS.get(token.text)
			if op not in INFIX: break
			left_bp, right_bp, left_assoc = INFIX[op]
			if (left_assoc and left_bp < min_bp) or (not left_assoc and left_bp <= min_bp): break
			self.pop()
			lhs = syntax.Operation(op, lhs, self.parse_expression(right_bp))
		return lhs

	def parse_primary(self) -> syntax.Expression:
		token = self.peek()
		if token.kind == "number":
			self.pop()
			return resolve_number(token)
		if token.kind == "name":
			self.pop()
			if self.peek().is_op("("): return syntax.FunctionCall(token.text, self.parse_arguments())
			return syntax.Name(token.text)
		if token.is_op("("):
			self.pop()
			inner = self.parse_expression(0.0)
			if not self.peek().is_op(")"): raise errors.UnmatchedParenthesis(self.peek())
			self.pop()
			return inner
		if token.kind == "operator" and GLYPHS.get(token.text) in PREFIX:
			return self.parse_prefix()
		if token.kind == "end": raise errors.EmptyInput(token) if self.pos == 0 else errors.UnexpectedToken(token)
		raise errors.UnexpectedToken(token)

	def parse_prefix(self) -> syntax.Operation:
		op = GLYPHS[self.pop().text]
		bp = PREFIX[op]
		operands = [self.parse_expression(bp)]
		if op is Operator.ROOT and self.starts_operand():
			# "√ 3 27" reads as the cube root of 27.
			operands.append(self.parse_expression(bp))
		return syntax.Operation(op, *operands)

	def starts_operand(self) -> bool:
		token = self.peek()
		return token.kind in ("number", "name") or token.is_op("(") or token.is_op("√")

	def parse_arguments(self) -> list[syntax.Expression]:
		self.expect_op("(")
		args = []
		if not self.peek().is_op(")"):
			while True:
				args.append(self.parse_expression(0.0))
				if not self.peek().is_op(","): break
				self.pop()
		if not self.peek().is_op(")"): raise errors.UnmatchedParenthesis(self.peek())
		self.pop()
		return args

	###########################################################################
	# Statements

	def parse_program(self) -> list[syntax.Statement]:
		self.skip_semicolons()
		if self.at_end(): raise errors.EmptyInput(self.peek())
		statements = []
		while not self.at_end():
			statements.append(self.parse_statement())
		return statements

	def parse_statement(self) -> syntax.Statement:
		token = self.peek()
		if token.kind == "end": raise errors.EmptyInput(token)
		if token.kind == "keyword":
			try: sub_parser = getattr(self, "parse_"+token.text)
			except AttributeError: raise errors.UnexpectedToken(token) from None
			self.pop()
			statement = sub_parser()
		elif token.is_op("{"):
			statement = self.parse_block()
		else:
			expr = self.parse_expression(0.0)
			if isinstance(expr, syntax.FunctionCall):
				statement = syntax.ProcedureCall(expr.name, expr.args)
			else:
				statement = syntax.ExpressionStatement(expr)
		self.skip_semicolons()
		return statement

	def parse_block(self) -> syntax.Block:
		token = self.peek()
		if not token.is_op("{"): raise errors.ExpectedBlock(token)
		self.pop()
		statements = []
		while True:
			self.skip_semicolons()
			if self.peek().is_op("}"): break
			if self.at_end(): raise errors.ExpectedBlock(self.peek())
			statements.append(self.parse_statement())
		self.pop()
		return syntax.Block(statements)

	def parse_body(self) -> syntax.Statement:
		""" Either a braced block or a single statement. """
		self.skip_semicolons()
		if self.peek().is_op("{"): return self.parse_block()
		return self.parse_statement()

	def parse_if(self) -> syntax.If:
		condition = self.parse_expression(0.0)
		then_branch = self.parse_body()
		self.skip_semicolons()
		else_branch = None
		if self.peek().is_keyword("else"):
			self.pop()
			if self.peek().is_keyword("if"):
				self.pop()
				else_branch = self.parse_if()
			else:
				else_branch = self.parse_body()
		return syntax.If(condition, then_branch, else_branch)

	def parse_while(self) -> syntax.While:
		condition = self.parse_expression(0.0)
		return syntax.While(condition, self.parse_body())

	def parse_break(self): return syntax.Break()

	def parse_continue(self): return syntax.Continue()

	def optional_expression(self) -> Optional[syntax.Expression]:
		token = self.peek()
		if token.kind in ("end", "keyword") or token.is_op(";") or token.is_op("}"): return None
		return self.parse_expression(0.0)

	def parse_return(self): return syntax.Return(self.optional_expression())

	def parse_end(self): return syntax.End(self.optional_expression())

	def parse_let(self) -> syntax.Let:
		name = self.expect_name()
		init = None
		if self.peek().is_op("="):
			self.pop()
			init = self.parse_expression(0.0)
		return syntax.Let(name, init)

	def parse_const(self) -> syntax.Const:
		name = self.expect_name()
		self.expect_op("=")
		return syntax.Const(name, self.parse_expression(0.0))

	def parse_signature(self) -> tuple[str, list[str]]:
		name = self.expect_name()
		self.expect_op("(")
		params = []
		if not self.peek().is_op(")"):
			while True:
				params.append(self.expect_name())
				if not self.peek().is_op(","): break
				self.pop()
		self.expect_op(")")
		return name, params

	def parse_fn(self) -> syntax.FunctionDeclaration:
		name, params = self.parse_signature()
		return syntax.FunctionDeclaration(name, params, self.parse_block())

	def parse_proc(self) -> syntax.ProcedureDeclaration:
		name, params = self.parse_signature()
		return syntax.ProcedureDeclaration(name, params, self.parse_block())


def parse_expression_text(text:str) -> syntax.Expression:
	""" Exactly one expression, and nothing else. """
	parser = Parser(tokenize(text))
	if parser.at_end(): raise errors.EmptyInput(parser.peek())
	expr = parser.parse_expression(0.0)
	if not parser.at_end(): raise errors.UnexpectedToken(parser.peek())
	return expr

def parse_program_text(text:str) -> list[syntax.Statement]:
	return Parser(tokenize(text)).parse_program()
