"""
Turn source text into a flat list of tokens.

The scanner never fails: characters it does not recognize are skipped,
and an unterminated block comment simply runs to the end of the input.
Character classes are ASCII-only. The list always ends with an "end" token.
"""
from typing import NamedTuple
from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner

KEYWORDS = frozenset(["if", "else", "while", "break", "continue", "return", "let", "const", "end", "fn", "proc"])
BOOLEANS = {"true": "1", "false": "0"}

class Token(NamedTuple):
	kind: str    # number, name, keyword, operator, augmented, or end
	text: str
	start: int
	stop: int

	def is_op(self, text:str) -> bool:
		return self.kind == "operator" and self.text == text

	def is_keyword(self, text:str) -> bool:
		return self.kind == "keyword" and self.text == text

	def __repr__(self): return "<%s %r>" % (self.kind, self.text)


def _emit(kind:str):
	def action(yy:IterableScanner):
		where = yy.slice()
		yy.token(kind, Token(kind, yy.match(), where.start, where.stop))
	return action

def scan_word(yy:IterableScanner):
	word, where = yy.match(), yy.slice()
	if word in BOOLEANS: yy.token("number", Token("number", BOOLEANS[word], where.start, where.stop))
	elif word in KEYWORDS: yy.token("keyword", Token("keyword", word, where.start, where.stop))
	else: yy.token("name", Token("name", word, where.start, where.stop))

def scan_open_comment(yy:IterableScanner): yy.push("comment")

def scan_close_comment(yy:IterableScanner): yy.pop()

# Where two rules match the same length of text, the earlier rule wins.
lexicon = miniscan.Definition("PPAAEE tokens")
lexicon.ignore(r'\s+')
lexicon.ignore(r'\/\/.*')
lexicon.on(r'\/\*')(scan_open_comment)
with lexicon.condition("comment") as comment:
	comment.on(r'\*\/')(scan_close_comment)
	comment.ignore(r'[^*]+')
	comment.ignore(r'\*')
lexicon.on(r'0[xX]{xdigit}*')(_emit("number"))
lexicon.on(r'0[bB][01]*')(_emit("number"))
lexicon.on(r'\d+(\.\d+)?|\.\d+')(_emit("number"))
lexicon.on(r'[\l_]\w*')(scan_word)
lexicon.on(r'[\-+*%\^]=|\/=')(_emit("augmented"))
lexicon.on(r'==|<=|>=|!=|!\^|!&|!\||\^\^|&&|\|\|')(_emit("operator"))
lexicon.on(r'[\-+*%\^=<>!|&]|\/|√')(_emit("operator"))
lexicon.on(r'[()\{\};,.]')(_emit("operator"))
lexicon.ignore(r'{ANY}')


def tokenize(text:str) -> list[Token]:
	tokens = [token for kind, token in lexicon.scan(text)]
	tokens.append(Token("end", "", len(text), len(text)))
	return tokens
