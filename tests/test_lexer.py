import unittest
from ppaaee.lexer import tokenize

def _kinds_and_texts(text):
	return [(t.kind, t.text) for t in tokenize(text)]

class LexerTests(unittest.TestCase):

	def test_always_ends_with_end(self):
		for text in ["", "   ", "1 + 2", "/* unterminated", "@@@"]:
			with self.subTest(text):
				tokens = tokenize(text)
				self.assertEqual("end", tokens[-1].kind)
				self.assertEqual(1, sum(t.kind == "end" for t in tokens))

	def test_numbers(self):
		cases = {
			"42": "42", "3.14": "3.14", ".5": ".5",
			"0xFF": "0xFF", "0X1a": "0X1a", "0b1010": "0b1010",
		}
		for text, expect in cases.items():
			with self.subTest(text):
				self.assertEqual([("number", expect), ("end", "")], _kinds_and_texts(text))

	def test_dot_without_digit_is_an_operator(self):
		self.assertEqual([("name", "a"), ("operator", "."), ("name", "b"), ("end", "")], _kinds_and_texts("a.b"))
		self.assertEqual([("number", "1"), ("operator", "."), ("name", "x"), ("end", "")], _kinds_and_texts("1.x"))

	def test_only_one_decimal_point(self):
		self.assertEqual([("number", "1.2"), ("number", ".3"), ("end", "")], _kinds_and_texts("1.2.3"))

	def test_words(self):
		self.assertEqual([
			("keyword", "let"), ("name", "x_1"), ("operator", "="),
			("number", "1"), ("operator", "&&"), ("number", "0"), ("end", ""),
		], _kinds_and_texts("let x_1 = true && false"))

	def test_every_keyword(self):
		for word in "if else while break continue return let const end fn proc".split():
			with self.subTest(word):
				self.assertEqual([("keyword", word), ("end", "")], _kinds_and_texts(word))

	def test_two_character_operators(self):
		for text in ["==", "!=", "<=", ">=", "&&", "||", "^^", "!^", "!&", "!|"]:
			with self.subTest(text):
				self.assertEqual([("operator", text), ("end", "")], _kinds_and_texts(text))

	def test_augmented_assignment(self):
		for text in ["+=", "-=", "*=", "/=", "%=", "^="]:
			with self.subTest(text):
				self.assertEqual([("augmented", text), ("end", "")], _kinds_and_texts(text))

	def test_single_characters_fall_back(self):
		self.assertEqual(
			[("operator", c) for c in "+-*/%^=<>!&|√(){};,"] + [("end", "")],
			_kinds_and_texts("+ - * / % ^ = < > ! & | √ ( ) { } ; ,"),
		)

	def test_comments_are_skipped(self):
		text = "1 // one\n+ /* two\n lines */ 2 /* never closed"
		self.assertEqual([("number", "1"), ("operator", "+"), ("number", "2"), ("end", "")], _kinds_and_texts(text))

	def test_junk_is_skipped(self):
		self.assertEqual([("number", "1"), ("number", "2"), ("end", "")], _kinds_and_texts("1 @ $ 2"))

	def test_only_ascii_digits_and_letters(self):
		self.assertEqual([("number", "2"), ("end", "")], _kinds_and_texts("2²"))
		self.assertEqual([("number", "3"), ("end", "")], _kinds_and_texts("3é"))
		self.assertEqual([("name", "caf"), ("number", "1"), ("end", "")], _kinds_and_texts("café ٣ 1"))

	def test_longest_match(self):
		self.assertEqual([("number", "0x1f"), ("name", "g"), ("end", "")], _kinds_and_texts("0x1fg"))
		self.assertEqual([("number", "0b10"), ("number", "2"), ("end", "")], _kinds_and_texts("0b102"))
		self.assertEqual([("augmented", "/="), ("operator", "/"), ("end", "")], _kinds_and_texts("/=/"))
		self.assertEqual([("operator", "!"), ("operator", "!="), ("end", "")], _kinds_and_texts("!!="))

	def test_comment_opener_inside_a_comment(self):
		self.assertEqual([("number", "1"), ("number", "2"), ("end", "")], _kinds_and_texts("1 /* a /* b ** */ 2"))

	def test_offsets(self):
		tokens = tokenize("ab  += 3")
		self.assertEqual((0, 2), (tokens[0].start, tokens[0].stop))
		self.assertEqual((4, 6), (tokens[1].start, tokens[1].stop))
		self.assertEqual((7, 8), (tokens[2].start, tokens[2].stop))
		self.assertEqual((8, 8), (tokens[3].start, tokens[3].stop))

if __name__ == '__main__':
	unittest.main()
