"""
An embeddable calculator and small scripting language.

    from ppaaee import SymbolTable, evaluate, execute
    table = SymbolTable()
    execute("let x = 2; x ^= 10", table)
    evaluate("x + 1", table)   # 1025.0
"""
from .space import SymbolTable
from .executive import evaluate, execute
from .errors import InterpreterError, ParseError, EvalError, ExecutionError
