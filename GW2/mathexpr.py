''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Algebraic expressions supplied by users to replace built-in groundwater
flow formulas.

create() parses a formula into a tree of nodes and resolves every variable
name to an index through a caller supplied resolver, so bad names are caught
when the formula is read.  evaluate() walks the tree, asking a value getter
for the current value of each variable index.

    expop   :: '^'
    multop  :: '*' | '/'
    addop   :: '+' | '-'
    operand :: fn '(' expr ')' | real | variable | '(' expr ')'
    power   :: operand [ expop unary ]*
    unary   :: addop* power
    term    :: unary [ multop unary ]*
    expr    :: term [ addop term ]*
'''

import operator
from dataclasses import dataclass
from typing import Any

import numpy as np
from pyparsing import (Forward, Literal, Regex, Suppress, Word, alphanums,
                       alphas, ParseBaseException)


class MathExprError(ValueError):
    ''' malformed formula; token holds the offending text '''
    def __init__(self, message, token=''):
        super().__init__(message)
        self.token = token


@dataclass(frozen=True)
class Number:
    value: float

@dataclass(frozen=True)
class Variable:
    index: int
    name: str = ''

@dataclass(frozen=True)
class UnaryMinus:
    operand: Any

@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: Any
    right: Any

@dataclass(frozen=True)
class Function:
    name: str
    arg: Any


opn = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "^": np.power,
}

fn = {
    "cos": np.cos,
    "sin": np.sin,
    "tan": np.tan,
    "cot": lambda x: 1.0 / np.tan(x),
    "abs": np.abs,
    "sgn": np.sign,
    "sqrt": np.sqrt,
    "log": np.log,
    "exp": np.exp,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    "acot": lambda x: np.pi / 2.0 - np.arctan(x),
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "coth": lambda x: 1.0 / np.tanh(x),
    "log10": np.log10,
    "step": lambda x: np.float64(1.0) if x > 0.0 else np.float64(0.0),
}


# parse actions, each returns a single tree node
def _number(tokens):
    return Number(float(tokens[0]))

def _name(tokens):
    return Variable(-1, tokens[0])

def _function(tokens):
    return Function(tokens[0], tokens[1])

def _signs(tokens):
    node = tokens[-1]
    for sign in reversed(tokens[:-1]):
        if sign == "-":
            node = UnaryMinus(node)
    return node

def _fold_left(tokens):
    items = list(tokens)
    node = items[0]
    for i in range(1, len(items), 2):
        node = BinaryOp(items[i], node, items[i + 1])
    return node

def _fold_right(tokens):
    # 2^3^2 = 2^(3^2)
    items = list(tokens)
    node = items[-1]
    for i in range(len(items) - 3, -1, -2):
        node = BinaryOp(items[i + 1], items[i], node)
    return node


bnf = None

def BNF():
    global bnf
    if not bnf:
        fnumber = Regex(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
        ident = Word(alphas, alphanums + "_")

        plus, minus, mult, div = map(Literal, "+-*/")
        lpar, rpar = map(Suppress, "()")
        addop = plus | minus
        multop = mult | div
        expop = Literal("^")

        expr = Forward()
        fn_call = (ident + lpar - expr + rpar).set_parse_action(_function)
        operand = (
            fn_call
            | fnumber.set_parse_action(_number)
            | ident.copy().set_parse_action(_name)
            | lpar + expr + rpar
        )
        # signs apply to a whole power, -2^2 = -(2^2)
        unary = Forward()
        power = (operand + (expop + unary)[...]).set_parse_action(_fold_right)
        unary <<= (addop[...] + power).set_parse_action(_signs)
        term = (unary + (multop + unary)[...]).set_parse_action(_fold_left)
        expr <<= (term + (addop + term)[...]).set_parse_action(_fold_left)
        bnf = expr
    return bnf


def _resolve(node, resolver):
    if isinstance(node, Variable):
        index = resolver(node.name)
        if index < 0:
            raise MathExprError(f"unknown variable '{node.name}' in expression", node.name)
        return Variable(index, node.name)
    if isinstance(node, Function):
        name = node.name.lower()
        if name not in fn:
            raise MathExprError(f"unknown function '{node.name}' in expression", node.name)
        return Function(name, _resolve(node.arg, resolver))
    if isinstance(node, UnaryMinus):
        return UnaryMinus(_resolve(node.operand, resolver))
    if isinstance(node, BinaryOp):
        return BinaryOp(node.op, _resolve(node.left, resolver), _resolve(node.right, resolver))
    return node


def create(formula, resolver):
    ''' parses formula into an expression tree.
    resolver maps a variable name to its index, or to -1 for an unknown name.
    Raises MathExprError naming the offending token. '''
    try:
        tree = BNF().parse_string(formula, parse_all=True)[0]
    except ParseBaseException as err:
        rest = formula[err.loc:].split()
        token = rest[0] if rest else formula.strip()
        raise MathExprError(f"invalid expression '{formula}' at '{token}'", token) from err
    return _resolve(tree, resolver)


def _eval(node, getter):
    if isinstance(node, Number):
        return np.float64(node.value)
    if isinstance(node, Variable):
        return np.float64(getter(node.index))
    if isinstance(node, UnaryMinus):
        return -_eval(node.operand, getter)
    if isinstance(node, BinaryOp):
        return opn[node.op](_eval(node.left, getter), _eval(node.right, getter))
    return fn[node.name](_eval(node.arg, getter))


def evaluate(tree, getter):
    ''' value of an expression tree; getter maps a variable index to its
    current value.  Division by zero and domain errors give inf or nan. '''
    with np.errstate(all="ignore"):
        return float(_eval(tree, getter))
