"""Lexer and parser turning infix text into expression trees."""

from .lexer import Token, TokenKind, Lexer, tokenize, IMPLICIT_MULTIPLICATION_PAIRS
from .parser import Parser, parse

__all__ = ['Token', 'TokenKind', 'Lexer', 'tokenize', 'IMPLICIT_MULTIPLICATION_PAIRS', 'Parser', 'parse']
