

class SlispError(Exception):
    """ Base class for all slisp errors"""
    pass


class SlispSyntaxError(SlispError):
    """ Raised by the reader when source text is not a single well formed expression"""


class InvalidTokenError(SlispSyntaxError):
    """ Raised when a token cannot be classified as an atom"""


class InterpreterSemanticError(SlispError):
    """ Raised for every contract violation found while evaluating"""


class ArityError(InterpreterSemanticError):
    """ Raised when a procedure or special form gets the wrong number of operands"""


class SemanticTypeError(InterpreterSemanticError):
    """ Raised when an operand has the wrong atom type"""


class UnboundSymbolError(InterpreterSemanticError):
    """ Raised when a symbol is used before it is bound"""


class UnknownProcedureError(InterpreterSemanticError):
    """ Raised when the operator of an application does not name a procedure"""


class RedefinitionError(InterpreterSemanticError):
    """ Raised when define targets a built-in or special form name"""


class DivisionByZeroError(InterpreterSemanticError):
    """ Raised when / is called with a divisor of exactly zero"""
