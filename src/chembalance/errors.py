"""Exceptions and warnings raised while balancing an equation."""


class BalanceError(Exception):
    """Base class for every failure of a balance attempt.

    The diagnostic keyword arguments are kept so that callers can inspect
    the offending input without parsing the message.
    """

    def __init__(self, msg, **diagn):
        super().__init__(msg)
        self.msg = msg
        self.diagnostic = diagn

    @property
    def kind(self):
        return type(self).__name__

    def __str__(self):
        return self.msg


class ParseError(BalanceError):
    """Raised while turning text into compounds and compositions."""


class InvalidCharacter(ParseError):
    """A compound contains a character outside letters, digits and parentheses."""


class UnmatchedParentheses(ParseError):
    """Opening and closing parentheses of a compound do not pair up."""


class MalformedEntity(ParseError):
    """An entity does not start with an uppercase letter or a parenthesis."""


class EmptyToken(ParseError):
    """An entity or a compound is empty."""


class InvalidNumber(ParseError):
    """A trailing digit run cannot be used as a count."""


class InvalidEquation(ParseError):
    """The equation does not contain exactly one ``->``."""


class IncompleteEquation(ParseError):
    """A half-equation or one of its compounds is empty."""


class EmptyCompoundList(ParseError):
    """One side of the equation has no compounds."""


class ElementMismatch(BalanceError):
    """Reactants and products are not made of the same elements.

    No choice of coefficients can conserve mass for such an equation.
    """

    def __init__(self, msg, missing=(), extra=(), **diagn):
        super().__init__(msg, **diagn)
        self.missing = list(missing)
        self.extra = list(extra)


class FailedToBalance(BalanceError):
    """No coefficient vector within the configured bound balances the equation.

    This is not a proof that the equation cannot be balanced: a larger
    ``max_coefficient`` may find a solution.
    """

    def __init__(self, msg, max_coefficient, **diagn):
        super().__init__(msg, **diagn)
        self.max_coefficient = max_coefficient


class NoResult(BalanceError):
    """A result was requested before any balance attempt succeeded."""


class SuspiciousElementWarning(UserWarning):
    """Warning for an element symbol longer than any real one."""

    def __init__(self, msg, symbol):
        super().__init__(msg)
        self.msg = msg
        self.symbol = symbol

    def __str__(self):
        return self.msg
