"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
"""


class ProgramPersistenceError(Exception):
    """Error while storing a generated program.

    Raised when the program row cannot be written, for example because of
    a database error or a constraint violation.
    """

    pass


class PRPersistenceError(Exception):
    """Error while storing one-rep maxes or their history."""

    pass
