"""
Exceptions raised by the archive model and the diff engine.
"""


class OoxmlDiffError(Exception):
    """
    Base class of all errors raised by this package.
    """


class LoadError(OoxmlDiffError):
    """
    Raised if the input bytes are not a valid archive container.
    """


class NotFoundError(OoxmlDiffError, KeyError):
    """
    Raised if a read or remove addresses a path without a matching entry.
    """

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self):
        return f'No entry at path: {self.path}'


class ComparisonReadError(OoxmlDiffError):
    """
    Raised if the content of one side could not be read while comparing. This error is always
    recovered by treating the pair as different.
    """

    def __init__(self, path: str, side: str):
        super().__init__(f'Could not read {side} content of {path}')
        self.path = path
        self.side = side


class FormatError(OoxmlDiffError):
    """
    Raised if XML text could not be parsed for pretty-printing. Callers fall back to the
    unformatted text.
    """
