"""Error types raised by the iqdb client."""


class IqdbError(Exception):
    """Base class for every failure raised by the iqdb client."""


class TransportError(IqdbError):
    """Raised when iqdb.org cannot be reached or answers with an HTTP error."""


class StructureError(IqdbError):
    """Raised when an expected element is missing from a fetched page."""

    def __init__(self, tag: str, path: str, detail: str = ""):
        self.tag = tag
        self.path = path
        message = f"expected <{tag}> under {path or 'document'}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class FormatError(IqdbError):
    """Raised when page text or an attribute cannot be parsed into a typed value."""

    def __init__(self, value: str, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"cannot parse {value!r} as {expected}")
