# pdfutils/errors.py


class PdfUtilsError(Exception):
    """Base class for errors reported to the user."""


class InvalidInputError(PdfUtilsError, ValueError):
    """User input (page numbers, names, paths) could not be used."""


class InvalidPasswordError(PdfUtilsError):
    """The PDF needs a password that was not given or is wrong."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__("Incorrect password for this PDF file!")


class OperationCancelled(PdfUtilsError):
    pass
