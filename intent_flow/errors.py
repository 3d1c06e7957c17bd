"""Exceptions raised by the Intent Flow collaborators."""


class IntentFlowError(Exception):
    """Base class for every error reported by this package."""


class ConfigurationError(IntentFlowError):
    """Raised when a flow configuration knob is out of range."""


class RecordFileError(IntentFlowError):
    """Raised when a record file is missing, unsupported or undecodable."""


class RecordValidationError(IntentFlowError):
    """Raised when a row of a record file fails structural validation.

    Attributes:
        index: Zero-based position of the offending row in the file.
        reason: Human readable validation message.
    """

    def __init__(self, *, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid thread record at row {index}: {reason}")
