"""Exceptions raised for malformed submissions."""


class SubmissionError(ValueError):
    """A submission violates a scorer precondition and cannot be graded."""
