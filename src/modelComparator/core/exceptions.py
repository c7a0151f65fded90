"""
Exceptions raised by the modelComparator pipeline.

Per-candidate fit failures (EstimatorFitError) are recorded by the tuner and
never escape it; everything else propagates to the caller.
"""


class ModelComparatorError(Exception):
    """Base class for all pipeline errors."""
    pass


class DataValidationError(ModelComparatorError):
    """Raised when the input table violates the dataset invariants."""
    pass


class InsufficientDataError(ModelComparatorError):
    """Raised when a label class is too small to stratify."""
    pass


class DuplicateFamilyError(ModelComparatorError):
    """Raised when two model families share a name."""
    pass


class RegistryFrozenError(ModelComparatorError):
    """Raised when registering into a registry that is already in use."""
    pass


class UnknownMetricError(ModelComparatorError, ValueError):
    """Raised for a metric name that is not supported."""
    pass


class EstimatorFitError(ModelComparatorError):
    """A single candidate failed to fit or score on one fold."""

    def __init__(self, family: str, candidate_index: int, fold: str, cause: BaseException):
        self.family = family
        self.candidate_index = candidate_index
        self.fold = fold
        self.cause = cause
        super().__init__(
            f"family={family} candidate={candidate_index} fold={fold}: "
            f"{type(cause).__name__}: {cause}"
        )


class AllCandidatesFailedError(ModelComparatorError):
    """Raised when no hyperparameter candidate of a family could be fitted."""

    def __init__(self, family: str, errors):
        self.family = family
        self.errors = list(errors)
        detail = self.errors[0] if self.errors else "no candidates"
        super().__init__(
            f"All {len(self.errors)} candidates failed for family '{family}' "
            f"(first error: {detail})"
        )


class NoViableCandidateError(ModelComparatorError):
    """Raised when selection finds no non-failed candidate."""
    pass


class TuningCancelledError(ModelComparatorError):
    """Raised inside a family task after its cancellation was requested."""
    pass
