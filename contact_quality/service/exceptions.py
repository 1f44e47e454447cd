class AnalysisServiceError(Exception):
    """Raised when the analysis service returns something unusable."""


class AnalysisServiceNetworkError(AnalysisServiceError):
    """Raised when a call to the analysis service fails at the transport level."""
