class AnalysisFailed(RuntimeError):
    """
    Single surfaced failure of an analysis request.
    Covers transport errors, non-JSON payloads and schema mismatches alike;
    the original cause is chained via __cause__ for logging only.
    """
