class FibbenchError(Exception):
    pass

class BenchmarkError(FibbenchError):
    """Timed runs disagreed on the computed value"""

class AnalysisError(FibbenchError):
    """No usable benchmark results were found"""
