"""Exceptions raised by the insight engine"""
from typing import List

class InsightEngineError(Exception):
    """Base exception for insight engine errors"""
    pass

class InvalidProfileError(InsightEngineError):
    """Profile is missing required numeric data or cannot support ratio analysis"""
    def __init__(self, message: str, fields: List[str] = None):
        super().__init__(message)
        self.fields = fields or []

class AnalyzerError(InsightEngineError):
    """An analyzer raised while producing drafts"""
    def __init__(self, analyzer: str, cause: Exception):
        super().__init__(f"Analyzer '{analyzer}' failed: {cause}")
        self.analyzer = analyzer
        self.cause = cause

class StaleDataWarning(UserWarning):
    """Historical data needed for a comparison is absent; the comparison is skipped"""
    pass
