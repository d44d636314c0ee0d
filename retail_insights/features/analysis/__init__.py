from .services import AnalysisService, AnalysisOrchestrator, BatchAnalysis, COMBINED_RESULT_KEY

__all__ = ['AnalysisService', 'AnalysisOrchestrator', 'BatchAnalysis', 'COMBINED_RESULT_KEY']
