from .email_analyzer import EmailAnalyzer

__all__ = ['EmailAnalyzer']
