from .environment import get_app_mode, is_demo_mode
from .errors import ConfigError, JobHunterError, ProviderError, ResponseFormatError
from .models import FormField, JobContext, MatchResult, PageAnalysis, UserProfile
from .page_analyzer import PageAnalyzer
from .demo import DemoPageAnalyzer, get_page_analyzer

__all__ = [
    "get_app_mode", "is_demo_mode",
    "JobHunterError", "ConfigError", "ProviderError", "ResponseFormatError",
    "FormField", "JobContext", "MatchResult", "PageAnalysis", "UserProfile",
    "PageAnalyzer", "DemoPageAnalyzer", "get_page_analyzer",
]
