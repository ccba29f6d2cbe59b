from .analysis_views import user_analyses_view
from .get_analysis import GetAnalysisUseCase
from .list_analyses import ListAnalysesUseCase, fetch_analyses
from .upload_video import UploadVideoUseCase

__all__ = [
    "ListAnalysesUseCase",
    "GetAnalysisUseCase",
    "UploadVideoUseCase",
    "fetch_analyses",
    "user_analyses_view",
]
