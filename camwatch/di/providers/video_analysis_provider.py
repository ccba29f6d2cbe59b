from typing import TYPE_CHECKING

from ...application.use_cases.video_analysis import (
    GetAnalysisUseCase,
    ListAnalysesUseCase,
    UploadVideoUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class VideoAnalysisProvider:
    """Video analysis use case provider - upload, list and result view"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_factory(UploadVideoUseCase, lambda context: UploadVideoUseCase(context))
        container.register_factory(ListAnalysesUseCase, lambda context: ListAnalysesUseCase(context))
        container.register_factory(GetAnalysisUseCase, lambda context: GetAnalysisUseCase(context))
