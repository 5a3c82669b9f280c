from .config import AppConfig
from .data_io import IngestResult, load_catalog, normalize_catalog
from .errors import CatalogSchemaError, ClusterConfigError, ImdbHybridError
from .pipeline import PipelineResult, run_pipeline
from .ranker import Ranker, ScoreWeights
from .schemas import EvaluationResult, RankedMovie, RecommendationRequest

__all__ = [
    "AppConfig",
    "CatalogSchemaError",
    "ClusterConfigError",
    "EvaluationResult",
    "ImdbHybridError",
    "IngestResult",
    "PipelineResult",
    "RankedMovie",
    "Ranker",
    "RecommendationRequest",
    "ScoreWeights",
    "load_catalog",
    "normalize_catalog",
    "run_pipeline",
]
