from .challenge_extractor import ChallengeExtractor, ExtractionOutcome, ExtractionStage
from .worker_pool import ExtractionWorkerPool, PoolClosedError

__all__ = [
    "ChallengeExtractor",
    "ExtractionOutcome",
    "ExtractionStage",
    "ExtractionWorkerPool",
    "PoolClosedError",
]
