from .challenge import ChallengeResponse, QueryResponse

__all__ = ["ChallengeResponse", "QueryResponse"]
