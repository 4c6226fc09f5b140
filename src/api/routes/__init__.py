from api.routes.challenge import ChallengeController

__all__ = ["ChallengeController"]
