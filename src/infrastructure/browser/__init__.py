from .interception import should_block
from .playwright_session import PlaywrightPageSession, PlaywrightSessionFactory

__all__ = ["PlaywrightPageSession", "PlaywrightSessionFactory", "should_block"]
