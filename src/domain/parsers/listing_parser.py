"""Parser for challenge entries on the kata search page."""

import re

from loguru import logger

from domain.exceptions import NoChallengesFoundError
from domain.models import ChallengeRef


class ListingParser:
    """
    Extracts (name, path) pairs from the markdown rendering of a search page.

    Each kata renders as a rank marker line, a blank line, then a markdown link:

        6 kyu

        [Multiply](/kata/50654ddff44f800200000004)
    """

    NAME_PATTERN = re.compile(r"^\d\skyu\n\n\[(.*)\]", re.MULTILINE)
    LINK_PATTERN = re.compile(r"^\d\skyu\n\n\[.*\]\((.*)\)", re.MULTILINE)

    @classmethod
    def parse(cls, text: str) -> list[ChallengeRef]:
        """
        Parse challenge references in document order.

        Raises:
            NoChallengesFoundError: If either pattern finds nothing or the
                name and link counts disagree
        """
        names = cls.NAME_PATTERN.findall(text)
        links = cls.LINK_PATTERN.findall(text)

        if not names or not links:
            logger.warning("No challenge entries found in listing")
            raise NoChallengesFoundError()

        if len(names) != len(links):
            logger.warning(
                f"Listing names and links disagree: {len(names)} names, {len(links)} links"
            )
            raise NoChallengesFoundError(
                f"Listing is inconsistent: found {len(names)} names but {len(links)} links."
            )

        challenges = [
            ChallengeRef(name=name.strip() or f"Challenge {index + 1}", path=link.strip())
            for index, (name, link) in enumerate(zip(names, links))
        ]

        logger.debug(f"Parsed {len(challenges)} challenge(s) from listing")
        return challenges
