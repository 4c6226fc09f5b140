"""Builder for Codewars search, training and user URLs."""

from urllib.parse import quote

from loguru import logger

from domain.models import ChallengeRef, QueryOptions

# Characters JavaScript's encodeURI leaves untouched, besides alphanumerics and "-_.~"
_URI_SAFE = ";,/?:@&=+$!*'()#"


class URLBuilder:
    """Translates query options into Codewars URLs."""

    BASE_URL = "https://www.codewars.com"
    SEARCH_URL = f"{BASE_URL}/kata/search"
    USER_API_URL = f"{BASE_URL}/api/v1/users"

    TAG_SEPARATOR = "%2C"
    SAMPLE_FLAG = "&sample=true"

    PROGRESS_PARAMS = {
        "kata-untrained": "&xids=played",
        "kata-incomplete": "&xids=completed",
        "kata-completed": "&xids=not_completed",
    }

    STATUS_PARAMS = {
        "approved-and-beta": "",
        "approved": "&beta=false",
        "beta": "&beta=true",
    }
    DEFAULT_STATUS_PARAM = "&beta=false"

    SORT_PARAMS = {
        "oldest": "&order_by=published_at%20asc",
        "newest": "&order_by=sort_date%20desc",
        "popularity": "&order_by=popularity%20desc",
        "positive-feedback": "&order_by=satisfaction_percent%20desc%2Ctotal_completed%20desc",
        "most-completed": "&order_by=total_completed%20desc",
        "least-completed": "&order_by=total_completed%20asc",
        "hardest": "&order_by=rank_id%20desc",
        "easiest": "&order_by=rank_id%20asc",
        "name": "&order_by=name%20asc",
        "low-satisfaction": "&order_by=satisfaction_percent%20asc",
    }

    LANGUAGE_SLUGS = {
        "all": "",
        "c++": "cpp",
        "c#": "csharp",
        "f#": "fsharp",
        "λ calculus": "lambdacalc",
        "objective-c": "objc",
        "risc-v": "riscv",
    }

    @classmethod
    def encode_tags(cls, tags: tuple[str, ...]) -> str:
        """
        Encode tags as a single comma-separated parameter.

        Example: ("ASCII Art", "Algebra") -> "&tags=ASCII%20Art%2CAlgebra"
        """
        if not tags:
            return ""

        encoded = [quote(tag, safe=_URI_SAFE) for tag in tags]
        return f"&tags={cls.TAG_SEPARATOR.join(encoded)}"

    @classmethod
    def encode_difficulty(cls, difficulty: tuple[int, ...]) -> str:
        """Encode each kyu level as a repeated, negated rank parameter."""
        return "".join(f"&r%5B%5D=-{level}" for level in difficulty)

    @classmethod
    def encode_progress(cls, progress: str) -> str:
        return cls.PROGRESS_PARAMS.get(progress, "")

    @classmethod
    def encode_status(cls, status: str) -> str:
        return cls.STATUS_PARAMS.get(status, cls.DEFAULT_STATUS_PARAM)

    @classmethod
    def encode_sort(cls, sort_by: str) -> str:
        # Unknown values are raw order_by fragments supplied by the caller
        return cls.SORT_PARAMS.get(sort_by, sort_by)

    @classmethod
    def encode_language(cls, language: str) -> str:
        return cls.LANGUAGE_SLUGS.get(language, language)

    @classmethod
    def build_search_url(cls, options: QueryOptions) -> str:
        """
        Build the search URL returning one sample page of matching katas.
        """
        language = cls.encode_language(options.language)
        query = "".join(
            [
                cls.encode_difficulty(options.difficulty),
                cls.encode_progress(options.progress),
                cls.encode_tags(options.tags),
                cls.encode_status(options.status),
                cls.encode_sort(options.sort_by),
            ]
        )

        url = f"{cls.SEARCH_URL}/{language}?q={query}{cls.SAMPLE_FLAG}"

        logger.debug(f"Built search URL: {url}")
        return url

    @classmethod
    def build_training_url(cls, challenge: ChallengeRef, language: str) -> str:
        """
        Build the training page URL for a challenge in the given language.

        Languages without a site slug ("all") keep their own name in the path.
        """
        slug = cls.encode_language(language) or language
        return f"{cls.BASE_URL}{challenge.path}/train/{slug}"

    @classmethod
    def build_user_url(cls, username: str) -> str:
        return f"{cls.USER_API_URL}/{quote(username, safe='')}"


def build_search_url(options: QueryOptions) -> str:
    """Convenience function to build a search URL."""
    return URLBuilder.build_search_url(options)
