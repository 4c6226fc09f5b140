import pytest

from domain.models import ChallengeRef, QueryOptions
from domain.parsers.url_builder import URLBuilder, build_search_url


def test_newest_javascript_query_matches_codewars_format() -> None:
    options = QueryOptions(
        sort_by="newest",
        language="javascript",
        status="approved",
        progress="kata-incomplete",
        difficulty=[6, 7],
        tags=[],
    )

    url = build_search_url(options)

    assert url == (
        "https://www.codewars.com/kata/search/javascript?q="
        "&r%5B%5D=-6&r%5B%5D=-7&xids=completed&beta=false"
        "&order_by=sort_date%20desc&sample=true"
    )
    assert url.endswith("&sample=true")


def test_empty_tags_and_difficulty_add_no_parameters() -> None:
    url = URLBuilder.build_search_url(QueryOptions(language="python"))

    assert "&tags=" not in url
    assert "r%5B%5D" not in url


def test_tags_keep_input_order_and_are_escaped_individually() -> None:
    options = QueryOptions(tags=("ASCII Art", "Algebra", "Algorithms"))

    url = URLBuilder.build_search_url(options)

    assert "&tags=ASCII%20Art%2CAlgebra%2CAlgorithms" in url


def test_encoding_is_deterministic() -> None:
    first = QueryOptions(language="ruby", difficulty=[8, 3], tags=["Fundamentals"])
    second = QueryOptions(language="ruby", difficulty=(8, 3), tags=("Fundamentals",))

    assert first == second
    assert build_search_url(first) == build_search_url(second)


@pytest.mark.parametrize(
    "language, slug",
    [
        ("c++", "cpp"),
        ("c#", "csharp"),
        ("f#", "fsharp"),
        ("λ calculus", "lambdacalc"),
        ("objective-c", "objc"),
        ("risc-v", "riscv"),
        ("all", ""),
        ("python", "python"),
    ],
)
def test_language_slugs(language, slug) -> None:
    assert URLBuilder.encode_language(language) == slug
    assert URLBuilder.build_search_url(QueryOptions(language=language)).startswith(
        f"https://www.codewars.com/kata/search/{slug}?q="
    )


@pytest.mark.parametrize(
    "progress, expected",
    [
        ("kata-untrained", "&xids=played"),
        ("kata-incomplete", "&xids=completed"),
        ("kata-completed", "&xids=not_completed"),
        ("all", ""),
    ],
)
def test_progress_parameters(progress, expected) -> None:
    assert URLBuilder.encode_progress(progress) == expected


@pytest.mark.parametrize(
    "status, expected",
    [
        ("approved-and-beta", ""),
        ("approved", "&beta=false"),
        ("beta", "&beta=true"),
        ("something-else", "&beta=false"),
    ],
)
def test_status_parameters(status, expected) -> None:
    assert URLBuilder.encode_status(status) == expected


def test_unknown_sort_passes_through_verbatim() -> None:
    raw = "&order_by=vote_score%20desc"
    assert URLBuilder.encode_sort(raw) == raw
    assert URLBuilder.encode_sort("hardest") == "&order_by=rank_id%20desc"


def test_difficulty_out_of_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        QueryOptions(difficulty=[9])


def test_default_query_options() -> None:
    options = QueryOptions.default()

    assert options.sort_by == "newest"
    assert options.language == "my-languages"
    assert options.progress == "kata-incomplete"
    assert options.difficulty == ()


def test_build_training_url() -> None:
    challenge = ChallengeRef(name="Multiply", path="/kata/50654ddff44f800200000004")

    url = URLBuilder.build_training_url(challenge, "c++")

    assert url == "https://www.codewars.com/kata/50654ddff44f800200000004/train/cpp"


def test_build_user_url() -> None:
    assert URLBuilder.build_user_url("some user") == "https://www.codewars.com/api/v1/users/some%20user"


def test_training_url_for_all_languages_keeps_language_name() -> None:
    challenge = ChallengeRef(name="Multiply", path="/kata/50654ddff44f800200000004")

    url = URLBuilder.build_training_url(challenge, "all")

    assert url == "https://www.codewars.com/kata/50654ddff44f800200000004/train/all"


def test_single_tag_string_is_one_tag() -> None:
    options = QueryOptions(tags="Algebra")

    assert options.tags == ("Algebra",)
    assert "&tags=Algebra" in build_search_url(options)
