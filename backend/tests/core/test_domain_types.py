"""Domain Types: slug derivation and well-known role names."""

from community_api.core.domain_types import RoleName, slugify


def test_slugify_lowercases_and_joins_words():
    assert slugify("Python Devs") == "python-devs"


def test_slugify_collapses_separator_runs():
    assert slugify("Rock  &  Roll -- Fans") == "rock-roll-fans"


def test_slugify_keeps_underscores():
    assert slugify("snake_case club") == "snake_case-club"


def test_role_names_match_stored_values():
    assert RoleName.ADMIN == "Community Admin"
    assert RoleName.MODERATOR.value == "Community Moderator"
    assert RoleName.MEMBER.value == "Community Member"
