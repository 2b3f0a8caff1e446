"""Rule Sets: the validation table for every endpoint that takes input.

Messages match what API clients already match on; change them only together
with the clients.
"""

from community_api.core.validation import (
    FieldRule, Location, exists, is_email, is_string, min_length,
)

_NAME_MSG = "Name must be at least 2 characters long."
_EMAIL_MSG = "Please provide a valid email address."
_PASSWORD_MSG = "Password should be at least 2 characters."


def _name_rule(message: str) -> FieldRule:
    return FieldRule("name", (exists(), is_string(), min_length(2, message)))


_EMAIL_RULE = FieldRule("email", (exists(), is_email(_EMAIL_MSG)))
_PASSWORD_RULE = FieldRule(
    "password", (exists(), is_string(), min_length(2, _PASSWORD_MSG)),
)


def _reference_rule(
    name: str, label: str, location: Location = Location.BODY,
) -> FieldRule:
    return FieldRule(
        name,
        (
            exists(f"{label} ID must be provided.", falsy=True),
            is_string(f"{label} ID must be a string."),
        ),
        location,
    )


SIGNUP_RULES = (_name_rule(_NAME_MSG), _EMAIL_RULE, _PASSWORD_RULE)

SIGNIN_RULES = (_EMAIL_RULE, _PASSWORD_RULE)

CREATE_ROLE_RULES = (_name_rule("Name should be at least 2 characters."),)

CREATE_COMMUNITY_RULES = (_name_rule(_NAME_MSG),)

LIST_MEMBERS_RULES = (
    FieldRule(
        "id",
        (exists(falsy=True), is_string("Please specify community id.")),
        Location.PATH,
    ),
)

ADD_MEMBER_RULES = (
    _reference_rule("community", "Community"),
    _reference_rule("user", "User"),
    _reference_rule("role", "Role"),
)

REMOVE_MEMBER_RULES = (_reference_rule("id", "User", Location.PATH),)
