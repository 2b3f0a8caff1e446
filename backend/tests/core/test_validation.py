"""Request Validator: tests for rule evaluation and the endpoint rule sets.

Tests cover:
    - every violation is reported, no bail-out after the first
    - checks without their own message are dropped from the batch
    - "exists" vs "exists with falsy" semantics
    - path-located rules read from the path, not the body
"""

from community_api.core.errors import ErrorCode, FieldError
from community_api.core.validation import (
    MISSING, SENTINEL_MESSAGE, Check, FieldRule, Location, RequestPayload,
    exists, is_email, is_string, min_length, validate,
)
from community_api.services.rule_sets import (
    ADD_MEMBER_RULES, CREATE_ROLE_RULES, LIST_MEMBERS_RULES,
    REMOVE_MEMBER_RULES, SIGNIN_RULES, SIGNUP_RULES,
)


def _messages(result: FieldError) -> list[tuple[str, str]]:
    return [(i.param, i.message) for i in result.issues]


# ─── validate ────────────────────────────────────────────────────

def test_valid_payload_returns_none():
    body = {"name": "Ada", "email": "ada@mail.com", "password": "secret"}
    assert validate(RequestPayload(body=body), SIGNUP_RULES) is None


def test_every_violation_is_reported():
    body = {"name": "A", "email": "not-an-email", "password": "x"}
    result = validate(RequestPayload(body=body), SIGNUP_RULES)
    assert _messages(result) == [
        ("name", "Name must be at least 2 characters long."),
        ("email", "Please provide a valid email address."),
        ("password", "Password should be at least 2 characters."),
    ]
    assert all(i.code == ErrorCode.INVALID_INPUT for i in result.issues)


def test_missing_fields_report_only_messaged_checks():
    """exists()/is_string() carry no message, so only min_length speaks."""
    result = validate(RequestPayload(), SIGNUP_RULES)
    assert _messages(result) == [
        ("name", "Name must be at least 2 characters long."),
        ("email", "Please provide a valid email address."),
        ("password", "Password should be at least 2 characters."),
    ]


def test_sentinel_message_is_filtered_case_insensitively():
    rules = (FieldRule("x", (Check(lambda v: False, SENTINEL_MESSAGE.upper()),)),)
    assert validate(RequestPayload(body={}), rules) is None


def test_role_name_message():
    result = validate(RequestPayload(body={"name": "a"}), CREATE_ROLE_RULES)
    assert _messages(result) == [
        ("name", "Name should be at least 2 characters."),
    ]


def test_signin_accepts_existing_credentials_shape():
    body = {"email": "ada@mail.com", "password": "pw"}
    assert validate(RequestPayload(body=body), SIGNIN_RULES) is None


# ─── reference rules ─────────────────────────────────────────────

def test_add_member_missing_ids_reports_provided_messages():
    result = validate(RequestPayload(body={}), ADD_MEMBER_RULES)
    assert _messages(result) == [
        ("community", "Community ID must be provided."),
        ("community", "Community ID must be a string."),
        ("user", "User ID must be provided."),
        ("user", "User ID must be a string."),
        ("role", "Role ID must be provided."),
        ("role", "Role ID must be a string."),
    ]


def test_add_member_empty_string_counts_as_missing():
    body = {"community": "", "user": "1", "role": "2"}
    result = validate(RequestPayload(body=body), ADD_MEMBER_RULES)
    assert _messages(result) == [("community", "Community ID must be provided.")]


def test_add_member_non_string_id():
    body = {"community": 5, "user": "1", "role": "2"}
    result = validate(RequestPayload(body=body), ADD_MEMBER_RULES)
    assert _messages(result) == [("community", "Community ID must be a string.")]


def test_path_rules_read_path_not_body():
    payload = RequestPayload(body={"id": "ignored"}, path={"id": "123"})
    assert validate(payload, REMOVE_MEMBER_RULES) is None
    assert validate(payload, LIST_MEMBERS_RULES) is None


def test_path_rule_missing_id():
    result = validate(RequestPayload(body={"id": "x"}), REMOVE_MEMBER_RULES)
    assert _messages(result) == [
        ("id", "User ID must be provided."),
        ("id", "User ID must be a string."),
    ]


# ─── checks ──────────────────────────────────────────────────────

def test_exists_plain_accepts_falsy_values():
    assert exists().predicate("") is True
    assert exists().predicate(None) is True


def test_exists_falsy_rejects_empty():
    assert exists(falsy=True).predicate("") is False
    assert exists(falsy=True).predicate(0) is False
    assert exists(falsy=True).predicate("x") is True


def test_is_string():
    assert is_string().predicate("x") is True
    assert is_string().predicate(3) is False


def test_min_length_counts_stringified_value():
    assert min_length(2).predicate(12) is True
    assert min_length(2).predicate("a") is False


def test_is_email():
    assert is_email().predicate("someone@mail.com") is True
    assert is_email().predicate("someone@") is False
    assert is_email().predicate(42) is False


def test_location_lookup_defaults_to_body():
    rule = FieldRule("name", (exists(),))
    assert rule.location == Location.BODY


def test_rules_read_only_body_and_path():
    assert {loc.value for loc in Location} == {"body", "path"}
    assert RequestPayload(path={"id": "1"}).lookup(Location.BODY, "id") is MISSING
