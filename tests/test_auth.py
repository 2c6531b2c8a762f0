import pytest

from core.auth import AuthOutcome, authenticate, is_admin
from core.schemas import AccountStatus, Role, UserAccount


@pytest.fixture
def users():
    return [
        UserAccount(id="1", name="Ana", email=" Ana@Example.com", password="secret", role=Role.ADMIN),
        UserAccount(id="2", name="Bo", email="bo@example.com", password="pw", status=AccountStatus.INACTIVE),
        UserAccount(id="3", name="Cy", email="cy@example.com", password=""),
    ]


def test_email_is_trimmed_and_case_insensitive(users):
    result = authenticate(users, "  ANA@example.COM ", "secret")
    assert result.ok
    assert result.user.id == "1"


def test_password_is_trimmed_but_exact(users):
    assert authenticate(users, "ana@example.com", " secret ").ok
    assert authenticate(users, "ana@example.com", "Secret").outcome is AuthOutcome.NOT_FOUND


def test_inactive_account_is_refused_with_correct_password(users):
    result = authenticate(users, "bo@example.com", "pw")
    assert not result.ok
    assert result.outcome is AuthOutcome.INACTIVE
    assert "inactive" in result.message


def test_inactive_account_with_wrong_password_is_refused(users):
    assert not authenticate(users, "bo@example.com", "nope").ok


def test_empty_stored_password_uses_sheet_default(users):
    assert authenticate(users, "cy@example.com", "123456").ok
    assert not authenticate(users, "cy@example.com", "").ok


def test_unknown_user(users):
    result = authenticate(users, "zed@example.com", "x")
    assert result.outcome is AuthOutcome.NOT_FOUND
    assert result.user is None


def test_missing_configuration_blocks_login(users):
    result = authenticate(users, "ana@example.com", "secret", configured=False)
    assert result.outcome is AuthOutcome.NOT_CONFIGURED
    assert result.message


def test_is_admin(users):
    assert is_admin(users[0])
    assert not is_admin(users[1])
    assert not is_admin(None)
