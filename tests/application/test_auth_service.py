import asyncio
from datetime import date

import pytest

from app.application.services.auth_service import admin_login, login, logout, signup, validate_login
from app.application.services.profile_service import update_profile
from app.core.exceptions import (
    AppError,
    ForbiddenException,
    PartialFailureError,
    ProfileNotFoundError,
    UnauthorizedException,
    ValidationException,
)
from app.domain.models.weight_log import WeightLog
from app.domain.schemas.profile import ProfileUpdate
from app.infrastructure.session_events import SessionEvent
from tests.fakes import ADMIN, CLIENT, store_failure


@pytest.mark.parametrize(
    ("email", "password", "field"),
    [
        ("", "secret", "email"),
        ("not-an-email", "secret", "email"),
        ("marie@example.com", "", "password"),
    ],
)
def test_validate_login_rejects_before_network(fakes, resolver, email, password, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        asyncio.run(login(fakes.auth, resolver, fakes.events, email, password))

    assert exc_info.value.details == {"field": field}
    assert fakes.auth.sign_in_calls == 0


def test_validate_login_accepts_well_formed_input() -> None:
    validate_login("marie@example.com", "secret")


def test_login_maps_invalid_credentials_to_localized_message(fakes, resolver) -> None:
    with pytest.raises(UnauthorizedException) as exc_info:
        asyncio.run(login(fakes.auth, resolver, fakes.events, CLIENT.email, "wrong"))

    assert exc_info.value.message == "Email ou mot de passe incorrect"


def test_login_returns_session_and_profile(fakes, resolver) -> None:
    session, profile = asyncio.run(login(fakes.auth, resolver, fakes.events, CLIENT.email, "client-pass"))

    assert session.user_id == CLIENT.id
    assert profile == CLIENT


def test_login_without_profile_signs_out_again(fakes, resolver) -> None:
    fakes.auth.register("ghost@example.com", "pass", "ghost")

    with pytest.raises(ProfileNotFoundError):
        asyncio.run(login(fakes.auth, resolver, fakes.events, "ghost@example.com", "pass"))

    assert len(fakes.auth.signed_out) == 1


def test_admin_login_refuses_client_and_invalidates_session(fakes, resolver) -> None:
    published = []

    async def listener(event, session):
        published.append(event)

    fakes.events.subscribe(CLIENT.id, listener)

    with pytest.raises(ForbiddenException) as exc_info:
        asyncio.run(admin_login(fakes.auth, resolver, fakes.events, CLIENT.email, "client-pass"))

    assert exc_info.value.message == "Accès réservé aux administrateurs"
    token = fakes.auth.signed_out[0]
    assert fakes.events.is_revoked(token)
    assert asyncio.run(fakes.auth.get_session(token)) is None
    assert SessionEvent.SIGNED_IN not in published


def test_admin_login_accepts_admin(fakes, resolver) -> None:
    session, profile = asyncio.run(admin_login(fakes.auth, resolver, fakes.events, ADMIN.email, "admin-pass"))

    assert profile == ADMIN
    assert fakes.auth.signed_out == []
    assert not fakes.events.is_revoked(session.access_token)


def test_signup_creates_client_session(fakes, resolver) -> None:
    # The provider creates the profile row; seed it the way its trigger would
    fakes.profiles.missing_reads = 1
    provider_sign_up = fakes.auth.sign_up

    async def sign_up_with_trigger(email, password, metadata):
        session = await provider_sign_up(email, password, metadata)
        await fakes.profiles.create({"id": session.user_id, "email": email, **metadata})
        return session

    fakes.auth.sign_up = sign_up_with_trigger

    session, profile = asyncio.run(signup(fakes.auth, resolver, fakes.events, "Sophie", "sophie@example.com", "pass123"))

    assert profile.id == session.user_id
    assert profile.full_name == "Sophie"
    assert profile.role.value == "client"


def test_signup_without_profile_discards_new_session(fakes, resolver) -> None:
    with pytest.raises(PartialFailureError) as exc_info:
        asyncio.run(signup(fakes.auth, resolver, fakes.events, "Sophie", "sophie@example.com", "pass123"))

    error = exc_info.value
    assert error.status_code == 502
    assert error.details["completed"] == ["credential"]
    assert error.details["failed"] == "profile"
    token = fakes.auth.signed_out[0]
    assert fakes.events.is_revoked(token)
    assert asyncio.run(fakes.auth.get_session(token)) is None


def test_logout_records_last_weight(fakes) -> None:
    session = fakes.auth.issue(CLIENT.id)
    fakes.weights.logs.append(WeightLog(client_id=CLIENT.id, weight=77.7, date=date(2024, 3, 1)))

    audited = asyncio.run(logout(fakes.auth, fakes.events, fakes.weights, fakes.audits, session, CLIENT))

    assert audited
    assert fakes.audits.rows[0].user_id == CLIENT.id
    assert fakes.audits.rows[0].last_weight == 77.7
    assert fakes.events.is_revoked(session.access_token)


def test_logout_survives_audit_failure(fakes) -> None:
    session = fakes.auth.issue(CLIENT.id)
    fakes.audits.fail = store_failure()

    audited = asyncio.run(logout(fakes.auth, fakes.events, fakes.weights, fakes.audits, session, CLIENT))

    assert not audited
    assert fakes.auth.signed_out == [session.access_token]


def test_logout_failure_keeps_session(fakes) -> None:
    session = fakes.auth.issue(CLIENT.id)
    fakes.auth.fail_sign_out = True

    with pytest.raises(AppError):
        asyncio.run(logout(fakes.auth, fakes.events, fakes.weights, fakes.audits, session, CLIENT))

    assert not fakes.events.is_revoked(session.access_token)
    assert fakes.audits.rows == []


def test_update_profile_writes_row_and_email(fakes) -> None:
    changes = ProfileUpdate(full_name="Marie L.", email="marie.l@example.com", phone="0601020304")

    result = asyncio.run(update_profile(fakes.profiles, fakes.auth, fakes.events, CLIENT, changes))

    assert result.profile.full_name == "Marie L."
    assert result.profile.phone == "0601020304"
    assert result.email_updated
    assert fakes.auth.email_updates == [(CLIENT.id, "marie.l@example.com")]


def test_update_profile_reports_email_partial_failure(fakes) -> None:
    fakes.auth.fail_update_email = True
    changes = ProfileUpdate(full_name="Marie L.", email="taken@example.com")

    result = asyncio.run(update_profile(fakes.profiles, fakes.auth, fakes.events, CLIENT, changes))

    assert result.partial_failure
    assert not result.email_updated
    assert fakes.profiles.profiles[CLIENT.id].full_name == "Marie L."


def test_update_profile_keeps_role(fakes) -> None:
    changes = ProfileUpdate(full_name="Marie", email=CLIENT.email)

    result = asyncio.run(update_profile(fakes.profiles, fakes.auth, fakes.events, CLIENT, changes))

    assert result.profile.role == CLIENT.role
    assert fakes.auth.email_updates == []
