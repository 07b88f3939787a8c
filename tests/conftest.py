from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.application.services.profile_resolver import ProfileResolver
from app.domain.models.appointment import Appointment, AppointmentStatus
from app.domain.models.weight_log import WeightLog
from app.infrastructure.session_events import SessionEvents
from app.interfaces import deps
from app.main import app
from tests.fakes import (
    ADMIN,
    CLIENT,
    FakeAppointmentRepository,
    FakeAuthGateway,
    FakeFileStorage,
    FakeInvoiceRepository,
    FakeProfileRepository,
    FakeSessionAuditRepository,
    FakeWeightLogRepository,
)


@pytest.fixture
def fakes():
    events = SessionEvents()
    auth = FakeAuthGateway(events)
    auth.register(ADMIN.email, "admin-pass", ADMIN.id)
    auth.register(CLIENT.email, "client-pass", CLIENT.id)
    return SimpleNamespace(
        events=events,
        auth=auth,
        profiles=FakeProfileRepository([ADMIN, CLIENT]),
        weights=FakeWeightLogRepository([
            WeightLog(id="w-a", client_id=CLIENT.id, weight=80.0, date=date(2024, 1, 5)),
            WeightLog(id="w-b", client_id=CLIENT.id, weight=78.4, date=date(2024, 2, 5)),
        ]),
        appointments=FakeAppointmentRepository([
            Appointment(
                id="a1",
                client_id=CLIENT.id,
                date_time=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
                status=AppointmentStatus.COMPLETED,
                price=Decimal("45.00"),
                client_name=CLIENT.full_name,
            ),
        ]),
        invoices=FakeInvoiceRepository(),
        audits=FakeSessionAuditRepository(),
        storage=FakeFileStorage(),
    )


@pytest.fixture
def resolver(fakes):
    return ProfileResolver(fakes.profiles, max_attempts=3, retry_delay=0)


@pytest.fixture
def api(fakes):
    overrides = {
        deps.get_session_events: lambda: fakes.events,
        deps.get_auth_gateway: lambda: fakes.auth,
        deps.get_profile_repository: lambda: fakes.profiles,
        deps.get_weight_log_repository: lambda: fakes.weights,
        deps.get_appointment_repository: lambda: fakes.appointments,
        deps.get_invoice_repository: lambda: fakes.invoices,
        deps.get_session_audit_repository: lambda: fakes.audits,
        deps.get_file_storage: lambda: fakes.storage,
        deps.get_profile_resolver: lambda: ProfileResolver(fakes.profiles, max_attempts=3, retry_delay=0),
    }
    app.dependency_overrides.update(overrides)
    yield TestClient(app)
    app.dependency_overrides.clear()
