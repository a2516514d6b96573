"""Smoke tests for the admin registration."""

from datetime import date
from decimal import Decimal

import pytest

from sponsorships import models


@pytest.fixture
def registration(db):
    event = models.Event.objects.create(
        id="event_c", name="Weekly Sabha", individual_cost=Decimal("200"), individual_upto=5
    )
    models.EventDate.objects.create(event=event, date=date(2026, 11, 8), title="Diwali Sabha")
    registration = models.Registration.objects.create(
        first_name="Ravi", last_name="Patel", email="ravi@example.com"
    )
    models.RegistrationDate.objects.create(
        registration=registration, event=event, date=date(2026, 11, 8)
    )
    return registration


@pytest.mark.django_db
class TestAdminPages:
    """Admin change lists and change forms render."""

    @pytest.mark.parametrize(
        "url",
        [
            "/admin/sponsorships/event/",
            "/admin/sponsorships/eventdate/",
            "/admin/sponsorships/registration/",
        ],
    )
    def test_changelist(self, admin_client, registration, url):
        assert admin_client.get(url).status_code == 200

    def test_registration_change_form_shows_dates(self, admin_client, registration):
        response = admin_client.get(f"/admin/sponsorships/registration/{registration.pk}/change/")

        assert response.status_code == 200
        assert b"Weekly Sabha" in response.content
