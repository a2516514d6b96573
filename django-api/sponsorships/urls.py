from django.urls import path

from sponsorships.handlers import (
    AvailableDatesView,
    CatalogView,
    DatabaseHealthView,
    DatabaseWakeUpView,
    ManualDatesView,
    RegistrationDatesView,
    RegistrationListView,
    WizardPlanDateView,
    WizardPlanView,
    WizardStateView,
    WizardSubmitView,
    WizardSupplementalDateView,
    WizardSupplementalLimitView,
)

urlpatterns = [
    path("catalog", CatalogView.as_view(), name="catalog"),
    path("wizard", WizardStateView.as_view(), name="wizard"),
    path("wizard/plan", WizardPlanView.as_view(), name="wizard-plan"),
    path("wizard/plan-dates", WizardPlanDateView.as_view(), name="wizard-plan-dates"),
    path(
        "wizard/supplemental-limits",
        WizardSupplementalLimitView.as_view(),
        name="wizard-supplemental-limits",
    ),
    path(
        "wizard/supplemental-dates",
        WizardSupplementalDateView.as_view(),
        name="wizard-supplemental-dates",
    ),
    path("wizard/submit", WizardSubmitView.as_view(), name="wizard-submit"),
    path("registrations", RegistrationListView.as_view(), name="registrations"),
    path(
        "registrations/<str:registration_id>/dates",
        RegistrationDatesView.as_view(),
        name="registration-dates",
    ),
    path(
        "registrations/<str:registration_id>/available-dates",
        AvailableDatesView.as_view(),
        name="registration-available-dates",
    ),
    path(
        "registrations/<str:registration_id>/manual-dates",
        ManualDatesView.as_view(),
        name="registration-manual-dates",
    ),
    path("db-health", DatabaseHealthView.as_view(), name="db-health"),
    path("db-health/wake-up", DatabaseWakeUpView.as_view(), name="db-health-wake-up"),
]
