from sponsorships.handlers.views import (
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

__all__ = [
    "AvailableDatesView",
    "CatalogView",
    "DatabaseHealthView",
    "DatabaseWakeUpView",
    "ManualDatesView",
    "RegistrationDatesView",
    "RegistrationListView",
    "WizardPlanDateView",
    "WizardPlanView",
    "WizardStateView",
    "WizardSubmitView",
    "WizardSupplementalDateView",
    "WizardSupplementalLimitView",
]
