from sponsorships.services.catalog_service import CatalogService
from sponsorships.services.registration_service import RegistrationService

__all__ = ["CatalogService", "RegistrationService"]
