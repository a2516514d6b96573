from sponsorships.stores.django_store import DjangoCatalogStore, DjangoRegistrationStore
from sponsorships.stores.interfaces import CatalogStore, RegistrationStore

__all__ = [
    "CatalogStore",
    "RegistrationStore",
    "DjangoCatalogStore",
    "DjangoRegistrationStore",
]
