"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services and the allocator for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

The wizard's SelectionState lives in the Django session as plain data, so
each browser session owns exactly one in-progress registration.
"""

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from sponsorships.domain import Actor, RegistrationAllocator, SelectionState
from sponsorships.domain.errors import DomainError, ErrorCode
from sponsorships.handlers.serializers import (
    AvailableDateSerializer,
    CatalogEntrySerializer,
    ContactSerializer,
    DateToggleSerializer,
    ManualAdditionSerializer,
    PlanSelectionSerializer,
    RegistrationDateDetailSerializer,
    RegistrationDateSerializer,
    RegistrationSearchSerializer,
    RegistrationSerializer,
    SponsorshipPlanSerializer,
    SupplementalLimitSerializer,
)
from sponsorships.services import CatalogService, RegistrationService
from sponsorships.stores import DjangoCatalogStore, DjangoRegistrationStore
from sponsorships.stores.health import DatabaseHealth
from sponsorships.stores.resilience import get_executor

WIZARD_SESSION_KEY = "sponsorships.wizard"

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PLAN_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_REGISTRATION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_LIMIT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_403_FORBIDDEN,
    ErrorCode.DATABASE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(exc: DomainError) -> Response:
    return Response(
        {"error": {"code": exc.code.value, "message": exc.message}},
        status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
    )


def catalog_service() -> CatalogService:
    return CatalogService(DjangoCatalogStore(), get_executor())


def registration_service() -> RegistrationService:
    return RegistrationService(DjangoRegistrationStore(), get_executor())


def current_actor(request: Request) -> Actor | None:
    user = request.user
    if not user or not user.is_authenticated:
        return None
    return Actor(id=str(user.pk), email=user.email or "")


class DomainErrorMixin:
    """Turns DomainErrors raised by a handler into mapped responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class CatalogView(DomainErrorMixin, APIView):
    """Handler for GET /api/catalog"""

    def get(self, request: Request) -> Response:
        service = catalog_service()
        return Response(
            {
                "events": CatalogEntrySerializer(service.list_entries(), many=True).data,
                "plans": SponsorshipPlanSerializer(service.plans.all(), many=True).data,
            }
        )


class WizardView(DomainErrorMixin, APIView):
    """Base for wizard handlers; loads and stores the session's selection state."""

    def load(self, request: Request) -> tuple[RegistrationAllocator, SelectionState]:
        allocator = catalog_service().get_allocator()
        state = SelectionState.from_dict(request.session.get(WIZARD_SESSION_KEY))
        return allocator, allocator.reconcile(state)

    def store(self, request: Request, state: SelectionState) -> None:
        request.session[WIZARD_SESSION_KEY] = state.to_dict()

    def respond(
        self,
        allocator: RegistrationAllocator,
        state: SelectionState,
        warning: str | None = None,
    ) -> Response:
        return Response(
            {
                "state": state.to_dict(),
                "total": str(allocator.compute_total(state)),
                "plan_violations": allocator.validate_plan_step(state),
                "supplemental_violations": allocator.validate_supplemental_step(state),
                "warning": warning,
            }
        )


class WizardStateView(WizardView):
    """Handler for GET /api/wizard"""

    def get(self, request: Request) -> Response:
        allocator, state = self.load(request)
        return self.respond(allocator, state)


class WizardPlanView(WizardView):
    """Handler for POST /api/wizard/plan"""

    def post(self, request: Request) -> Response:
        serializer = PlanSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        allocator, _ = self.load(request)
        state = allocator.select_plan(serializer.validated_data.get("plan_id"))
        self.store(request, state)
        return self.respond(allocator, state)


class WizardPlanDateView(WizardView):
    """Handler for POST /api/wizard/plan-dates"""

    def post(self, request: Request) -> Response:
        serializer = DateToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        allocator, state = self.load(request)
        result = allocator.toggle_plan_date(
            state, serializer.validated_data["event_id"], serializer.validated_data["date"]
        )
        self.store(request, result.state)
        return self.respond(allocator, result.state, result.warning)


class WizardSupplementalLimitView(WizardView):
    """Handler for POST /api/wizard/supplemental-limits"""

    def post(self, request: Request) -> Response:
        serializer = SupplementalLimitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        allocator, state = self.load(request)
        state = allocator.set_supplemental_limit(
            state, serializer.validated_data["event_id"], serializer.validated_data["limit"]
        )
        self.store(request, state)
        return self.respond(allocator, state)


class WizardSupplementalDateView(WizardView):
    """Handler for POST /api/wizard/supplemental-dates"""

    def post(self, request: Request) -> Response:
        serializer = DateToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        allocator, state = self.load(request)
        result = allocator.toggle_supplemental_date(
            state, serializer.validated_data["event_id"], serializer.validated_data["date"]
        )
        self.store(request, result.state)
        return self.respond(allocator, result.state, result.warning)


class WizardSubmitView(WizardView):
    """Handler for POST /api/wizard/submit"""

    def post(self, request: Request) -> Response:
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        allocator, state = self.load(request)

        result = registration_service().submit(serializer.to_contact(), state, allocator)
        if not result.ok:
            return Response(
                {"errors": list(result.violations)}, status=status.HTTP_400_BAD_REQUEST
            )

        request.session.pop(WIZARD_SESSION_KEY, None)
        return Response(
            {
                "registration": RegistrationSerializer(result.registration).data,
                "dates": RegistrationDateSerializer(result.dates, many=True).data,
                "total": str(result.total),
            },
            status=status.HTTP_201_CREATED,
        )


class RegistrationListView(DomainErrorMixin, APIView):
    """Handler for GET /api/registrations?q=&date=&year="""

    permission_classes = [IsAdminUser]

    def get(self, request: Request) -> Response:
        serializer = RegistrationSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data
        registrations = registration_service().search(
            query=params.get("q"), on_date=params.get("date"), year=params.get("year")
        )
        return Response(RegistrationSerializer(registrations, many=True).data)


class RegistrationDatesView(DomainErrorMixin, APIView):
    """Handler for GET /api/registrations/{registration_id}/dates"""

    permission_classes = [IsAdminUser]

    def get(self, request: Request, registration_id: str) -> Response:
        found = registration_service().lookup(registration_id)
        return Response(
            {
                "registration": RegistrationSerializer(found.registration).data,
                "dates": RegistrationDateDetailSerializer(found.dates, many=True).data,
            }
        )


class AvailableDatesView(DomainErrorMixin, APIView):
    """Handler for GET /api/registrations/{registration_id}/available-dates?year="""

    permission_classes = [IsAdminUser]

    def get(self, request: Request, registration_id: str) -> Response:
        raw_year = request.query_params.get("year") or str(timezone.localdate().year)
        if not raw_year.isdigit():
            return Response(
                {"errors": ["year must be a number"]}, status=status.HTTP_400_BAD_REQUEST
            )
        available = registration_service().list_available_dates(
            registration_id, int(raw_year)
        )
        return Response(AvailableDateSerializer(available, many=True).data)


class ManualDatesView(DomainErrorMixin, APIView):
    """Handler for POST /api/registrations/{registration_id}/manual-dates"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, registration_id: str) -> Response:
        serializer = ManualAdditionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = registration_service().add_manual_dates(
            current_actor(request),
            registration_id,
            serializer.validated_data["year"],
            serializer.pairs(),
            serializer.validated_data["notes"],
        )
        if not result.ok:
            return Response(
                {"errors": list(result.errors)}, status=status.HTTP_400_BAD_REQUEST
            )
        return Response(
            RegistrationDateSerializer(result.created, many=True).data,
            status=status.HTTP_201_CREATED,
        )


class DatabaseHealthView(APIView):
    """Handler for GET /api/db-health"""

    def get(self, request: Request) -> Response:
        health = DatabaseHealth().check()
        return Response(
            health.to_dict(),
            status=status.HTTP_200_OK
            if health.is_healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class DatabaseWakeUpView(APIView):
    """Handler for POST /api/db-health/wake-up"""

    def post(self, request: Request) -> Response:
        health = DatabaseHealth().wake_up(max_attempts=5, delay=3.0)
        if not health.is_healthy:
            return Response(health.to_dict(), status=status.HTTP_503_SERVICE_UNAVAILABLE)
        payload = health.to_dict()
        payload["message"] = "Database is now awake and ready!"
        return Response(payload)
