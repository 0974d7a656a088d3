"""HTTP views for the orders app.

Views are kept intentionally small: they validate requests (via
Pydantic), map to domain DTOs, delegate to the domain services obtained
from ``providers`` and translate the outcome into an HTTP response.

Create outcomes map to status codes as follows:

- CREATED: 201 with the stored order.
- DUPLICATE_ORDER_NUMBER: 422, ``Order number '<value>' already exists``.
- DUPLICATE_ORDER_ID: 409 ``ORDER_ID_CONFLICT``; the client may retry.
- ORDER_ID_EXHAUSTED: 500 ``ORDER_ID_EXHAUSTED`` with the attempt count.
"""
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from .domain import CreateOutcome
from .providers import get_order_service, get_query_service
from .schemas import CreateOrderDTO, OrderReadDTO


class OrdersCollectionView(APIView):
    """List orders (GET) and create an order (POST)."""
    throttle_classes = [ScopedRateThrottle]

    def get_throttles(self):
        # DRF evaluates throttles in initial(), before get/post
        self.throttle_scope = "orders_list" if self.request.method == "GET" else "orders_create"
        return [throttle() for throttle in self.throttle_classes]

    def get(self, request):
        """Return orders filtered by ``paymentDescription`` and ``country``.

        Returns:
            Response: 200 with a JSON array, Estonia first, then by
            payment due date.
        """
        orders = get_query_service().list(
            payment_description=request.query_params.get("paymentDescription"),
            country=request.query_params.get("country"),
        )
        return Response([OrderReadDTO.from_domain(o).to_json() for o in orders], status=status.HTTP_200_OK)

    def post(self, request):
        """Create a new order with a generated ``orderId``.

        Returns:
            Response: 201 with the order, 400 for validation errors, or the
            error statuses listed in the module docstring.
        """
        try:
            dto = CreateOrderDTO.model_validate(request.data)
        except ValidationError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        result = get_order_service().create(dto.to_domain())

        if result.outcome is CreateOutcome.CREATED:
            return Response(OrderReadDTO.from_domain(result.order).to_json(), status=status.HTTP_201_CREATED)
        if result.outcome is CreateOutcome.DUPLICATE_ORDER_NUMBER:
            return Response(
                {"detail": f"Order number '{result.value}' already exists"},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        if result.outcome is CreateOutcome.DUPLICATE_ORDER_ID:
            return Response({"detail": "ORDER_ID_CONFLICT"}, status=status.HTTP_409_CONFLICT)
        return Response(
            {"detail": "ORDER_ID_EXHAUSTED", "attempts": result.attempts},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class OrderCountriesView(APIView):
    """Distinct order countries used to populate the country filter."""
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_countries"

    def get(self, request):
        return Response(get_query_service().countries(), status=status.HTTP_200_OK)
