"""Vehicle API views."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser  # type: ignore
from rest_framework.permissions import AllowAny  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminOrReadOnly

from .filters import VehicleFilterSet
from .models import Vehicle
from .serializers import VehicleDetailSerializer, VehicleSerializer, VehicleWriteSerializer
from .services import delete_vehicle, vehicles_within_radius


class NearbyQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    radius = serializers.FloatField(min_value=0, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)


class VehicleViewSet(viewsets.ModelViewSet):
    """Public vehicle catalogue; listings are managed by administrators."""

    queryset = Vehicle.objects.select_related("owner").prefetch_related("images")
    permission_classes = [IsAdminOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = VehicleFilterSet
    ordering_fields = [
        "price_per_day",
        "created_at",
        "average_rating",
        "year",
        "name",
        "brand",
    ]
    ordering = ["-created_at"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return VehicleWriteSerializer
        if self.action == "retrieve":
            return VehicleDetailSerializer
        return VehicleSerializer

    def filter_queryset(self, queryset):  # type: ignore
        # Query filters only narrow the list; detail lookups see every vehicle.
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)

    def _read_response(self, vehicle: Vehicle, status_code: int = status.HTTP_200_OK) -> Response:
        vehicle = self.get_queryset().get(pk=vehicle.pk)
        serializer = VehicleSerializer(vehicle, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vehicle = serializer.save(owner=request.user)
        return self._read_response(vehicle, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        vehicle = serializer.save()
        return self._read_response(vehicle)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        delete_vehicle(self.get_object())
        return Response({"success": True, "message": "Vehicle deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], permission_classes=[AllowAny])
    def near(self, request):  # type: ignore
        """Available vehicles within ``radius`` km of ``lat``/``lng``."""
        params = NearbyQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        radius = data.get("radius", settings.VEHICLE_SEARCH_DEFAULT_RADIUS_KM)
        limit = data.get("limit", settings.VEHICLE_NEAR_DEFAULT_LIMIT)
        queryset = vehicles_within_radius(
            self.get_queryset().filter(availability=True),
            data["lat"],
            data["lng"],
            radius,
        )[:limit]
        serializer = VehicleSerializer(queryset, many=True, context=self.get_serializer_context())
        return Response({"success": True, "count": len(serializer.data), "data": serializer.data})
