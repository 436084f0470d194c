"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdmin, IsOwnerOrAdmin, user_is_admin

from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatsSerializer,
    BookingStatusSerializer,
)
from .services import booking_stats, cancel_booking, update_booking_status


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Bookings of the current user; administrators see and manage all of them.

    Bookings are never deleted, they end in a terminal status instead.
    """

    queryset = Booking.objects.select_related("user", "vehicle").all()
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["created_at", "start_date", "end_date", "total_price", "status"]
    ordering = ["-created_at"]
    owner_field = "user"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        # Other users' bookings stay reachable by id so access is refused with 403.
        if self.action == "list" and not user_is_admin(self.request.user):
            return qs.filter(user=self.request.user)
        return qs

    def filter_queryset(self, queryset):  # type: ignore
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(
        detail=True,
        methods=["put"],
        url_path="status",
        permission_classes=[permissions.IsAuthenticated, IsAdmin],
    )
    def update_status(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = update_booking_status(
            booking,
            serializer.validated_data["status"],
            serializer.validated_data.get("admin_notes"),
        )
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["put"], permission_classes=[permissions.IsAuthenticated, IsOwnerOrAdmin])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = cancel_booking(booking, serializer.validated_data.get("cancellation_reason", ""))
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated, IsAdmin])
    def stats(self, request):  # type: ignore
        return Response(BookingStatsSerializer(booking_stats()).data)
