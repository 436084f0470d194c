"""API views for managing reviews."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdmin, IsOwner, IsOwnerOrAdmin
from apps.vehicles.models import Vehicle

from .filters import ReviewFilterSet
from .models import Review
from .serializers import (
    AdminResponseSerializer,
    RatingStatSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
)
from .services import delete_review, rating_distribution, respond_to_review, update_review


class ReviewViewSet(viewsets.ModelViewSet):
    """
    Public reviews of vehicles.

    Renters write reviews for their completed bookings and may edit them,
    the author or an administrator may delete one, and administrators
    answer reviews through ``PUT <id>/response/``.
    """

    queryset = Review.objects.select_related("user", "vehicle", "booking", "responded_by").all()
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ReviewFilterSet
    ordering_fields = ["created_at", "rating", "helpful_votes"]
    ordering = ["-created_at"]
    owner_field = "user"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "vehicle"}:
            return [permissions.AllowAny()]
        if self.action in {"update", "partial_update"}:
            return [permissions.IsAuthenticated(), IsOwner()]
        if self.action == "destroy":
            return [permissions.IsAuthenticated(), IsOwnerOrAdmin()]
        if self.action == "respond":
            return [permissions.IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReviewCreateSerializer
        if self.action in {"update", "partial_update"}:
            return ReviewUpdateSerializer
        return ReviewSerializer

    def filter_queryset(self, queryset):  # type: ignore
        if self.action not in {"list", "vehicle"}:
            return queryset
        return super().filter_queryset(queryset)

    def _read_response(self, review: Review, status_code: int = status.HTTP_200_OK) -> Response:
        review = self.get_queryset().get(pk=review.pk)
        return Response(ReviewSerializer(review, context=self.get_serializer_context()).data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = serializer.save()
        return self._read_response(review, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        review = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        review = update_review(review, serializer.validated_data)
        return self._read_response(review)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        delete_review(self.get_object())
        return Response({"success": True, "message": "Review deleted successfully"})

    @action(detail=False, methods=["get"], url_path=r"vehicle/(?P<vehicle_id>\d+)")
    def vehicle(self, request, vehicle_id=None):  # type: ignore
        """Paginated reviews of one vehicle with the distribution of ratings."""

        vehicle = get_object_or_404(Vehicle, pk=vehicle_id)
        queryset = self.filter_queryset(self.get_queryset().filter(vehicle=vehicle))
        rating_stats = RatingStatSerializer(rating_distribution(vehicle.id), many=True).data

        page = self.paginate_queryset(queryset)
        if page is not None:
            response = self.get_paginated_response(ReviewSerializer(page, many=True).data)
            response.data["rating_stats"] = rating_stats
            return response

        data = ReviewSerializer(queryset, many=True).data
        return Response({"success": True, "count": len(data), "rating_stats": rating_stats, "data": data})

    @action(detail=True, methods=["put"], url_path="response")
    def respond(self, request, pk=None):  # type: ignore
        review: Review = self.get_object()  # type: ignore
        serializer = AdminResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = respond_to_review(review, request.user, serializer.validated_data["response"])
        return self._read_response(review)
