"""Role based permission classes shared by the RideRent API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def user_is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdmin(permissions.BasePermission):
    """Only platform administrators."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return user_is_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone can read, administrators write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return user_is_admin(request.user)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission: the object's owner or an administrator.

    The owner is read from ``view.owner_field`` (``user`` by default).
    """

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if user_is_admin(user):
            return True
        owner_field = getattr(view, "owner_field", "user")
        return getattr(obj, f"{owner_field}_id", None) == user.id


class IsOwner(permissions.BasePermission):
    """Object-level permission: the object's owner only."""

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        owner_field = getattr(view, "owner_field", "user")
        return getattr(obj, f"{owner_field}_id", None) == user.id
