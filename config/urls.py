"""URL configuration for RideRent project.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application‑level routers provided by Django Rest Framework and each app.
"""
from django.conf import settings  # type: ignore
from django.conf.urls.static import static  # type: ignore
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/vehicles/', include('apps.vehicles.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/reviews/', include('apps.reviews.urls')),
    # API schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
