from django.urls import include, path

urlpatterns = [
    path('radiology/', include('radiology.urls')),
    path('api/', include('radiology.api_urls')),
]
