from django.contrib import admin
from django.urls import include, path

from slots.urls import api_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/slot/', include((api_urlpatterns, 'slots_api'))),
    path('slots/', include('slots.urls')),
    path('', include('accounts.urls')),
]
