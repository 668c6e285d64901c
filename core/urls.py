from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path
from django.conf import settings

import gateway.views
from core.settings import STRING_TO_ADMIN_PATH

urlpatterns = [
    path(STRING_TO_ADMIN_PATH, admin.site.urls, name="admin"),
    path('blink/settings/', gateway.views.global_settings, name="gateway_global_settings"),
    path('blink/logs/', gateway.views.view_logs, name="gateway_view_logs"),
]

#this is only for development purpose
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
