from django.contrib import admin
from config.models import PlatformSetting
from config.utils import invalidate_app_setting

@admin.register(PlatformSetting)
class PlatformSettingAdmin(admin.ModelAdmin):
  list_display = ("key", "value", "description", "updated_at")
  search_fields = ("key", "value")

  def save_model(self, request, obj, form, change):
      super().save_model(request, obj, form, change)
      # Cache sofort verwerfen, sonst sieht die Settings‑Seite alte Werte
      invalidate_app_setting(obj.key)

  def delete_model(self, request, obj):
      key = obj.key
      super().delete_model(request, obj)
      invalidate_app_setting(key)
