from django.db import models

class PlatformSetting(models.Model):
  """
  Ein Schlüssel‑Wert‑Paar der Plugin‑Konfiguration (Option Store).
  Werte werden immer als String gespeichert: Checkboxen als ``yes``/``no``,
  strukturierte Werte als JSON.
  """
  key = models.CharField(max_length=200, unique=True)
  value = models.TextField(blank=True)
  description = models.CharField(max_length=500, blank=True)
  updated_at = models.DateTimeField(auto_now=True)

  class Meta:
      verbose_name = "Platform Setting"
      verbose_name_plural = "Platform Settings"
      ordering = ["key"]

  def __str__(self):
      return f"{self.key} = {self.value}"
