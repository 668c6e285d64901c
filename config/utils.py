import json
from django.core.cache import cache
from django.db import transaction
from config.models import PlatformSetting

CACHE_TIMEOUT = 60 * 5  # 5 Minuten

TRUE_VALUES = ("true", "1", "yes", "on")


def _cache_key(key):
  return f"app_setting:{key}"


def _cast(val, cast_type):
  try:
      if cast_type == bool:
          return str(val).lower() in TRUE_VALUES
      if cast_type == int:
          return int(val)
      if cast_type == float:
          return float(val)
      if cast_type == list or cast_type == dict:
          return json.loads(val)
      return cast_type(val)
  except (TypeError, ValueError):
      # Fallback: roher String
      return val


def get_app_setting(key, default=None, cast_type=str):
  """
  Liefert einen Wert aus der Datenbank / dem Cache.
  * cast_type: str, int, bool, json (list/dict), ...
  Im Cache liegt immer der rohe String, gecastet wird beim Lesen.
  """
  cached = cache.get(_cache_key(key))
  if cached is not None:
      return _cast(cached, cast_type)

  try:
      setting = PlatformSetting.objects.get(key=key)
  except PlatformSetting.DoesNotExist:
      return default

  cache.set(_cache_key(key), setting.value, CACHE_TIMEOUT)
  return _cast(setting.value, cast_type)


def to_option_value(value):
  """Serialisiert einen Python‑Wert in die String‑Form des Option Stores."""
  if value is None:
      return ""
  if isinstance(value, bool):
      return "yes" if value else "no"
  if isinstance(value, (dict, list)):
      return json.dumps(value, sort_keys=True)
  return str(value)


def invalidate_app_setting(key):
  cache.delete(_cache_key(key))


def update_app_settings(values):
  """
  Schreibt mehrere Einstellungen in einer Transaktion (last writer wins).
  Gibt die Liste der geschriebenen Keys zurück.
  """
  written = []
  with transaction.atomic():
      for key, value in values.items():
          PlatformSetting.objects.update_or_create(
              key=key, defaults={"value": to_option_value(value)},
          )
          written.append(key)
  # erst nach dem Commit verwerfen, damit kein alter Wert zurück in den Cache kommt
  for key in written:
      invalidate_app_setting(key)
  return written


class OptionStore:
  """
  Schmale Schnittstelle auf den Option Store, die in die Settings‑Seite
  injiziert wird (``get`` / ``save_fields``).
  """

  def get(self, key, default=None, cast_type=str):
      return get_app_setting(key, default=default, cast_type=cast_type)

  def save_fields(self, values):
      return update_app_settings(values)

  def add_missing(self, values):
      """Legt nur Keys an, die noch nicht existieren. Liefert die neuen Keys."""
      existing = set(
          PlatformSetting.objects.filter(key__in=list(values)).values_list("key", flat=True)
      )
      missing = {k: v for k, v in values.items() if k not in existing}
      if missing:
          update_app_settings(missing)
      return sorted(missing)
