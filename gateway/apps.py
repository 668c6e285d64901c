from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)

class GatewayConfig(AppConfig):
  name = 'gateway'
  verbose_name = 'Blink Payment Gateway'

  def ready(self):
      logger.debug("Blink gateway app loaded.")
