from django import forms
from django.utils.translation import gettext_lazy as _

from . import order_states


class LenientChoiceField(forms.ChoiceField):
    """
    ChoiceField, das unbekannte Werte nicht ablehnt. Die Settings‑Seite
    ersetzt sie beim Speichern durch den Default, die übrigen Felder
    werden trotzdem gespeichert.
    """

    def valid_value(self, value):
        return True


class OrderStatesWidget(forms.MultiWidget):
    """Ein Select pro Blink‑Status."""

    def __init__(self, attrs=None):
        widgets = {
            state: forms.Select(choices=order_states.ORDER_STATUSES, attrs=attrs)
            for state in order_states.state_ids()
        }
        super().__init__(widgets, attrs)

    def decompress(self, value):
        """
        ``value`` ist das gespeicherte Mapping (dict oder JSON‑String).
        Fehlende Status werden mit den Defaults belegt.
        """
        mapping = order_states.resolve_mapping(value or {})
        return [mapping[state] for state in order_states.state_ids()]


class OrderStatesField(forms.MultiValueField):
    """
    Zuordnung Blink‑Status → Bestellstatus.
    In `compress()` wird aus den einzelnen Selects ein dict gebaut.
    """

    widget = OrderStatesWidget

    def __init__(self, **kwargs):
        fields = [
            LenientChoiceField(choices=order_states.ORDER_STATUSES, required=False)
            for _state in order_states.state_ids()
        ]
        kwargs.setdefault('required', False)
        kwargs.setdefault('label', _('Order States'))
        super().__init__(fields=fields, require_all_fields=False, **kwargs)

    def compress(self, data_list):
        if not data_list:
            return {}
        return order_states.sanitize_mapping(
            dict(zip(order_states.state_ids(), data_list))
        )
