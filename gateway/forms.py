from django import forms
from django.utils.safestring import mark_safe

from .fields import LenientChoiceField, OrderStatesField


def _field_for(descriptor, initial):
    """Baut aus einer Feldbeschreibung das passende Django‑Formularfeld."""
    common = {
        'label': descriptor.title,
        'required': False,
        'help_text': mark_safe(descriptor.desc) if descriptor.desc else '',
    }
    if descriptor.type == 'select':
        return LenientChoiceField(
            choices=list(descriptor.options.items()),
            initial=initial if initial is not None else descriptor.default,
            widget=forms.Select(attrs={'class': 'form-control'}),
            **common,
        )
    if descriptor.type == 'text':
        return forms.CharField(
            initial=initial if initial is not None else descriptor.default,
            widget=forms.TextInput(attrs={'class': 'form-control', 'autocomplete': 'off'}),
            **common,
        )
    if descriptor.type == 'textarea':
        return forms.CharField(
            initial=initial if initial is not None else descriptor.default,
            widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            **common,
        )
    if descriptor.type == 'checkbox':
        value = initial if initial is not None else descriptor.default
        return forms.BooleanField(initial=value == 'yes', **common)
    if descriptor.type == 'order_states':
        return OrderStatesField(initial=initial, label=descriptor.title, help_text=common['help_text'])
    return None


class GlobalSettingsForm(forms.Form):
    """
    Formular für die globalen Blink‑Einstellungen.
    Die Felder werden aus den Feldbeschreibungen der Settings‑Seite erzeugt;
    Anzeige‑Felder (Titel, Markup, Section‑Ende) landen in ``self.sections``.
    """

    def __init__(self, *args, descriptors=(), stored=None, **kwargs):
        super().__init__(*args, **kwargs)
        stored = stored or {}
        self.sections = []
        current = None

        for descriptor in descriptors:
            if descriptor.type == 'title':
                current = {'title': descriptor.title, 'desc': mark_safe(descriptor.desc), 'rows': []}
                self.sections.append(current)
                continue
            if descriptor.type == 'sectionend':
                current = None
                continue
            if current is None:
                current = {'title': '', 'desc': '', 'rows': []}
                self.sections.append(current)

            if descriptor.type == 'custom_markup':
                current['rows'].append({
                    'id': descriptor.id,
                    'title': descriptor.title,
                    'markup': mark_safe(descriptor.markup),
                })
                continue

            field = _field_for(descriptor, stored.get(descriptor.id))
            if field is not None:
                self.fields[descriptor.id] = field
                current['rows'].append({'id': descriptor.id, 'field_name': descriptor.id})

    def section_rows(self):
        """Sections mit gebundenen Feldern für das Template."""
        for section in self.sections:
            rows = []
            for row in section['rows']:
                if 'field_name' in row:
                    rows.append({'id': row['id'], 'field': self[row['field_name']]})
                else:
                    rows.append(row)
            yield {'title': section['title'], 'desc': section['desc'], 'rows': rows}
