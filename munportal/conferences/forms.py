from django import forms
from django.core.exceptions import ValidationError
from django.forms import BaseInlineFormSet, inlineformset_factory

from accounts.forms import REGION_CHOICES

from .models import Committee, Conference


class ListTextField(forms.CharField):
    """
    A list of short strings typed one per line (commas also separate).
    Blank entries and repeats are dropped; order is kept.
    """

    widget = forms.Textarea(attrs={"class": "form-control", "rows": 3})

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("required", False)
        super().__init__(*args, **kwargs)

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return "\n".join(value)
        return value

    def to_python(self, value):
        if isinstance(value, (list, tuple)):
            items = value
        else:
            text = super().to_python(value) or ""
            items = text.replace(",", "\n").splitlines()

        result = []
        for item in items:
            item = item.strip()
            if item and item not in result:
                result.append(item)
        return result

    def has_changed(self, initial, data):
        if self.disabled:
            return False
        return self.to_python(initial or []) != self.to_python(data)


class ConferenceForm(forms.ModelForm):
    city = forms.TypedChoiceField(
        choices=REGION_CHOICES,
        coerce=int,
        empty_value=None,
        required=False,
        label="Region",
    )
    languages = ListTextField(help_text="Working languages, one per line.")

    class Meta:
        model = Conference
        fields = [
            "name_ru",
            "name_kk",
            "name_en",
            "date_ru",
            "date_kk",
            "date_en",
            "start_date",
            "time",
            "location",
            "city",
            "description_ru",
            "description_kk",
            "description_en",
            "conditions_ru",
            "conditions_kk",
            "conditions_en",
            "organizer_contact",
            "registration_fee_amount",
            "registration_fee_currency",
            "languages",
        ]
        widgets = {
            "start_date": forms.DateInput(attrs={"type": "date", "class": "form-control"}),
            "time": forms.TimeInput(attrs={"type": "time", "class": "form-control"}),
            "description_ru": forms.Textarea(attrs={"rows": 4, "class": "form-control"}),
            "description_kk": forms.Textarea(attrs={"rows": 4, "class": "form-control"}),
            "description_en": forms.Textarea(attrs={"rows": 4, "class": "form-control"}),
            "conditions_ru": forms.Textarea(attrs={"rows": 3, "class": "form-control"}),
            "conditions_kk": forms.Textarea(attrs={"rows": 3, "class": "form-control"}),
            "conditions_en": forms.Textarea(attrs={"rows": 3, "class": "form-control"}),
        }

    def clean_registration_fee_amount(self):
        amount = self.cleaned_data.get("registration_fee_amount")
        if amount is not None and amount < 0:
            raise ValidationError("The registration fee cannot be negative.")
        return amount


class CommitteeForm(forms.ModelForm):
    countries = ListTextField(help_text="Assignable countries, one per line.")
    languages = ListTextField()

    class Meta:
        model = Committee
        fields = ["name", "topic", "capacity", "priority", "countries", "languages"]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control"}),
            "topic": forms.TextInput(attrs={"class": "form-control"}),
            "capacity": forms.NumberInput(attrs={"class": "form-control", "min": 1}),
            "priority": forms.NumberInput(attrs={"class": "form-control", "min": 0}),
        }


class BaseCommitteeFormSet(BaseInlineFormSet):
    def clean(self):
        super().clean()
        if any(self.errors):
            return
        names = [
            form.cleaned_data.get("name", "").strip()
            for form in self.forms
            if form.cleaned_data and not form.cleaned_data.get("DELETE")
        ]
        names = [n for n in names if n]
        if not names:
            raise ValidationError("Add at least one committee.")
        if len(set(n.lower() for n in names)) != len(names):
            raise ValidationError("Committee names must be unique within a conference.")


CommitteeFormSet = inlineformset_factory(
    Conference,
    Committee,
    form=CommitteeForm,
    formset=BaseCommitteeFormSet,
    extra=1,
    min_num=1,
    validate_min=True,
    can_delete=True,
)
