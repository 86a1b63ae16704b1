from django import forms
from django.core.exceptions import ValidationError

from .models import DelegateApplication, Registration


class ApplicationForm(forms.ModelForm):
    """Delegate application; committee choices come from one conference."""

    class Meta:
        model = DelegateApplication
        fields = [
            "full_name",
            "email",
            "phone",
            "motivation",
            "primary_committee",
            "secondary_committee",
            "tertiary_committee",
        ]
        widgets = {
            "full_name": forms.TextInput(attrs={"class": "form-control"}),
            "email": forms.EmailInput(attrs={"class": "form-control"}),
            "phone": forms.TextInput(attrs={"class": "form-control"}),
            "motivation": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
        }

    def __init__(self, *args, conference=None, **kwargs):
        super().__init__(*args, **kwargs)
        committees = conference.committees.all() if conference is not None else None
        for name in ("primary_committee", "secondary_committee", "tertiary_committee"):
            if committees is not None:
                self.fields[name].queryset = committees
            self.fields[name].widget.attrs["class"] = "form-select"
        self.fields["primary_committee"].required = True

    def clean(self):
        cleaned = super().clean()
        chosen = [
            cleaned.get(name)
            for name in ("primary_committee", "secondary_committee", "tertiary_committee")
        ]
        chosen = [c.pk for c in chosen if c is not None]
        if len(chosen) != len(set(chosen)):
            raise ValidationError("Choose a different committee for each preference.")
        return cleaned


class StatusForm(forms.Form):
    status = forms.ChoiceField(choices=DelegateApplication.STATUS_CHOICES)


class AssignmentOverrideForm(forms.Form):
    committee = forms.ModelChoiceField(queryset=None, required=False)
    country = forms.CharField(max_length=100, required=False)

    def __init__(self, *args, conference=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["committee"].queryset = conference.committees.all()


class RegistrationForm(forms.ModelForm):
    class Meta:
        model = Registration
        fields = ["conference", "full_name", "school", "email", "grade", "motivation"]
        widgets = {
            "grade": forms.NumberInput(attrs={"min": 8, "max": 12}),
            "motivation": forms.Textarea(attrs={"rows": 4}),
        }
