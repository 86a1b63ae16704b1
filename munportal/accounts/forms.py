# accounts/forms.py
from io import BytesIO

from django import forms
from django.conf import settings
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.files.base import ContentFile
from PIL import Image, ImageOps  # for EXIF orientation fix

from . import roles
from .models import UserProfile
from .validators import normalize_phone, validate_phone


class EmailAuthenticationForm(AuthenticationForm):
    """Log in with the e-mail address (stored as the username)."""

    username = forms.EmailField(
        label="Email",
        widget=forms.EmailInput(attrs={"class": "form-control", "autofocus": True}),
    )

    def clean_username(self):
        return self.cleaned_data["username"].strip().lower()


class SignupForm(UserCreationForm):
    full_name = forms.CharField(max_length=120)
    email = forms.EmailField()
    phone = forms.CharField(max_length=30, validators=[validate_phone])
    role = forms.ChoiceField(choices=roles.ROLE_CHOICES, initial=roles.PARTICIPANT)
    verification_code = forms.CharField(
        max_length=64,
        required=False,
        help_text="Required for every role except participant.",
    )
    password1 = forms.CharField(
        label="Password",
        strip=False,
        widget=forms.PasswordInput,
        help_text="At least 6 characters, with letters and digits.",
    )
    password2 = forms.CharField(
        label="Confirm password",
        strip=False,
        widget=forms.PasswordInput,
    )

    class Meta:
        model = User
        fields = ("email",)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.code_check = roles.INVALID_CODE
        for name, field in self.fields.items():
            css = "form-select" if name == "role" else "form-control"
            field.widget.attrs.update({"class": css})

    def clean_full_name(self):
        full_name = self.cleaned_data["full_name"].strip()
        if not full_name:
            raise ValidationError("Please enter your name.")
        return full_name

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if User.objects.filter(username__iexact=email).exists():
            raise ValidationError("This email is already registered.")
        return email

    def clean_phone(self):
        return normalize_phone(self.cleaned_data["phone"])

    def clean(self):
        cleaned = super().clean()
        role = cleaned.get("role")
        email = cleaned.get("email")

        if role == roles.FOUNDER and email and not roles.is_founder_email(email):
            self.add_error("role", "The founder role is reserved for the founder account.")
        elif role != roles.FOUNDER and roles.is_founder_email(email):
            self.add_error("role", "The founder account must sign up with the founder role.")

        if role in roles.ELEVATED_ROLES:
            check = roles.verify_code_for_role(cleaned.get("verification_code"), role)
            if not check.valid:
                self.add_error("verification_code", "Invalid verification code.")
            self.code_check = check
        return cleaned

    def save(self, commit=True):
        user = super().save(commit=False)
        user.username = self.cleaned_data["email"]
        user.email = self.cleaned_data["email"]
        if not commit:
            return user

        user.save()
        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.full_name = self.cleaned_data["full_name"]
        profile.phone = self.cleaned_data["phone"]
        if self.code_check.valid:
            profile.role = self.code_check.role
            profile.school_id = self.code_check.school_id
            profile.secretary_type = self.code_check.secretary_type
        else:
            profile.role = roles.PARTICIPANT
        profile.save()
        return user


class ProfileForm(forms.ModelForm):
    class Meta:
        model = UserProfile
        fields = ["full_name", "bio", "phone", "photo"]
        widgets = {
            "full_name": forms.TextInput(
                attrs={"class": "form-control", "placeholder": "Your name"}
            ),
            "bio": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
            "phone": forms.TextInput(
                attrs={"class": "form-control", "placeholder": "+7 701 123 4567"}
            ),
            "photo": forms.ClearableFileInput(attrs={"class": "form-control"}),
        }

    def clean_phone(self):
        phone = self.cleaned_data.get("phone", "")
        if not phone:
            return phone
        validate_phone(phone)
        return normalize_phone(phone)

    def clean_photo(self):
        """
        Validate and normalize the uploaded image:
        - Size under PROFILE_PHOTO_MAX_BYTES
        - Allow JPEG/PNG/WebP
        - Verify it's an image
        - Fix EXIF orientation, convert to RGB
        - Re-encode as JPEG (strips EXIF/metadata)
        """
        file = self.cleaned_data.get("photo")
        # nothing new uploaded: keep whatever is stored (or cleared)
        if not file or not hasattr(file, "content_type"):
            return file

        max_bytes = settings.PROFILE_PHOTO_MAX_BYTES
        if getattr(file, "size", 0) and file.size > max_bytes:
            raise ValidationError(
                f"Please upload an image smaller than {max_bytes // (1024 * 1024)}MB."
            )

        ctype = getattr(file, "content_type", None)
        allowed = {"image/jpeg", "image/png", "image/webp"}
        if ctype and ctype not in allowed:
            raise ValidationError("Only JPEG, PNG, or WebP images are allowed.")

        try:
            file.seek(0)
            img = Image.open(file)
            img.verify()
        except Exception:
            raise ValidationError("That file is not a valid image.")

        file.seek(0)
        img = ImageOps.exif_transpose(Image.open(file))
        if img.mode != "RGB":
            img = img.convert("RGB")

        buf = BytesIO()
        img.save(buf, format="JPEG", optimize=True, quality=85)
        buf.seek(0)

        owner = self.instance.user_id or "new"
        return ContentFile(buf.read(), name=f"profile-{owner}.jpg")


REGION_CHOICES = [("", "—")] + [
    (str(pk), names["en"]) for pk, names in sorted(roles.REGIONS.items())
]


class AdminProfileForm(forms.ModelForm):
    """Founder-only form to change a user's role and region."""

    school_id = forms.TypedChoiceField(
        choices=REGION_CHOICES,
        coerce=int,
        empty_value=None,
        required=False,
        label="Region",
    )

    class Meta:
        model = UserProfile
        fields = ["role", "school_id"]
        widgets = {"role": forms.Select(attrs={"class": "form-select"})}
