# applications/services.py
import logging
import random
from io import BytesIO

import qrcode
from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.mail import EmailMessage
from django.db import IntegrityError, transaction
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A6, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from accounts import roles
from conferences.models import Committee

from .assignment import compute_assignments
from .models import DelegateApplication

logger = logging.getLogger(__name__)


# --- Intake -----------------------------------------------------------------


def submit_application(conference, profile, form):
    """Save a validated ApplicationForm for ``profile``."""
    if not conference.accepts_applications:
        raise ValidationError("Registration for this conference is closed.")
    if DelegateApplication.objects.filter(conference=conference, applicant=profile).exists():
        raise ValidationError("You have already applied to this conference.")

    application = form.save(commit=False)
    application.conference = conference
    application.applicant = profile
    application.status = DelegateApplication.PENDING
    try:
        with transaction.atomic():
            application.save()
    except IntegrityError:
        raise ValidationError("You have already applied to this conference.")

    logger.info(
        "Application %s submitted to conference %s by profile %s",
        application.pk,
        conference.pk,
        profile.pk,
    )
    return application


def _check_manager(profile, conference):
    if not roles.can_manage_applications(profile, conference):
        raise PermissionDenied("You are not allowed to manage this conference's delegates.")


def set_application_status(application, profile, status):
    """
    Approve, reject or reset an application. Leaving ``approved`` drops any
    committee/country the applicant held.
    """
    _check_manager(profile, application.conference)
    if status not in dict(DelegateApplication.STATUS_CHOICES):
        raise ValidationError(f"Unknown status: {status}")

    application.status = status
    fields = ["status", "updated_at"]
    if status != DelegateApplication.APPROVED:
        application.assigned_committee = None
        application.assigned_country = None
        fields += ["assigned_committee", "assigned_country"]
    application.save(update_fields=fields)

    logger.info(
        "Application %s set to %s by profile %s", application.pk, status, profile.pk
    )
    return application


# --- Assignment -------------------------------------------------------------


def run_auto_assignment(conference, profile=None, rng=random, notify=True):
    """
    Assign the conference's approved delegates to committees and countries.

    Each changed application is written with its own UPDATE; a failure part
    way through leaves earlier writes in place and propagates. Returns the
    AssignmentResult.
    """
    if profile is not None:
        _check_manager(profile, conference)

    committees = list(Committee.objects.filter(conference=conference).order_by("priority", "id"))
    applications = list(
        DelegateApplication.objects.filter(
            conference=conference, status=DelegateApplication.APPROVED
        ).order_by("-created_at", "-id")
    )

    result = compute_assignments(applications, committees, rng=rng)

    now = timezone.now()
    for assignment in result.changes:
        DelegateApplication.objects.filter(pk=assignment.application_id).update(
            assigned_committee_id=assignment.committee_id,
            assigned_country=assignment.country,
            updated_at=now,
        )

    logger.info(
        "Auto-assignment for conference %s: %s placed, %s unplaced, %s updated",
        conference.pk,
        result.placed,
        result.unplaced,
        len(result.changes),
    )

    if notify:
        newly_placed = [a.application_id for a in result.assignments if a.newly_placed]
        if newly_placed:
            notify_placements(
                DelegateApplication.objects.filter(pk__in=newly_placed).select_related(
                    "conference", "assigned_committee"
                )
            )
    return result


def override_assignment(application, profile, committee=None, country=""):
    """
    Place an approved application by hand. ``committee=None`` clears the
    placement. The committee must belong to the same conference and have a
    free seat; the country must be on the committee's list (when it has one)
    and not held by another delegate of that committee.
    """
    _check_manager(profile, application.conference)
    country = (country or "").strip() or None

    if committee is None:
        if country:
            raise ValidationError("Choose a committee before choosing a country.")
    else:
        if application.status != DelegateApplication.APPROVED:
            raise ValidationError("Only approved applications can be placed.")
        if committee.conference_id != application.conference_id:
            raise ValidationError("That committee belongs to another conference.")

        others = DelegateApplication.objects.filter(assigned_committee=committee).exclude(
            pk=application.pk
        )
        if others.count() >= committee.capacity:
            raise ValidationError(f"{committee.name} is full.")
        if country:
            if committee.countries and country not in committee.countries:
                raise ValidationError(f"{country} is not available in {committee.name}.")
            if others.filter(assigned_country=country).exists():
                raise ValidationError(f"{country} is already taken in {committee.name}.")

    application.assigned_committee = committee
    application.assigned_country = country
    application.save(update_fields=["assigned_committee", "assigned_country", "updated_at"])
    logger.info(
        "Application %s placed by hand in committee %s (%s) by profile %s",
        application.pk,
        committee.pk if committee else None,
        country,
        profile.pk,
    )
    return application


# --- Badges and e-mail ------------------------------------------------------


def build_badges_pdf(applications):
    """
    Build a PDF with one badge per placed delegate: conference, name,
    committee and country on top, the badge QR code underneath.
    Returns None when there is nothing to print.
    """
    applications = [a for a in applications if a.assigned_committee_id]
    if not applications:
        return None

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A6),
        title="Delegate badges",
        leftMargin=0.4 * inch,
        rightMargin=0.4 * inch,
        topMargin=0.3 * inch,
        bottomMargin=0.3 * inch,
    )

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    title_style.textColor = colors.HexColor("#0B3D91")
    title_style.fontSize = 14
    elements = []

    for index, application in enumerate(applications):
        conference = application.conference
        committee = application.assigned_committee

        elements.append(Paragraph(f"<b>{conference.localized('name', 'en')}</b>", title_style))
        elements.append(Spacer(1, 4))

        table = Table(
            [
                ["Delegate:", application.full_name],
                ["Committee:", committee.name],
                ["Country:", application.assigned_country or "-"],
            ],
            colWidths=[1.0 * inch, 3.6 * inch],
        )
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("ALIGN", (0, 0), (0, -1), "RIGHT"),
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 6))

        qr = qrcode.QRCode(box_size=4, border=1)
        qr.add_data(application.badge_code)
        qr.make(fit=True)
        qr_img = qr.make_image(fill_color="black", back_color="white")

        img_buffer = BytesIO()
        qr_img.save(img_buffer, format="PNG")
        img_buffer.seek(0)

        qr_image = Image(img_buffer, width=1.2 * inch, height=1.2 * inch)
        qr_image.hAlign = "CENTER"
        elements.append(qr_image)

        if index != len(applications) - 1:
            elements.append(PageBreak())

    doc.build(elements)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


def send_assignment_email(application, pdf_bytes=None):
    """Tell a delegate where they were placed. The badge PDF is optional."""
    if not application.email:
        return

    conference_name = application.conference.localized("name", "en")
    subject = f"Your committee for {conference_name}"
    body_lines = [
        f"Hi {application.full_name or 'there'},",
        "",
        f"You have been placed in {application.assigned_committee.name}"
        + (
            f" representing {application.assigned_country}."
            if application.assigned_country
            else "."
        ),
        "Your delegate badge is attached. Please bring it to the conference.",
        "",
        "Best regards,",
        "MUN Portal Team",
    ]

    msg = EmailMessage(
        subject,
        "\n".join(body_lines),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[application.email],
    )
    if pdf_bytes:
        msg.attach(f"badge-{application.badge_code}.pdf", pdf_bytes, "application/pdf")
    msg.send(fail_silently=False)


def notify_placements(applications):
    """Best effort: a failed e-mail never undoes a placement."""
    for application in applications:
        if not application.email:
            continue
        try:
            send_assignment_email(application, build_badges_pdf([application]))
        except Exception:
            logger.exception("Could not send placement e-mail for application %s", application.pk)
