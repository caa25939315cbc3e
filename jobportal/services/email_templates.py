"""
HTML bodies for outgoing email.

User-supplied text (names, employer notes, rejection reasons) is escaped
before it is placed in markup.
"""
from html import escape
from typing import Optional

from jobportal.core.config import EMAIL_FROM, EMAIL_FROM_NOREPLY, FRONTEND_URL
from jobportal.services.email_service import EmailMessage


def application_status_email(
    to: str,
    applicant_name: str,
    status: str,
    status_title: str,
    job_title: str,
    company_name: str,
    notes: Optional[str] = None,
) -> EmailMessage:
    if status == "hired":
        next_steps = "<p>The employer will contact you soon with next steps.</p>"
    else:
        next_steps = "<p>You can check your application status in your dashboard.</p>"

    feedback = ""
    if notes:
        feedback = (
            "<p><strong>Feedback from the employer:</strong></p>"
            f"<p>{escape(notes)}</p>"
        )

    html = f"""
        <h1>Application Status Update</h1>
        <p>Dear {escape(applicant_name)},</p>
        <p>{escape(status_title)} for the <strong>{escape(job_title)}</strong> position at <strong>{escape(company_name)}</strong>.</p>
        {next_steps}
        {feedback}
        <p>Thank you for using our platform!</p>
    """
    return EmailMessage(
        sender=EMAIL_FROM,
        to=to,
        subject=f"Application Update: {status_title} for {job_title}",
        html=html,
    )


def application_submitted_email(to: str, job_title: str, company_name: str) -> EmailMessage:
    html = f"""
        <h1>Application Submitted</h1>
        <p>Thank you for applying to the {escape(job_title)} position at {escape(company_name)}.</p>
        <p>Your application has been received and is currently under review.</p>
        <p>You can track the status of your application in your dashboard.</p>
    """
    return EmailMessage(
        sender=EMAIL_FROM,
        to=to,
        subject=f"Application Submitted: {job_title} at {company_name}",
        html=html,
    )


def company_approved_email(to: str, company_name: str) -> EmailMessage:
    html = f"""
        <h1>Your Company Profile Has Been Approved!</h1>
        <p>Dear {escape(company_name)},</p>
        <p>We're pleased to inform you that your company profile has been approved.</p>
        <p>You can now post jobs and start recruiting talented professionals.</p>
        <p><a href="{FRONTEND_URL}/company/dashboard">Go to your dashboard</a> to get started.</p>
        <br/>
        <p>Best regards,</p>
        <p>Job Portal Team</p>
    """
    return EmailMessage(
        sender=EMAIL_FROM_NOREPLY,
        to=[to],
        subject="Company Profile Approved",
        html=html,
    )


def company_rejected_email(to: str, company_name: str, rejection_reason: Optional[str] = None) -> EmailMessage:
    reason = f"<p><strong>Reason:</strong> {escape(rejection_reason)}</p>" if rejection_reason else ""
    html = f"""
        <h1>Your Company Profile Requires Updates</h1>
        <p>Dear {escape(company_name)},</p>
        <p>We've reviewed your company profile and found that it requires some updates before it can be approved.</p>
        {reason}
        <p>Please <a href="{FRONTEND_URL}/company/profile/edit">update your profile</a> and resubmit for approval.</p>
        <br/>
        <p>Best regards,</p>
        <p>Job Portal Team</p>
    """
    return EmailMessage(
        sender=EMAIL_FROM_NOREPLY,
        to=[to],
        subject="Company Profile Needs Updates",
        html=html,
    )


def welcome_email(to: str, name: str, role: str) -> EmailMessage:
    if role == "company":
        body = f"""
            <p>Your company account has been created successfully.</p>
            <p>Please complete your company profile by clicking the link below:</p>
            <p><a href="{FRONTEND_URL}/company/profile">Complete Company Profile</a></p>
            <p>Once your company profile is approved, you can start posting jobs.</p>
        """
        subject = "Welcome to Job Portal - Company Account Created"
    else:
        body = """
            <p>Your account has been created successfully.</p>
            <p>You can now start searching for jobs and applying to them.</p>
        """
        subject = "Welcome to Job Portal"

    html = f"""
        <h1>Welcome to Job Portal</h1>
        <p>Dear {escape(name)},</p>
        {body}
        <br/>
        <p>Best regards,</p>
        <p>Job Portal Team</p>
    """
    return EmailMessage(sender=EMAIL_FROM_NOREPLY, to=[to], subject=subject, html=html)


def password_reset_email(to: str, name: str, token: str, ttl_hours: int) -> EmailMessage:
    reset_url = f"{FRONTEND_URL}/auth/reset-password/{token}"
    html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h1>Password Reset Request</h1>
            <p>Hello {escape(name)},</p>
            <p>We received a request to reset your password. If you didn't make this request, you can safely ignore this email.</p>
            <p>To reset your password, please follow the link below:</p>
            <p><a href="{reset_url}">Reset Password</a></p>
            <p>This link will expire in {ttl_hours} hours.</p>
            <p>Best regards,<br/>The Job Portal Team</p>
        </div>
    """
    return EmailMessage(sender=EMAIL_FROM_NOREPLY, to=to, subject="Password Reset Request", html=html)


def password_reset_success_email(to: str, name: str) -> EmailMessage:
    html = f"""
        <h1>Password Reset Successful</h1>
        <p>Hi {escape(name)},</p>
        <p>Your password has been successfully reset.</p>
        <p>If you did not perform this action, please contact our support team immediately.</p>
        <p>Best regards,</p>
        <p>The Job Portal Team</p>
    """
    return EmailMessage(sender=EMAIL_FROM_NOREPLY, to=to, subject="Password Reset Successful", html=html)
