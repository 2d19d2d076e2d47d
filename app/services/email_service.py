"""
Email Service
Handles sending emails for account and appointment notifications
"""

from flask import current_app
from flask_mail import Message
from extensions import mail


def _layout(heading, content):
    """Wrap notification content in the shared email layout"""
    return f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2 style="color: #8E5572;">{heading}</h2>
                {content}
                <hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;">
                <p style="color: #999; font-size: 12px;">
                    This is an automated message from {current_app.config.get('BRAND_NAME')}. Please do not reply to this email.
                </p>
            </div>
        </body>
        </html>
        """


def _appointment_card(appointment, when=None):
    when = when or appointment.date
    return f"""
                <div style="background-color: #f8f8f8; padding: 20px; border-radius: 5px; margin: 20px 0;">
                    <h3 style="margin-top: 0; color: #333;">{appointment.title}</h3>
                    <p><strong>Date:</strong> {when.strftime('%A, %d %B %Y')}</p>
                    <p><strong>Time:</strong> {when.strftime('%H:%M')}</p>
                    <p><strong>Location:</strong> {appointment.location}</p>
                    <p><strong>Appointment ID:</strong> #{appointment.id}</p>
                </div>
    """


class EmailService:
    """Service for sending emails"""

    @staticmethod
    def send_email(to, subject, html_body, text_body=None):
        """Send an email. Failures are logged, never raised."""
        try:
            msg = Message(
                subject=subject,
                recipients=[to] if isinstance(to, str) else to,
                html=html_body,
                body=text_body or html_body
            )
            mail.send(msg)
            return True
        except Exception as e:
            current_app.logger.error(f'Failed to send email: {str(e)}')
            return False

    @staticmethod
    def test_connection():
        """Open (and close) a connection to the mail server"""
        try:
            with mail.connect():
                pass
            return True
        except Exception as e:
            current_app.logger.error(f'Email connection test failed: {str(e)}')
            return False

    @staticmethod
    def send_welcome_email(user):
        """Send welcome email after registration"""
        brand = current_app.config.get('BRAND_NAME')
        subject = f"Welcome to {brand}!"
        html_body = _layout(f"Welcome, {user.name}!", f"""
                <p>Thank you for registering. Your account has been created with the following details:</p>
                <ul>
                    <li><strong>Name:</strong> {user.name}</li>
                    <li><strong>Email:</strong> {user.email}</li>
                </ul>
                <p>You can now book appointments online at
                   <a href="{current_app.config.get('FRONTEND_URL')}">{current_app.config.get('FRONTEND_URL')}</a>.</p>
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_appointment_confirmation(user, appointment):
        """Send appointment confirmation to the user who booked"""
        subject = f"Appointment Confirmation - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("Appointment Confirmed", f"""
                <p>Hi {user.name},</p>
                <p>Your appointment has been booked.</p>
                {_appointment_card(appointment)}
                {f'<p><strong>Notes:</strong> {appointment.description}</p>' if appointment.description else ''}
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_appointment_rescheduled_email(user, appointment, previous_date):
        """Send notice that an appointment moved to a new date"""
        subject = f"Appointment Rescheduled - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("Appointment Rescheduled", f"""
                <p>Hi {user.name},</p>
                <p>Your appointment previously on
                   <strong>{previous_date.strftime('%A, %d %B %Y at %H:%M')}</strong> has been moved.</p>
                {_appointment_card(appointment)}
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_appointment_cancelled_email(user, appointment):
        """Send cancellation email"""
        subject = f"Appointment Cancelled - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("Appointment Cancelled", f"""
                <p>Hi {user.name},</p>
                <p>The following appointment has been cancelled.</p>
                {_appointment_card(appointment)}
                {f'<p><strong>Reason:</strong> {appointment.cancellation_reason}</p>' if appointment.cancellation_reason else ''}
                <p style="color: #666; font-size: 14px;">You can book another appointment anytime.</p>
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_login_notification(user, ip_address=None):
        subject = f"Login Notification - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("New Login to Your Account", f"""
                <p>Hi {user.name},</p>
                <p>Your account was just signed in to{f' from <strong>{ip_address}</strong>' if ip_address else ''}.</p>
                <p style="color: #666; font-size: 14px;">
                    If this wasn't you, please change your password immediately.
                </p>
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_password_updated_email(user):
        subject = f"Password Updated - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("Password Updated", f"""
                <p>Hi {user.name},</p>
                <p>The password for your account was changed.</p>
                <p style="color: #666; font-size: 14px;">
                    If you didn't make this change, please contact us right away.
                </p>
        """)
        return EmailService.send_email(user.email, subject, html_body)

    @staticmethod
    def send_account_deletion_email(user):
        subject = f"Account Deleted - {current_app.config.get('BRAND_NAME')}"
        html_body = _layout("Account Deleted", f"""
                <p>Hi {user.name},</p>
                <p>Your account and its details have been removed from our system.</p>
                <p style="color: #666; font-size: 14px;">We hope to see you again.</p>
        """)
        return EmailService.send_email(user.email, subject, html_body)
