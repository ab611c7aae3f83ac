from __future__ import annotations

from dataclasses import dataclass
from html import escape

from ..core.constants import CREDENTIALS_SUBJECT


@dataclass(frozen=True)
class CredentialsMessage:
    """One-time credentials for a freshly created account."""

    name: str
    email: str
    password: str
    role: str

    @property
    def subject(self) -> str:
        return CREDENTIALS_SUBJECT

    def html(self) -> str:
        return (
            f"<p>Hello {escape(self.name)},</p>\n"
            "<p>Your account has been created for the IRS Timesheet app. "
            "Use the credentials below to sign in.</p>\n"
            f"<p><strong>Email:</strong> {escape(self.email)}</p>\n"
            f"<p><strong>Password:</strong> {escape(self.password)}</p>\n"
            f"<p><strong>Role:</strong> {escape(self.role)}</p>\n"
            "<p>Open the app, tap Login, and enter these details to access your dashboard.</p>\n"
            "<p>Please change your password after first login if the app supports it.</p>\n"
        )

    def text(self) -> str:
        return (
            "IRS Timesheet login credentials\n"
            f"Name: {self.name}\n"
            f"Email: {self.email}\n"
            f"Password: {self.password}\n"
            f"Role: {self.role}\n"
        )
