"""Typed view of the per-company settings blob."""

from pydantic import BaseModel

from app.settings import settings


class BusinessHoursSettings(BaseModel):
    start: str = "09:00"
    end: str = "17:00"
    timezone: str = ""


class TwilioSettings(BaseModel):
    phone_number: str = ""
    account_sid: str = ""
    auth_token: str = ""
    enabled: bool = False


class RetellSettings(BaseModel):
    agent_id: str = ""
    api_key: str = ""
    enabled: bool = False


class NotificationSettings(BaseModel):
    email_alerts: bool = True
    sms_alerts: bool = True
    emergency_only: bool = False


class AutomationSettings(BaseModel):
    auto_responder: bool = False
    package_notifications: bool = True
    booking_confirmations: bool = True
    maintenance_alerts: bool = True


class CompanySettings(BaseModel):
    """Business hours, channel credentials and notification toggles."""

    business_hours: BusinessHoursSettings = BusinessHoursSettings()
    twilio_settings: TwilioSettings = TwilioSettings()
    retell_settings: RetellSettings = RetellSettings()
    notifications: NotificationSettings = NotificationSettings()
    automations: AutomationSettings = AutomationSettings()

    @classmethod
    def from_blob(cls, blob: dict | None) -> "CompanySettings":
        """Parse the JSON stored on a company, filling in defaults."""
        return cls.model_validate(blob or {})

    @property
    def timezone(self) -> str:
        """Company timezone, or the deployment default when none is set."""
        return self.business_hours.timezone or settings.default_timezone
