"""Client for the platform's key/value system settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from admin_console.admin_client import AdminAPIError, AdminClient

SETTINGS_ENDPOINT = "/admin/settings"


@dataclass(frozen=True)
class SettingEntry:
    key: str
    value: str
    description: Optional[str] = None


@dataclass(frozen=True)
class KnownSetting:
    key: str
    description: str
    default: Any = ""

    @property
    def is_bool(self) -> bool:
        return isinstance(self.default, bool)


KNOWN_SETTINGS = (
    KnownSetting("backend_url", "Backend API URL"),
    KnownSetting("frontend_url", "Frontend URL"),
    KnownSetting("email_from", "Default sender email"),
    KnownSetting("language", "Default language", "en"),
    KnownSetting("timezone", "Default timezone", "Africa/Kigali"),
    KnownSetting("maintenance_mode", "Maintenance mode status", False),
    KnownSetting("sms_provider_enabled", "SMS provider status", False),
    KnownSetting("email_provider_enabled", "Email provider status", True),
    KnownSetting("stripe_public_key", "Stripe public key"),
    KnownSetting("stripe_secret_key", "Stripe secret key"),
    KnownSetting("twilio_sid", "Twilio account SID"),
    KnownSetting("twilio_auth_token", "Twilio auth token"),
    KnownSetting("twilio_from", "Twilio sender number"),
    KnownSetting("site_name", "Website name"),
    KnownSetting("site_description", "Website description"),
    KnownSetting("contact_email", "Contact email"),
    KnownSetting("contact_phone", "Contact phone"),
)


def default_form() -> Dict[str, Any]:
    return {setting.key: setting.default for setting in KNOWN_SETTINGS}


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def fold_entries(entries: List[Mapping[str, Any]], form: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge server entries into a form mapping keyed by known setting.

    Unknown keys are ignored; known keys the server does not send keep their
    current form value.
    """
    folded = dict(form) if form is not None else default_form()
    known = {setting.key: setting for setting in KNOWN_SETTINGS}
    for entry in entries:
        setting = known.get(entry.get("key"))
        value = entry.get("value")
        if setting is None or value is None:
            continue
        folded[setting.key] = value == "true" if setting.is_bool else value
    return folded


def to_entries(form: Mapping[str, Any]) -> List[SettingEntry]:
    """Every known key, stringified, for a bulk upsert."""
    return [
        SettingEntry(setting.key, stringify(form.get(setting.key, setting.default)), setting.description)
        for setting in KNOWN_SETTINGS
    ]


class SettingsStore:
    """Loads settings into a form mapping and bulk-saves the full known key set."""

    def __init__(self, client: AdminClient):
        self.client = client
        self.form: Dict[str, Any] = default_form()
        self.error: Optional[str] = None

    def load(self) -> bool:
        try:
            response = self.client.get(SETTINGS_ENDPOINT)
        except AdminAPIError as exc:
            self.error = f"Failed to load settings: {exc.message}"
            logger.warning("Settings load failed: {error}", error=exc.message)
            return False
        entries = (response.get("data") or {}).get("settings") or []
        self.form = fold_entries(entries, default_form())
        self.error = None
        return True

    def save(self, form: Optional[Mapping[str, Any]] = None) -> bool:
        """Upsert every known key from ``form`` and reload from the server."""
        if form is not None:
            self.form = {**self.form, **form}
        payload = {
            "settings": [
                {"key": entry.key, "value": entry.value, "description": entry.description}
                for entry in to_entries(self.form)
            ]
        }
        try:
            self.client.put(SETTINGS_ENDPOINT, json=payload)
        except AdminAPIError as exc:
            self.error = f"Failed to save settings: {exc.message}"
            logger.warning("Settings save failed: {error}", error=exc.message)
            return False
        logger.info("Saved {count} settings", count=len(payload["settings"]))
        return self.load()
