from httpx import Response

from admin_console.settings_store import KNOWN_SETTINGS, SettingsStore, default_form, fold_entries

from helpers import RecordingTransport, envelope


def test_fold_ignores_unknown_and_keeps_defaults():
    form = fold_entries(
        [
            {"key": "site_name", "value": "Kigali Trips"},
            {"key": "maintenance_mode", "value": "true"},
            {"key": "legacy_flag", "value": "1"},
        ]
    )
    assert form["site_name"] == "Kigali Trips"
    assert form["maintenance_mode"] is True
    assert form["timezone"] == "Africa/Kigali"
    assert form["email_provider_enabled"] is True
    assert "legacy_flag" not in form


def test_save_sends_every_known_key():
    transport = RecordingTransport(
        envelope({"settings": []}),
        envelope({"settings": []}),
    )
    store = SettingsStore(transport.client())

    assert store.save({"sms_provider_enabled": True}) is True

    sent = transport.body(0)["settings"]
    assert [entry["key"] for entry in sent] == [setting.key for setting in KNOWN_SETTINGS]
    assert len(sent) == 17
    values = {entry["key"]: entry["value"] for entry in sent}
    assert values["sms_provider_enabled"] == "true"
    assert values["maintenance_mode"] == "false"
    assert all(isinstance(value, str) for value in values.values())
    assert transport.requests[0].method == "PUT"
    assert transport.requests[1].method == "GET"


def test_failed_save_reports_error():
    transport = RecordingTransport(Response(500, json={"success": False, "error": "boom"}))
    store = SettingsStore(transport.client())

    assert store.save() is False
    assert store.error == "Failed to save settings: boom"


def test_settings_round_trip(admin_client):
    store = SettingsStore(admin_client)
    assert store.load() is True
    assert store.form["site_name"] == "Visit Rwanda Travel"

    submitted = {
        **default_form(),
        "site_name": "Kigali Trips, Ltd.",
        "maintenance_mode": True,
        "email_provider_enabled": False,
        "contact_phone": "+250 788 123 456",
        "stripe_public_key": "pk_test_123",
    }
    assert store.save(submitted) is True

    reloaded = SettingsStore(admin_client)
    assert reloaded.load() is True
    for setting in KNOWN_SETTINGS:
        assert reloaded.form[setting.key] == submitted[setting.key]
