"""Tests for the secondary system sync."""

import uuid

import pytest
from asgiref.sync import async_to_sync

from partyman.exceptions import SyncError
from partyman.protocols import PartyView
from partyman.services.sync import SecondarySync
from partyman.tests.fakes import FakeBridge


def _view(**kwargs):
    defaults = {
        "id": uuid.UUID("00000000-0000-0000-0000-000000000001"),
        "name": "Jane Doe",
        "kind": "PROSPECT",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "555 0100",
        "industry": "Retail",
        "city": "Springfield",
        "region": "IL",
    }
    defaults.update(kwargs)
    return PartyView(**defaults)


class TestParseResponse:
    def test_dict_passes_through(self):
        raw = {"response": {"recordId": "1"}, "messages": [{"code": "0", "message": "OK"}]}
        assert SecondarySync.parse_response("s", raw) is raw

    def test_json_string_is_decoded(self):
        assert SecondarySync.parse_response("s", '{"recordId": "9"}') == {"recordId": "9"}

    def test_json_bytes_are_decoded(self):
        assert SecondarySync.parse_response("s", b'{"ok": true}') == {"ok": True}

    def test_garbage_string(self):
        with pytest.raises(SyncError, match="Unparseable"):
            SecondarySync.parse_response("s", "<html>")

    def test_non_object(self):
        with pytest.raises(SyncError, match="Unexpected"):
            SecondarySync.parse_response("s", ["a"])

    def test_error_flag(self):
        with pytest.raises(SyncError) as exc:
            SecondarySync.parse_response("JS * Create Customer", {"error": True})
        assert exc.value.script == "JS * Create Customer"
        assert str(exc.value) == "JS * Create Customer reported an error"

    def test_error_flag_with_message(self):
        with pytest.raises(SyncError, match="Record is locked"):
            SecondarySync.parse_response("s", {"error": "x", "message": "Record is locked"})

    def test_non_zero_message_code(self):
        raw = {"messages": [{"code": "102", "message": "Field is missing"}]}
        with pytest.raises(SyncError, match="Field is missing") as exc:
            SecondarySync.parse_response("s", raw)
        assert exc.value.response is raw

    def test_numeric_zero_code_passes(self):
        assert SecondarySync.parse_response("s", {"messages": [{"code": 0}]})


class TestBuildPayload:
    def test_field_data(self):
        sync = SecondarySync(FakeBridge(), layout="prodCustomers")
        payload = sync.build_payload(_view())

        assert payload["layout"] == "prodCustomers"
        assert payload["action"] == "create"
        fields = payload["fieldData"]
        assert fields["Name"] == "Jane Doe"
        assert fields["Email"] == "jane@example.com"
        assert fields["State"] == "IL"
        assert fields["Industry"] == "Retail"
        assert fields["AddressLine1"] == ""
        assert fields["PartyId"] == "00000000-0000-0000-0000-000000000001"

    def test_defaults_from_settings(self, settings):
        settings.PARTYMAN = {"SECONDARY_LAYOUT": "qaCustomers", "CREATE_RECORD_SCRIPT": "Create"}
        sync = SecondarySync(FakeBridge())
        assert sync.layout == "qaCustomers"
        assert sync.create_script == "Create"


class TestSync:
    def test_nested_record_id(self):
        bridge = FakeBridge()
        ref = async_to_sync(SecondarySync(bridge).sync)(_view())

        assert ref.record_id == "FM-1001"
        assert ref.layout == "devCustomers"
        assert bridge.calls[0][0] == "JS * Create Customer"

    def test_string_response(self):
        bridge = FakeBridge('{"response": {"recordId": "77"}}')
        ref = async_to_sync(SecondarySync(bridge).sync)(_view())
        assert ref.record_id == "77"

    def test_no_record_id(self):
        bridge = FakeBridge({"response": {"modId": "1"}})
        with pytest.raises(SyncError, match="No record id"):
            async_to_sync(SecondarySync(bridge).sync)(_view())

    def test_bridge_exception_is_wrapped(self):
        bridge = FakeBridge(exc=TimeoutError("slow"))
        with pytest.raises(SyncError) as exc:
            async_to_sync(SecondarySync(bridge).sync)(_view())
        assert isinstance(exc.value.__cause__, TimeoutError)

    def test_sync_error_passes_through(self):
        error = SyncError("not configured", script="x")
        bridge = FakeBridge(exc=error)
        with pytest.raises(SyncError) as exc:
            async_to_sync(SecondarySync(bridge).sync)(_view())
        assert exc.value is error


class TestFetchConfiguration:
    def test_returns_response_body(self):
        config = {"fieldMetaData": [{"name": "Email"}]}
        bridge = FakeBridge({"response": config, "messages": [{"code": "0"}]})

        result = async_to_sync(SecondarySync(bridge).fetch_configuration)()

        assert result == config
        script, payload = bridge.calls[0]
        assert script == "JS * Fetch Config"
        assert payload["action"] == "metaData"

    def test_flat_response(self):
        bridge = FakeBridge({"layouts": ["devCustomers"]})
        result = async_to_sync(SecondarySync(bridge).fetch_configuration)()
        assert result == {"layouts": ["devCustomers"]}

    def test_error(self):
        bridge = FakeBridge({"messages": [{"code": "952", "message": "Invalid token"}]})
        with pytest.raises(SyncError, match="Invalid token"):
            async_to_sync(SecondarySync(bridge).fetch_configuration)()
