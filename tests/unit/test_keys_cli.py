"""Unit tests for cli/keys.py"""

from tests.mocks.fixtures import make_api_key


class TestList:

    def test_table(self, invoke, fake_api):
        fake_api.on("GET", "/keys", {"keys": [
            make_api_key(),
            make_api_key(key_id="key_002", name="Deploy", last_used_at="2026-02-01T08:00:00Z"),
        ]})
        result = invoke("keys", "list")

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].split() == ["ID", "NAME", "PREFIX", "LAST", "USED"]
        assert "sk_live_ab12..." in lines[1]
        assert lines[1].endswith("never")
        assert lines[2].endswith("2026-02-01T08:00:00Z")

    def test_empty(self, invoke, fake_api):
        fake_api.on("GET", "/keys", {"keys": []})
        result = invoke("keys", "list")
        assert result.output == "No API keys found\n"


class TestCreate:

    def test_create_shows_full_key_once(self, invoke, fake_api):
        fake_api.on("POST", "/keys", {
            "id": "key_new",
            "key": "sk_live_FULLSECRETVALUE1234",
            "name": "CI",
            "keyPrefix": "sk_live_FULL",
            "scopes": ["productions:read", "assets:read"],
            "warning": "Store this key securely. It will not be shown again.",
        }, status=201)

        result = invoke("keys", "create", "--name", "CI")

        assert result.exit_code == 0, result.output
        assert "sk_live_FULLSECRETVALUE1234" in result.output
        assert "will not be shown again" in result.output
        assert fake_api.body(fake_api.last("POST")) == {
            "name": "CI",
            "scopes": ["productions:read", "assets:read"],
        }

    def test_custom_scopes(self, invoke, fake_api):
        fake_api.on("POST", "/keys", {"id": "key_new", "key": "sk_live_x"}, status=201)
        invoke("keys", "create", "--name", "CI", "--scopes", "productions:write, assets:write")
        assert fake_api.body(fake_api.last("POST"))["scopes"] == ["productions:write", "assets:write"]

    def test_default_warning(self, invoke, fake_api):
        fake_api.on("POST", "/keys", {"id": "key_new", "key": "sk_live_x"}, status=201)
        result = invoke("keys", "create", "--name", "CI")
        assert "not be shown again" in result.output

    def test_name_required(self, invoke, fake_api):
        result = invoke("keys", "create")
        assert result.exit_code == 2
        assert fake_api.requests == []

    def test_empty_scopes(self, invoke, fake_api):
        result = invoke("keys", "create", "--name", "CI", "--scopes", " , ")
        assert result.exit_code == 1
        assert fake_api.requests == []


class TestRevoke:

    def test_declined(self, invoke, fake_api):
        result = invoke("keys", "revoke", "key_001", input="no\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert fake_api.calls("DELETE") == []

    def test_confirmed(self, invoke, fake_api):
        fake_api.on("DELETE", "/keys/key_001", status=204)
        result = invoke("keys", "revoke", "key_001", input="y\n")
        assert result.exit_code == 0, result.output
        assert "Revoked" in result.output
        assert len(fake_api.calls("DELETE", "/keys/key_001")) == 1

    def test_force(self, invoke, fake_api):
        fake_api.on("DELETE", "/keys/key_001", status=204)
        result = invoke("keys", "revoke", "key_001", "--force")
        assert result.exit_code == 0
        assert "Revoked" in result.output
