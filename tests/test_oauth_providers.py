"""Tests for the Facebook, GitHub, Google and LinkedIn providers.

Network calls go through httpx.MockTransport; nothing leaves the process.
"""
import logging
import re
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from social_oauth.core.config import settings
from social_oauth.oauth import (
    FacebookOAuthProvider,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    LinkedInOAuthProvider,
    OAuthConfig,
    OAuthServiceInterface,
    OAuthTokenError,
    OAuthUserInfoError,
    close_default_http_client,
    get_default_http_client,
)

DEFAULT_SCOPES = [
    (FacebookOAuthProvider, ("email",)),
    (GitHubOAuthProvider, ("user",)),
    (GoogleOAuthProvider, ("openid", "profile", "email")),
    (LinkedInOAuthProvider, ("r_liteprofile", "r_emailaddress")),
]
ALL_PROVIDERS = [cls for cls, _ in DEFAULT_SCOPES]


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


def _form(request: httpx.Request) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


def _token_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"access_token": "tok123", "token_type": "bearer"})


class TestConfiguration:
    @pytest.mark.parametrize("provider_cls,defaults", DEFAULT_SCOPES)
    def test_empty_scopes_fall_back_to_defaults(self, provider_cls, defaults, unused_http):
        provider = provider_cls("id1", "sec1", "http://app/cb", [], http=unused_http)
        assert provider.get_scopes() == defaults

    @pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
    def test_explicit_scopes_kept(self, provider_cls, unused_http):
        provider = provider_cls("id1", "sec1", scopes=["custom"], http=unused_http)
        assert provider.get_scopes() == ("custom",)
        assert provider.get_config()["scope"] == "custom"

    @pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
    def test_implements_interface(self, provider_cls, unused_http):
        assert isinstance(provider_cls("id1", "sec1", http=unused_http), OAuthServiceInterface)

    @pytest.mark.parametrize("provider_cls", [FacebookOAuthProvider, GoogleOAuthProvider, LinkedInOAuthProvider])
    def test_config_includes_grant_type(self, provider_cls, unused_http):
        data = provider_cls("id1", "sec1", http=unused_http).get_config()
        assert data["response_type"] == "code"
        assert data["grant_type"] == "authorization_code"

    def test_github_config_has_no_grant_type(self, unused_http):
        data = GitHubOAuthProvider("id1", "sec1", http=unused_http).get_config()
        assert data["response_type"] == "code"
        assert "grant_type" not in data

    @pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
    def test_state_is_fifteen_bytes(self, provider_cls, unused_http):
        state = provider_cls("id1", "sec1", http=unused_http).get_config()["state"]
        assert re.fullmatch(r"[0-9a-f]{30}", state)

    def test_state_bytes_override(self, unused_http):
        provider = GoogleOAuthProvider("id1", "sec1", http=unused_http, state_bytes=4)
        assert len(provider.get_config()["state"]) == 8

    def test_from_config_applies_defaults(self, unused_http):
        provider = GoogleOAuthProvider.from_config(OAuthConfig("id1", "sec1"), http=unused_http)
        assert provider.get_scopes() == ("openid", "profile", "email")

    def test_repr_hides_secret(self, unused_http):
        assert "sec1" not in repr(GitHubOAuthProvider("id1", "sec1", http=unused_http))

    def test_no_http_client_until_network_call(self):
        close_default_http_client()

        provider = GoogleOAuthProvider("id1", "sec1", "http://app/cb")
        provider.get_auth_url()
        provider.with_scopes(["email"]).get_config()

        assert get_default_http_client.cache_info().currsize == 0

    def test_providers_without_client_share_default(self):
        close_default_http_client()
        try:
            github = GitHubOAuthProvider("id1", "sec1")
            google = GoogleOAuthProvider("id1", "sec1")
            assert github.http is google.http
            assert github.http is get_default_http_client()
        finally:
            close_default_http_client()


class TestFunctionalUpdates:
    def test_with_methods_return_new_provider(self, unused_http):
        provider = GitHubOAuthProvider("id1", "sec1", "http://app/cb", http=unused_http)

        updated = provider.with_client_id("id2").with_redirect_url("/next/cb/").with_scopes(["repo"])

        assert isinstance(updated, GitHubOAuthProvider)
        assert updated.get_client_id() == "id2"
        assert updated.get_redirect_url() == "next/cb"
        assert updated.get_scopes() == ("repo",)
        assert provider.get_client_id() == "id1"
        assert provider.get_redirect_url() == "http://app/cb"
        assert provider.get_scopes() == ("user",)
        assert updated.http is provider.http

    def test_with_client_secret(self, unused_http):
        provider = FacebookOAuthProvider("id1", "sec1", http=unused_http)
        assert provider.with_client_secret("sec2").get_client_secret() == "sec2"
        assert provider.get_client_secret() == "sec1"

    def test_projection_uses_provider_config(self, unused_http):
        provider = GoogleOAuthProvider("id1", "sec1", http=unused_http)
        assert provider.only_config(["grant_type", "client_id"]) == {
            "client_id": "id1",
            "grant_type": "authorization_code",
        }
        assert "client_secret" not in provider.without_config("client_secret")


class TestAuthURL:
    def test_github_end_to_end(self, unused_http):
        provider = GitHubOAuthProvider(client_id="id1", client_secret="sec1", redirect_url="http://app/cb", http=unused_http)

        url = provider.get_auth_url()

        assert url.startswith("https://github.com/login/oauth/authorize?")
        assert "client_id=id1" in url
        assert "redirect_uri=http%3A%2F%2Fapp%2Fcb" in url
        assert "scope=user" in url
        assert re.fullmatch(r"[0-9a-f]{30}", _query(url)["state"][0])

    @pytest.mark.parametrize(
        "provider_cls,base",
        [
            (FacebookOAuthProvider, "https://www.facebook.com/v12.0/dialog/oauth"),
            (GitHubOAuthProvider, "https://github.com/login/oauth/authorize"),
            (GoogleOAuthProvider, "https://accounts.google.com/o/oauth2/auth"),
            (LinkedInOAuthProvider, "https://www.linkedin.com/oauth/v2/authorization"),
        ],
    )
    def test_auth_url_parameters(self, provider_cls, base, unused_http):
        url = provider_cls("id1", "sec1", "http://app/cb", http=unused_http).get_auth_url()

        assert url.split("?")[0] == base
        params = _query(url)
        assert set(params) == {"response_type", "client_id", "redirect_uri", "scope", "state"}
        assert params["response_type"] == ["code"]
        assert "sec1" not in url

    def test_google_scopes_space_joined(self, unused_http):
        url = GoogleOAuthProvider("id1", "sec1", http=unused_http).get_auth_url()
        assert "scope=openid+profile+email" in url


class TestAccessToken:
    def test_google_token_exchange(self, mock_http):
        http, requests = mock_http(_token_ok)
        provider = GoogleOAuthProvider("id1", "sec1", "http://app/cb", http=http)

        assert provider.get_access_token("code-abc") == "tok123"

        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://www.googleapis.com/oauth2/v4/token"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert _form(request) == {
            "code": "code-abc",
            "client_id": "id1",
            "client_secret": "sec1",
            "redirect_uri": "http://app/cb",
            "grant_type": "authorization_code",
        }

    def test_github_token_exchange_echoes_state(self, mock_http):
        http, requests = mock_http(_token_ok)
        provider = GitHubOAuthProvider("id1", "sec1", "http://app/cb", http=http)

        assert provider.get_access_token("code-abc") == "tok123"

        request = requests[0]
        assert str(request.url) == "https://github.com/login/oauth/access_token"
        assert request.headers["accept"] == "application/json"
        form = _form(request)
        assert set(form) == {"code", "client_id", "client_secret", "redirect_uri", "state"}
        assert re.fullmatch(r"[0-9a-f]{30}", form["state"])

    @pytest.mark.parametrize(
        "provider_cls,token_url",
        [
            (FacebookOAuthProvider, "https://graph.facebook.com/v12.0/oauth/access_token"),
            (LinkedInOAuthProvider, "https://www.linkedin.com/oauth/v2/accessToken"),
        ],
    )
    def test_token_url(self, provider_cls, token_url, mock_http):
        http, requests = mock_http(_token_ok)
        assert provider_cls("id1", "sec1", http=http).get_access_token("c") == "tok123"
        assert str(requests[0].url) == token_url
        assert _form(requests[0])["grant_type"] == "authorization_code"

    @pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
    def test_http_400_returns_empty_string(self, provider_cls, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))
        assert provider_cls("id1", "sec1", http=http).get_access_token("bad") == ""

    def test_http_400_result_carries_error(self, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))

        result = GoogleOAuthProvider("id1", "sec1", http=http).exchange_code("bad")

        assert not result.ok
        assert isinstance(result.error, OAuthTokenError)
        assert result.error.status_code == 400
        assert result.error.provider == "google"
        with pytest.raises(OAuthTokenError):
            result.unwrap()

    def test_missing_access_token_returns_empty_string(self, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(200, json={"error": "bad_verification_code"}))
        provider = GitHubOAuthProvider("id1", "sec1", http=http)

        assert provider.get_access_token("bad") == ""
        assert isinstance(provider.exchange_code("bad").error, OAuthTokenError)

    def test_malformed_json_returns_empty_string(self, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(200, text="access_token=oops&scope=user"))
        assert GitHubOAuthProvider("id1", "sec1", http=http).get_access_token("c") == ""

    def test_connection_error_returns_empty_string(self, mock_http):
        def _refuse(request):
            raise httpx.ConnectError("refused", request=request)

        http, _ = mock_http(_refuse)
        assert FacebookOAuthProvider("id1", "sec1", http=http).get_access_token("c") == ""

    def test_successful_result(self, mock_http):
        http, _ = mock_http(_token_ok)
        result = LinkedInOAuthProvider("id1", "sec1", http=http).exchange_code("c")
        assert result.ok
        assert result.unwrap() == "tok123"

    def test_log_lines_hold_no_secrets(self, mock_http, caplog):
        http, _ = mock_http(lambda request: httpx.Response(400, json={}))
        with caplog.at_level(logging.INFO):
            GoogleOAuthProvider("id1", "sec1", http=http).get_access_token("code-secret-xyz")
        assert "Token exchange attempt" in caplog.text
        assert "sec1" not in caplog.text
        assert "code-secret-xyz" not in caplog.text


class TestGetUser:
    def test_facebook_sends_token_as_query_param(self, mock_http):
        http, requests = mock_http(lambda request: httpx.Response(200, json={"id": "1", "name": "Ann"}))

        user = FacebookOAuthProvider("id1", "sec1", http=http).get_user("tok123")

        assert user == {"id": "1", "name": "Ann"}
        url = requests[0].url
        assert url.host == "graph.facebook.com"
        assert url.path == "/me"
        assert url.params["access_token"] == "tok123"
        assert url.params["fields"] == "id,name,email"
        assert "authorization" not in requests[0].headers

    def test_google_sends_token_as_query_param(self, mock_http):
        http, requests = mock_http(lambda request: httpx.Response(200, json={"sub": "g-1"}))

        assert GoogleOAuthProvider("id1", "sec1", http=http).get_user("tok/+=") == {"sub": "g-1"}
        assert requests[0].url.path == "/oauth2/v3/userinfo"
        assert requests[0].url.params["access_token"] == "tok/+="

    def test_github_sends_bearer_and_user_agent(self, mock_http):
        http, requests = mock_http(lambda request: httpx.Response(200, json={"id": 7, "login": "octo"}))

        assert GitHubOAuthProvider("id1", "sec1", http=http).get_user("tok123") == {"id": 7, "login": "octo"}

        request = requests[0]
        assert str(request.url) == "https://api.github.com/user"
        assert request.headers["authorization"] == "Bearer tok123"
        assert request.headers["user-agent"] == settings.OAUTH_USER_AGENT

    def test_linkedin_sends_bearer(self, mock_http):
        http, requests = mock_http(lambda request: httpx.Response(200, json={"id": "li-1"}))

        assert LinkedInOAuthProvider("id1", "sec1", http=http).get_user("tok123") == {"id": "li-1"}

        request = requests[0]
        assert request.url.path == "/v2/me"
        assert request.url.params["projection"].startswith("(id,firstName,lastName")
        assert request.headers["authorization"] == "Bearer tok123"

    @pytest.mark.parametrize("provider_cls", ALL_PROVIDERS)
    def test_http_error_returns_none(self, provider_cls, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(401, json={"message": "Bad credentials"}))
        assert provider_cls("id1", "sec1", http=http).get_user("expired") is None

    def test_non_object_payload_returns_none(self, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(200, json=["not", "a", "profile"]))
        provider = GitHubOAuthProvider("id1", "sec1", http=http)

        assert provider.get_user("tok") is None
        assert isinstance(provider.fetch_user("tok").error, OAuthUserInfoError)

    def test_malformed_json_returns_none(self, mock_http):
        http, _ = mock_http(lambda request: httpx.Response(200, text="<html>"))
        assert GoogleOAuthProvider("id1", "sec1", http=http).get_user("tok") is None


class TestExtractUserData:
    def test_facebook(self, unused_http):
        provider = FacebookOAuthProvider("id1", "sec1", http=unused_http)
        assert provider.extract_user_data({"id": "10", "name": "Ann", "email": "ann@example.com"}) == {
            "id": "10",
            "email": "ann@example.com",
            "name": "Ann",
            "picture": "",
        }

    def test_github_without_name_or_email(self, unused_http):
        provider = GitHubOAuthProvider("id1", "sec1", http=unused_http)
        data = provider.extract_user_data({"id": 42, "login": "octo", "name": None, "email": None})
        assert data == {"id": "42", "email": "", "name": "octo", "picture": ""}

    def test_google(self, unused_http):
        provider = GoogleOAuthProvider("id1", "sec1", http=unused_http)
        data = provider.extract_user_data(
            {"sub": "g-1", "email": "a@gmail.com", "name": "A", "picture": "https://img", "email_verified": True}
        )
        assert data["id"] == "g-1"
        assert data["email_verified"] is True
        assert data["picture"] == "https://img"

    def test_linkedin(self, unused_http):
        provider = LinkedInOAuthProvider("id1", "sec1", http=unused_http)
        info = {
            "id": "li-1",
            "firstName": {"localized": {"en_US": "Bob"}, "preferredLocale": {"language": "en", "country": "US"}},
            "lastName": {"localized": {"de_DE": "Baumann"}, "preferredLocale": {"language": "fr", "country": "FR"}},
            "profilePicture": {
                "displayImage~": {
                    "elements": [
                        {"identifiers": [{"identifier": "https://small"}]},
                        {"identifiers": [{"identifier": "https://large"}]},
                    ]
                }
            },
        }
        assert provider.extract_user_data(info) == {
            "id": "li-1",
            "email": "",
            "name": "Bob Baumann",
            "picture": "https://large",
        }

    def test_linkedin_minimal(self, unused_http):
        provider = LinkedInOAuthProvider("id1", "sec1", http=unused_http)
        assert provider.extract_user_data({"id": "li-2"}) == {"id": "li-2", "email": "", "name": "", "picture": ""}
