"""
Digest, model, exception, interceptor chain and logging tests
"""

import io
import logging

import pytest

from attendance_sdk.client.http_client import ResponseResult
from attendance_sdk.client.interceptors import (
    InterceptorChain,
    InterceptorEntry,
    LoggingInterceptor,
)
from attendance_sdk.crypto import hash_password
from attendance_sdk.exceptions import (
    ApiError,
    AuthRefreshError,
    BootstrapError,
    ErrorCategory,
    TransportError,
)
from attendance_sdk.models import (
    ActivityAttendanceReportRequest,
    DirectoryUserInfo,
    RuntimeConfig,
    UserIdentity,
)
from attendance_sdk.utils import configure_logging

from conftest import make_response


class TestHashPassword:
    """Tests for hash_password"""

    @pytest.mark.parametrize(
        "password, expected",
        [
            ("secret", "5en6G6MezRroT3XKqkdPOmY/BfQ="),
            ("pässword", "I7dElEdfX4dJgLdnbVEeI9iG2mQ="),
            ("", "2jmj7l5rSw0yVb/vlWAYkK/YBwk="),
        ],
    )
    def test_known_digests(self, password, expected):
        """Should match known base64 SHA-1 digests"""
        assert hash_password(password) == expected

    def test_bytes_input(self):
        """Should accept bytes"""
        assert hash_password(b"secret") == hash_password("secret")


class TestModels:
    """Tests for payload models"""

    def test_runtime_config_aliases(self):
        """Should read camelCase fields and ignore extras"""
        config = RuntimeConfig.model_validate(
            {"defaultHomeBaseUrl": "https://dir.test", "authToken": "T0", "extra": 1}
        )
        assert config.default_home_base_url == "https://dir.test"
        assert config.auth_token == "T0"

    def test_directory_user_info(self):
        """Should parse the nested school connection"""
        info = DirectoryUserInfo.model_validate(
            {"schoolConnection": {"appCode": "S1", "apiUrl": "https://tenant.test"}}
        )
        assert info.school_connection.app_code == "S1"

    def test_user_identity_keeps_extra_fields(self):
        """Should keep identity fields beyond the two it needs"""
        identity = UserIdentity.model_validate({"userType": 2, "internalId": 77, "firstName": "Ada"})
        assert identity.user_type == 2
        assert identity.internal_id == 77

    def test_report_request_accepts_joined_strings(self):
        """Should accept already-joined id lists"""
        request = ActivityAttendanceReportRequest(
            activities="1,2",
            site_prefix="NS",
            from_date="2024-01-01",
            to_date="2024-01-31",
            grades="3",
        )
        assert request.to_body()["activities"] == "1,2"
        assert request.to_body()["sitePrefix"] == "NS"


class TestExceptions:
    """Tests for the error hierarchy"""

    def test_categories(self):
        """Should derive the category from the code"""
        assert TransportError.timeout().category == ErrorCategory.NETWORK
        assert ApiError("x", status_code=500).category == ErrorCategory.API
        assert AuthRefreshError("x").category == ErrorCategory.AUTH
        assert BootstrapError("x", step="login").category == ErrorCategory.BOOTSTRAP

    def test_description_and_dict(self):
        """Should describe and serialize the error"""
        error = ApiError("Activity listing failed", status_code=404, body={"m": 1})

        assert error.get_description() == "[API404] Activity listing failed (HTTP 404)"
        data = error.to_dict()
        assert data["name"] == "ApiError"
        assert data["details"] == {"body": {"m": 1}}

    def test_bootstrap_step_in_details(self):
        """Should record the failing step"""
        error = BootstrapError("boom", step="user_lookup")
        assert error.details == {"step": "user_lookup"}


class TestInterceptorChain:
    """Tests for InterceptorChain"""

    def _result(self, status=500):
        return ResponseResult(status_code=status, body={}, raw_text="{}")

    def test_chain_is_immutable_snapshot(self):
        """Should not see entries added after construction"""
        entries = [InterceptorEntry()]
        chain = InterceptorChain(entries)
        entries.append(InterceptorEntry())
        assert len(chain) == 1

    def test_resolve_error_short_circuits(self):
        """Should stop at the first replacement"""
        calls = []
        replacement = self._result(200)
        chain = InterceptorChain([
            InterceptorEntry(on_error=lambda c: calls.append("a")),
            InterceptorEntry(on_error=lambda c: replacement),
            InterceptorEntry(on_error=lambda c: calls.append("c")),
        ])

        assert chain.resolve_error(object()) is replacement
        assert calls == ["a"]

    def test_resolve_error_without_replacement(self):
        """Should return None without a replacement"""
        chain = InterceptorChain([InterceptorEntry(on_success=lambda r: None)])
        assert chain.resolve_error(object()) is None

    def test_notify_success_runs_all(self):
        """Should run every success handler"""
        seen = []
        chain = InterceptorChain([
            InterceptorEntry(on_success=lambda r: seen.append(1)),
            InterceptorEntry(),
            InterceptorEntry(on_success=lambda r: seen.append(2)),
        ])
        chain.notify_success(self._result(200))
        assert seen == [1, 2]

    def test_logging_interceptor_never_resolves(self, caplog, make_client, transport):
        """Should log outcomes without replacing them"""
        transport.add("GET", "https://x.test/y", make_response(404, {}))
        client = make_client(interceptors=[LoggingInterceptor().as_entry()])

        with caplog.at_level(logging.INFO, logger="attendance_sdk"):
            result = client.get("y")

        assert result.status_code == 404
        assert "HTTP 404" in caplog.text


class TestConfigureLogging:
    """Tests for configure_logging"""

    def test_does_not_stack_handlers(self):
        """Should keep a single SDK handler across repeated calls"""
        stream = io.StringIO()
        sdk_logger = configure_logging(debug=True, stream=stream)
        configure_logging(debug=True, stream=stream)

        ours = [h for h in sdk_logger.handlers if getattr(h, "_attendance_sdk_handler", False)]
        assert len(ours) == 1
        assert sdk_logger.level == logging.DEBUG

        logging.getLogger("attendance_sdk.client").debug("visible")
        assert "visible" in stream.getvalue()

        for handler in ours:
            sdk_logger.removeHandler(handler)
        sdk_logger.setLevel(logging.NOTSET)
