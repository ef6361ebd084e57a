from src.error_handler import GENERIC_MESSAGE, ErrorHandler, user_message_for
from src.integrations.contracts.leads import LeadErrorKind, LeadSubmissionError, SubmissionResult


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["retryable"] is False
    assert "internal error" in out["message"].lower()
    assert "boom" in out["metadata"]["error"]


def test_validation_error_lists_fields():
    exc = LeadSubmissionError(
        LeadErrorKind.VALIDATION_ERROR,
        "Lead validation failed: Missing required field: email",
        details=["Missing required field: email"],
    )
    out = ErrorHandler().handle_submission_error(exc)
    assert "required fields" in out["message"]
    assert out["error_code"] == "VALIDATION_ERROR"
    assert out["field_errors"] == ["Missing required field: email"]
    assert out["retryable"] is False


def test_timeout_asks_user_to_check_connection():
    exc = LeadSubmissionError(LeadErrorKind.TIMEOUT, "CRM request timeout", attempts=3)
    out = ErrorHandler().handle_submission_error(exc)
    assert "check your connection" in out["message"]
    assert out["retryable"] is True


def test_provider_body_is_never_exposed():
    exc = LeadSubmissionError(
        LeadErrorKind.SERVER_ERROR,
        "CRM API returned 500: Traceback at db.internal:5432",
        status_code=500,
        response_body="Traceback at db.internal:5432",
        attempts=3,
    )
    out = ErrorHandler().handle_submission_error(exc)
    assert out["message"] == GENERIC_MESSAGE
    assert "db.internal" not in str(out)


def test_every_other_kind_gets_generic_message():
    for kind in (
        LeadErrorKind.SERVER_ERROR,
        LeadErrorKind.RATE_LIMITED,
        LeadErrorKind.CLIENT_ERROR,
        LeadErrorKind.TRANSPORT_ERROR,
        LeadErrorKind.UNKNOWN,
    ):
        assert user_message_for(kind) == GENERIC_MESSAGE


def test_failed_submission_result_carries_error():
    exc = LeadSubmissionError(LeadErrorKind.RATE_LIMITED, "slow down", status_code=429, attempts=2)
    result = SubmissionResult.failed(exc)
    assert result.success is False
    assert result.attempts == 2
    assert result.to_dict()["error"]["kind"] == "RATE_LIMITED"
