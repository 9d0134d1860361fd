"""Domain exception error codes and payloads."""

from humanika.domain.exceptions import (
    AlreadyResolvedError,
    AuthorizationException,
    DuplicatePendingError,
    HumanikaException,
    InvalidTransitionError,
    NoPendingApprovalError,
    NoteRequiredError,
    NotOwnerError,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = HumanikaException("boom")
    assert exc.error_code == "HumanikaException"
    assert exc.to_dict() == {"error": "HumanikaException", "message": "boom", "details": {}}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("bad", field="note")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "note"}


def test_authorization_exception_message_names_action_and_resource() -> None:
    exc = AuthorizationException(resource="EVENT", action="approve")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: approve on EVENT"
    assert exc.details == {"resource": "EVENT", "action": "approve"}


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("LETTER", "l1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "l1" in exc.message


def test_workflow_error_codes() -> None:
    assert InvalidTransitionError("DRAFT", "APPROVED").error_code == "INVALID_TRANSITION"
    assert NotOwnerError("EVENT", "e1", "u1").error_code == "NOT_OWNER"
    assert NoPendingApprovalError("EVENT", "e1").error_code == "NO_PENDING_APPROVAL"
    assert DuplicatePendingError("EVENT", "e1").error_code == "DUPLICATE_PENDING"
    assert AlreadyResolvedError("r1", "APPROVED").details == {
        "record_id": "r1",
        "decision": "APPROVED",
    }
    note = NoteRequiredError("REJECTED")
    assert note.error_code == "NOTE_REQUIRED"
    assert note.details["field"] == "note"


def test_all_workflow_errors_are_humanika_exceptions() -> None:
    for exc in (
        InvalidTransitionError("A", "B"),
        NotOwnerError("EVENT", "e", "u"),
        NoPendingApprovalError("EVENT", "e"),
        DuplicatePendingError("EVENT", "e"),
        AlreadyResolvedError("r"),
        NoteRequiredError("REVISION"),
    ):
        assert isinstance(exc, HumanikaException)
