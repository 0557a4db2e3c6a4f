from underwriting_desk.error_handler import ErrorHandler
from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingTransportError


def test_transport_error_keeps_its_message():
    eh = ErrorHandler()
    out = eh.handle_exception(UnderwritingTransportError("Invalid credit score", status_code=422), action="submit")
    assert out["message"] == "Invalid credit score"
    assert out["metadata"]["status_code"] == 422


def test_unexpected_exception_uses_default_message():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), action="history", context={"k": "v"})
    assert out["message"] == "Unable to load history"
    assert "boom" in out["metadata"]["error"]
    assert out["metadata"]["context"] == {"k": "v"}

    out = eh.handle_exception(Exception("boom"))
    assert out["message"] == "Submission failed. Please try again."
