from __future__ import annotations


class ContestError(Exception):
    """Base for failures that reach the caller with a status and a short message."""
    status_code = 500
    message = "Server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ContestError):
    status_code = 400
    message = "Invalid request."


class InvalidIdentity(ValidationError):
    message = "Invalid email format. The part before @ should be your roll number."


class MissingCredential(ContestError):
    status_code = 401
    message = "Missing auth token."


class MalformedCredential(ContestError):
    status_code = 401
    message = "Malformed auth token."


class InvalidCredential(ContestError):
    status_code = 401
    message = "Invalid or expired auth token."


class InvalidCredentials(ContestError):
    status_code = 401
    message = "Invalid credentials."


class Forbidden(ContestError):
    status_code = 403
    message = "Admin access required."


class NotFound(ContestError):
    status_code = 404
    message = "Participant not found."


class DuplicateIdentity(ContestError):
    status_code = 409
    message = "An account with this email or roll number already exists."


def describe_invalid(errors) -> str:
    """Short message for pydantic/FastAPI validation errors, naming the offending fields."""
    if any(err.get("type") == "json_invalid" for err in errors):
        return "Invalid request body."
    fields = sorted({
        ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header"))
        for err in errors
    } - {""})
    return f"Invalid request: {', '.join(fields)}." if fields else "Invalid request body."
