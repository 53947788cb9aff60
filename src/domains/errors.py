# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Directory error taxonomy.

Every service raises subclasses of DirectoryError. The API layer maps the
four families onto HTTP status codes:

- NotFoundError: 404
- ValidationError, ConflictError, InvalidReferenceError: 400
"""

from typing import Any


class DirectoryError(Exception):
    """Base exception for directory operations.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DirectoryError):
    """Raised when an id does not resolve, or resolves to the wrong role."""

    pass


class ValidationError(DirectoryError):
    """Raised when one or more field constraints fail.

    Attributes:
        errors: One message per violated constraint.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class ConflictError(DirectoryError):
    """Raised when an operation clashes with the current state.

    Attributes:
        payload: Optional structured data returned alongside the message.
    """

    def __init__(self, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.payload = payload


class InvalidReferenceError(DirectoryError):
    """Raised for malformed ids or references to the wrong kind of record."""

    pass


# Not found


class TeacherNotFoundError(NotFoundError):
    """Raised when a teacher is not found."""

    def __init__(self, message: str = "Teacher not found") -> None:
        super().__init__(message)


class StudentNotFoundError(NotFoundError):
    """Raised when a student is not found."""

    def __init__(self, message: str = "Student not found") -> None:
        super().__init__(message)


class AdminNotFoundError(NotFoundError):
    """Raised when the acting admin account is not found."""

    def __init__(self, message: str = "Admin not found") -> None:
        super().__init__(message)


class CourseNotFoundError(NotFoundError):
    """Raised when a course is not found."""

    def __init__(self, message: str = "Course not found") -> None:
        super().__init__(message)


# Conflicts


class EmailAlreadyInUseError(ConflictError):
    """Raised when an email already belongs to another account."""

    def __init__(self, message: str = "Email already in use by another account") -> None:
        super().__init__(message)


class AlreadyAssignedError(ConflictError):
    """Raised when a course is already in the teacher's course list."""

    def __init__(
        self, message: str = "Course already assigned to this teacher's list"
    ) -> None:
        super().__init__(message)


class AlreadyEnrolledError(ConflictError):
    """Raised when a student and course are already linked."""

    def __init__(
        self, message: str = "Student is already enrolled in this course"
    ) -> None:
        super().__init__(message)


class TeacherHasCoursesError(ConflictError):
    """Raised when a simple teacher removal is blocked by owned courses.

    Attributes:
        courses: Blocking courses as ``{"id": ..., "name": ...}`` dicts.
    """

    def __init__(self, courses: list[dict[str, str]]) -> None:
        self.courses = courses
        super().__init__(
            "Teacher has assigned courses. Please confirm deletion or reassign courses.",
            payload={"courses": courses},
        )


class CourseNotApprovedError(ConflictError):
    """Raised when enrolling into a course that is not approved."""

    def __init__(
        self, message: str = "Cannot enroll student in a non-approved course"
    ) -> None:
        super().__init__(message)


# References


class NotATeacherError(InvalidReferenceError):
    """Raised when a teacher reference points at a missing or non-teacher account."""

    def __init__(
        self, message: str = "Assigned teacher not found or is not a teacher"
    ) -> None:
        super().__init__(message)
