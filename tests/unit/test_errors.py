# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the directory error taxonomy and its HTTP mapping."""

from src.api.errors import to_http_exception
from src.domains.errors import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    EmailAlreadyInUseError,
    InvalidReferenceError,
    NotATeacherError,
    StudentNotFoundError,
    TeacherHasCoursesError,
    ValidationError,
)


class TestValidationError:
    """Tests for ValidationError."""

    def test_messages_joined(self) -> None:
        """Test every field message is kept and joined in the message."""
        error = ValidationError(["Name is required", "Password is required"])

        assert error.errors == ["Name is required", "Password is required"]
        assert error.message == "Name is required, Password is required"

    def test_single_message(self) -> None:
        """Test a plain string becomes a one-item list."""
        error = ValidationError("No update fields provided")

        assert error.errors == ["No update fields provided"]
        assert str(error) == "No update fields provided"


class TestToHttpException:
    """Tests for to_http_exception."""

    def test_not_found_maps_to_404(self) -> None:
        """Test not-found errors become 404 with their message."""
        exc = to_http_exception(CourseNotFoundError())

        assert exc.status_code == 404
        assert exc.detail == "Course not found"

    def test_student_not_found_custom_message(self) -> None:
        """Test a custom not-found message is preserved."""
        exc = to_http_exception(StudentNotFoundError("Student not found or user is not a student"))

        assert exc.status_code == 404
        assert exc.detail == "Student not found or user is not a student"

    def test_client_errors_map_to_400(self) -> None:
        """Test validation, conflict and reference errors become 400."""
        for error in (
            ValidationError(["Email is required"]),
            EmailAlreadyInUseError(),
            AlreadyEnrolledError(),
            InvalidReferenceError("Invalid course ID"),
            NotATeacherError(),
        ):
            exc = to_http_exception(error)
            assert exc.status_code == 400
            assert exc.detail == error.message

    def test_teacher_has_courses_carries_courses(self) -> None:
        """Test the blocking courses are returned alongside the message."""
        courses = [{"id": "c-1", "name": "Algebra"}]

        exc = to_http_exception(TeacherHasCoursesError(courses))

        assert exc.status_code == 400
        assert exc.detail == {
            "message": "Teacher has assigned courses. Please confirm deletion or reassign courses.",
            "courses": courses,
        }
