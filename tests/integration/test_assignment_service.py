# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for TeacherAssignmentService.

Covers course assignment and the three teacher removal variants.
"""

import pytest

from src.domains.errors import (
    AlreadyAssignedError,
    CourseNotFoundError,
    InvalidReferenceError,
    NotATeacherError,
    TeacherHasCoursesError,
    TeacherNotFoundError,
    ValidationError,
)

MISSING_ID = "00000000-0000-4000-8000-000000000000"


class TestAssignCourse:
    """Tests for assigning courses to teachers."""

    @pytest.mark.asyncio
    async def test_reassign_moves_course(
        self,
        assignment_service,
        course_service,
        user_service,
        make_teacher,
        make_course,
        admin_actor,
    ) -> None:
        """Test that assignment moves a course off its previous teacher."""
        first = await make_teacher()
        second = await make_teacher()
        course = await make_course(first.id, name="Chemistry")

        result = await assignment_service.assign_course(second.id, course.id, admin_actor)

        assert result.id == second.id
        assert result.courses == [course.id]
        assert [c.name for c in result.assigned_courses] == ["Chemistry"]
        assert (await user_service.get_teacher(first.id)).courses == []
        assert (await course_service.get_course(course.id)).teacher_id == second.id

    @pytest.mark.asyncio
    async def test_assign_unassigned_course(
        self, assignment_service, course_service, make_teacher, make_course
    ) -> None:
        """Test that an orphaned course can be picked up again."""
        owner = await make_teacher()
        course = await make_course(owner.id)
        await assignment_service.remove_teacher_keep_courses(owner.id)
        adopter = await make_teacher()

        result = await assignment_service.assign_course(adopter.id, course.id)

        assert result.courses == [course.id]
        assert (await course_service.get_course(course.id)).teacher_id == adopter.id

    @pytest.mark.asyncio
    async def test_already_assigned(self, assignment_service, make_teacher, make_course) -> None:
        """Test that assigning a teacher's own course is a conflict."""
        teacher = await make_teacher()
        course = await make_course(teacher.id)

        with pytest.raises(AlreadyAssignedError):
            await assignment_service.assign_course(teacher.id, course.id)

    @pytest.mark.asyncio
    async def test_assign_to_student(
        self, assignment_service, make_teacher, make_student, make_course
    ) -> None:
        """Test that a course cannot be assigned to a student."""
        teacher = await make_teacher()
        student = await make_student()
        course = await make_course(teacher.id)

        with pytest.raises(NotATeacherError, match="non-teacher"):
            await assignment_service.assign_course(student.id, course.id)

    @pytest.mark.asyncio
    async def test_assign_missing_records(self, assignment_service, make_teacher) -> None:
        """Test not found errors for unknown teacher and course."""
        teacher = await make_teacher()

        with pytest.raises(TeacherNotFoundError):
            await assignment_service.assign_course(MISSING_ID, MISSING_ID)
        with pytest.raises(CourseNotFoundError):
            await assignment_service.assign_course(teacher.id, MISSING_ID)

    @pytest.mark.asyncio
    async def test_assign_malformed_ids(self, assignment_service, make_teacher) -> None:
        """Test that malformed ids are invalid references."""
        teacher = await make_teacher()

        with pytest.raises(InvalidReferenceError):
            await assignment_service.assign_course(teacher.id, None)
        with pytest.raises(InvalidReferenceError):
            await assignment_service.assign_course("bad", MISSING_ID)


class TestRemoveTeacher:
    """Tests for the blocking teacher removal."""

    @pytest.mark.asyncio
    async def test_remove_teacher_without_courses(
        self, assignment_service, user_service, make_teacher, admin_actor
    ) -> None:
        """Test that a teacher with no courses is removed."""
        teacher = await make_teacher()

        result = await assignment_service.remove_teacher(teacher.id, admin_actor)

        assert result.message == "Teacher removed successfully"
        with pytest.raises(TeacherNotFoundError):
            await user_service.get_teacher(teacher.id)

    @pytest.mark.asyncio
    async def test_blocked_by_courses(self, assignment_service, make_teacher, make_course) -> None:
        """Test that owned courses block removal and are reported."""
        teacher = await make_teacher()
        first = await make_course(teacher.id, name="Latin")
        second = await make_course(teacher.id, name="Greek")

        with pytest.raises(TeacherHasCoursesError) as exc_info:
            await assignment_service.remove_teacher(teacher.id)

        assert exc_info.value.courses == [
            {"id": first.id, "name": "Latin"},
            {"id": second.id, "name": "Greek"},
        ]
        assert exc_info.value.payload == {"courses": exc_info.value.courses}

    @pytest.mark.asyncio
    async def test_remove_unknown_teacher(self, assignment_service) -> None:
        """Test that removing an unknown teacher is not found."""
        with pytest.raises(TeacherNotFoundError):
            await assignment_service.remove_teacher(MISSING_ID)


class TestRemoveTeacherWithCourses:
    """Tests for removing a teacher along with listed courses."""

    @pytest.mark.asyncio
    async def test_listed_courses_deleted_rest_orphaned(
        self,
        assignment_service,
        course_service,
        user_service,
        enrollment_service,
        make_teacher,
        make_student,
        make_course,
        admin_actor,
    ) -> None:
        """Test that listed courses go and unlisted ones lose their teacher."""
        teacher = await make_teacher()
        other = await make_teacher()
        doomed = await make_course(teacher.id, approved=True)
        survivor = await make_course(teacher.id)
        foreign = await make_course(other.id)
        student = await make_student()
        await enrollment_service.enroll_student(student.id, doomed.id)

        result = await assignment_service.remove_teacher_with_courses(
            teacher.id, [doomed.id, foreign.id], admin_actor
        )

        assert result.message == "Teacher and 1 associated course(s) removed"
        assert result.deleted_courses == 1
        assert result.orphaned_courses == 1
        with pytest.raises(CourseNotFoundError):
            await course_service.get_course(doomed.id)
        assert (await course_service.get_course(survivor.id)).teacher_id is None
        assert (await course_service.get_course(foreign.id)).teacher_id == other.id
        assert (await user_service.get_student(student.id)).enrollments == []
        with pytest.raises(TeacherNotFoundError):
            await user_service.get_teacher(teacher.id)

    @pytest.mark.asyncio
    async def test_course_ids_must_be_a_list(self, assignment_service, make_teacher) -> None:
        """Test that a missing or non-list course_ids is rejected."""
        teacher = await make_teacher()

        with pytest.raises(ValidationError, match="must be an array"):
            await assignment_service.remove_teacher_with_courses(teacher.id, None)
        with pytest.raises(ValidationError):
            await assignment_service.remove_teacher_with_courses(teacher.id, "abc")

    @pytest.mark.asyncio
    async def test_malformed_course_id(self, assignment_service, make_teacher) -> None:
        """Test that a malformed listed id is rejected before any change."""
        teacher = await make_teacher()

        with pytest.raises(InvalidReferenceError):
            await assignment_service.remove_teacher_with_courses(teacher.id, ["nope"])

    @pytest.mark.asyncio
    async def test_empty_list_orphans_everything(
        self, assignment_service, course_service, make_teacher, make_course
    ) -> None:
        """Test that an empty list deletes nothing."""
        teacher = await make_teacher()
        course = await make_course(teacher.id)

        result = await assignment_service.remove_teacher_with_courses(teacher.id, [])

        assert result.deleted_courses == 0
        assert (await course_service.get_course(course.id)).teacher_id is None


class TestRemoveTeacherKeepCourses:
    """Tests for removing a teacher and keeping its courses."""

    @pytest.mark.asyncio
    async def test_courses_become_unassigned(
        self, assignment_service, course_service, make_teacher, make_course, admin_actor
    ) -> None:
        """Test that every owned course survives without a teacher."""
        teacher = await make_teacher()
        first = await make_course(teacher.id)
        second = await make_course(teacher.id)

        result = await assignment_service.remove_teacher_keep_courses(teacher.id, admin_actor)

        assert result.message == (
            "Teacher removed successfully, associated courses are now unassigned."
        )
        assert result.orphaned_courses == 2
        courses = await course_service.list_courses()
        assert {c.id for c in courses} == {first.id, second.id}
        assert all(c.teacher_id is None and c.teacher is None for c in courses)

    @pytest.mark.asyncio
    async def test_unknown_teacher(self, assignment_service) -> None:
        """Test that removing an unknown teacher is not found."""
        with pytest.raises(TeacherNotFoundError):
            await assignment_service.remove_teacher_keep_courses(MISSING_ID)
