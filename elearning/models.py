"""
E-Learning Application Models Registry

This module serves as the central models registry for the E-Learning application.
It imports and exposes all models from the logical submodules (users, courses)
to ensure they are properly registered with Django's ORM system.

Architecture:
- users/: Profiles (billing data) and course ownership
- courses/: Course catalogue and lessons

Author: DSP Development Team
Version: 1.0.0
"""

# Import all course-related models for registration with Django ORM
from .courses.models import Course, Lesson

# Import all user-related models for registration with Django ORM
from .users.models import Profile, CourseOwnership

__all__ = ["Course", "Lesson", "Profile", "CourseOwnership"]
