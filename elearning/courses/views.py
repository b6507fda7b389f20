"""
E-Learning Course Views

Read-only catalogue endpoints consumed by the course list and home pages.

Views:
- CourseListView: All courses, optionally filtered by category
- CourseDetailView: A single course
- CourseLessonListView: Lessons of a course (requires access)

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Set

from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from elearning.users.models import CourseOwnership

from .models import Course
from .serializers import CourseSerializer, LessonSerializer

logger = logging.getLogger(__name__)


def _owned_course_ids(user) -> Set[int]:
    if not user or not user.is_authenticated:
        return set()
    return set(
        CourseOwnership.objects.filter(user=user).values_list("course_id", flat=True)
    )


class CourseListView(generics.ListAPIView):
    """
    GET /api/elearning/courses/?category=BEGINNER|ADVANCED
    """

    permission_classes = [AllowAny]
    serializer_class = CourseSerializer

    def get_queryset(self):
        queryset = Course.objects.all()
        category = self.request.query_params.get("category")
        if category:
            queryset = queryset.filter(category=category.upper())
        return queryset

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["owned_course_ids"] = _owned_course_ids(self.request.user)
        return context


class CourseDetailView(generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = CourseSerializer
    queryset = Course.objects.all()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["owned_course_ids"] = _owned_course_ids(self.request.user)
        return context


class CourseLessonListView(APIView):
    """
    GET /api/elearning/courses/<pk>/lessons/

    Lessons are only returned to users who own the course, subscribers,
    staff, or for free courses.
    """

    permission_classes = [AllowAny]

    def get(self, request, pk):
        course = get_object_or_404(Course, pk=pk)

        if not course.check_user_accessibility(request.user):
            return Response(
                {"detail": _("Purchase this course or subscribe to access its lessons.")},
                status=status.HTTP_403_FORBIDDEN,
            )

        lessons = course.lessons.order_by("seq_no")
        return Response(LessonSerializer(lessons, many=True).data)
