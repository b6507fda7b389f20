"""
E-Learning Course Serializers

Serializers:
- LessonSerializer: Lesson list entries
- CourseSerializer: Catalogue entries, flagged with the caller's access
"""

from typing import Set

from rest_framework import serializers

from .models import Course, Lesson


class LessonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lesson
        fields = ("id", "seq_no", "description", "duration", "video_url")
        read_only_fields = fields


class CourseSerializer(serializers.ModelSerializer):
    """
    Course catalogue entry.

    `owned` is True when the requesting user bought this course; the view
    passes the ids of owned courses in the serializer context so the list
    does not run one query per course.
    """

    owned = serializers.SerializerMethodField()

    class Meta:
        model = Course
        fields = (
            "id",
            "seq_no",
            "url",
            "description",
            "long_description",
            "icon_url",
            "category",
            "price",
            "lessons_count",
            "promo",
            "owned",
        )
        read_only_fields = fields

    def get_owned(self, obj: Course) -> bool:
        owned_ids: Set[int] = self.context.get("owned_course_ids", set())
        return obj.id in owned_ids
